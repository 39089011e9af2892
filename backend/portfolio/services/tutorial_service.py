from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Tutorial
from ..schemas.tutorial import TutorialIn, TutorialOut
from ..utils.static_data import TutorialCategory, load_tutorial_data, static_tutorials
from .records import apply_fields, payload_dict, unique_slug


EDITABLE_FIELDS = (
    "title",
    "description",
    "category",
    "duration",
    "thumbnail",
    "video_url",
    "publish_date",
    "learning_objectives",
    "key_shortcuts",
    "common_pitfalls",
    "pro_tips",
    "resources",
    "content",
    "published",
)


class TutorialService:
    """Tutorials from the database layered over the bundled tutorial file.

    A database row with the same slug as a bundled tutorial replaces it.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _db_rows(self, include_unpublished: bool = False) -> List[Tutorial]:
        stmt = select(Tutorial)
        if not include_unpublished:
            stmt = stmt.where(Tutorial.published.is_(True))
        return list(self.db.execute(stmt).scalars().all())

    def list_published(self, category: Optional[str] = None) -> List[TutorialOut]:
        merged: Dict[str, TutorialOut] = {t.slug: t for t in static_tutorials()}
        for row in self._db_rows():
            merged[row.slug] = TutorialOut.model_validate(row)
        items = sorted(merged.values(), key=lambda t: (t.publish_date or dt.date.min, t.title), reverse=True)
        if category:
            items = [t for t in items if t.category == category]
        return items

    def categories(self) -> List[TutorialCategory]:
        return list(load_tutorial_data().categories)

    def get_by_slug(self, slug: str) -> Optional[TutorialOut]:
        row = self.db.execute(
            select(Tutorial).where(Tutorial.slug == slug, Tutorial.published.is_(True))
        ).scalar_one_or_none()
        if row is not None:
            return TutorialOut.model_validate(row)
        for tutorial in static_tutorials():
            if tutorial.slug == slug:
                return tutorial
        return None

    def related(self, tutorial: TutorialOut, limit: int = 3) -> List[TutorialOut]:
        others = [t for t in self.list_published() if t.slug != tutorial.slug]
        same = [t for t in others if t.category == tutorial.category]
        return (same + [t for t in others if t not in same])[:limit]

    def get(self, tutorial_id: str) -> Optional[Tutorial]:
        return self.db.get(Tutorial, tutorial_id)

    def admin_list(self) -> List[Tutorial]:
        return sorted(self._db_rows(include_unpublished=True), key=lambda t: t.title.lower())

    def create(self, data: TutorialIn | Dict[str, Any]) -> Tutorial:
        values = payload_dict(data)
        title = (values.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        tutorial = Tutorial(title=title, slug=unique_slug(self.db, Tutorial, values.get("slug") or title))
        apply_fields(tutorial, values, EDITABLE_FIELDS)
        tutorial.title = title
        self.db.add(tutorial)
        self.db.commit()
        self.db.refresh(tutorial)
        return tutorial

    def update(self, tutorial_id: str, data: TutorialIn | Dict[str, Any]) -> Tutorial:
        tutorial = self.get(tutorial_id)
        if tutorial is None:
            raise LookupError(f"tutorial {tutorial_id} not found")
        values = payload_dict(data)
        if "title" in values and not (values["title"] or "").strip():
            raise ValueError("title is required")
        if values.get("slug") and values["slug"] != tutorial.slug:
            tutorial.slug = unique_slug(self.db, Tutorial, values["slug"], exclude_id=tutorial.id)
        apply_fields(tutorial, values, EDITABLE_FIELDS)
        self.db.commit()
        self.db.refresh(tutorial)
        return tutorial

    def delete(self, tutorial_id: str) -> None:
        tutorial = self.get(tutorial_id)
        if tutorial is None:
            raise LookupError(f"tutorial {tutorial_id} not found")
        self.db.delete(tutorial)
        self.db.commit()
