from __future__ import annotations

import datetime as dt
import re
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import NewsItem
from ..schemas.posts import NewsIn
from ..utils.static_data import StaticNews, static_news
from .records import apply_fields, normalize_tags, payload_dict, unique_slug


UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

EDITABLE_FIELDS = (
    "title",
    "date",
    "category",
    "excerpt",
    "location",
    "link",
    "cover_image",
    "tags",
    "content",
    "published",
)

AnyNews = Union[NewsItem, StaticNews]


class NewsService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_published(self, limit: Optional[int] = None) -> List[NewsItem]:
        rows = self.db.execute(select(NewsItem).where(NewsItem.published.is_(True))).scalars().all()
        items = sorted(rows, key=lambda n: (n.date or dt.date.min, n.created_at), reverse=True)
        return items[:limit] if limit else items

    def list_for_site(self, limit: Optional[int] = None) -> List[AnyNews]:
        """Published news, or the bundled news file while the table is empty."""
        items: List[AnyNews] = list(self.list_published(limit))
        if not items:
            items = list(static_news())
            if limit:
                items = items[:limit]
        return items

    def get(self, news_id: str) -> Optional[NewsItem]:
        return self.db.get(NewsItem, news_id)

    def get_by_id_or_slug(self, key: str) -> Optional[AnyNews]:
        if UUID_RE.match(key):
            item = self.get(key)
        else:
            item = self.db.execute(select(NewsItem).where(NewsItem.slug == key)).scalar_one_or_none()
        if item is not None:
            return item if item.published else None
        for static in static_news():
            if static.slug == key:
                return static
        return None

    def admin_list(self) -> List[NewsItem]:
        rows = self.db.execute(select(NewsItem)).scalars().all()
        return sorted(rows, key=lambda n: (n.date or dt.date.min, n.created_at), reverse=True)

    def create(self, data: NewsIn | Dict[str, Any]) -> NewsItem:
        values = payload_dict(data)
        title = (values.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        item = NewsItem(title=title, slug=unique_slug(self.db, NewsItem, values.get("slug") or title))
        apply_fields(item, values, EDITABLE_FIELDS)
        item.title = title
        item.tags = normalize_tags(values.get("tags"))
        if item.date is None:
            item.date = dt.date.today()
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update(self, news_id: str, data: NewsIn | Dict[str, Any]) -> NewsItem:
        item = self.get(news_id)
        if item is None:
            raise LookupError(f"news {news_id} not found")
        values = payload_dict(data)
        if "title" in values and not (values["title"] or "").strip():
            raise ValueError("title is required")
        if values.get("slug") and values["slug"] != item.slug:
            item.slug = unique_slug(self.db, NewsItem, values["slug"], exclude_id=item.id)
        apply_fields(item, values, EDITABLE_FIELDS)
        if "tags" in values:
            item.tags = normalize_tags(values["tags"])
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, news_id: str) -> None:
        item = self.get(news_id)
        if item is None:
            raise LookupError(f"news {news_id} not found")
        self.db.delete(item)
        self.db.commit()
