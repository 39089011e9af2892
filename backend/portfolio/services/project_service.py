from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..models import Project
from ..schemas.project import ProjectIn
from ..utils.slugs import slugify
from .records import apply_fields, matches_tag, normalize_tags, payload_dict, unique_slug


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "category",
    "subcategory",
    "year",
    "venue",
    "client_name",
    "description",
    "project_overview",
    "design_notes",
    "cover_image",
    "card_image",
    "hero_image",
    "focal_point",
    "images",
    "production_photos",
    "galleries",
    "credits",
    "software_used",
    "video_urls",
    "tags",
    "content",
    "published",
    "featured",
)


def _category_matches(project: Project, category: str) -> bool:
    wanted = category.strip().lower()
    value = (project.category or "").strip()
    return value.lower() == wanted or slugify(value) == wanted


class ProjectService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _ordered(self):
        return select(Project).order_by(
            Project.featured.desc(), Project.year.desc(), Project.created_at.desc()
        )

    def list_published(
        self,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        tag: Optional[str] = None,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[Project]:
        stmt = self._ordered().where(Project.published.is_(True))
        if featured is not None:
            stmt = stmt.where(Project.featured.is_(featured))
        items = list(self.db.execute(stmt).scalars().all())
        if category:
            items = [p for p in items if _category_matches(p, category)]
        if subcategory:
            items = [p for p in items if (p.subcategory or "") == subcategory]
        if tag:
            items = [p for p in items if matches_tag(p.tags, tag)]
        return items[:limit] if limit else items

    def subcategories(self, projects: List[Project]) -> List[str]:
        return sorted({p.subcategory for p in projects if p.subcategory})

    def get(self, project_id: str) -> Optional[Project]:
        return self.db.get(Project, project_id)

    def get_by_slug(self, slug: str, include_unpublished: bool = False) -> Optional[Project]:
        stmt = select(Project).where(Project.slug == slug)
        if not include_unpublished:
            stmt = stmt.where(Project.published.is_(True))
        project = self.db.execute(stmt).scalar_one_or_none()
        if project is None and not include_unpublished:
            # older links use the record id in place of the slug
            by_id = self.db.get(Project, slug)
            if by_id is not None and by_id.published:
                return by_id
        return project

    def _bump(self, project_id: str, column) -> int:
        project = self.get(project_id)
        if project is None:
            raise LookupError(f"project {project_id} not found")
        self.db.execute(update(Project).where(Project.id == project_id).values({column: column + 1}))
        self.db.commit()
        self.db.refresh(project)
        return getattr(project, column.key)

    def record_view(self, project_id: str) -> int:
        return self._bump(project_id, Project.views)

    def like(self, project_id: str) -> int:
        return self._bump(project_id, Project.likes)

    def unlike(self, project_id: str) -> int:
        project = self.get(project_id)
        if project is None:
            raise LookupError(f"project {project_id} not found")
        self.db.execute(
            update(Project)
            .where(Project.id == project_id, Project.likes > 0)
            .values({Project.likes: Project.likes - 1})
        )
        self.db.commit()
        self.db.refresh(project)
        return project.likes

    def related(self, project: Project, limit: int = 3) -> List[Project]:
        items = [p for p in self.list_published() if p.id != project.id]
        same = [p for p in items if project.category and p.category == project.category]
        rest = [p for p in items if p not in same]
        return (same + rest)[:limit]

    def admin_list(self) -> List[Project]:
        return list(self.db.execute(self._ordered()).scalars().all())

    def create(self, data: ProjectIn | Dict[str, Any]) -> Project:
        values = payload_dict(data)
        title = (values.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        project = Project(title=title, slug=unique_slug(self.db, Project, values.get("slug") or title))
        apply_fields(project, values, EDITABLE_FIELDS)
        project.title = title
        project.tags = normalize_tags(values.get("tags"))
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        logger.info("project created slug=%s", project.slug)
        return project

    def update(self, project_id: str, data: ProjectIn | Dict[str, Any]) -> Project:
        project = self.get(project_id)
        if project is None:
            raise LookupError(f"project {project_id} not found")
        values = payload_dict(data)
        if "title" in values and not (values["title"] or "").strip():
            raise ValueError("title is required")
        if values.get("slug") and values["slug"] != project.slug:
            project.slug = unique_slug(self.db, Project, values["slug"], exclude_id=project.id)
        apply_fields(project, values, EDITABLE_FIELDS)
        if "tags" in values:
            project.tags = normalize_tags(values["tags"])
        self.db.commit()
        self.db.refresh(project)
        return project

    def delete(self, project_id: str) -> None:
        project = self.get(project_id)
        if project is None:
            raise LookupError(f"project {project_id} not found")
        self.db.delete(project)
        self.db.commit()
