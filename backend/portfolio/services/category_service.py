from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Category
from ..schemas.taxonomy import CATEGORY_TYPES, CategoryIn
from ..utils.slugs import slugify
from .records import payload_dict


def _check_type(category_type: str) -> str:
    if category_type not in CATEGORY_TYPES:
        raise ValueError(f"unknown category type: {category_type}")
    return category_type


class CategoryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_by_type(self, category_type: str) -> List[Category]:
        stmt = (
            select(Category)
            .where(Category.type == _check_type(category_type))
            .order_by(Category.display_order.asc(), Category.name.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def grouped(self) -> Dict[str, List[Category]]:
        return {t: self.list_by_type(t) for t in CATEGORY_TYPES}

    def name_for_slug(self, category_type: str, slug: str) -> Optional[str]:
        for category in self.list_by_type(category_type):
            if category.slug == slug:
                return category.name
        return None

    def colors(self, category_type: str) -> Dict[str, str]:
        return {c.name: c.color for c in self.list_by_type(category_type) if c.color}

    def create(self, category_type: str, data: CategoryIn | Dict[str, Any]) -> Category:
        values = payload_dict(data)
        name = (values.get("name") or "").strip()
        if not name:
            raise ValueError("name is required")
        slug = slugify(values.get("slug") or name)
        exists = self.db.execute(
            select(Category.id).where(Category.type == _check_type(category_type), Category.slug == slug)
        ).first()
        if exists:
            raise ValueError(f"category {slug} already exists")
        display_order = values.get("display_order")
        if display_order is None:
            current = self.db.execute(
                select(func.max(Category.display_order)).where(Category.type == category_type)
            ).scalar()
            display_order = (current or 0) + 1
        category = Category(
            type=category_type,
            name=name,
            slug=slug,
            color=values.get("color"),
            display_order=display_order,
        )
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update(self, category_id: int, data: CategoryIn | Dict[str, Any]) -> Category:
        category = self.db.get(Category, category_id)
        if category is None:
            raise LookupError(f"category {category_id} not found")
        values = payload_dict(data)
        if "name" in values:
            if not (values["name"] or "").strip():
                raise ValueError("name is required")
            category.name = values["name"].strip()
        if values.get("slug"):
            category.slug = slugify(values["slug"])
        if "color" in values:
            category.color = values["color"]
        if values.get("display_order") is not None:
            category.display_order = values["display_order"]
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete(self, category_id: int) -> None:
        category = self.db.get(Category, category_id)
        if category is None:
            raise LookupError(f"category {category_id} not found")
        self.db.delete(category)
        self.db.commit()
