from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..models import Article
from ..schemas.posts import ArticleIn
from ..utils.slugs import slugify
from .records import apply_fields, matches_tag, normalize_tags, payload_dict, unique_slug


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "category",
    "date",
    "read_time",
    "excerpt",
    "cover_image",
    "tags",
    "content",
    "published",
    "featured",
)


def _newest_first(items: List[Article]) -> List[Article]:
    return sorted(items, key=lambda a: (a.date or dt.date.min, a.created_at), reverse=True)


class ArticleService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_published(
        self,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Article]:
        rows = self.db.execute(select(Article).where(Article.published.is_(True))).scalars().all()
        items = _newest_first(list(rows))
        if category and category != "all":
            wanted = category.lower()
            items = [a for a in items if (a.category or "").lower() == wanted or slugify(a.category or "") == wanted]
        if tag:
            items = [a for a in items if matches_tag(a.tags, tag)]
        return items[:limit] if limit else items

    def get(self, article_id: str) -> Optional[Article]:
        return self.db.get(Article, article_id)

    def get_by_slug(self, slug: str, include_unpublished: bool = False) -> Optional[Article]:
        stmt = select(Article).where(Article.slug == slug)
        if not include_unpublished:
            stmt = stmt.where(Article.published.is_(True))
        return self.db.execute(stmt).scalar_one_or_none()

    def related(
        self,
        category: Optional[str],
        tags: Optional[List[str]],
        exclude_id: Optional[str] = None,
        limit: int = 3,
    ) -> List[Article]:
        """Same category or at least one shared tag, newest first."""
        wanted_tags = {t.lower() for t in tags or []}
        out = []
        for article in self.list_published():
            if exclude_id and article.id == exclude_id:
                continue
            same_category = bool(category) and article.category == category
            shared_tag = bool(wanted_tags & {str(t).lower() for t in article.tags or []})
            if same_category or shared_tag:
                out.append(article)
            if len(out) >= limit:
                break
        return out

    def _bump(self, article_id: str, column) -> int:
        article = self.get(article_id)
        if article is None:
            raise LookupError(f"article {article_id} not found")
        self.db.execute(update(Article).where(Article.id == article_id).values({column: column + 1}))
        self.db.commit()
        self.db.refresh(article)
        return getattr(article, column.key)

    def record_view(self, article_id: str) -> int:
        return self._bump(article_id, Article.views)

    def like(self, article_id: str) -> int:
        return self._bump(article_id, Article.likes)

    def categories_in_use(self) -> List[str]:
        return sorted({a.category for a in self.list_published() if a.category})

    def admin_list(self) -> List[Article]:
        return _newest_first(list(self.db.execute(select(Article)).scalars().all()))

    def create(self, data: ArticleIn | Dict[str, Any]) -> Article:
        values = payload_dict(data)
        title = (values.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        article = Article(title=title, slug=unique_slug(self.db, Article, values.get("slug") or title))
        apply_fields(article, values, EDITABLE_FIELDS)
        article.title = title
        article.tags = normalize_tags(values.get("tags"))
        if article.date is None:
            article.date = dt.date.today()
        self.db.add(article)
        self.db.commit()
        self.db.refresh(article)
        logger.info("article created slug=%s", article.slug)
        return article

    def update(self, article_id: str, data: ArticleIn | Dict[str, Any]) -> Article:
        article = self.get(article_id)
        if article is None:
            raise LookupError(f"article {article_id} not found")
        values = payload_dict(data)
        if "title" in values and not (values["title"] or "").strip():
            raise ValueError("title is required")
        if values.get("slug") and values["slug"] != article.slug:
            article.slug = unique_slug(self.db, Article, values["slug"], exclude_id=article.id)
        apply_fields(article, values, EDITABLE_FIELDS)
        if "tags" in values:
            article.tags = normalize_tags(values["tags"])
        self.db.commit()
        self.db.refresh(article)
        return article

    def delete(self, article_id: str) -> None:
        article = self.get(article_id)
        if article is None:
            raise LookupError(f"article {article_id} not found")
        self.db.delete(article)
        self.db.commit()
