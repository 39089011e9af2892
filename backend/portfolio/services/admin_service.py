from __future__ import annotations

from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Article, Category, Collaborator, NewsItem, Project, Tutorial


class AdminService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _count(self, model, *where) -> int:
        stmt = select(func.count()).select_from(model)
        if where:
            stmt = stmt.where(*where)
        return int(self.db.execute(stmt).scalar_one())

    def _sum(self, column) -> int:
        return int(self.db.execute(select(func.coalesce(func.sum(column), 0))).scalar_one())

    def stats(self) -> Dict[str, int]:
        """Dashboard counters."""
        return {
            "projects": self._count(Project),
            "published_projects": self._count(Project, Project.published.is_(True)),
            "articles": self._count(Article),
            "published_articles": self._count(Article, Article.published.is_(True)),
            "news": self._count(NewsItem),
            "tutorials": self._count(Tutorial),
            "categories": self._count(Category),
            "collaborators": self._count(Collaborator),
            "project_views": self._sum(Project.views),
            "project_likes": self._sum(Project.likes),
            "article_views": self._sum(Article.views),
            "article_likes": self._sum(Article.likes),
        }
