from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..navigation.routes import Article, NewsArticle, Project, Tutorial, view_path
from .article_service import ArticleService
from .news_service import NewsService
from .project_service import ProjectService
from .tutorial_service import TutorialService


@dataclass
class SearchHit:
    kind: str
    title: str
    url: str
    summary: str = ""
    image: Optional[str] = None


def _haystack(*parts: Any) -> str:
    chunks: List[str] = []
    for part in parts:
        if isinstance(part, (list, tuple)):
            chunks.extend(str(p) for p in part)
        elif part:
            chunks.append(str(part))
    return " ".join(chunks).lower()


def _matches(terms: Iterable[str], text: str) -> bool:
    return all(term in text for term in terms)


class SearchService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def search(self, query: Optional[str], limit: int = 50) -> List[SearchHit]:
        terms = [t for t in (query or "").lower().split() if t]
        if not terms:
            return []
        hits: List[SearchHit] = []
        for p in ProjectService(self.db).list_published():
            text = _haystack(p.title, p.description, p.category, p.venue, p.tags)
            if _matches(terms, text):
                hits.append(SearchHit("project", p.title, view_path(Project(p.slug)), p.description or "", p.card_image or p.cover_image))
        for a in ArticleService(self.db).list_published():
            text = _haystack(a.title, a.excerpt, a.category, a.tags)
            if _matches(terms, text):
                hits.append(SearchHit("article", a.title, view_path(Article(a.slug)), a.excerpt or "", a.cover_image))
        for n in NewsService(self.db).list_for_site():
            text = _haystack(n.title, n.excerpt, n.location, n.tags)
            if _matches(terms, text):
                hits.append(SearchHit("news", n.title, view_path(NewsArticle(n.slug or n.id)), n.excerpt or "", n.cover_image))
        for t in TutorialService(self.db).list_published():
            text = _haystack(t.title, t.description, t.category)
            if _matches(terms, text):
                hits.append(SearchHit("tutorial", t.title, view_path(Tutorial(t.slug)), t.description or "", t.thumbnail))
        return hits[:limit]
