from __future__ import annotations

import datetime as dt
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from ..schemas.tutorial import TutorialOut


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class TutorialCategory(BaseModel):
    id: str
    name: str
    description: Optional[str] = None


class StaticNews(BaseModel):
    slug: str
    title: str
    date: Optional[dt.date] = None
    category: Optional[str] = None
    excerpt: str = ""
    location: Optional[str] = None
    link: Optional[str] = None
    cover_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    content: Any = None

    @property
    def id(self) -> str:
        return self.slug


class NavItem(BaseModel):
    label: str
    page: str
    arg: Optional[str] = None
    submenu: List["NavItem"] = Field(default_factory=list)


class SocialLink(BaseModel):
    platform: str
    url: str
    label: str = ""


class PageMeta(BaseModel):
    title: str
    description: str = ""


class FaqItem(BaseModel):
    question: str
    answer: str


class SiteData(BaseModel):
    navigation: List[NavItem] = Field(default_factory=list)
    social_links: List[SocialLink] = Field(default_factory=list)
    pages: Dict[str, PageMeta] = Field(default_factory=dict)
    faq: List[FaqItem] = Field(default_factory=list)

    def page_meta(self, page: str) -> PageMeta:
        return self.pages.get(page) or PageMeta(title=page.replace("-", " ").title())


class TutorialData(BaseModel):
    categories: List[TutorialCategory] = Field(default_factory=list)
    tutorials: List[TutorialOut] = Field(default_factory=list)


class NewsData(BaseModel):
    news: List[StaticNews] = Field(default_factory=list)


def _read_yaml(name: str, data_dir: Optional[Path] = None) -> Dict[str, Any]:
    path = (data_dir or DATA_DIR) / name
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=1)
def load_tutorial_data() -> TutorialData:
    return TutorialData(**_read_yaml("tutorials.yaml"))


@lru_cache(maxsize=1)
def load_news_data() -> NewsData:
    return NewsData(**_read_yaml("news.yaml"))


@lru_cache(maxsize=1)
def load_site_data() -> SiteData:
    return SiteData(**_read_yaml("site.yaml"))


def static_tutorials() -> List[TutorialOut]:
    return list(load_tutorial_data().tutorials)


def static_news() -> List[StaticNews]:
    items = list(load_news_data().news)
    items.sort(key=lambda n: n.date or dt.date.min, reverse=True)
    return items
