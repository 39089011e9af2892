from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional, Union

from pydantic import Field

from .base import InputModel, OutputModel


Body = Union[str, List[Any], None]


class ArticleIn(InputModel):
    slug: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None
    read_time: Optional[str] = None
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None
    content: Body = None
    published: Optional[bool] = None
    featured: Optional[bool] = None


class ArticleOut(OutputModel):
    id: str
    slug: str
    title: str
    category: Optional[str] = None
    date: Optional[dt.date] = None
    read_time: Optional[str] = None
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    content: Body = None
    published: bool = False
    featured: bool = False
    views: int = 0
    likes: int = 0


class NewsIn(InputModel):
    slug: Optional[str] = None
    title: Optional[str] = None
    date: Optional[dt.date] = None
    category: Optional[str] = None
    excerpt: Optional[str] = None
    location: Optional[str] = None
    link: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None
    content: Body = None
    published: Optional[bool] = None


class NewsOut(OutputModel):
    id: str
    slug: Optional[str] = None
    title: str
    date: Optional[dt.date] = None
    category: Optional[str] = None
    excerpt: Optional[str] = None
    location: Optional[str] = None
    link: Optional[str] = None
    cover_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    content: Body = None
    published: bool = True
