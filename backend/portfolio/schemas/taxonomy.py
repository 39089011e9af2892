from __future__ import annotations

from typing import Optional

from .base import InputModel, OutputModel


CATEGORY_TYPES = ("portfolio", "articles", "news")


class CategoryIn(InputModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = None


class CategoryOut(OutputModel):
    id: int
    type: str
    name: str
    slug: str
    color: Optional[str] = None
    display_order: int = 0


class CollaboratorIn(InputModel):
    name: Optional[str] = None
    role: Optional[str] = None
    website: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None


class CollaboratorOut(OutputModel):
    id: int
    name: str
    role: Optional[str] = None
    website: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None
