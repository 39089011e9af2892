from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional

from pydantic import Field

from .base import InputModel, OutputModel


class TutorialIn(InputModel):
    slug: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[str] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    publish_date: Optional[dt.date] = None
    learning_objectives: Optional[List[str]] = None
    key_shortcuts: Optional[List[Any]] = None
    common_pitfalls: Optional[List[str]] = None
    pro_tips: Optional[List[str]] = None
    resources: Optional[List[Any]] = None
    content: Optional[List[Any]] = None
    published: Optional[bool] = None


class TutorialOut(OutputModel):
    id: Optional[str] = None
    slug: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[str] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    publish_date: Optional[dt.date] = None
    learning_objectives: List[str] = Field(default_factory=list)
    key_shortcuts: List[Any] = Field(default_factory=list)
    common_pitfalls: List[str] = Field(default_factory=list)
    pro_tips: List[str] = Field(default_factory=list)
    resources: List[Any] = Field(default_factory=list)
    content: Optional[List[Any]] = None
    published: bool = True
