from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .base import InputModel, OutputModel


class FocalPoint(BaseModel):
    x: float = Field(default=50, ge=0, le=100)
    y: float = Field(default=50, ge=0, le=100)


class Credit(BaseModel):
    role: str = ""
    name: str = ""


class ProjectIn(InputModel):
    slug: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    year: Optional[int] = None
    venue: Optional[str] = None
    client_name: Optional[str] = None
    description: Optional[str] = None
    project_overview: Optional[str] = None
    design_notes: Optional[str] = None
    cover_image: Optional[str] = None
    card_image: Optional[str] = None
    hero_image: Optional[str] = None
    focal_point: Optional[FocalPoint] = None
    images: Optional[List[Any]] = None
    production_photos: Optional[List[Any]] = None
    galleries: Optional[Dict[str, List[Any]]] = None
    credits: Optional[List[Credit]] = None
    software_used: Optional[List[str]] = None
    video_urls: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    content: Optional[List[Dict[str, Any]]] = None
    published: Optional[bool] = None
    featured: Optional[bool] = None


class ProjectOut(OutputModel):
    id: str
    slug: str
    title: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    year: Optional[int] = None
    venue: Optional[str] = None
    client_name: Optional[str] = None
    description: Optional[str] = None
    project_overview: Optional[str] = None
    design_notes: Optional[str] = None
    cover_image: Optional[str] = None
    card_image: Optional[str] = None
    hero_image: Optional[str] = None
    focal_point: Optional[Dict[str, Any]] = None
    images: List[Any] = Field(default_factory=list)
    production_photos: List[Any] = Field(default_factory=list)
    galleries: Dict[str, Any] = Field(default_factory=dict)
    credits: List[Any] = Field(default_factory=list)
    software_used: List[str] = Field(default_factory=list)
    video_urls: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    content: Optional[List[Any]] = None
    published: bool = False
    featured: bool = False
    views: int = 0
    likes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
