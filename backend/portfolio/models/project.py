from __future__ import annotations

from datetime import datetime
from typing import Any
from sqlalchemy import String, Text, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, new_id, utcnow


class Project(Base):
    __tablename__ = "portfolio_projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)  # e.g. scenic-design, rendering
    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    venue: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    design_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    card_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    hero_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    focal_point: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)  # {"x": 0-100, "y": 0-100}
    images: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    production_photos: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    galleries: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    credits: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    software_used: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    video_urls: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    tags: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    content: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)
