from __future__ import annotations

from datetime import date, datetime
from typing import Any
from sqlalchemy import String, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, new_id, utcnow


class Tutorial(Base):
    __tablename__ = "tutorials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(20), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    publish_date: Mapped[date | None] = mapped_column(nullable=True)
    learning_objectives: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    key_shortcuts: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    common_pitfalls: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    pro_tips: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    resources: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    content: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)
