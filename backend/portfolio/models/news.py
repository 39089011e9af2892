from __future__ import annotations

import datetime as dt
from typing import Any
from sqlalchemy import String, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, new_id, utcnow


class NewsItem(Base):
    __tablename__ = "news"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str | None] = mapped_column(String(200), unique=True, nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date | None] = mapped_column(nullable=True, index=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    tags: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    content: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    created_at: Mapped[dt.datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)
