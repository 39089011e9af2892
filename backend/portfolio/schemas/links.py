from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import InputModel


class BioLinkIn(InputModel):
    title: Optional[str] = None
    url: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    type: Optional[Literal["link", "social"]] = None
    enabled: Optional[bool] = None
    order: Optional[int] = None


class BioLink(BaseModel):
    id: str
    title: str
    url: str
    icon: str = "link"
    description: Optional[str] = None
    type: Literal["link", "social"] = "link"
    enabled: bool = True
    order: int = 0


class BioProfile(BaseModel):
    """Header of the link-in-bio page; dumped in camelCase like the site settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = Field(default="BRANDON PT DAVIS", max_length=120)
    tagline: str = Field(default="Scenic Designer", max_length=200)
    profile_image: str = ""
