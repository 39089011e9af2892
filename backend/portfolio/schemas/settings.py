from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


THEMES = ("light", "dark", "system")


class Production(BaseModel):
    production: str
    director: Optional[str] = None
    designer: Optional[str] = None
    company: str = ""
    year: str = ""


class SiteSettings(BaseModel):
    """Global site configuration stored under ``site_settings``.

    Stored with the camelCase keys the admin screens have always written.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    hero_title: str = "Brandon PT Davis"
    hero_subtitle: str = "Scenic Designer"
    bio_text: str = ""
    profile_image_url: Optional[str] = None
    intro_text: str = ""
    about_text: str = ""
    philosophy_text: str = ""

    contact_email: str = "info@brandonptdavis.com"
    contact_phone: Optional[str] = None
    contact_location: Optional[str] = None
    availability_status: Optional[str] = None

    phone: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    upcoming_productions: List[Production] = Field(default_factory=list)
    recent_productions: List[Production] = Field(default_factory=list)
    assistant_design_productions: List[Production] = Field(default_factory=list)
    resume_url: Optional[str] = None
    resume_filename: Optional[str] = None
    resume_last_updated: Optional[str] = None

    site_title: str = "Brandon PT Davis | Scenic Designer"
    site_description: str = "Scenic design portfolio, articles and tutorials."
    default_og_image: Optional[str] = None

    footer_copyright: str = "Brandon PT Davis"
    default_theme: str = Field(default="system", pattern="^(light|dark|system)$")
