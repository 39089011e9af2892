from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import SiteConfiguration
from ..models.base import new_id
from ..schemas.links import BioLink, BioLinkIn, BioProfile
from .records import payload_dict


logger = logging.getLogger(__name__)

LINKS_KEY = "bio-links"
PROFILE_KEY = "bio-data"


class BioLinksService:
    """Link-in-bio entries and profile header, kept as two site_configuration rows."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _row(self, key: str) -> Optional[SiteConfiguration]:
        return self.db.execute(select(SiteConfiguration).where(SiteConfiguration.key == key)).scalar_one_or_none()

    def _write(self, key: str, value: Dict[str, Any]) -> None:
        row = self._row(key)
        if row is None:
            self.db.add(SiteConfiguration(key=key, value=value))
        else:
            row.value = value
        self.db.commit()

    def _stored(self) -> List[BioLink]:
        row = self._row(LINKS_KEY)
        stored = (row.value or {}).get("links", []) if row is not None else []
        links: List[BioLink] = []
        for raw in stored:
            try:
                links.append(BioLink.model_validate(raw))
            except ValidationError as exc:
                logger.warning("skipping invalid bio link: %s", exc.errors()[:1])
        return links

    def _save(self, links: List[BioLink]) -> None:
        self._write(LINKS_KEY, {"links": [link.model_dump(mode="json") for link in links]})

    def all(self) -> List[BioLink]:
        return sorted(self._stored(), key=lambda link: link.order)

    def enabled(self) -> List[BioLink]:
        return [link for link in self.all() if link.enabled]

    def add(self, data: Union[BioLinkIn, Dict[str, Any]]) -> BioLink:
        values = payload_dict(data)
        title = (values.get("title") or "").strip()
        url = (values.get("url") or "").strip()
        if not title or not url:
            raise ValueError("title and url are required")
        links = self._stored()
        values.update(id=new_id(), title=title, url=url)
        if not values.get("order"):
            values["order"] = len(links) + 1
        link = BioLink.model_validate({k: v for k, v in values.items() if v is not None})
        self._save(links + [link])
        logger.info("bio link added id=%s", link.id)
        return link

    def update(self, link_id: str, data: Union[BioLinkIn, Dict[str, Any]]) -> BioLink:
        values = {k: v for k, v in payload_dict(data).items() if v is not None}
        links = self._stored()
        for index, link in enumerate(links):
            if link.id == link_id:
                links[index] = BioLink.model_validate({**link.model_dump(), **values, "id": link_id})
                self._save(links)
                return links[index]
        raise LookupError(f"bio link {link_id} not found")

    def delete(self, link_id: str) -> None:
        links = self._stored()
        kept = [link for link in links if link.id != link_id]
        if len(kept) == len(links):
            raise LookupError(f"bio link {link_id} not found")
        self._save(kept)

    def profile(self) -> BioProfile:
        row = self._row(PROFILE_KEY)
        if row is None or not row.value:
            return BioProfile()
        try:
            return BioProfile.model_validate(row.value)
        except ValidationError as exc:
            logger.warning("stored bio profile invalid, using defaults: %s", exc.errors()[:1])
            return BioProfile()

    def update_profile(self, values: Dict[str, Any]) -> BioProfile:
        current = self.profile().model_dump(by_alias=True)
        aliased = {}
        for key, value in values.items():
            field = BioProfile.model_fields.get(key)
            aliased[field.alias if field is not None and field.alias else key] = value
        merged = BioProfile.model_validate({**current, **aliased})
        self._write(PROFILE_KEY, merged.model_dump(mode="json", by_alias=True))
        return merged
