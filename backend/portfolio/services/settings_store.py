from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import SiteConfiguration
from ..schemas.settings import THEMES, SiteSettings
from ..utils.cache import SETTINGS_KEY, cache_delete, cache_get_json, cache_set_json


logger = logging.getLogger(__name__)

THEME_COOKIE = "theme"
LOCAL_TTL_SECONDS = 60
REDIS_TTL_SECONDS = 600

_local: Optional[tuple[float, SiteSettings]] = None


def clear_settings_cache() -> None:
    global _local
    _local = None
    cache_delete(SETTINGS_KEY)


def resolve_theme(cookie_value: Optional[str], default: str = "system") -> str:
    value = (cookie_value or "").strip().lower()
    if value in THEMES:
        return value
    return default if default in THEMES else "system"


def _aliased(values: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in values.items():
        field = SiteSettings.model_fields.get(key)
        out[field.alias if field is not None and field.alias else key] = value
    return out


class SiteSettingsStore:
    """Single place where the global site settings are read and written."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _row(self) -> Optional[SiteConfiguration]:
        return self.db.execute(
            select(SiteConfiguration).where(SiteConfiguration.key == SETTINGS_KEY)
        ).scalar_one_or_none()

    def _from_db(self) -> SiteSettings:
        row = self._row()
        if row is None or not row.value:
            return SiteSettings()
        try:
            return SiteSettings.model_validate(row.value)
        except ValidationError as exc:
            logger.warning("stored site settings invalid, using defaults: %s", exc.errors()[:1])
            return SiteSettings()

    def load(self) -> SiteSettings:
        global _local
        now = time.time()
        if _local and _local[0] > now:
            return _local[1]
        cached = cache_get_json(SETTINGS_KEY)
        if isinstance(cached, dict):
            settings_obj = SiteSettings.model_validate(cached)
        else:
            settings_obj = self._from_db()
            cache_set_json(SETTINGS_KEY, settings_obj.model_dump(mode="json", by_alias=True), REDIS_TTL_SECONDS)
        _local = (now + LOCAL_TTL_SECONDS, settings_obj)
        return settings_obj

    def update(self, values: Dict[str, Any]) -> SiteSettings:
        """Merge ``values`` into the stored settings; invalid values raise ValidationError."""
        current = self._from_db().model_dump(by_alias=True)
        merged = SiteSettings.model_validate({**current, **_aliased(values)})
        payload = merged.model_dump(mode="json", by_alias=True)
        row = self._row()
        if row is None:
            row = SiteConfiguration(key=SETTINGS_KEY, value=payload)
            self.db.add(row)
        else:
            row.value = payload
        self.db.commit()
        clear_settings_cache()
        logger.info("site settings updated keys=%s", sorted(values))
        return merged
