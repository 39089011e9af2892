import json
import logging
import time
from typing import Any, Optional

import redis

from ..config import settings


logger = logging.getLogger(__name__)
_redis_client: Optional[redis.Redis] = None
_redis_disabled_until: float = 0.0

SITEMAP_KEY = "sitemap:pages"
IMAGE_SITEMAP_KEY = "sitemap:images"
RSS_KEY = "rss:articles"
VIDEO_SITEMAP_KEY = "sitemap:videos"
SETTINGS_KEY = "site_settings"


def _now() -> float:
    return time.time()


def _mark_redis_disabled(reason: str, seconds: int = 60) -> None:
    global _redis_disabled_until
    _redis_disabled_until = _now() + seconds
    logger.warning("redis disabled for %ss: %s", seconds, reason)


def get_redis() -> Optional[redis.Redis]:
    global _redis_client
    if _redis_disabled_until and _redis_disabled_until > _now():
        return None
    url = settings.REDIS_URL
    if not url:
        return None
    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=0.2,
                socket_timeout=0.5,
                retry_on_timeout=False,
                health_check_interval=30,
            )
            _redis_client.ping()
        except redis.RedisError as exc:
            logger.warning("redis unavailable: %s", exc)
            _mark_redis_disabled(str(exc))
            _redis_client = None
            return None
    return _redis_client


def cache_get_json(key: str) -> Optional[Any]:
    client = get_redis()
    if client is None:
        return None
    try:
        raw = client.get(key)
        if not raw:
            return None
        return json.loads(raw)
    except (redis.RedisError, ValueError) as exc:
        logger.warning("redis get failed: %s", exc)
        return None


def cache_set_json(key: str, value: Any, ttl_sec: int) -> bool:
    client = get_redis()
    if client is None:
        return False
    try:
        client.setex(key, ttl_sec, json.dumps(value, ensure_ascii=False))
        return True
    except (redis.RedisError, TypeError) as exc:
        logger.warning("redis set failed: %s", exc)
        return False


def cache_get_text(key: str) -> Optional[str]:
    value = cache_get_json(key)
    return value if isinstance(value, str) else None


def cache_delete(*keys: str) -> int:
    client = get_redis()
    if client is None or not keys:
        return 0
    try:
        return int(client.delete(*keys))
    except redis.RedisError as exc:
        logger.warning("redis delete failed: %s", exc)
        return 0


def invalidate_generated() -> None:
    """Drop cached sitemaps and feeds after content changes."""
    cache_delete(SITEMAP_KEY, IMAGE_SITEMAP_KEY, VIDEO_SITEMAP_KEY, RSS_KEY)
