import pytest
from sqlalchemy.exc import OperationalError

from backend.portfolio.utils import cache
from backend.portfolio.utils.fetch import fetch_or_fallback
from backend.portfolio.utils.images import focal_param, optimize_image, srcset
from backend.portfolio.utils.slugs import slugify, strip_tags
from backend.portfolio.utils.telegram import format_contact_message


STORAGE = "https://abc.storage.test/storage/v1/object/public/portfolio/hamlet/set.jpg"


def test_fetch_or_fallback_success():
    result = fetch_or_fallback(lambda: [1, 2], [], "numbers")
    assert result.ok
    assert result.value == [1, 2]
    assert not result.used_fallback


def test_fetch_or_fallback_on_database_error():
    def broken():
        raise OperationalError("select 1", {}, Exception("connection refused"))

    result = fetch_or_fallback(broken, [], "projects")
    assert not result.ok
    assert result.used_fallback
    assert result.value == []
    assert "connection refused" in result.error


def test_fetch_or_fallback_does_not_hide_programming_errors():
    def buggy():
        raise TypeError("bad call")

    with pytest.raises(TypeError):
        fetch_or_fallback(buggy, None, "anything")


def test_optimize_image_storage_url():
    url = optimize_image(STORAGE, "card")
    assert "/storage/v1/render/image/public/portfolio/hamlet/set.jpg?" in url
    assert "width=600" in url
    assert "quality=80" in url


def test_optimize_image_focal_point_and_passthrough():
    assert "focal=30,70" in optimize_image(STORAGE, "hero", {"x": 30, "y": 70})
    assert optimize_image("https://other.test/a.jpg") == "https://other.test/a.jpg"
    assert optimize_image(None) == ""
    already = STORAGE + "?width=100"
    assert optimize_image(already) == already
    stamped = "https://abc.storage.test/storage/v1/object/public/portfolio/set-1700000000000.jpg"
    assert optimize_image(stamped) == stamped


def test_focal_param_and_srcset():
    assert focal_param({"x": "12.5", "y": 40}) == "12.5,40"
    assert focal_param({"x": "left"}) is None
    assert focal_param(None) is None
    entries = srcset(STORAGE, widths=(400, 800)).split(", ")
    assert entries[0].endswith(" 400w")
    assert "width=800" in entries[1]
    assert srcset("https://other.test/a.jpg") == "https://other.test/a.jpg"


def test_slugify_and_strip_tags():
    assert slugify("Café <b>Society</b>!") == "cafe-society"
    assert slugify("???", fallback="x") == "x"
    assert strip_tags("<p>a</p>b") == "ab"


def test_format_contact_message():
    msg = format_contact_message(
        {"name": "Ada", "email": "ada@example.test", "production": "Hamlet", "message": "  Hello there  "}
    )
    lines = msg.split("\n")
    assert lines[0] == "New contact form message"
    assert "name: Ada" in lines
    assert "email: ada@example.test" in lines
    assert "production: Hamlet" in lines
    assert lines[-1] == "Hello there"
    assert "subject:" not in msg


def test_cache_is_noop_without_redis():
    assert cache.get_redis() is None
    assert cache.cache_get_json("anything") is None
    assert cache.cache_set_json("anything", {"a": 1}, 10) is False
    assert cache.cache_delete("anything") == 0
    cache.invalidate_generated()


class FakeRedis:
    def __init__(self):
        self.store = {}

    def ping(self):
        return True

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value

    def delete(self, *keys):
        return sum(1 for k in keys if self.store.pop(k, None) is not None)


def test_cache_round_trip_with_client(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(cache, "get_redis", lambda: fake)
    assert cache.cache_set_json(cache.RSS_KEY, "<rss/>", 60)
    assert cache.cache_get_text(cache.RSS_KEY) == "<rss/>"
    cache.cache_set_json("obj", {"a": 1}, 60)
    assert cache.cache_get_text("obj") is None
    cache.invalidate_generated()
    assert cache.RSS_KEY not in fake.store
