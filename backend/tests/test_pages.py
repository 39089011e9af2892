import datetime as dt

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from backend.portfolio.routers import pages
from backend.portfolio.services.article_service import ArticleService
from backend.portfolio.services.category_service import CategoryService
from backend.portfolio.services.links_service import BioLinksService
from backend.portfolio.services.project_service import ProjectService
from backend.portfolio.utils.static_data import static_news, static_tutorials


def _heading(text, level=2):
    return {"id": text, "type": "heading", "content": text, "metadata": {"level": level}}


def test_home_page(client, db):
    ProjectService(db).create({"title": "Hamlet", "published": True, "featured": True})
    resp = client.get("/")
    assert resp.status_code == 200
    assert 'class="page-home"' in resp.text
    assert "Brandon PT Davis" in resp.text
    assert "Hamlet" in resp.text
    assert 'data-theme="system"' in resp.text


def test_portfolio_filter(client, db):
    CategoryService(db).create("portfolio", {"name": "Scenic Design"})
    ProjectService(db).create({"title": "Hamlet", "category": "Scenic Design", "published": True})
    ProjectService(db).create({"title": "Night Market", "category": "Experiential", "published": True})

    everything = client.get("/portfolio")
    assert "Hamlet" in everything.text and "Night Market" in everything.text

    filtered = client.get("/portfolio?filter=scenic-design")
    assert filtered.status_code == 200
    assert "Hamlet" in filtered.text
    assert "Night Market" not in filtered.text


def test_project_page_and_fallback_to_portfolio(client, db):
    ProjectService(db).create(
        {"title": "Hamlet", "venue": "Main Stage", "published": True, "content": [_heading("Concept")]}
    )
    resp = client.get("/project/hamlet")
    assert resp.status_code == 200
    assert 'class="page-project"' in resp.text
    assert '<h2 id="concept">Concept</h2>' in resp.text

    missing = client.get("/project/no-such-show")
    assert missing.status_code == 200
    assert 'class="page-portfolio"' in missing.text


def test_article_page_with_table_of_contents(client, db):
    ArticleService(db).create(
        {
            "title": "On Scale",
            "published": True,
            "date": dt.date(2024, 1, 1),
            "content": [_heading("Research"), _heading("Models"), _heading("Paint", 3)],
        }
    )
    resp = client.get("/articles/on-scale")
    assert resp.status_code == 200
    assert 'class="toc"' in resp.text
    assert '<a href="#paint">Paint</a>' in resp.text
    assert 'class="page-articles"' in client.get("/articles/gone").text


def test_unknown_page_is_404(client):
    resp = client.get("/no-such-page")
    assert resp.status_code == 404
    assert "Page not found" in resp.text
    assert 'class="page-404"' in resp.text


def test_legacy_urls_redirect_permanently(client):
    resp = client.get("/scenic-insights/old-post", follow_redirects=False)
    assert resp.status_code == 308
    assert resp.headers["location"] == "/articles/old-post"
    tag = client.get("/tag/opera", follow_redirects=False)
    assert tag.status_code == 308
    assert tag.headers["location"] == "/articles?tag=opera"


def test_news_and_studio_use_bundled_content(client):
    news = client.get("/news")
    assert news.status_code == 200
    assert static_news()[0].title in news.text
    item = client.get(f"/news/{static_news()[0].slug}")
    assert item.status_code == 200
    assert 'class="page-news-article"' in item.text

    studio = client.get("/scenic-studio")
    assert "Scenic Studio" in studio.text
    tutorial = static_tutorials()[0]
    assert tutorial.title in client.get(f"/scenic-studio/{tutorial.slug}").text
    assert "Scenic Studio" in client.get("/scenic-studio/missing-tutorial").text


def test_search_page(client, db):
    ProjectService(db).create({"title": "Hamlet", "published": True})
    resp = client.get("/search?q=hamlet")
    assert resp.status_code == 200
    assert '<a href="/project/hamlet">Hamlet</a>' in resp.text


def test_contact_form(client):
    page = client.get("/contact")
    assert 'action="/contact"' in page.text

    invalid = client.post("/contact", data={"name": "Ada", "email": "nope", "message": "Hi"})
    assert invalid.status_code == 400
    assert "Please enter a valid email address" in invalid.text
    assert 'value="Ada"' in invalid.text

    sent = client.post("/contact", data={"name": "Ada", "email": "ada@example.test", "message": "Hi"})
    assert sent.status_code == 200
    assert "Thank you! Your message has been sent." in sent.text


def test_theme_cookie(client):
    resp = client.post("/theme", data={"theme": "dark", "next": "/portfolio"}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/portfolio"
    assert "theme=dark" in resp.headers["set-cookie"]
    assert 'data-theme="dark"' in client.get("/").text

    offsite = client.post("/theme", data={"theme": "light", "next": "//evil.test"}, follow_redirects=False)
    assert offsite.headers["location"] == "/"


def test_database_outage_degrades_gracefully(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(ProjectService, "list_published", broken)
    resp = client.get("/portfolio")
    assert resp.status_code == 200
    assert "Some content could not be loaded right now" in resp.text


def test_unexpected_error_renders_error_page(app, monkeypatch):
    def explode(data, view):
        raise RuntimeError("boom")

    monkeypatch.setattr(pages, "render_view", explode)
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/portfolio")
        assert resp.status_code == 500
        assert "Something went wrong" in resp.text
        assert "boom" not in resp.text


def test_sitemap_endpoints(client, db):
    ProjectService(db).create({"title": "Hamlet", "published": True, "cover_image": "https://img.test/h.jpg"})
    sitemap = client.get("/sitemap.xml")
    assert sitemap.status_code == 200
    assert sitemap.headers["content-type"].startswith("application/xml")
    assert "/project/hamlet</loc>" in sitemap.text
    assert "https://img.test/h.jpg" in client.get("/image-sitemap.xml").text
    rss = client.get("/rss.xml")
    assert rss.headers["content-type"].startswith("application/rss+xml")
    assert "<title>Hamlet</title>" in rss.text


def test_static_assets_are_cached(client):
    resp = client.get("/static/css/site.css")
    assert resp.status_code == 200
    assert "immutable" in resp.headers["cache-control"]


def test_links_page(client, db):
    empty = client.get("/links")
    assert empty.status_code == 200
    assert "BRANDON PT DAVIS" in empty.text
    assert "No links yet." in empty.text

    service = BioLinksService(db)
    service.add({"title": "Instagram", "url": "https://instagram.test/bptd", "type": "social"})
    service.add({"title": "Portfolio", "url": "https://example.test/work", "description": "selected work"})
    service.add({"title": "Old reel", "url": "https://old.test", "enabled": False})
    service.update_profile({"tagline": "Scenic Designer & Educator"})

    page = client.get("/links")
    assert 'aria-label="Instagram"' in page.text
    assert 'href="https://example.test/work"' in page.text
    assert "SELECTED WORK" in page.text
    assert "Old reel" not in page.text
    assert "Scenic Designer &amp; Educator" in page.text


def test_video_sitemap_endpoint(client, db):
    ProjectService(db).create({"title": "Night Market", "published": True, "video_urls": ["https://youtu.be/abc123"]})
    resp = client.get("/video-sitemap.xml")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    assert resp.headers["cache-control"] == "public, max-age=3600"
    assert '<video:player_loc allow_embed="yes">https://youtu.be/abc123</video:player_loc>' in resp.text
