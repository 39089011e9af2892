import datetime as dt

from backend.portfolio.services.article_service import ArticleService
from backend.portfolio.services.category_service import CategoryService
from backend.portfolio.services.collaborator_service import CollaboratorService
from backend.portfolio.services.links_service import BioLinksService
from backend.portfolio.services.project_service import ProjectService
from backend.portfolio.utils.static_data import load_tutorial_data, static_news, static_tutorials


BLOCKS = [
    {"id": "1", "type": "heading", "content": "Research", "metadata": {"level": 2}},
    {"id": "2", "type": "paragraph", "content": "Sketches first.", "metadata": {}},
]


def _seed(db):
    hamlet = ProjectService(db).create(
        {"title": "Hamlet", "category": "Scenic Design", "published": True, "featured": True, "tags": ["Shakespeare"]}
    )
    ProjectService(db).create({"title": "Night Market", "category": "Experiential", "published": True})
    ProjectService(db).create({"title": "Draft"})
    post = ArticleService(db).create(
        {"title": "On Scale", "category": "Process", "tags": ["models"], "content": BLOCKS, "published": True, "date": dt.date(2024, 1, 1)}
    )
    ArticleService(db).create({"title": "Paint", "category": "Process", "published": True, "date": dt.date(2024, 2, 1)})
    return hamlet, post


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert "X-Process-Time" in resp.headers


def test_projects_listing_and_detail(client, db):
    hamlet, _ = _seed(db)
    data = client.get("/api/projects").json()
    assert [p["title"] for p in data] == ["Hamlet", "Night Market"]
    assert [p["title"] for p in client.get("/api/projects", params={"category": "experiential"}).json()] == ["Night Market"]
    assert [p["title"] for p in client.get("/api/projects", params={"featured": "true"}).json()] == ["Hamlet"]
    assert client.get("/api/projects", params={"limit": 0}).status_code == 422

    detail = client.get("/api/projects/hamlet").json()
    assert detail["id"] == hamlet.id
    assert detail["tags"] == ["Shakespeare"]
    assert client.get("/api/projects/draft").status_code == 404


def test_project_view_and_like(client, db):
    hamlet, _ = _seed(db)
    assert client.post(f"/api/projects/{hamlet.id}/view").json() == {"views": 1}
    assert client.post(f"/api/projects/{hamlet.id}/like").json() == {"likes": 1}
    assert client.post("/api/projects/missing/like").status_code == 404

    assert client.post(f"/api/projects/{hamlet.id}/unlike").json() == {"likes": 0}
    assert client.post(f"/api/projects/{hamlet.id}/unlike").json() == {"likes": 0}
    assert client.post("/api/projects/missing/unlike").status_code == 404


def test_posts(client, db):
    _, post = _seed(db)
    assert [p["title"] for p in client.get("/api/posts").json()] == ["Paint", "On Scale"]
    detail = client.get("/api/posts/on-scale").json()
    assert '<h2 id="research">Research</h2>' in detail["html"]
    assert client.get("/api/posts/nope").status_code == 404

    related = client.get("/api/posts/related", params={"category": "Process", "exclude": post.id}).json()
    assert [p["title"] for p in related] == ["Paint"]
    by_tag = client.get("/api/posts/related", params={"tags": "models,other"}).json()
    assert [p["title"] for p in by_tag] == ["On Scale"]

    assert client.post(f"/api/posts/{post.id}/view").json() == {"views": 1}
    assert client.post(f"/api/posts/{post.id}/like").json() == {"likes": 1}
    assert client.post("/api/posts/missing/view").status_code == 404


def test_categories_collaborators_and_settings(client, db):
    CategoryService(db).create("portfolio", {"name": "Scenic Design"})
    CollaboratorService(db).create({"name": "Zoe", "role": "Director"})

    assert [c["slug"] for c in client.get("/api/categories/portfolio").json()] == ["scenic-design"]
    assert client.get("/api/categories/widgets").status_code == 400
    assert client.get("/api/collaborators").json()[0]["name"] == "Zoe"

    settings = client.get("/api/settings").json()
    assert settings["heroTitle"] == "Brandon PT Davis"
    assert settings["defaultTheme"] == "system"


def test_news_and_tutorials_fall_back_to_bundled_data(client):
    news = client.get("/api/news").json()
    assert [n["slug"] for n in news] == [n.slug for n in static_news()]
    first = static_news()[0]
    detail = client.get(f"/api/news/{first.slug}").json()
    assert detail["title"] == first.title
    assert "html" in detail
    assert client.get("/api/news/missing-item").status_code == 404

    tutorials = client.get("/api/tutorials").json()
    assert len(tutorials) == len(static_tutorials())
    slug = static_tutorials()[0].slug
    assert client.get(f"/api/tutorials/{slug}").json()["slug"] == slug
    assert client.get("/api/tutorials/missing").status_code == 404

    categories = client.get("/api/tutorial-categories").json()
    assert [c["id"] for c in categories] == [c.id for c in load_tutorial_data().categories]
    assert categories[0]["name"] == "Quick Tips"


def test_search(client, db):
    _seed(db)
    body = client.get("/api/search", params={"q": "hamlet"}).json()
    assert body["query"] == "hamlet"
    assert [r["url"] for r in body["results"] if r["kind"] == "project"] == ["/project/hamlet"]
    assert client.get("/api/search").json()["results"] == []


def test_render_endpoint(client):
    resp = client.post("/api/render", json=BLOCKS)
    assert resp.status_code == 200
    assert '<div class="prose-paragraph">Sketches first.</div>' in resp.json()["html"]
    assert client.post("/api/render", json={"blocks": BLOCKS}).json() == resp.json()
    assert client.post("/api/render", json={"blocks": "nope"}).status_code == 400


def test_unknown_api_path_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not found"}


def test_bio_links(client, db):
    assert client.get("/api/links").json() == []
    assert client.get("/api/links/bio").json() == {
        "name": "BRANDON PT DAVIS",
        "tagline": "Scenic Designer",
        "profileImage": "",
    }

    service = BioLinksService(db)
    service.add({"title": "Instagram", "url": "https://instagram.test/bptd", "type": "social", "order": 5})
    service.add({"title": "Portfolio", "url": "https://example.test"})
    service.add({"title": "Old reel", "url": "https://old.test", "enabled": False})

    links = client.get("/api/links").json()
    assert [link["title"] for link in links] == ["Portfolio", "Instagram"]
    assert links[0]["order"] == 2
    assert links[0]["enabled"] is True
