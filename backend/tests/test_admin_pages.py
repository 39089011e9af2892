import json

from backend.portfolio.services.article_service import ArticleService
from backend.portfolio.services.project_service import ProjectService


def _content(db, service_cls, record_id):
    db.expire_all()
    return service_cls(db).get(record_id).content


def test_admin_requires_login(client):
    resp = client.get("/admin", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/admin/login"
    assert client.get("/admin/projects", follow_redirects=False).status_code == 302


def test_login_form(client):
    page = client.get("/admin/login")
    assert page.status_code == 200
    assert 'name="password"' in page.text

    bad = client.post("/admin/login", data={"password": "nope"})
    assert bad.status_code == 400
    assert "Incorrect password" in bad.text


def test_dashboard_and_logout(admin_client, db):
    ProjectService(db).create({"title": "Hamlet", "published": True})
    page = admin_client.get("/admin")
    assert page.status_code == 200
    assert "1 / 1" in page.text
    assert admin_client.get("/admin/login", follow_redirects=False).headers["location"] == "/admin"

    assert admin_client.get("/admin/logout", follow_redirects=False).status_code == 302
    assert admin_client.get("/admin", follow_redirects=False).status_code == 302


def test_create_edit_and_delete_project_through_forms(admin_client, db):
    assert admin_client.get("/admin/widgets").status_code == 404
    assert "New Project" in admin_client.get("/admin/projects/new").text

    missing_title = admin_client.post("/admin/projects/new", data={"title": ""})
    assert missing_title.status_code == 400
    assert "title is required" in missing_title.text

    resp = admin_client.post(
        "/admin/projects/new",
        data={"title": "The Tempest", "category": "Scenic Design", "tags": "storm, island", "published": "on"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    project_id = resp.headers["location"].rsplit("/", 1)[-1]
    project = ProjectService(db).get(project_id)
    assert project.tags == ["storm", "island"]
    assert project.published is True
    assert project.featured is False

    saved = admin_client.post(
        f"/admin/projects/{project_id}",
        data={"title": "The Tempest", "venue": "Main Stage", "tags": "storm"},
        follow_redirects=False,
    )
    assert saved.status_code == 303
    db.expire_all()
    project = ProjectService(db).get(project_id)
    assert project.venue == "Main Stage"
    assert project.published is False

    listing = admin_client.get("/admin/projects")
    assert "The Tempest" in listing.text
    assert "draft" in listing.text

    assert admin_client.post(f"/admin/projects/{project_id}/delete", follow_redirects=False).status_code == 303
    assert admin_client.get(f"/admin/projects/{project_id}").status_code == 404


def test_block_editing(admin_client, db):
    project = ProjectService(db).create({"title": "Hamlet"})
    base = f"/admin/projects/{project.id}"

    for block_type in ("heading", "paragraph"):
        resp = admin_client.post(f"{base}/blocks/add", data={"block_type": block_type}, follow_redirects=False)
        assert resp.status_code == 303
    assert admin_client.post(f"{base}/blocks/add", data={"block_type": "marquee"}).status_code == 400

    blocks = _content(db, ProjectService, project.id)
    assert [b["type"] for b in blocks] == ["heading", "paragraph"]
    heading_id, paragraph_id = blocks[0]["id"], blocks[1]["id"]

    admin_client.post(f"{base}/blocks/{paragraph_id}/move", data={"offset": -1})
    assert [b["id"] for b in _content(db, ProjectService, project.id)] == [paragraph_id, heading_id]

    admin_client.post(
        f"{base}/blocks/{heading_id}/update",
        data={"content": "Act One", "metadata": json.dumps({"level": 3})},
    )
    heading = next(b for b in _content(db, ProjectService, project.id) if b["id"] == heading_id)
    assert heading["content"] == "Act One"
    assert heading["metadata"]["level"] == 3

    bad_meta = admin_client.post(f"{base}/blocks/{heading_id}/update", data={"content": "x", "metadata": "[1]"})
    assert bad_meta.status_code == 400

    admin_client.post(f"{base}/blocks/{paragraph_id}/remove")
    assert [b["id"] for b in _content(db, ProjectService, project.id)] == [heading_id]

    preview = admin_client.get(f"{base}/preview")
    assert '<h3 id="act-one">Act One</h3>' in preview.text


def test_convert_legacy_html_body(admin_client, db):
    article = ArticleService(db).create({"title": "Old Post", "content": "<h2>Intro</h2><p>Hello</p>"})
    base = f"/admin/articles/{article.id}"
    assert "convert" in admin_client.get(base).text

    assert admin_client.post(f"{base}/convert", follow_redirects=False).status_code == 303
    blocks = _content(db, ArticleService, article.id)
    assert [(b["type"], b["content"]) for b in blocks] == [("heading", "Intro"), ("paragraph", "Hello")]
    assert admin_client.post(f"{base}/convert").status_code == 400


def test_settings_form(admin_client, client):
    page = admin_client.get("/admin/settings")
    assert page.status_code == 200
    assert "Site settings" in page.text

    resp = admin_client.post(
        "/admin/settings",
        data={"hero_title": "Scenery", "contact_phone": "", "default_theme": "light"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert "Settings saved." in admin_client.get(resp.headers["location"]).text
    body = client.get("/api/settings").json()
    assert body["heroTitle"] == "Scenery"
    assert body["defaultTheme"] == "light"
    assert body["contactPhone"] is None

    bad = admin_client.post("/admin/settings", data={"default_theme": "neon"})
    assert bad.status_code == 400
