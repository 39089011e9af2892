from backend.portfolio.config import settings
from backend.portfolio.services.auth_service import AuthService


def test_admin_api_requires_token(client):
    resp = client.get("/api/admin/projects")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid or missing admin token"}
    assert client.get("/api/admin/stats", headers={"X-Admin-Token": "forged"}).status_code == 401


def test_login_issues_usable_token(client, admin_password):
    assert client.post("/api/admin/login", json={"password": "wrong"}).status_code == 401
    assert client.post("/api/admin/login", json={}).json() == {"detail": "Invalid password"}

    body = client.post("/api/admin/login", json={"password": admin_password}).json()
    assert body["expiresIn"] == AuthService().ttl_seconds
    resp = client.get("/api/admin/stats", headers={"Authorization": f"Bearer {body['token']}"})
    assert resp.status_code == 200
    assert resp.json()["projects"] == 0


def test_session_cookie_also_grants_access(admin_client):
    assert admin_client.get("/api/admin/stats").status_code == 200


def test_project_crud(client, admin_headers):
    created = client.post(
        "/api/admin/projects",
        json={"title": "The Tempest", "clientName": "Rep", "focalPoint": {"x": 10, "y": 90}, "tags": ["storm"]},
        headers=admin_headers,
    )
    assert created.status_code == 201
    project = created.json()
    assert project["slug"] == "the-tempest"
    assert project["client_name"] == "Rep"
    assert project["published"] is False

    # drafts are visible to the admin list only
    assert client.get("/api/projects").json() == []
    assert [p["id"] for p in client.get("/api/admin/projects", headers=admin_headers).json()] == [project["id"]]

    updated = client.put(
        f"/api/admin/projects/{project['id']}", json={"published": True, "venue": "Main Stage"}, headers=admin_headers
    ).json()
    assert updated["venue"] == "Main Stage"
    assert updated["title"] == "The Tempest"
    assert client.get("/api/projects/the-tempest").status_code == 200

    assert client.post("/api/admin/projects", json={"title": ""}, headers=admin_headers).status_code == 400
    bad_focal = client.post(
        "/api/admin/projects", json={"title": "x", "focalPoint": {"x": 101, "y": 0}}, headers=admin_headers
    )
    assert bad_focal.status_code == 422

    assert client.delete(f"/api/admin/projects/{project['id']}", headers=admin_headers).json() == {"ok": True}
    assert client.delete(f"/api/admin/projects/{project['id']}", headers=admin_headers).status_code == 404
    assert client.get(f"/api/admin/projects/{project['id']}", headers=admin_headers).status_code == 404


def test_post_and_news_crud(client, admin_headers):
    post = client.post(
        "/api/admin/posts",
        json={"title": "Model Boxes", "category": "Process", "date": "2024-05-01", "published": True},
        headers=admin_headers,
    )
    assert post.status_code == 201
    post_id = post.json()["id"]
    assert client.get("/api/posts/model-boxes").json()["date"] == "2024-05-01"
    client.put(f"/api/admin/posts/{post_id}", json={"excerpt": "Quarter scale"}, headers=admin_headers)
    assert client.get(f"/api/admin/posts/{post_id}", headers=admin_headers).json()["excerpt"] == "Quarter scale"
    assert client.delete(f"/api/admin/posts/{post_id}", headers=admin_headers).json() == {"ok": True}

    news = client.post("/api/admin/news", json={"title": "Opening", "published": True}, headers=admin_headers)
    assert news.status_code == 201
    assert [n["title"] for n in client.get("/api/news").json()] == ["Opening"]
    news_id = news.json()["id"]
    assert client.get(f"/api/admin/news/{news_id}", headers=admin_headers).json()["slug"] == "opening"
    assert client.delete(f"/api/admin/news/{news_id}", headers=admin_headers).json() == {"ok": True}


def test_tutorial_crud(client, admin_headers):
    created = client.post(
        "/api/admin/tutorials", json={"title": "Lighting the model", "category": "Rendering"}, headers=admin_headers
    )
    assert created.status_code == 201
    tutorial_id = created.json()["id"]
    assert any(t["slug"] == "lighting-the-model" for t in client.get("/api/tutorials").json())
    client.put(f"/api/admin/tutorials/{tutorial_id}", json={"published": False}, headers=admin_headers)
    assert client.get("/api/tutorials/lighting-the-model").status_code == 404
    assert client.delete(f"/api/admin/tutorials/{tutorial_id}", headers=admin_headers).json() == {"ok": True}


def test_category_and_collaborator_crud(client, admin_headers):
    created = client.post("/api/admin/categories/portfolio", json={"name": "Scenic Design"}, headers=admin_headers)
    assert created.status_code == 201
    category_id = created.json()["id"]
    assert client.post("/api/admin/categories/widgets", json={"name": "x"}, headers=admin_headers).status_code == 400
    assert client.post("/api/admin/categories/portfolio", json={"name": "Scenic Design"}, headers=admin_headers).status_code == 400

    grouped = client.get("/api/admin/categories", headers=admin_headers).json()
    assert [c["name"] for c in grouped["portfolio"]] == ["Scenic Design"]
    assert grouped["articles"] == []

    renamed = client.put(
        f"/api/admin/categories/portfolio/{category_id}", json={"name": "Scenic", "displayOrder": 3}, headers=admin_headers
    ).json()
    assert renamed["name"] == "Scenic"
    assert renamed["display_order"] == 3
    assert client.delete(f"/api/admin/categories/portfolio/{category_id}", headers=admin_headers).json() == {"ok": True}
    assert client.delete(f"/api/admin/categories/portfolio/{category_id}", headers=admin_headers).status_code == 404

    person = client.post("/api/admin/collaborators", json={"name": "Zoe", "role": "Director"}, headers=admin_headers)
    assert person.status_code == 201
    person_id = person.json()["id"]
    assert client.put(f"/api/admin/collaborators/{person_id}", json={"bio": "Directs"}, headers=admin_headers).json()["bio"] == "Directs"
    assert client.delete(f"/api/admin/collaborators/{person_id}", headers=admin_headers).json() == {"ok": True}


def test_settings_update(client, admin_headers):
    current = client.get("/api/admin/settings", headers=admin_headers).json()
    assert current["defaultTheme"] == "system"

    updated = client.put("/api/admin/settings", json={"heroTitle": "Scenery", "defaultTheme": "dark"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["heroTitle"] == "Scenery"
    assert client.get("/api/settings").json()["defaultTheme"] == "dark"

    assert client.put("/api/admin/settings", json={"defaultTheme": "neon"}, headers=admin_headers).status_code == 422


def test_bio_link_management(client, admin_headers):
    assert client.post("/api/admin/links", json={"title": "Reel"}).status_code == 401
    assert client.post("/api/admin/links", json={"title": "Reel"}, headers=admin_headers).status_code == 400

    created = client.post(
        "/api/admin/links", json={"title": "Reel", "url": "https://vimeo.test/reel", "icon": "video"}, headers=admin_headers
    )
    assert created.status_code == 201
    link = created.json()
    assert link["order"] == 1
    assert link["enabled"] is True

    hidden = client.put(f"/api/admin/links/{link['id']}", json={"enabled": False}, headers=admin_headers).json()
    assert hidden["enabled"] is False
    assert hidden["title"] == "Reel"
    assert client.get("/api/links").json() == []
    assert [item["id"] for item in client.get("/api/admin/links", headers=admin_headers).json()] == [link["id"]]
    assert client.put("/api/admin/links/missing", json={"title": "x"}, headers=admin_headers).status_code == 404

    bio = client.put("/api/admin/links/bio", json={"tagline": "Scenic & Experiential Designer"}, headers=admin_headers)
    assert bio.json()["tagline"] == "Scenic & Experiential Designer"
    assert bio.json()["name"] == "BRANDON PT DAVIS"
    client.put("/api/admin/links/bio", json={"profile_image": "https://img.test/me.jpg"}, headers=admin_headers)
    assert client.get("/api/links/bio").json()["profileImage"] == "https://img.test/me.jpg"

    assert client.delete(f"/api/admin/links/{link['id']}", headers=admin_headers).json() == {"ok": True}
    assert client.delete(f"/api/admin/links/{link['id']}", headers=admin_headers).status_code == 404


def test_login_with_corrupt_hash_is_rejected(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", "pbkdf2_sha256$0$00$00")
    assert client.post("/api/admin/login", json={"password": "anything"}).status_code == 401
