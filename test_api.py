"""Read-only JSON API."""
from conftest import USER_EMAIL, login
from models.project import Project
from models.testimonial import Testimonial
from test_content import BLOG, PROJECT


def test_home_json(client):
    r = client.get("/api/en/home")
    assert r.status_code == 200
    body = r.get_json()
    assert body["success"]
    assert body["locale"] == "en"
    assert body["data"]["sections"]["hero_active"] is True
    assert body["data"]["hero"] is None
    assert body["data"]["projects"] == []


def test_projects_json(owner_client, app):
    owner_client.post("/en/admin/projects/new", data=PROJECT)
    projects = owner_client.get("/api/en/projects").get_json()["data"]
    assert [p["slug"] for p in projects] == ["portfolio-site"]
    assert owner_client.get("/api/en/projects?featured=1").get_json()["data"] == []

    project = owner_client.get(f"/api/en/projects/{projects[0]['id']}").get_json()["data"]
    assert project["title"] == "Portfolio site"

    # No Arabic text yet: placeholders instead of English
    arabic = owner_client.get(f"/api/ar/projects/{projects[0]['id']}").get_json()["data"]
    assert arabic["title"] == "Untitled Project"


def test_inactive_project_is_404(owner_client, app):
    owner_client.post("/en/admin/projects/new",
                      data={k: v for k, v in PROJECT.items() if k != "is_active"})
    with app.app_context():
        project_id = Project.get_all("en", active_only=False)[0]["id"]
    r = owner_client.get(f"/api/en/projects/{project_id}")
    assert r.status_code == 404
    assert r.get_json()["success"] is False


def test_blogs_json(owner_client):
    owner_client.post("/en/admin/blogs/new", data=BLOG)
    blogs = owner_client.get("/api/en/blogs").get_json()["data"]
    assert blogs[0]["slug"] == "secure-actions"
    assert blogs[0]["tags"][0]["name"] == "security"
    detail = owner_client.get(f"/api/en/blogs/{blogs[0]['id']}").get_json()
    assert detail["data"]["category"] == "Engineering"


def test_testimonials_json_hides_email(client, app):
    with app.app_context():
        testimonial_id = Testimonial.create("Client", "CEO", "Great work, thank you.", 5,
                                            email="client@mail.io")
        Testimonial.update_status(testimonial_id, is_active=True)
    data = client.get("/api/testimonials").get_json()["data"]
    assert [t["id"] for t in data] == [testimonial_id]
    assert "email" not in data[0]


def test_me_requires_sign_in(client):
    r = client.get("/api/me")
    assert r.status_code == 401
    assert r.get_json() == {"success": False, "error": "UNAUTHORIZED", "status": 401}


def test_me_returns_public_fields(client):
    login(client, USER_EMAIL)
    data = client.get("/api/me").get_json()["data"]
    assert data["email"] == USER_EMAIL
    assert data["role"] == "USER"
    assert data["is_admin"] is False
    assert "password_hash" not in data


def test_unknown_api_path_is_json_404(client):
    r = client.get("/api/en/nothing")
    assert r.status_code == 404
    assert r.get_json()["status"] == 404


def test_unsupported_locale(client):
    assert client.get("/api/fr/projects").status_code == 404
