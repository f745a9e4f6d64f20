"""Sign-in, registration, locale routing and the public pages."""
import sqlite3

from conftest import (ADMIN_EMAIL, OWNER_EMAIL, SUSPENDED_EMAIL, UNVERIFIED_EMAIL,
                      USER_EMAIL, get_csrf, login)
from models.audit_log import AuditLog
from models.user import User


def test_root_redirects_to_default_locale(client):
    r = client.get("/")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/en/")


def test_root_honours_accept_language(client):
    r = client.get("/", headers={"Accept-Language": "ar,en;q=0.5"})
    assert r.headers["Location"].endswith("/ar/")


def test_arabic_pages_are_rtl(client):
    r = client.get("/ar/")
    assert r.status_code == 200
    assert 'dir="rtl"' in r.get_data(as_text=True)
    assert 'dir="ltr"' in client.get("/en/").get_data(as_text=True)


def test_unknown_locale_is_404(client):
    assert client.get("/fr/projects").status_code == 404


def test_set_language_swaps_locale_segment(client):
    r = client.get("/set-language/ar", headers={"Referer": "http://localhost/en/projects"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/ar/projects")


def test_set_language_ignores_foreign_referrer(client):
    r = client.get("/set-language/ar", headers={"Referer": "https://evil.example/en/x"})
    assert r.headers["Location"].endswith("/ar/")


def test_sign_in_page_loads(client):
    r = client.get("/en/auth/sign-in")
    assert r.status_code == 200
    assert get_csrf(r.get_data(as_text=True))


def test_owner_sign_in_redirects_to_dashboard(client, app):
    r = login(client, OWNER_EMAIL)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/en/admin/")
    with app.app_context():
        assert AuditLog.get_actions() == ["LOGIN"]


def test_visitor_sign_in_redirects_home(client):
    r = login(client, USER_EMAIL)
    assert r.headers["Location"].endswith("/en/")


def test_sign_in_follows_safe_next_only(client):
    r = client.post("/en/auth/sign-in?next=/en/blogs",
                    data={"email": USER_EMAIL, "password": "Secret123"})
    assert r.headers["Location"].endswith("/en/blogs")
    client.post("/en/auth/sign-out")

    r = client.post("/en/auth/sign-in?next=//evil.example/",
                    data={"email": USER_EMAIL, "password": "Secret123"})
    assert "evil" not in r.headers["Location"]


def test_wrong_password_is_rejected(client):
    r = login(client, OWNER_EMAIL, password="nope-nope")
    assert r.status_code == 401
    assert "Invalid credentials!" in r.get_data(as_text=True)


def test_unknown_email_gets_same_message(client):
    r = login(client, "ghost@portfolio.io")
    assert r.status_code == 401
    assert "Invalid credentials!" in r.get_data(as_text=True)


def test_unverified_user_cannot_sign_in(client):
    r = login(client, UNVERIFIED_EMAIL)
    assert r.status_code == 403
    assert "not been verified" in r.get_data(as_text=True)


def test_unverified_user_allowed_when_verification_disabled(client, app):
    app.config["REQUIRE_EMAIL_VERIFICATION"] = False
    assert login(client, UNVERIFIED_EMAIL).status_code == 302


def test_suspended_user_cannot_sign_in(client):
    r = login(client, SUSPENDED_EMAIL)
    assert r.status_code == 403
    assert "Account access restricted." in r.get_data(as_text=True)


def test_sign_in_validation_error(client):
    r = client.post("/en/auth/sign-in", data={"email": "not-an-email", "password": ""})
    assert r.status_code == 400


def test_sign_up_creates_unverified_user(client, app):
    r = client.post("/en/auth/sign-up", data={
        "name": "New Person",
        "email": "New@Portfolio.io",
        "password": "Password1",
        "accept_terms": "y",
    })
    assert r.status_code == 302
    with app.app_context():
        user = User.get_by_email("new@portfolio.io")
        assert user is not None
        assert user.role == "USER"
        assert not user.is_verified


def test_sign_up_rejects_duplicate_email(client):
    r = client.post("/en/auth/sign-up", data={
        "name": "Again", "email": ADMIN_EMAIL, "password": "Password1", "accept_terms": "y",
    })
    assert r.status_code == 409
    assert "Email already in use!" in r.get_data(as_text=True)


def test_sign_up_enforces_password_rules(client):
    r = client.post("/en/auth/sign-up", data={
        "name": "Weak", "email": "weak@portfolio.io", "password": "password", "accept_terms": "y",
    })
    assert r.status_code == 400
    assert "uppercase" in r.get_data(as_text=True)


def test_sign_up_requires_terms(client):
    r = client.post("/en/auth/sign-up", data={
        "name": "Terms", "email": "terms@portfolio.io", "password": "Password1",
    })
    assert r.status_code == 400


def test_sign_out(client, app):
    login(client, USER_EMAIL)
    r = client.post("/en/auth/sign-out")
    assert r.status_code == 302
    assert client.get("/api/me").status_code == 401
    with app.app_context():
        assert "LOGOUT" in AuditLog.get_actions()


def test_sign_in_and_out_survive_audit_failures(client, monkeypatch):
    def broken_audit_log(*args, **kwargs):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(AuditLog, "log", staticmethod(broken_audit_log))
    r = login(client, USER_EMAIL)
    assert r.status_code == 302
    assert client.get("/api/me").status_code == 200

    r = client.post("/en/auth/sign-out")
    assert r.status_code == 302
    assert client.get("/api/me").status_code == 401


def test_sign_out_requires_post(client):
    assert client.get("/en/auth/sign-out").status_code == 405


def test_csrf_is_enforced_when_enabled(client, app):
    app.config["WTF_CSRF_ENABLED"] = True
    r = client.post("/en/auth/sign-in", data={"email": OWNER_EMAIL, "password": "Secret123"})
    assert r.status_code == 400

    token = get_csrf(client.get("/en/auth/sign-in").get_data(as_text=True))
    r = client.post("/en/auth/sign-in", data={
        "email": OWNER_EMAIL, "password": "Secret123", "csrf_token": token,
    })
    assert r.status_code == 302


def test_admin_requires_sign_in(client):
    r = client.get("/en/admin/")
    assert r.status_code == 302
    assert "/en/auth/sign-in" in r.headers["Location"]
    assert "next=" in r.headers["Location"]


def test_admin_forbidden_for_visitors(user_client):
    assert user_client.get("/en/admin/").status_code == 403


def test_admin_dashboard_loads(admin_client):
    r = admin_client.get("/en/admin/")
    assert r.status_code == 200
    assert "Unread messages" in r.get_data(as_text=True)


def test_admin_pages_render(owner_client):
    for path in ("hero", "about", "skills", "skills/new", "experience/new", "education",
                 "certifications/new", "projects", "projects/new", "blogs", "blogs/new",
                 "testimonials", "messages", "sections", "users", "profile", "audit-log"):
        r = owner_client.get(f"/en/admin/{path}")
        assert r.status_code == 200, path


def test_admin_role_revoked_mid_session(admin_client, app):
    with app.app_context():
        User.update(User.get_by_email(ADMIN_EMAIL).id, role="USER")
    assert admin_client.get("/en/admin/").status_code == 403


def test_public_pages_render_empty(client):
    for path in ("/en/", "/en/projects", "/en/blogs", "/ar/", "/ar/projects", "/ar/blogs"):
        assert client.get(path).status_code == 200, path


def test_missing_project_and_blog_are_404(client):
    assert client.get("/en/projects/999").status_code == 404
    assert client.get("/en/blogs/999").status_code == 404
