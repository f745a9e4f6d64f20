"""User management by super roles and self-service profile editing."""
from conftest import (ADMIN_EMAIL, OWNER_EMAIL, SUPER_EMAIL, SYSTEM_KEY, UNVERIFIED_EMAIL,
                      USER_EMAIL, login, user_id)
from models.audit_log import AuditLog
from models.profile import Profile
from models.user import User


def update(client, email, app, **fields):
    data = {"id": user_id(app, email), "role": "USER", "status": "ACTIVE"}
    data.update(fields)
    return client.post("/en/admin/users/update", data=data, follow_redirects=True)


def test_users_page_lists_accounts(owner_client):
    html = owner_client.get("/en/admin/users").get_data(as_text=True)
    assert USER_EMAIL in html
    assert "password_hash" not in html


def test_owner_promotes_user(owner_client, app):
    r = update(owner_client, USER_EMAIL, app, role="ADMIN")
    assert "Changes saved." in r.get_data(as_text=True)
    with app.app_context():
        assert User.get_by_email(USER_EMAIL).role == "ADMIN"


def test_owner_suspends_user(owner_client, app):
    update(owner_client, USER_EMAIL, app, status="SUSPENDED")
    with app.app_context():
        assert not User.get_by_email(USER_EMAIL).is_active


def test_verify_email(owner_client, app):
    update(owner_client, UNVERIFIED_EMAIL, app, verify_email="y")
    with app.app_context():
        assert User.get_by_email(UNVERIFIED_EMAIL).is_verified


def test_admin_cannot_manage_users(admin_client, app):
    r = update(admin_client, USER_EMAIL, app, role="ADMIN")
    assert "You do not have permission to do that." in r.get_data(as_text=True)
    with app.app_context():
        assert User.get_by_email(USER_EMAIL).role == "USER"


def test_nobody_changes_their_own_role(owner_client, app):
    r = update(owner_client, OWNER_EMAIL, app, role="USER")
    assert "You cannot change your own role or status." in r.get_data(as_text=True)
    with app.app_context():
        assert User.get_by_email(OWNER_EMAIL).role == "OWNER"


def test_super_admin_cannot_touch_owner_without_key(client, app):
    login(client, SUPER_EMAIL)
    r = update(client, OWNER_EMAIL, app, role="ADMIN")
    assert "Only an owner can manage owner accounts." in r.get_data(as_text=True)

    r = update(client, USER_EMAIL, app, role="OWNER")
    assert "Only an owner can manage owner accounts." in r.get_data(as_text=True)


def test_super_admin_with_system_key_is_sudo(client, app):
    login(client, SUPER_EMAIL)
    update(client, OWNER_EMAIL, app, role="ADMIN", system_key=SYSTEM_KEY)
    with app.app_context():
        assert User.get_by_email(OWNER_EMAIL).role == "ADMIN"
        log = AuditLog.get_recent(1)[0]
        assert log["action"] == "UPDATE_USER"
        assert log["is_sudo"] == 1
        assert SYSTEM_KEY not in log["details"]


def test_wrong_system_key(client, app):
    login(client, SUPER_EMAIL)
    r = update(client, OWNER_EMAIL, app, role="ADMIN", system_key="guess")
    assert "Invalid system key." in r.get_data(as_text=True)


def test_suspension_takes_effect_immediately(client, app):
    login(client, ADMIN_EMAIL)
    with app.app_context():
        User.update(User.get_by_email(ADMIN_EMAIL).id, status="SUSPENDED")
    r = client.post("/en/admin/blogs/new", data={})
    assert r.status_code in (302, 401, 403)
    assert client.get("/api/me").status_code == 401


def test_profile_update(admin_client, app):
    r = admin_client.post("/en/admin/profile", data={
        "name": "Admin Person",
        "professional_email": "hello@portfolio.io",
        "phone": "+15551234567",
        "bio": "Builder of things.",
        "social_links-0-name": "GitHub",
        "social_links-0-url": "https://github.com/admin",
        "social_links-1-name": "",
    })
    assert r.status_code == 302
    with app.app_context():
        admin = User.get_by_email(ADMIN_EMAIL)
        assert admin.name == "Admin Person"
        profile = Profile.get_for_user(admin.id, "en")
        assert profile["phone"] == "+15551234567"
        assert [link["name"] for link in profile["social_links"]] == ["GitHub"]
        assert Profile.get_for_user(admin.id, "ar")["bio"] == ""


def test_profile_rejects_bad_phone(admin_client):
    r = admin_client.post("/en/admin/profile", data={"name": "Admin", "phone": "555-1234"})
    assert r.status_code == 400


def test_owner_profile_feeds_contact_section(owner_client):
    owner_client.post("/en/admin/profile", data={
        "name": "Site Owner",
        "professional_email": "contact@portfolio.io",
    })
    assert "contact@portfolio.io" in owner_client.get("/en/").get_data(as_text=True)


def test_audit_log_page_filters(owner_client, app):
    update(owner_client, USER_EMAIL, app, role="ADMIN")
    html = owner_client.get("/en/admin/audit-log?action=UPDATE_USER").get_data(as_text=True)
    assert "UPDATE_USER" in html
    with app.app_context():
        logs, total = AuditLog.get_logs(action="LOGIN")
        assert total == 1
        assert logs[0]["user_name"] == "Owner"
