"""The validate / authorize / run / audit wrapper every mutation goes through."""
import json
import sqlite3

import pytest
from flask_login import login_user
from werkzeug.datastructures import MultiDict
from wtforms import StringField
from wtforms.validators import DataRequired, Length

from conftest import ADMIN_EMAIL, OWNER_EMAIL, SUSPENDED_EMAIL, SYSTEM_KEY, USER_EMAIL
from forms.common import SchemaForm
from models.audit_log import AuditLog
from models.user import User
from secure_action import (ADMIN_ROLES, AUTHENTICATED, PUBLIC, SUPER_ROLES, ActionError,
                           create_secure_action, redact, secure_action, validation_details)


class NoteForm(SchemaForm):
    title = StringField(validators=[DataRequired(), Length(min=3)])
    password = StringField()


def echo(data, ctx):
    return {"title": data["title"], "user": ctx.user.email if ctx.user else None,
            "sudo": ctx.is_sudo}


@pytest.fixture
def ctx(app):
    with app.test_request_context("/en/", environ_base={"REMOTE_ADDR": "10.0.0.7"}):
        yield


def sign_in(email, force=False):
    login_user(User.get_by_email(email), force=force)


def test_public_action_runs_without_user(ctx):
    result = create_secure_action({"title": "hello"}, NoteForm, PUBLIC, echo)
    assert result.success
    assert result.status == 200
    assert result.data == {"title": "hello", "user": None, "sudo": False}


def test_validation_error_details(ctx):
    result = create_secure_action({"title": "x"}, NoteForm, PUBLIC, echo)
    assert not result.success
    assert result.status == 400
    assert result.error == "VALIDATION_ERROR"
    assert "title" in result.details["field_errors"]
    assert result.form is not None


def test_multidict_payload_is_treated_as_form_input(ctx):
    result = create_secure_action(MultiDict({"title": "from form"}), NoteForm, PUBLIC, echo)
    assert result.data["title"] == "from form"


def test_anonymous_caller_is_unauthorized(ctx):
    result = create_secure_action({"title": "hello"}, NoteForm, AUTHENTICATED, echo)
    assert (result.error, result.status) == ("UNAUTHORIZED", 401)


def test_validation_runs_before_authorization(ctx):
    result = create_secure_action({"title": ""}, NoteForm, AUTHENTICATED, echo)
    assert result.status == 400


def test_stale_session_of_suspended_user(ctx):
    sign_in(SUSPENDED_EMAIL, force=True)
    result = create_secure_action({"title": "hello"}, NoteForm, AUTHENTICATED, echo)
    assert (result.error, result.status) == ("USER_SUSPENDED", 403)


def test_deleted_account_is_user_not_found(ctx, app):
    sign_in(USER_EMAIL)
    from models.database import get_db
    db = get_db()
    with db:
        db.execute("DELETE FROM users WHERE email = ?", (USER_EMAIL,))
    result = create_secure_action({"title": "hello"}, NoteForm, AUTHENTICATED, echo)
    assert (result.error, result.status) == ("USER_NOT_FOUND", 401)


def test_role_outside_access_level_is_forbidden(ctx):
    sign_in(USER_EMAIL)
    result = create_secure_action({"title": "hello"}, NoteForm, ADMIN_ROLES, echo)
    assert (result.error, result.status) == ("FORBIDDEN", 403)


def test_role_inside_access_level_runs(ctx):
    sign_in(ADMIN_EMAIL)
    result = create_secure_action({"title": "hello"}, NoteForm, ADMIN_ROLES, echo)
    assert result.success
    assert result.data["user"] == ADMIN_EMAIL


def test_admin_is_not_super(ctx):
    sign_in(ADMIN_EMAIL)
    result = create_secure_action({"title": "hello"}, NoteForm, SUPER_ROLES, echo)
    assert result.status == 403


def test_invalid_system_key(ctx):
    sign_in(OWNER_EMAIL)
    result = create_secure_action({"title": "hello"}, NoteForm, SUPER_ROLES, echo,
                                  system_key="wrong")
    assert (result.error, result.status) == ("INVALID_SYSTEM_KEY", 403)


def test_system_key_rejected_when_not_configured(ctx, app):
    app.config["SUPER_ADMIN_SYSTEM_KEY"] = None
    sign_in(OWNER_EMAIL)
    result = create_secure_action({"title": "hello"}, NoteForm, SUPER_ROLES, echo,
                                  system_key=SYSTEM_KEY)
    assert result.error == "INVALID_SYSTEM_KEY"


def test_valid_system_key_marks_sudo(ctx):
    sign_in(OWNER_EMAIL)
    result = create_secure_action({"title": "hello"}, NoteForm, SUPER_ROLES, echo,
                                  name="SUDO_NOTE", system_key=SYSTEM_KEY)
    assert result.data["sudo"] is True
    log = AuditLog.get_recent(1)[0]
    assert log["action"] == "SUDO_NOTE"
    assert log["is_sudo"] == 1


def test_action_error_keeps_its_status(ctx):
    def missing(data, ctx):
        raise ActionError("Note not found", 404)

    result = create_secure_action({"title": "hello"}, NoteForm, PUBLIC, missing)
    assert (result.error, result.status) == ("Note not found", 404)


def test_integrity_error_is_conflict(ctx):
    def duplicate(data, ctx):
        raise sqlite3.IntegrityError("UNIQUE constraint failed")

    result = create_secure_action({"title": "hello"}, NoteForm, PUBLIC, duplicate)
    assert (result.error, result.status) == ("CONFLICT", 409)


def test_unexpected_error_is_internal(ctx):
    def broken(data, ctx):
        raise RuntimeError("boom")

    result = create_secure_action({"title": "hello"}, NoteForm, PUBLIC, broken)
    assert (result.error, result.status) == ("INTERNAL_ERROR", 500)
    assert "boom" not in json.dumps(result.to_dict())


def test_successful_action_is_audited_with_redaction(ctx):
    sign_in(ADMIN_EMAIL)
    create_secure_action({"title": "hello", "password": "hunter22"}, NoteForm, ADMIN_ROLES,
                         echo, name="WRITE_NOTE")
    log = AuditLog.get_recent(1)[0]
    assert log["action"] == "WRITE_NOTE"
    assert log["user_email"] == ADMIN_EMAIL
    assert log["ip_address"] == "10.0.0.7"
    details = json.loads(log["details"])
    assert details["input"]["title"] == "hello"
    assert details["input"]["password"] == "[REDACTED]"


def test_failed_action_is_not_audited(ctx):
    sign_in(ADMIN_EMAIL)

    def missing(data, ctx):
        raise ActionError("nope", 404)

    create_secure_action({"title": "hello"}, NoteForm, ADMIN_ROLES, missing, name="NOPE")
    assert "NOPE" not in AuditLog.get_actions()


def test_public_actions_are_not_audited(ctx):
    create_secure_action({"title": "hello"}, NoteForm, PUBLIC, echo, name="PUBLIC_NOTE")
    assert AuditLog.get_actions() == []


def test_forwarded_for_header_is_used(app):
    with app.test_request_context("/", headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"}):
        sign_in(ADMIN_EMAIL)
        create_secure_action({"title": "hello"}, NoteForm, ADMIN_ROLES, echo)
        assert AuditLog.get_recent(1)[0]["ip_address"] == "203.0.113.9"


def test_decorator_reads_system_key_from_payload(ctx):
    @secure_action(NoteForm, SUPER_ROLES, system_key_field="password")
    def sudo_note(data, ctx):
        return ctx.is_sudo

    sign_in(OWNER_EMAIL)
    assert sudo_note.action_name == "SUDO_NOTE"
    assert sudo_note({"title": "hello", "password": SYSTEM_KEY}).data is True
    assert sudo_note({"title": "hello"}).data is False
    assert sudo_note({"title": "hello", "password": "bad"}).error == "INVALID_SYSTEM_KEY"


def test_redact_nested_values():
    data = {"user": {"password_hash": "x", "name": "n"}, "tokens": ["a"], "items": [{"secret": 1}]}
    assert redact(data) == {"user": {"password_hash": "[REDACTED]", "name": "n"},
                            "tokens": "[REDACTED]", "items": [{"secret": "[REDACTED]"}]}


def test_validation_details_flattens_nested_errors(app):
    from forms.content_forms import SkillCategoryForm
    with app.test_request_context():
        form = SkillCategoryForm(formdata=MultiDict({
            "title": "Backend", "icon": "server", "skills-0-name": "Python",
            "skills-0-level": "150",
        }))
        assert not form.validate()
        assert "skills.0.level" in validation_details(form)["field_errors"]


def broken_audit_log(*args, **kwargs):
    raise sqlite3.OperationalError("database is locked")


def test_audit_failure_does_not_fail_the_action(ctx, monkeypatch):
    sign_in(ADMIN_EMAIL)
    monkeypatch.setattr(AuditLog, "log", staticmethod(broken_audit_log))
    result = create_secure_action({"title": "hello"}, NoteForm, ADMIN_ROLES, echo,
                                  name="WRITE_NOTE")
    assert result.success
    assert result.data["title"] == "hello"
