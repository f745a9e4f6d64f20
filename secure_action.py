"""Validated, authorized and audited execution of server actions.

Every mutation the site performs goes through :func:`create_secure_action`
(or the :func:`secure_action` decorator). The wrapper validates the payload
against a WTForms schema, resolves the signed-in user from the database,
enforces the requested access level, runs the callback and records an audit
entry. Callers always get an :class:`ActionResult` back; exceptions never
escape.
"""
import functools
import hmac
import json
import logging
import sqlite3

from flask import current_app, request
from flask_login import current_user

from models.audit_log import AuditLog
from models.database import get_db, query_db
from models.user import ACTIVE, ADMIN, OWNER, SUPER_ADMIN

logger = logging.getLogger(__name__)

PUBLIC = "PUBLIC"
AUTHENTICATED = "AUTHENTICATED"
ADMIN_ROLES = (ADMIN, SUPER_ADMIN, OWNER)
SUPER_ROLES = (SUPER_ADMIN, OWNER)

REDACTED = "[REDACTED]"
_SENSITIVE_KEYS = ("password", "secret", "token", "system_key")


class SessionUser:
    def __init__(self, id, email, role, name=None, image=None):
        self.id = id
        self.email = email
        self.role = role
        self.name = name
        self.image = image

    @staticmethod
    def from_row(row):
        return SessionUser(id=row["id"], email=row["email"], role=row["role"],
                           name=row["name"], image=row["image"])


class SessionContext:
    """What the callback knows about the caller.

    ``user`` is ``None`` exactly when the action is public.
    """

    def __init__(self, is_public, user=None, is_sudo=False):
        self.is_public = is_public
        self.user = user
        self.is_sudo = is_sudo


class ActionError(Exception):
    """Raised by callbacks for expected failures (not found, conflicts...)."""

    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


class ActionResult:
    def __init__(self, success, data=None, error=None, status=200, details=None,
                 form=None):
        self.success = success
        self.data = data
        self.error = error
        self.status = status
        self.details = details
        self.form = form

    @classmethod
    def ok(cls, data=None, form=None):
        return cls(True, data=data, form=form)

    @classmethod
    def fail(cls, error, status, details=None, form=None):
        return cls(False, error=error, status=status, details=details, form=form)

    def to_dict(self):
        if self.success:
            return {"success": True, "data": self.data}
        body = {"success": False, "error": self.error, "status": self.status}
        if self.details:
            body["details"] = self.details
        return body

    def __repr__(self):
        if self.success:
            return "<ActionResult ok>"
        return f"<ActionResult {self.status} {self.error}>"


def client_ip():
    """First ``X-Forwarded-For`` hop, falling back to the socket address."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr


def build_form(schema, payload):
    # Multidicts (request.form, request.files) are raw browser input; plain
    # mappings are already-typed data from code or JSON.
    if payload is not None and hasattr(payload, "getlist"):
        return schema(formdata=payload)
    return schema(formdata=None, data=dict(payload or {}))


def _flatten_errors(errors, prefix=""):
    flat = {}
    if isinstance(errors, dict):
        for key, value in errors.items():
            if key is None:
                continue
            flat.update(_flatten_errors(value, f"{prefix}.{key}" if prefix else key))
    elif errors and all(isinstance(item, str) for item in errors):
        flat[prefix] = list(errors)
    else:
        for index, value in enumerate(errors):
            if value:
                flat.update(_flatten_errors(value, f"{prefix}.{index}"))
    return flat


def validation_details(form):
    return {
        "form_errors": list(form.form_errors),
        "field_errors": _flatten_errors(form.errors),
    }


def redact(value):
    if isinstance(value, dict):
        return {
            key: REDACTED if any(s in str(key).lower() for s in _SENSITIVE_KEYS)
            else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


def _access_roles(access_level):
    if isinstance(access_level, (tuple, list, set, frozenset)):
        return access_level
    return None


def record_audit(user_id, action, **fields):
    """Write an audit entry; a failed write is logged and otherwise ignored."""
    try:
        AuditLog.log(user_id, action, **fields)
    except sqlite3.Error:
        logger.exception("Failed to write audit entry for %s", action)


def _write_audit(name, user, data, is_sudo):
    record_audit(
        user.id,
        name,
        details=json.dumps({"input": redact(data)}, default=str),
        ip_address=client_ip(),
        user_email=user.email,
        is_sudo=is_sudo,
    )


def create_secure_action(payload, schema, access_level, callback,
                         name="ACTION_EXECUTED", system_key=None):
    """Validate ``payload``, authorize the caller and run ``callback(data, ctx)``.

    ``access_level`` is ``PUBLIC``, ``AUTHENTICATED`` or a collection of
    roles. A non-empty ``system_key`` must match ``SUPER_ADMIN_SYSTEM_KEY``
    and marks the audit entry as sudo.
    """
    form = build_form(schema, payload)
    if not form.validate():
        return ActionResult.fail("VALIDATION_ERROR", 400,
                                 details=validation_details(form), form=form)
    data = form.data

    is_public = access_level == PUBLIC
    ctx = SessionContext(is_public=is_public)

    if not is_public:
        if current_user.is_anonymous:
            return ActionResult.fail("UNAUTHORIZED", 401, form=form)

        # The session may be stale; trust only the database copy
        row = query_db("SELECT * FROM users WHERE id = ?",
                       (current_user.get_id(),), one=True)
        if row is None or not row["email"]:
            return ActionResult.fail("USER_NOT_FOUND", 401, form=form)
        if row["status"] != ACTIVE:
            return ActionResult.fail(f"USER_{row['status']}", 403, form=form)

        roles = _access_roles(access_level)
        if roles is not None and row["role"] not in roles:
            return ActionResult.fail("FORBIDDEN", 403, form=form)

        ctx.user = SessionUser.from_row(row)

    if system_key is not None:
        expected = current_app.config.get("SUPER_ADMIN_SYSTEM_KEY")
        if not expected or not hmac.compare_digest(str(system_key).encode(),
                                                   str(expected).encode()):
            logger.warning("Rejected system key for %s from %s", name, client_ip())
            return ActionResult.fail("INVALID_SYSTEM_KEY", 403, form=form)
        ctx.is_sudo = True

    try:
        result = callback(data, ctx)
    except ActionError as e:
        get_db().rollback()
        return ActionResult.fail(e.message, e.status, form=form)
    except sqlite3.IntegrityError as e:
        get_db().rollback()
        logger.warning("%s rejected by a database constraint: %s", name, e)
        return ActionResult.fail("CONFLICT", 409, form=form)
    except Exception:
        get_db().rollback()
        logger.exception("Action %s failed", name)
        return ActionResult.fail("INTERNAL_ERROR", 500, form=form)

    if not is_public:
        _write_audit(name, ctx.user, data, ctx.is_sudo)

    return ActionResult.ok(result, form=form)


def secure_action(schema, access_level, name=None, system_key_field=None):
    """Decorator form of :func:`create_secure_action`.

    The decorated ``callback(data, ctx)`` becomes ``action(payload)``.
    When ``system_key_field`` is set, a non-empty value of that payload key
    is checked as the system key.
    """
    def decorator(callback):
        action_name = name or callback.__name__.upper()

        @functools.wraps(callback)
        def action(payload=None):
            system_key = None
            if system_key_field and payload is not None:
                system_key = payload.get(system_key_field) or None
            return create_secure_action(payload, schema, access_level, callback,
                                        name=action_name, system_key=system_key)

        action.callback = callback
        action.action_name = action_name
        return action

    return decorator
