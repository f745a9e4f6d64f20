import logging
from urllib.parse import urlparse

from flask import current_app, url_for
from flask_login import current_user, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from forms.auth_forms import SignInForm, SignUpForm
from models.user import User
from secure_action import (PUBLIC, ActionError, client_ip, create_secure_action, record_audit,
                           secure_action)

logger = logging.getLogger(__name__)


def is_safe_next(target):
    """Only same-site relative paths are accepted as post-login redirects."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return False
    parsed = urlparse(target)
    return not parsed.scheme and not parsed.netloc


def redirect_target(user, next_url=None):
    if is_safe_next(next_url):
        return next_url
    if user.is_admin:
        return url_for("admin.dashboard")
    return url_for("public.home")


def login(payload, next_url=None):
    def run(data, ctx):
        user = User.get_by_email(data["email"])
        if (user is None or not user.password_hash
                or not check_password_hash(user.password_hash, data["password"])):
            logger.info("Failed sign-in for %s from %s", data["email"], client_ip())
            raise ActionError("Invalid credentials!", 401)
        if current_app.config["REQUIRE_EMAIL_VERIFICATION"] and not user.is_verified:
            raise ActionError("email_not_verified", 403)
        if not user.is_active:
            raise ActionError("Account access restricted.", 403)

        login_user(user)
        record_audit(user.id, "LOGIN", details="User signed in", ip_address=client_ip(),
                     user_email=user.email, target_type="user", target_id=user.id)
        return {"redirect": redirect_target(user, next_url)}

    return create_secure_action(payload, SignInForm, PUBLIC, run, name="LOGIN")


@secure_action(SignUpForm, PUBLIC, name="REGISTER")
def register(data, ctx):
    if User.get_by_email(data["email"]):
        raise ActionError("Email already in use!", 409)

    verified = not current_app.config["REQUIRE_EMAIL_VERIFICATION"]
    user_id = User.create(
        name=data["name"],
        email=data["email"],
        password_hash=generate_password_hash(data["password"]),
        verified=verified,
    )
    record_audit(user_id, "REGISTER", details=f"User registered: {data['email']}",
                 ip_address=client_ip(), user_email=data["email"],
                 target_type="user", target_id=user_id)
    return {"id": user_id, "verified": verified}


def logout():
    if current_user.is_anonymous:
        return
    user_id, email = current_user.id, current_user.email
    logout_user()
    record_audit(user_id, "LOGOUT", details="User signed out", ip_address=client_ip(),
                 user_email=email, target_type="user", target_id=user_id)
