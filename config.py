import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    DATABASE = os.environ.get("DATABASE", os.path.join(BASE_DIR, "portfolio.db"))
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", os.path.join(BASE_DIR, "uploads"))
    MAX_CONTENT_LENGTH = 25 * 1024 * 1024  # 25 MB per request

    LOCALES = ("en", "ar")
    DEFAULT_LOCALE = "en"

    # Login is refused until an administrator verifies the address
    REQUIRE_EMAIL_VERIFICATION = _env_flag("REQUIRE_EMAIL_VERIFICATION", True)
    SUPER_ADMIN_SYSTEM_KEY = os.environ.get("SUPER_ADMIN_SYSTEM_KEY")

    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "owner@example.com")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "ChangeMe123")

    LOG_DIR = os.environ.get("LOG_DIR")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    MESSAGES_PER_PAGE = 10
    AUDIT_LOGS_PER_PAGE = 50
