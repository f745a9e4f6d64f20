import io
import re

import pytest
from PIL import Image
from werkzeug.security import generate_password_hash

from app import create_app
from init_db import init_db
from models.user import ADMIN, SUPER_ADMIN, SUSPENDED, USER, User

PASSWORD = "Secret123"
SYSTEM_KEY = "test-system-key"

OWNER_EMAIL = "owner@portfolio.io"
SUPER_EMAIL = "super@portfolio.io"
ADMIN_EMAIL = "admin@portfolio.io"
USER_EMAIL = "visitor@portfolio.io"
UNVERIFIED_EMAIL = "pending@portfolio.io"
SUSPENDED_EMAIL = "suspended@portfolio.io"


def get_csrf(html):
    match = re.search(r'name="csrf_token".*?value="(.+?)"', html)
    return match.group(1) if match else ""


def login(client, email, password=PASSWORD, locale="en"):
    return client.post(f"/{locale}/auth/sign-in", data={"email": email, "password": password})


def png_bytes(size=(8, 8)):
    buffer = io.BytesIO()
    Image.new("RGB", size, "red").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def app(tmp_path):
    database = str(tmp_path / "portfolio.db")
    upload_folder = str(tmp_path / "uploads")
    init_db(database=database, upload_folder=upload_folder, admin_email=OWNER_EMAIL,
            admin_password=PASSWORD)

    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DATABASE": database,
        "UPLOAD_FOLDER": upload_folder,
        "WTF_CSRF_ENABLED": False,
        "SUPER_ADMIN_SYSTEM_KEY": SYSTEM_KEY,
        "LOG_DIR": None,
    })

    password_hash = generate_password_hash(PASSWORD)
    with app.app_context():
        User.create("Super", SUPER_EMAIL, password_hash, role=SUPER_ADMIN, verified=True)
        User.create("Admin", ADMIN_EMAIL, password_hash, role=ADMIN, verified=True)
        User.create("Visitor", USER_EMAIL, password_hash, role=USER, verified=True)
        User.create("Pending", UNVERIFIED_EMAIL, password_hash, role=USER)
        User.create("Suspended", SUSPENDED_EMAIL, password_hash, role=USER,
                    status=SUSPENDED, verified=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner_client(client):
    login(client, OWNER_EMAIL)
    return client


@pytest.fixture
def admin_client(client):
    login(client, ADMIN_EMAIL)
    return client


@pytest.fixture
def user_client(client):
    login(client, USER_EMAIL)
    return client


def user_id(app, email):
    with app.app_context():
        return User.get_by_email(email).id
