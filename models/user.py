from flask_login import UserMixin

from models.database import get_db, query_db

USER = "USER"
ADMIN = "ADMIN"
SUPER_ADMIN = "SUPER_ADMIN"
OWNER = "OWNER"
ROLES = (USER, ADMIN, SUPER_ADMIN, OWNER)

ACTIVE = "ACTIVE"
SUSPENDED = "SUSPENDED"
BANNED = "BANNED"
DELETED = "DELETED"
STATUSES = (ACTIVE, SUSPENDED, BANNED, DELETED)

# Columns safe to hand to templates and the API
PUBLIC_COLUMNS = ("id, name, email, image, role, status, email_verified_at, "
                  "created_at, updated_at")


def normalize_email(email):
    return (email or "").strip().lower()


class User(UserMixin):
    def __init__(self, id, name, email, password_hash, image, role, status,
                 email_verified_at, created_at):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.image = image
        self.role = role
        self.status = status
        self.email_verified_at = email_verified_at
        self.created_at = created_at

    @property
    def is_active(self):
        return self.status == ACTIVE

    @property
    def is_admin(self):
        return self.role in (ADMIN, SUPER_ADMIN, OWNER)

    @property
    def is_verified(self):
        return self.email_verified_at is not None

    @staticmethod
    def from_row(row):
        if row is None:
            return None
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            image=row["image"],
            role=row["role"],
            status=row["status"],
            email_verified_at=row["email_verified_at"],
            created_at=row["created_at"],
        )

    @staticmethod
    def get_by_id(user_id):
        row = query_db("SELECT * FROM users WHERE id = ?", (user_id,), one=True)
        return User.from_row(row)

    @staticmethod
    def get_by_email(email):
        row = query_db("SELECT * FROM users WHERE email = ?",
                       (normalize_email(email),), one=True)
        return User.from_row(row)

    @staticmethod
    def create(name, email, password_hash, role=USER, status=ACTIVE, verified=False):
        db = get_db()
        with db:
            cursor = db.execute(
                "INSERT INTO users (name, email, password_hash, role, status, "
                "email_verified_at) VALUES (?, ?, ?, ?, ?, "
                "CASE WHEN ? THEN CURRENT_TIMESTAMP END)",
                (name, normalize_email(email), password_hash, role, status, int(verified)),
            )
        return cursor.lastrowid

    @staticmethod
    def get_all():
        return query_db(f"SELECT {PUBLIC_COLUMNS} FROM users ORDER BY created_at DESC")

    @staticmethod
    def update(user_id, **kwargs):
        allowed = {"name", "image", "role", "status", "email", "password_hash"}
        fields = {k: v for k, v in kwargs.items() if k in allowed}
        if not fields:
            return
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        values = list(fields.values()) + [user_id]
        db = get_db()
        with db:
            db.execute(f"UPDATE users SET {set_clause}, updated_at = CURRENT_TIMESTAMP "
                       f"WHERE id = ?", values)

    @staticmethod
    def mark_verified(user_id):
        db = get_db()
        with db:
            db.execute(
                "UPDATE users SET email_verified_at = COALESCE(email_verified_at, "
                "CURRENT_TIMESTAMP), updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (user_id,),
            )

    @staticmethod
    def count_all():
        row = query_db("SELECT COUNT(*) as count FROM users", one=True)
        return row["count"] if row else 0
