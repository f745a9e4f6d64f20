import math

from models.database import get_db, query_db

UNREAD = "UNREAD"
READ = "READ"
REPLIED = "REPLIED"
ARCHIVED = "ARCHIVED"
SPAM = "SPAM"
STATUSES = (UNREAD, READ, REPLIED, ARCHIVED, SPAM)

MESSAGE_ACTIONS = ("DELETE", "ARCHIVE", "SPAM", "TOGGLE_READ", "TOGGLE_STAR", "REPLIED")
MAX_PAGE_SIZE = 100


class ContactMessage:
    @staticmethod
    def create(name, email, message, subject=None, ip_address=None):
        db = get_db()
        with db:
            cursor = db.execute(
                "INSERT INTO contact_messages (name, email, subject, message, status, "
                "ip_address) VALUES (?, ?, ?, ?, ?, ?)",
                (name, email, subject, message, UNREAD, ip_address),
            )
        return cursor.lastrowid

    @staticmethod
    def get_by_id(message_id):
        row = query_db("SELECT * FROM contact_messages WHERE id = ?", (message_id,), one=True)
        return dict(row) if row else None

    @staticmethod
    def get_page(page=1, limit=10, status=None, priority=None):
        """One page of messages, newest first, with pagination metadata."""
        page = max(1, int(page or 1))
        limit = max(1, min(int(limit or 10), MAX_PAGE_SIZE))

        conditions = []
        params = []
        if status:
            conditions.append("status = ?")
            params.append(status)
        if priority is not None:
            conditions.append("priority = ?")
            params.append(int(priority))
        where = "WHERE " + " AND ".join(conditions) if conditions else ""

        rows = query_db(
            f"SELECT * FROM contact_messages {where} "
            f"ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
            params + [limit, (page - 1) * limit],
        )
        count_row = query_db(f"SELECT COUNT(*) as cnt FROM contact_messages {where}",
                             params, one=True)
        total = count_row["cnt"] if count_row else 0
        return {
            "data": [dict(row) for row in rows],
            "meta": {
                "total_count": total,
                "page_count": math.ceil(total / limit),
                "current_page": page,
            },
        }

    @staticmethod
    def next_state(message, action):
        """The column updates ``action`` applies to ``message`` (``None`` = delete)."""
        status = message["status"]
        if action == "DELETE":
            return None
        if action == "ARCHIVE":
            return {"status": READ if status == ARCHIVED else ARCHIVED}
        if action == "SPAM":
            return {"status": UNREAD if status == SPAM else SPAM}
        if action == "TOGGLE_READ":
            return {"status": READ if status == UNREAD else UNREAD}
        if action == "TOGGLE_STAR":
            return {"priority": 0 if message["priority"] else 1}
        if action == "REPLIED":
            return {"status": REPLIED}
        raise ValueError(f"Unknown message action: {action}")

    @staticmethod
    def apply(message_id, updates):
        db = get_db()
        with db:
            if updates is None:
                db.execute("DELETE FROM contact_messages WHERE id = ?", (message_id,))
                return
            set_clause = ", ".join(f"{k} = ?" for k in updates)
            db.execute(
                f"UPDATE contact_messages SET {set_clause}, updated_at = CURRENT_TIMESTAMP "
                f"WHERE id = ?",
                list(updates.values()) + [message_id],
            )

    @staticmethod
    def count_unread():
        row = query_db("SELECT COUNT(*) as count FROM contact_messages WHERE status = ?",
                       (UNREAD,), one=True)
        return row["count"] if row else 0
