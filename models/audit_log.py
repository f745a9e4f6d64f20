from models.database import get_db, query_db


class AuditLog:
    @staticmethod
    def log(user_id, action, details=None, ip_address=None, user_email=None,
            target_type=None, target_id=None, is_sudo=False):
        db = get_db()
        with db:
            db.execute(
                "INSERT INTO audit_logs (user_id, user_email, action, target_type, "
                "target_id, details, is_sudo, ip_address) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (user_id, user_email, action, target_type, target_id, details,
                 int(bool(is_sudo)), ip_address),
            )

    @staticmethod
    def get_logs(page=1, per_page=50, user_id=None, action=None):
        offset = (page - 1) * per_page
        conditions = []
        params = []

        if user_id:
            conditions.append("audit_logs.user_id = ?")
            params.append(user_id)
        if action:
            conditions.append("audit_logs.action = ?")
            params.append(action)

        where = ""
        if conditions:
            where = "WHERE " + " AND ".join(conditions)

        rows = query_db(
            f"SELECT audit_logs.*, users.name AS user_name FROM audit_logs "
            f"LEFT JOIN users ON audit_logs.user_id = users.id "
            f"{where} ORDER BY audit_logs.id DESC LIMIT ? OFFSET ?",
            params + [per_page, offset],
        )
        count_row = query_db(
            f"SELECT COUNT(*) as cnt FROM audit_logs {where}",
            params, one=True,
        )
        total = count_row["cnt"] if count_row else 0
        return rows, total

    @staticmethod
    def get_actions():
        rows = query_db("SELECT DISTINCT action FROM audit_logs ORDER BY action")
        return [row["action"] for row in rows]

    @staticmethod
    def count_today():
        row = query_db(
            "SELECT COUNT(*) as count FROM audit_logs "
            "WHERE DATE(timestamp) = DATE('now')",
            one=True
        )
        return row["count"] if row else 0

    @staticmethod
    def get_recent(limit=10):
        return query_db(
            "SELECT audit_logs.*, users.name AS user_name FROM audit_logs "
            "LEFT JOIN users ON audit_logs.user_id = users.id "
            "ORDER BY audit_logs.id DESC LIMIT ?",
            (limit,)
        )
