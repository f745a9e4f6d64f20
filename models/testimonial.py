from models.database import get_db, placeholders, query_db

PENDING = "PENDING"
APPROVED = "APPROVED"
REJECTED = "REJECTED"
ARCHIVED = "ARCHIVED"
STAR = "STAR"
STATUSES = (PENDING, APPROVED, REJECTED, ARCHIVED, STAR)


class Testimonial:
    @staticmethod
    def create(client_name, client_title, content, rating, email=None, role=None,
               avatar_url=None, linkedin_url=None, github_url=None):
        """New testimonials always start pending, inactive and not featured."""
        db = get_db()
        with db:
            cursor = db.execute(
                "INSERT INTO testimonials (client_name, client_title, email, role, "
                "content, rating, avatar_url, linkedin_url, github_url, status, "
                "is_featured, is_active) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, 0)",
                (client_name, client_title, email, role, content, rating, avatar_url,
                 linkedin_url, github_url, PENDING),
            )
        return cursor.lastrowid

    @staticmethod
    def get_public(limit=None):
        sql = ("SELECT * FROM testimonials WHERE is_active = 1 AND status IN (?, ?) "
               "ORDER BY is_featured DESC, created_at DESC, id DESC")
        params = [APPROVED, STAR]
        if limit:
            sql += " LIMIT ?"
            params.append(limit)
        return [dict(row) for row in query_db(sql, params)]

    @staticmethod
    def get_all(status=None):
        if status:
            rows = query_db("SELECT * FROM testimonials WHERE status = ? "
                            "ORDER BY created_at DESC, id DESC", (status,))
        else:
            rows = query_db("SELECT * FROM testimonials ORDER BY created_at DESC, id DESC")
        return [dict(row) for row in rows]

    @staticmethod
    def get_by_id(testimonial_id):
        row = query_db("SELECT * FROM testimonials WHERE id = ?", (testimonial_id,), one=True)
        return dict(row) if row else None

    @staticmethod
    def update_status(testimonial_id, is_active=None, is_featured=None):
        """Activating approves a testimonial; deactivating sends it back to pending."""
        updates = {}
        if is_active is not None:
            updates["is_active"] = int(bool(is_active))
            updates["status"] = APPROVED if is_active else PENDING
        if is_featured is not None:
            updates["is_featured"] = int(bool(is_featured))
        if not updates:
            return 0
        set_clause = ", ".join(f"{k} = ?" for k in updates)
        db = get_db()
        with db:
            cursor = db.execute(
                f"UPDATE testimonials SET {set_clause}, updated_at = CURRENT_TIMESTAMP "
                f"WHERE id = ?",
                list(updates.values()) + [testimonial_id],
            )
        return cursor.rowcount

    @staticmethod
    def delete(testimonial_id):
        db = get_db()
        with db:
            cursor = db.execute("DELETE FROM testimonials WHERE id = ?", (testimonial_id,))
        return cursor.rowcount

    @staticmethod
    def bulk_delete(testimonial_ids):
        if not testimonial_ids:
            return 0
        db = get_db()
        with db:
            cursor = db.execute(
                f"DELETE FROM testimonials WHERE id IN ({placeholders(testimonial_ids)})",
                list(testimonial_ids),
            )
        return cursor.rowcount

    @staticmethod
    def count_by_status(status):
        row = query_db("SELECT COUNT(*) as count FROM testimonials WHERE status = ?",
                       (status,), one=True)
        return row["count"] if row else 0
