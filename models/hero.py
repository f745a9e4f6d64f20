from models.database import get_db, query_db, upsert_translation

HERO_ID = 1
AVAILABILITY = ("AVAILABLE", "BUSY", "NOT_AVAILABLE")
TEXT_FIELDS = ("greeting", "name", "role", "description", "cta_text")


class Hero:
    @staticmethod
    def get(locale):
        """Hero root fields plus the ``locale`` text under ``content``."""
        row = query_db(
            "SELECT h.*, t.greeting, t.name, t.role, t.description, t.cta_text "
            "FROM hero_sections h "
            "LEFT JOIN hero_translations t ON t.hero_id = h.id AND t.locale = ? "
            "WHERE h.id = ?",
            (locale, HERO_ID), one=True,
        )
        if row is None:
            return None
        return {
            "id": row["id"],
            "primary_image": row["primary_image"],
            "resume_url": row["resume_url"],
            "availability": row["availability"],
            "is_active": bool(row["is_active"]),
            "updated_at": row["updated_at"],
            "content": {field: row[field] or "" for field in TEXT_FIELDS},
        }

    @staticmethod
    def save(locale, values):
        db = get_db()
        with db:
            db.execute(
                "INSERT INTO hero_sections (id, primary_image, resume_url, availability, "
                "is_active) VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET primary_image = excluded.primary_image, "
                "resume_url = excluded.resume_url, availability = excluded.availability, "
                "is_active = excluded.is_active, updated_at = CURRENT_TIMESTAMP",
                (HERO_ID, values["primary_image"], values.get("resume_url") or None,
                 values["availability"], int(bool(values.get("is_active")))),
            )
            upsert_translation(db, "hero_translations", "hero_id", HERO_ID, locale,
                               {field: values[field] for field in TEXT_FIELDS})
        return HERO_ID

    @staticmethod
    def delete():
        db = get_db()
        with db:
            cursor = db.execute("DELETE FROM hero_sections WHERE id = ?", (HERO_ID,))
        return cursor.rowcount
