from models.database import get_db, placeholders, query_db, upsert_translation

ROOT_FIELDS = ("issuer", "cover_url", "link", "issue_date", "expire_date", "credential_url")
TEXT_FIELDS = ("title", "credential_id", "description")


class Certification:
    @staticmethod
    def get_all(locale, active_only=False):
        where = "WHERE c.is_active = 1" if active_only else ""
        rows = query_db(
            "SELECT c.*, t.title, t.credential_id, t.description FROM certifications c "
            "LEFT JOIN certification_translations t "
            "ON t.certification_id = c.id AND t.locale = ? "
            f"{where} ORDER BY c.issue_date DESC, c.id DESC",
            (locale,),
        )
        return [Certification._to_dict(row, locale) for row in rows]

    @staticmethod
    def get_by_id(certification_id, locale, fallback=True):
        row = query_db(
            "SELECT c.*, t.title, t.credential_id, t.description FROM certifications c "
            "LEFT JOIN certification_translations t "
            "ON t.certification_id = c.id AND t.locale = ? WHERE c.id = ?",
            (locale, certification_id), one=True,
        )
        return Certification._to_dict(row, locale, fallback) if row else None

    @staticmethod
    def _to_dict(row, locale, fallback=True):
        cert = {name: row[name] or "" for name in ROOT_FIELDS + TEXT_FIELDS}
        cert["id"] = row["id"]
        cert["is_active"] = bool(row["is_active"])
        if fallback and not cert["title"]:
            cert["title"] = f"No {locale} title set"
        return cert

    @staticmethod
    def save(locale, values, certification_id=None):
        root = {name: values.get(name) or None for name in ROOT_FIELDS}
        root["is_active"] = int(bool(values.get("is_active")))
        db = get_db()
        with db:
            if certification_id:
                set_clause = ", ".join(f"{name} = ?" for name in root)
                db.execute(
                    f"UPDATE certifications SET {set_clause}, "
                    f"updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    list(root.values()) + [certification_id],
                )
            else:
                certification_id = db.execute(
                    f"INSERT INTO certifications ({', '.join(root)}) "
                    f"VALUES ({placeholders(root)})",
                    list(root.values()),
                ).lastrowid
            upsert_translation(db, "certification_translations", "certification_id",
                               certification_id, locale,
                               {name: values.get(name) or None for name in TEXT_FIELDS})
        return certification_id

    @staticmethod
    def exists(certification_id):
        return query_db("SELECT id FROM certifications WHERE id = ?",
                        (certification_id,), one=True) is not None

    @staticmethod
    def delete(certification_id):
        db = get_db()
        with db:
            cursor = db.execute("DELETE FROM certifications WHERE id = ?",
                                (certification_id,))
        return cursor.rowcount
