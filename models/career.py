"""Experience and education timelines.

Both entities share one shape: an organisation with dates, a per-locale
translation and an ordered list of techniques. ``CareerEntry`` holds the SQL;
``Experience`` and ``Education`` only name their tables and columns.
"""
from models.database import get_db, placeholders, query_db, upsert_translation


class CareerEntry:
    table = None
    translation_table = None
    technique_table = None
    owner_column = None
    root_fields = ()
    text_fields = ()
    title_field = None

    @classmethod
    def _select(cls):
        text = ", ".join(f"t.{name}" for name in cls.text_fields)
        return (f"SELECT e.*, {text} FROM {cls.table} e "
                f"LEFT JOIN {cls.translation_table} t "
                f"ON t.{cls.owner_column} = e.id AND t.locale = ?")

    @classmethod
    def get_all(cls, locale):
        rows = query_db(cls._select() + " ORDER BY e.start_date DESC, e.id DESC",
                        (locale,))
        techniques = cls._techniques([row["id"] for row in rows])
        return [cls._to_dict(row, locale, techniques.get(row["id"], [])) for row in rows]

    @classmethod
    def get_by_id(cls, entry_id, locale, fallback=True):
        row = query_db(cls._select() + " WHERE e.id = ?", (locale, entry_id), one=True)
        if row is None:
            return None
        techniques = cls._techniques([row["id"]])
        return cls._to_dict(row, locale, techniques.get(row["id"], []), fallback)

    @classmethod
    def _techniques(cls, entry_ids):
        grouped = {}
        if not entry_ids:
            return grouped
        rows = query_db(
            f"SELECT * FROM {cls.technique_table} "
            f"WHERE {cls.owner_column} IN ({placeholders(entry_ids)}) ORDER BY position, id",
            entry_ids,
        )
        for row in rows:
            grouped.setdefault(row[cls.owner_column], []).append(
                {"name": row["name"], "icon": row["icon"] or ""})
        return grouped

    @classmethod
    def _to_dict(cls, row, locale, techniques, fallback=True):
        entry = {"id": row["id"], "is_current": bool(row["is_current"]),
                 "updated_at": row["updated_at"], "techniques": techniques}
        for name in cls.root_fields:
            entry[name] = row[name] or ""
        for name in cls.text_fields:
            entry[name] = row[name] or ""
        if fallback and not entry[cls.title_field]:
            entry[cls.title_field] = f"No {locale} {cls.title_field} set"
        return entry

    @classmethod
    def save(cls, locale, values, entry_id=None):
        root = {name: values.get(name) or None for name in cls.root_fields}
        root["is_current"] = int(bool(values.get("is_current")))
        if root["is_current"]:
            root["end_date"] = None

        db = get_db()
        with db:
            if entry_id:
                set_clause = ", ".join(f"{name} = ?" for name in root)
                db.execute(
                    f"UPDATE {cls.table} SET {set_clause}, updated_at = CURRENT_TIMESTAMP "
                    f"WHERE id = ?",
                    list(root.values()) + [entry_id],
                )
            else:
                entry_id = db.execute(
                    f"INSERT INTO {cls.table} ({', '.join(root)}) "
                    f"VALUES ({placeholders(root)})",
                    list(root.values()),
                ).lastrowid
            upsert_translation(db, cls.translation_table, cls.owner_column, entry_id,
                               locale, {name: values.get(name) or None
                                        for name in cls.text_fields})

            db.execute(f"DELETE FROM {cls.technique_table} WHERE {cls.owner_column} = ?",
                       (entry_id,))
            for position, technique in enumerate(values.get("techniques") or []):
                db.execute(
                    f"INSERT INTO {cls.technique_table} ({cls.owner_column}, name, icon, "
                    f"position) VALUES (?, ?, ?, ?)",
                    (entry_id, technique["name"], technique.get("icon") or None, position),
                )
        return entry_id

    @classmethod
    def exists(cls, entry_id):
        return query_db(f"SELECT id FROM {cls.table} WHERE id = ?",
                        (entry_id,), one=True) is not None

    @classmethod
    def delete(cls, entry_id):
        db = get_db()
        with db:
            cursor = db.execute(f"DELETE FROM {cls.table} WHERE id = ?", (entry_id,))
        return cursor.rowcount


class Experience(CareerEntry):
    table = "experiences"
    translation_table = "experience_translations"
    technique_table = "experience_techniques"
    owner_column = "experience_id"
    root_fields = ("company_name", "company_logo", "company_website", "location",
                   "start_date", "end_date")
    text_fields = ("role", "employment_type", "description")
    title_field = "role"


class Education(CareerEntry):
    table = "educations"
    translation_table = "education_translations"
    technique_table = "education_techniques"
    owner_column = "education_id"
    root_fields = ("school_name", "school_logo", "school_website", "location",
                   "start_date", "end_date")
    text_fields = ("degree", "field_of_study", "description")
    title_field = "degree"
