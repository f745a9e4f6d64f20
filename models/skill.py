from models.database import get_db, placeholders, query_db, upsert_translation


class SkillCategory:
    @staticmethod
    def get_all(locale, active_only=False):
        where = "WHERE c.is_active = 1" if active_only else ""
        rows = query_db(
            "SELECT c.*, t.title FROM skill_categories c "
            "LEFT JOIN skill_category_translations t "
            "ON t.category_id = c.id AND t.locale = ? "
            f"{where} ORDER BY c.position, c.id",
            (locale,),
        )
        skills = SkillCategory._skills_by_category([row["id"] for row in rows])
        return [SkillCategory._to_dict(row, locale, skills.get(row["id"], []))
                for row in rows]

    @staticmethod
    def get_by_id(category_id, locale, fallback=True):
        row = query_db(
            "SELECT c.*, t.title FROM skill_categories c "
            "LEFT JOIN skill_category_translations t "
            "ON t.category_id = c.id AND t.locale = ? WHERE c.id = ?",
            (locale, category_id), one=True,
        )
        if row is None:
            return None
        skills = SkillCategory._skills_by_category([row["id"]])
        return SkillCategory._to_dict(row, locale, skills.get(row["id"], []), fallback)

    @staticmethod
    def _skills_by_category(category_ids):
        grouped = {}
        if not category_ids:
            return grouped
        rows = query_db(
            f"SELECT * FROM skills WHERE category_id IN ({placeholders(category_ids)}) "
            "ORDER BY position, id",
            category_ids,
        )
        for row in rows:
            grouped.setdefault(row["category_id"], []).append(
                {"id": row["id"], "name": row["name"], "level": row["level"],
                 "icon": row["icon"] or ""}
            )
        return grouped

    @staticmethod
    def _to_dict(row, locale, skills, fallback=True):
        return {
            "id": row["id"],
            "icon": row["icon"],
            "position": row["position"],
            "is_active": bool(row["is_active"]),
            "title": row["title"] or (f"No {locale} title set" if fallback else ""),
            "skills": skills,
        }

    @staticmethod
    def save(locale, values, category_id=None):
        """Create or update a category; its skill list is replaced wholesale."""
        db = get_db()
        with db:
            if category_id:
                db.execute(
                    "UPDATE skill_categories SET icon = ?, position = ?, is_active = ?, "
                    "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (values["icon"], values.get("position") or 0,
                     int(bool(values.get("is_active"))), category_id),
                )
            else:
                category_id = db.execute(
                    "INSERT INTO skill_categories (icon, position, is_active) VALUES (?, ?, ?)",
                    (values["icon"], values.get("position") or 0,
                     int(bool(values.get("is_active")))),
                ).lastrowid
            upsert_translation(db, "skill_category_translations", "category_id",
                               category_id, locale, {"title": values["title"]})

            db.execute("DELETE FROM skills WHERE category_id = ?", (category_id,))
            for position, skill in enumerate(values.get("skills") or []):
                level = skill.get("level")
                db.execute(
                    "INSERT INTO skills (category_id, name, level, icon, position) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (category_id, skill["name"], 80 if level is None else level,
                     skill.get("icon") or None, position),
                )
        return category_id

    @staticmethod
    def exists(category_id):
        return query_db("SELECT id FROM skill_categories WHERE id = ?",
                        (category_id,), one=True) is not None

    @staticmethod
    def delete(category_id):
        db = get_db()
        with db:
            cursor = db.execute("DELETE FROM skill_categories WHERE id = ?", (category_id,))
        return cursor.rowcount
