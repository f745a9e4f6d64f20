import json

from models.database import get_db, placeholders, query_db, upsert_translation
from models.taxonomy import Tag, Technique
from secure_action import ActionError

CATEGORIES = ("WEB", "MOBILE", "DESKTOP", "BACKEND", "AI_ML", "OTHER")

_SELECT = (
    "SELECT p.*, t.title, t.description, t.content FROM projects p "
    "LEFT JOIN project_translations t ON t.project_id = p.id AND t.locale = ? "
)


class Project:
    @staticmethod
    def get_all(locale, active_only=True, featured_only=False, limit=None):
        conditions = []
        if active_only:
            conditions.append("p.is_active = 1")
        if featured_only:
            conditions.append("p.is_featured = 1")
        where = "WHERE " + " AND ".join(conditions) if conditions else ""
        sql = _SELECT + f"{where} ORDER BY p.created_at DESC, p.id DESC"
        params = [locale]
        if limit:
            sql += " LIMIT ?"
            params.append(limit)
        rows = query_db(sql, params)
        return Project._hydrate(rows, locale)

    @staticmethod
    def get_by_id(project_id, locale, fallback=True):
        row = query_db(_SELECT + "WHERE p.id = ?", (locale, project_id), one=True)
        if row is None:
            return None
        return Project._hydrate([row], locale, fallback)[0]

    @staticmethod
    def _hydrate(rows, locale, fallback=True):
        ids = [row["id"] for row in rows]
        tags = Tag.linked("project_tags", "project_id", ids, locale)
        techniques = Technique.linked("project_techniques", "project_id", ids, locale)
        return [
            {
                "id": row["id"],
                "slug": row["slug"],
                "main_image": row["main_image"],
                "gallery": json.loads(row["gallery"] or "[]"),
                "category": row["category"],
                "live_url": row["live_url"] or "",
                "repo_url": row["repo_url"] or "",
                "is_featured": bool(row["is_featured"]),
                "is_active": bool(row["is_active"]),
                "created_at": row["created_at"],
                "updated_at": row["updated_at"],
                "title": row["title"] or ("Untitled Project" if fallback else ""),
                "description": (row["description"]
                                or ("No description available" if fallback else "")),
                "content": row["content"] or "",
                "tags": tags.get(row["id"], []),
                "techniques": techniques.get(row["id"], []),
            }
            for row in rows
        ]

    @staticmethod
    def save(locale, values, project_id=None):
        """Create or update a project with its locale text and links.

        Tag and technique links are replaced by the submitted selection plus
        any newly named items.
        """
        root = {
            "slug": values["slug"],
            "main_image": values["main_image"],
            "gallery": json.dumps([url for url in values.get("gallery") or [] if url]),
            "category": values["category"],
            "live_url": values.get("live_url") or None,
            "repo_url": values.get("repo_url") or None,
            "is_featured": int(bool(values.get("is_featured"))),
            "is_active": int(bool(values.get("is_active"))),
        }
        db = get_db()
        with db:
            if project_id:
                set_clause = ", ".join(f"{name} = ?" for name in root)
                db.execute(
                    f"UPDATE projects SET {set_clause}, updated_at = CURRENT_TIMESTAMP "
                    f"WHERE id = ?",
                    list(root.values()) + [project_id],
                )
            else:
                project_id = db.execute(
                    f"INSERT INTO projects ({', '.join(root)}) "
                    f"VALUES ({placeholders(root)})",
                    list(root.values()),
                ).lastrowid
            upsert_translation(db, "project_translations", "project_id", project_id,
                               locale, {
                                   "title": values["title"],
                                   "description": values["description"],
                                   "content": values.get("content") or "",
                               })

            tag_ids = Tag.resolve(db, locale, values.get("tags"), values.get("new_tags"))
            technique_ids = Technique.resolve(db, locale, values.get("techniques"),
                                              values.get("new_techniques"))
            if not tag_ids or not technique_ids:
                raise ActionError("Select at least one tag and one technique.", 400)
            db.execute("DELETE FROM project_tags WHERE project_id = ?", (project_id,))
            db.executemany("INSERT INTO project_tags (project_id, tag_id) VALUES (?, ?)",
                           [(project_id, tag_id) for tag_id in tag_ids])
            db.execute("DELETE FROM project_techniques WHERE project_id = ?", (project_id,))
            db.executemany(
                "INSERT INTO project_techniques (project_id, technique_id) VALUES (?, ?)",
                [(project_id, technique_id) for technique_id in technique_ids],
            )
        return project_id

    @staticmethod
    def slug_taken(slug, exclude_id=None):
        row = query_db("SELECT id FROM projects WHERE slug = ? AND id IS NOT ?",
                       (slug, exclude_id), one=True)
        return row is not None

    @staticmethod
    def exists(project_id):
        return query_db("SELECT id FROM projects WHERE id = ?",
                        (project_id,), one=True) is not None

    @staticmethod
    def delete(project_id):
        db = get_db()
        with db:
            cursor = db.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        return cursor.rowcount

    @staticmethod
    def count_all():
        row = query_db("SELECT COUNT(*) as count FROM projects", one=True)
        return row["count"] if row else 0
