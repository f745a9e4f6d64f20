from models.database import get_db, placeholders, query_db, upsert_translation
from models.taxonomy import BlogCategory, Tag, split_names
from rich_text import reading_time

TEXT_FIELDS = ("title", "excerpt", "content", "meta_title", "meta_desc")

_SELECT = (
    "SELECT b.*, t.title, t.excerpt, t.content, t.meta_title, t.meta_desc, "
    "ct.name AS category_name FROM blogs b "
    "LEFT JOIN blog_translations t ON t.blog_id = b.id AND t.locale = ? "
    "LEFT JOIN blog_category_translations ct "
    "ON ct.category_id = b.category_id AND ct.locale = ? "
)


class Blog:
    @staticmethod
    def get_all(locale, published_only=True, limit=None):
        where = "WHERE b.is_published = 1 " if published_only else ""
        order = ("ORDER BY b.published_at DESC, b.id DESC" if published_only
                 else "ORDER BY b.created_at DESC, b.id DESC")
        sql = _SELECT + where + order
        params = [locale, locale]
        if limit:
            sql += " LIMIT ?"
            params.append(limit)
        return Blog._hydrate(query_db(sql, params), locale)

    @staticmethod
    def get_by_id(blog_id, locale, fallback=True):
        row = query_db(_SELECT + "WHERE b.id = ?", (locale, locale, blog_id), one=True)
        if row is None:
            return None
        return Blog._hydrate([row], locale, fallback)[0]

    @staticmethod
    def _hydrate(rows, locale, fallback=True):
        tags = Tag.linked("blog_tags", "blog_id", [row["id"] for row in rows], locale)
        blogs = []
        for row in rows:
            content = row["content"] or ""
            blogs.append({
                "id": row["id"],
                "slug": row["slug"],
                "image": row["image"],
                "is_published": bool(row["is_published"]),
                "published_at": row["published_at"],
                "created_at": row["created_at"],
                "updated_at": row["updated_at"],
                "category_id": row["category_id"],
                "category": row["category_name"] or "Uncategorized",
                "title": row["title"] or ("Untitled" if fallback else ""),
                "excerpt": row["excerpt"] or "",
                "content": content,
                "meta_title": row["meta_title"] or "",
                "meta_desc": row["meta_desc"] or "",
                "reading_time": reading_time(content),
                "tags": tags.get(row["id"], []),
            })
        return blogs

    @staticmethod
    def save(locale, values, blog_id=None):
        """Create or update a post. ``published_at`` is stamped on first publish."""
        db = get_db()
        with db:
            new_categories = split_names(values.get("new_category"))
            if new_categories:
                category_id = BlogCategory.get_or_create(db, locale, new_categories[0])
            else:
                existing = BlogCategory.existing_ids(db, values.get("categories"))
                category_id = existing[0] if existing else None

            root = {
                "slug": values["slug"],
                "image": values["image"],
                "is_published": int(bool(values.get("is_published"))),
                "category_id": category_id,
            }
            if blog_id:
                set_clause = ", ".join(f"{name} = ?" for name in root)
                db.execute(
                    f"UPDATE blogs SET {set_clause}, "
                    f"published_at = CASE WHEN ? = 1 AND published_at IS NULL "
                    f"THEN CURRENT_TIMESTAMP ELSE published_at END, "
                    f"updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    list(root.values()) + [root["is_published"], blog_id],
                )
            else:
                blog_id = db.execute(
                    f"INSERT INTO blogs ({', '.join(root)}, published_at) "
                    f"VALUES ({placeholders(root)}, "
                    f"CASE WHEN ? THEN CURRENT_TIMESTAMP END)",
                    list(root.values()) + [root["is_published"]],
                ).lastrowid
            upsert_translation(db, "blog_translations", "blog_id", blog_id, locale,
                               {name: values.get(name) or None for name in TEXT_FIELDS})

            tag_ids = Tag.resolve(db, locale, values.get("tags"), values.get("new_tags"))
            db.execute("DELETE FROM blog_tags WHERE blog_id = ?", (blog_id,))
            db.executemany("INSERT INTO blog_tags (blog_id, tag_id) VALUES (?, ?)",
                           [(blog_id, tag_id) for tag_id in tag_ids])
        return blog_id

    @staticmethod
    def slug_taken(slug, exclude_id=None):
        row = query_db("SELECT id FROM blogs WHERE slug = ? AND id IS NOT ?",
                       (slug, exclude_id), one=True)
        return row is not None

    @staticmethod
    def exists(blog_id):
        return query_db("SELECT id FROM blogs WHERE id = ?", (blog_id,), one=True) is not None

    @staticmethod
    def delete(blog_id):
        db = get_db()
        with db:
            cursor = db.execute("DELETE FROM blogs WHERE id = ?", (blog_id,))
        return cursor.rowcount

    @staticmethod
    def count_published():
        row = query_db("SELECT COUNT(*) as count FROM blogs WHERE is_published = 1", one=True)
        return row["count"] if row else 0
