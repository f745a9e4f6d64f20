from models.database import placeholders, query_db


def split_names(raw):
    """``"Flask, SQL ,,flask"`` -> ``["Flask", "SQL"]`` (case-insensitive dedupe)."""
    names = []
    seen = set()
    for name in (raw or "").split(","):
        name = name.strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names


class Taxonomy:
    """A localized name list (tags, techniques, blog categories)."""

    table = None
    translation_table = None
    owner_column = None
    fallback_name = None

    @classmethod
    def get_all(cls, locale):
        rows = query_db(
            f"SELECT x.id, t.name FROM {cls.table} x "
            f"LEFT JOIN {cls.translation_table} t "
            f"ON t.{cls.owner_column} = x.id AND t.locale = ? "
            f"ORDER BY t.name IS NULL, t.name COLLATE NOCASE, x.id",
            (locale,),
        )
        return [{"id": row["id"], "name": row["name"] or cls.fallback_name} for row in rows]

    @classmethod
    def choices(cls, locale):
        return [(item["id"], item["name"]) for item in cls.get_all(locale)]

    @classmethod
    def existing_ids(cls, db, ids):
        ids = [int(i) for i in ids or []]
        if not ids:
            return []
        rows = db.execute(f"SELECT id FROM {cls.table} WHERE id IN ({placeholders(ids)})",
                          ids).fetchall()
        found = {row["id"] for row in rows}
        return [i for i in dict.fromkeys(ids) if i in found]

    @classmethod
    def get_or_create(cls, db, locale, name):
        row = db.execute(
            f"SELECT {cls.owner_column} AS id FROM {cls.translation_table} "
            f"WHERE locale = ? AND name = ? COLLATE NOCASE",
            (locale, name),
        ).fetchone()
        if row:
            return row["id"]
        item_id = db.execute(f"INSERT INTO {cls.table} DEFAULT VALUES").lastrowid
        db.execute(
            f"INSERT INTO {cls.translation_table} ({cls.owner_column}, locale, name) "
            f"VALUES (?, ?, ?)",
            (item_id, locale, name),
        )
        return item_id

    @classmethod
    def resolve(cls, db, locale, ids, new_names):
        """Existing ``ids`` plus ids for ``new_names`` (created if needed)."""
        resolved = cls.existing_ids(db, ids)
        for name in split_names(new_names):
            item_id = cls.get_or_create(db, locale, name)
            if item_id not in resolved:
                resolved.append(item_id)
        return resolved

    @classmethod
    def linked(cls, join_table, join_owner, owner_ids, locale):
        """``{owner_id: [{"id", "name"}]}`` for rows of ``join_table``."""
        grouped = {}
        if not owner_ids:
            return grouped
        rows = query_db(
            f"SELECT j.{join_owner} AS owner_id, x.id, t.name FROM {join_table} j "
            f"JOIN {cls.table} x ON x.id = j.{cls.owner_column} "
            f"LEFT JOIN {cls.translation_table} t "
            f"ON t.{cls.owner_column} = x.id AND t.locale = ? "
            f"WHERE j.{join_owner} IN ({placeholders(owner_ids)}) ORDER BY x.id",
            [locale] + list(owner_ids),
        )
        for row in rows:
            grouped.setdefault(row["owner_id"], []).append(
                {"id": row["id"], "name": row["name"] or cls.fallback_name})
        return grouped


class Tag(Taxonomy):
    table = "tags"
    translation_table = "tag_translations"
    owner_column = "tag_id"
    fallback_name = "Unnamed Tag"


class Technique(Taxonomy):
    table = "techniques"
    translation_table = "technique_translations"
    owner_column = "technique_id"
    fallback_name = "Unnamed Technique"


class BlogCategory(Taxonomy):
    table = "blog_categories"
    translation_table = "blog_category_translations"
    owner_column = "category_id"
    fallback_name = "Uncategorized"
