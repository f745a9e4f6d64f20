from models.database import get_db, placeholders, query_db, upsert_translation

ABOUT_ID = 1


def _sync_children(db, table, keep_ids):
    """Delete rows of ``table`` belonging to the about section not in ``keep_ids``."""
    if keep_ids:
        db.execute(
            f"DELETE FROM {table} WHERE about_id = ? AND id NOT IN ({placeholders(keep_ids)})",
            [ABOUT_ID] + list(keep_ids),
        )
    else:
        db.execute(f"DELETE FROM {table} WHERE about_id = ?", (ABOUT_ID,))


def _owned_id(db, table, item_id):
    # Ids from the browser are only trusted when they belong to this section
    if not item_id:
        return None
    row = db.execute(f"SELECT id FROM {table} WHERE id = ? AND about_id = ?",
                     (item_id, ABOUT_ID)).fetchone()
    return row["id"] if row else None


class About:
    @staticmethod
    def get(locale):
        row = query_db(
            "SELECT a.id, a.updated_at, t.title, t.subtitle, t.description "
            "FROM about_sections a "
            "LEFT JOIN about_translations t ON t.about_id = a.id AND t.locale = ? "
            "WHERE a.id = ?",
            (locale, ABOUT_ID), one=True,
        )
        if row is None:
            return None

        statuses = query_db(
            "SELECT s.id, s.icon, s.is_active, t.label, t.value FROM about_statuses s "
            "LEFT JOIN about_status_translations t ON t.status_id = s.id AND t.locale = ? "
            "WHERE s.about_id = ? ORDER BY s.position, s.id",
            (locale, ABOUT_ID),
        )
        pillars = query_db(
            "SELECT p.id, p.icon, t.title, t.description FROM core_pillars p "
            "LEFT JOIN core_pillar_translations t ON t.pillar_id = p.id AND t.locale = ? "
            "WHERE p.about_id = ? ORDER BY p.position, p.id",
            (locale, ABOUT_ID),
        )
        return {
            "id": row["id"],
            "updated_at": row["updated_at"],
            "title": row["title"] or "",
            "subtitle": row["subtitle"] or "",
            "description": row["description"] or "",
            "statuses": [
                {"id": s["id"], "icon": s["icon"] or "", "is_active": bool(s["is_active"]),
                 "label": s["label"] or "", "value": s["value"] or ""}
                for s in statuses
            ],
            "pillars": [
                {"id": p["id"], "icon": p["icon"], "title": p["title"] or "",
                 "description": p["description"] or ""}
                for p in pillars
            ],
        }

    @staticmethod
    def save(locale, values):
        """Upsert the section, its statuses and pillars in one transaction.

        Statuses and pillars missing from ``values`` are deleted.
        """
        db = get_db()
        with db:
            db.execute(
                "INSERT INTO about_sections (id) VALUES (?) ON CONFLICT(id) "
                "DO UPDATE SET updated_at = CURRENT_TIMESTAMP",
                (ABOUT_ID,),
            )
            upsert_translation(db, "about_translations", "about_id", ABOUT_ID, locale, {
                "title": values["title"],
                "subtitle": values.get("subtitle") or None,
                "description": values["description"],
            })

            statuses = values.get("statuses") or []
            keep = [s["id"] for s in statuses if _owned_id(db, "about_statuses", s.get("id"))]
            _sync_children(db, "about_statuses", keep)
            for position, status in enumerate(statuses):
                status_id = _owned_id(db, "about_statuses", status.get("id"))
                if status_id:
                    db.execute(
                        "UPDATE about_statuses SET icon = ?, is_active = ?, position = ? "
                        "WHERE id = ?",
                        (status.get("icon") or None, int(bool(status.get("is_active"))),
                         position, status_id),
                    )
                else:
                    status_id = db.execute(
                        "INSERT INTO about_statuses (about_id, icon, is_active, position) "
                        "VALUES (?, ?, ?, ?)",
                        (ABOUT_ID, status.get("icon") or None,
                         int(bool(status.get("is_active"))), position),
                    ).lastrowid
                upsert_translation(db, "about_status_translations", "status_id",
                                   status_id, locale,
                                   {"label": status["label"], "value": status["value"]})

            pillars = values.get("pillars") or []
            keep = [p["id"] for p in pillars if _owned_id(db, "core_pillars", p.get("id"))]
            _sync_children(db, "core_pillars", keep)
            for position, pillar in enumerate(pillars):
                pillar_id = _owned_id(db, "core_pillars", pillar.get("id"))
                if pillar_id:
                    db.execute(
                        "UPDATE core_pillars SET icon = ?, position = ? WHERE id = ?",
                        (pillar["icon"], position, pillar_id),
                    )
                else:
                    pillar_id = db.execute(
                        "INSERT INTO core_pillars (about_id, icon, position) VALUES (?, ?, ?)",
                        (ABOUT_ID, pillar["icon"], position),
                    ).lastrowid
                upsert_translation(db, "core_pillar_translations", "pillar_id",
                                   pillar_id, locale,
                                   {"title": pillar["title"],
                                    "description": pillar["description"]})
        return ABOUT_ID
