from models.database import get_db, placeholders, query_db, upsert_translation
from models.user import OWNER


class Profile:
    @staticmethod
    def get_for_user(user_id, locale):
        row = query_db(
            "SELECT p.*, t.bio, t.location FROM profiles p "
            "LEFT JOIN profile_translations t ON t.profile_id = p.id AND t.locale = ? "
            "WHERE p.user_id = ?",
            (locale, user_id), one=True,
        )
        if row is None:
            return None
        links = query_db("SELECT id, name, url, icon FROM social_links "
                         "WHERE profile_id = ? ORDER BY id", (row["id"],))
        return {
            "id": row["id"],
            "user_id": row["user_id"],
            "professional_email": row["professional_email"] or "",
            "phone": row["phone"] or "",
            "resume_url": row["resume_url"] or "",
            "bio": row["bio"] or "",
            "location": row["location"] or "",
            "social_links": [dict(link) for link in links],
        }

    @staticmethod
    def get_owner(locale):
        """The site owner's public profile (contact details, social links)."""
        row = query_db("SELECT id FROM users WHERE role = ? ORDER BY id LIMIT 1",
                       (OWNER,), one=True)
        if row is None:
            return None
        return Profile.get_for_user(row["id"], locale)

    @staticmethod
    def save(user_id, locale, values):
        """Upsert the profile and sync its social links.

        Links whose id is missing from ``values["social_links"]`` are deleted,
        links with a known id are updated and the rest are inserted.
        """
        db = get_db()
        with db:
            if values.get("name"):
                db.execute(
                    "UPDATE users SET name = ?, image = COALESCE(?, image), "
                    "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (values["name"], values.get("image") or None, user_id),
                )
            db.execute(
                "INSERT INTO profiles (user_id, professional_email, phone, resume_url) "
                "VALUES (?, ?, ?, ?) ON CONFLICT(user_id) DO UPDATE SET "
                "professional_email = excluded.professional_email, "
                "phone = excluded.phone, resume_url = excluded.resume_url, "
                "updated_at = CURRENT_TIMESTAMP",
                (user_id, values.get("professional_email") or None,
                 values.get("phone") or None, values.get("resume_url") or None),
            )
            profile_id = db.execute("SELECT id FROM profiles WHERE user_id = ?",
                                    (user_id,)).fetchone()["id"]
            upsert_translation(db, "profile_translations", "profile_id", profile_id, locale,
                               {"bio": values.get("bio") or None,
                                "location": values.get("location") or None})

            links = values.get("social_links") or []
            owned = {row["id"] for row in db.execute(
                "SELECT id FROM social_links WHERE profile_id = ?", (profile_id,))}
            keep = [link["id"] for link in links if link.get("id") in owned]
            if keep:
                db.execute(
                    f"DELETE FROM social_links WHERE profile_id = ? "
                    f"AND id NOT IN ({placeholders(keep)})",
                    [profile_id] + keep,
                )
            else:
                db.execute("DELETE FROM social_links WHERE profile_id = ?", (profile_id,))
            for link in links:
                if link.get("id") in owned:
                    db.execute(
                        "UPDATE social_links SET name = ?, url = ?, icon = ? WHERE id = ?",
                        (link["name"], link["url"], link.get("icon") or None, link["id"]),
                    )
                else:
                    db.execute(
                        "INSERT INTO social_links (profile_id, name, url, icon) "
                        "VALUES (?, ?, ?, ?)",
                        (profile_id, link["name"], link["url"], link.get("icon") or None),
                    )
        return profile_id
