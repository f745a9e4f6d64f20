from models.database import get_db, query_db

SETTINGS_ID = 1
SECTION_FLAGS = (
    "hero_active",
    "about_active",
    "project_active",
    "blog_active",
    "skill_active",
    "certification_active",
    "experience_active",
    "education_active",
    "contact_active",
    "testi_active",
)


class SectionSettings:
    @staticmethod
    def get():
        """Current switches; every section is on when no row exists yet."""
        row = query_db("SELECT * FROM section_settings WHERE id = ?", (SETTINGS_ID,), one=True)
        if row is None:
            return {flag: True for flag in SECTION_FLAGS}
        return {flag: bool(row[flag]) for flag in SECTION_FLAGS}

    @staticmethod
    def save(values):
        flags = {flag: int(bool(values.get(flag))) for flag in SECTION_FLAGS}
        db = get_db()
        with db:
            db.execute(
                f"INSERT INTO section_settings (id, {', '.join(flags)}) "
                f"VALUES (?, {', '.join('?' for _ in flags)}) "
                f"ON CONFLICT(id) DO UPDATE SET "
                f"{', '.join(f'{flag} = excluded.{flag}' for flag in flags)}, "
                f"updated_at = CURRENT_TIMESTAMP",
                [SETTINGS_ID] + list(flags.values()),
            )
        return SectionSettings.get()
