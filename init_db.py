import logging
import os
import sqlite3

from werkzeug.security import generate_password_hash

from config import Config

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT UNIQUE NOT NULL,
    password_hash TEXT,
    image TEXT,
    role TEXT NOT NULL DEFAULT 'USER',
    status TEXT NOT NULL DEFAULT 'ACTIVE',
    email_verified_at TIMESTAMP,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS audit_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER,
    user_email TEXT,
    action TEXT NOT NULL,
    target_type TEXT,
    target_id INTEGER,
    details TEXT,
    is_sudo INTEGER NOT NULL DEFAULT 0,
    ip_address TEXT,
    timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE SET NULL
);

-- Owner profile and social links
CREATE TABLE IF NOT EXISTS profiles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER UNIQUE NOT NULL,
    professional_email TEXT,
    phone TEXT,
    resume_url TEXT,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS profile_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    profile_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    bio TEXT,
    location TEXT,
    UNIQUE(profile_id, locale),
    FOREIGN KEY (profile_id) REFERENCES profiles(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS social_links (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    profile_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    url TEXT NOT NULL,
    icon TEXT,
    FOREIGN KEY (profile_id) REFERENCES profiles(id) ON DELETE CASCADE
);

-- Hero (singleton)
CREATE TABLE IF NOT EXISTS hero_sections (
    id INTEGER PRIMARY KEY,
    primary_image TEXT NOT NULL,
    resume_url TEXT,
    availability TEXT NOT NULL DEFAULT 'AVAILABLE',
    is_active INTEGER NOT NULL DEFAULT 1,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS hero_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    hero_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    greeting TEXT NOT NULL,
    name TEXT NOT NULL,
    role TEXT NOT NULL,
    description TEXT NOT NULL,
    cta_text TEXT NOT NULL,
    UNIQUE(hero_id, locale),
    FOREIGN KEY (hero_id) REFERENCES hero_sections(id) ON DELETE CASCADE
);

-- About (singleton) with statuses and core pillars
CREATE TABLE IF NOT EXISTS about_sections (
    id INTEGER PRIMARY KEY,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS about_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    about_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    title TEXT NOT NULL,
    subtitle TEXT,
    description TEXT NOT NULL,
    UNIQUE(about_id, locale),
    FOREIGN KEY (about_id) REFERENCES about_sections(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS about_statuses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    about_id INTEGER NOT NULL,
    icon TEXT,
    is_active INTEGER NOT NULL DEFAULT 1,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (about_id) REFERENCES about_sections(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS about_status_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    status_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    label TEXT NOT NULL,
    value TEXT NOT NULL,
    UNIQUE(status_id, locale),
    FOREIGN KEY (status_id) REFERENCES about_statuses(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS core_pillars (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    about_id INTEGER NOT NULL,
    icon TEXT NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (about_id) REFERENCES about_sections(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS core_pillar_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pillar_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    UNIQUE(pillar_id, locale),
    FOREIGN KEY (pillar_id) REFERENCES core_pillars(id) ON DELETE CASCADE
);

-- Skills
CREATE TABLE IF NOT EXISTS skill_categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    icon TEXT NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS skill_category_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    title TEXT NOT NULL,
    UNIQUE(category_id, locale),
    FOREIGN KEY (category_id) REFERENCES skill_categories(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS skills (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    level INTEGER NOT NULL DEFAULT 80,
    icon TEXT,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (category_id) REFERENCES skill_categories(id) ON DELETE CASCADE
);

-- Experience and education
CREATE TABLE IF NOT EXISTS experiences (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    company_name TEXT NOT NULL,
    company_logo TEXT,
    company_website TEXT,
    location TEXT,
    start_date TEXT NOT NULL,
    end_date TEXT,
    is_current INTEGER NOT NULL DEFAULT 0,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS experience_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    experience_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    role TEXT NOT NULL,
    employment_type TEXT,
    description TEXT,
    UNIQUE(experience_id, locale),
    FOREIGN KEY (experience_id) REFERENCES experiences(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS experience_techniques (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    experience_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    icon TEXT,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (experience_id) REFERENCES experiences(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS educations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    school_name TEXT NOT NULL,
    school_logo TEXT,
    school_website TEXT,
    location TEXT,
    start_date TEXT NOT NULL,
    end_date TEXT,
    is_current INTEGER NOT NULL DEFAULT 0,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS education_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    education_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    degree TEXT NOT NULL,
    field_of_study TEXT,
    description TEXT,
    UNIQUE(education_id, locale),
    FOREIGN KEY (education_id) REFERENCES educations(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS education_techniques (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    education_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    icon TEXT,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (education_id) REFERENCES educations(id) ON DELETE CASCADE
);

-- Certifications
CREATE TABLE IF NOT EXISTS certifications (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    issuer TEXT NOT NULL,
    cover_url TEXT,
    link TEXT,
    issue_date TEXT NOT NULL,
    expire_date TEXT,
    credential_url TEXT,
    is_active INTEGER NOT NULL DEFAULT 1,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS certification_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    certification_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    title TEXT NOT NULL,
    credential_id TEXT,
    description TEXT,
    UNIQUE(certification_id, locale),
    FOREIGN KEY (certification_id) REFERENCES certifications(id) ON DELETE CASCADE
);

-- Shared taxonomy
CREATE TABLE IF NOT EXISTS tags (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS tag_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tag_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    name TEXT NOT NULL,
    UNIQUE(tag_id, locale),
    FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS techniques (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    icon TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS technique_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    technique_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    name TEXT NOT NULL,
    UNIQUE(technique_id, locale),
    FOREIGN KEY (technique_id) REFERENCES techniques(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS blog_categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS blog_category_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    name TEXT NOT NULL,
    UNIQUE(category_id, locale),
    FOREIGN KEY (category_id) REFERENCES blog_categories(id) ON DELETE CASCADE
);

-- Projects
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug TEXT UNIQUE NOT NULL,
    main_image TEXT NOT NULL,
    gallery TEXT NOT NULL DEFAULT '[]',
    category TEXT NOT NULL,
    live_url TEXT,
    repo_url TEXT,
    is_featured INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS project_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    content TEXT NOT NULL DEFAULT '',
    UNIQUE(project_id, locale),
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS project_tags (
    project_id INTEGER NOT NULL,
    tag_id INTEGER NOT NULL,
    PRIMARY KEY (project_id, tag_id),
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE,
    FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS project_techniques (
    project_id INTEGER NOT NULL,
    technique_id INTEGER NOT NULL,
    PRIMARY KEY (project_id, technique_id),
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE,
    FOREIGN KEY (technique_id) REFERENCES techniques(id) ON DELETE CASCADE
);

-- Blog
CREATE TABLE IF NOT EXISTS blogs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug TEXT UNIQUE NOT NULL,
    image TEXT NOT NULL,
    is_published INTEGER NOT NULL DEFAULT 0,
    published_at TIMESTAMP,
    category_id INTEGER,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (category_id) REFERENCES blog_categories(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS blog_translations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    blog_id INTEGER NOT NULL,
    locale TEXT NOT NULL,
    title TEXT NOT NULL,
    excerpt TEXT NOT NULL,
    content TEXT NOT NULL,
    meta_title TEXT,
    meta_desc TEXT,
    UNIQUE(blog_id, locale),
    FOREIGN KEY (blog_id) REFERENCES blogs(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS blog_tags (
    blog_id INTEGER NOT NULL,
    tag_id INTEGER NOT NULL,
    PRIMARY KEY (blog_id, tag_id),
    FOREIGN KEY (blog_id) REFERENCES blogs(id) ON DELETE CASCADE,
    FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
);

-- Testimonials and contact messages
CREATE TABLE IF NOT EXISTS testimonials (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    client_name TEXT NOT NULL,
    client_title TEXT NOT NULL,
    email TEXT,
    role TEXT,
    content TEXT NOT NULL,
    rating INTEGER NOT NULL DEFAULT 5,
    avatar_url TEXT,
    linkedin_url TEXT,
    github_url TEXT,
    status TEXT NOT NULL DEFAULT 'PENDING',
    is_featured INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS contact_messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    subject TEXT,
    message TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'UNREAD',
    priority INTEGER NOT NULL DEFAULT 0,
    ip_address TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Home page section switches (singleton)
CREATE TABLE IF NOT EXISTS section_settings (
    id INTEGER PRIMARY KEY,
    hero_active INTEGER NOT NULL DEFAULT 1,
    about_active INTEGER NOT NULL DEFAULT 1,
    project_active INTEGER NOT NULL DEFAULT 1,
    blog_active INTEGER NOT NULL DEFAULT 1,
    skill_active INTEGER NOT NULL DEFAULT 1,
    certification_active INTEGER NOT NULL DEFAULT 1,
    experience_active INTEGER NOT NULL DEFAULT 1,
    education_active INTEGER NOT NULL DEFAULT 1,
    contact_active INTEGER NOT NULL DEFAULT 1,
    testi_active INTEGER NOT NULL DEFAULT 1,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def init_db(database=None, upload_folder=None, admin_email=None, admin_password=None):
    database = database or Config.DATABASE
    upload_folder = upload_folder or Config.UPLOAD_FOLDER
    admin_email = (admin_email or Config.ADMIN_EMAIL).strip().lower()
    admin_password = admin_password or Config.ADMIN_PASSWORD

    os.makedirs(upload_folder, exist_ok=True)

    db = sqlite3.connect(database)
    db.executescript(SCHEMA)

    # Seed the owner account if no owner exists yet
    cursor = db.execute("SELECT id FROM users WHERE role = 'OWNER' LIMIT 1")
    if cursor.fetchone() is None:
        db.execute(
            "INSERT OR IGNORE INTO users (name, email, password_hash, role, status, "
            "email_verified_at) VALUES (?, ?, ?, 'OWNER', 'ACTIVE', CURRENT_TIMESTAMP)",
            ("Owner", admin_email, generate_password_hash(admin_password)),
        )
        db.commit()
        if admin_password == "ChangeMe123":
            logger.warning("Owner created with default password. "
                           "Set ADMIN_PASSWORD env var for production.")
        logger.info("Owner account created (%s)", admin_email)

    db.execute("INSERT OR IGNORE INTO section_settings (id) VALUES (1)")
    db.commit()

    db.close()
    logger.info("Database initialized at %s", database)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
