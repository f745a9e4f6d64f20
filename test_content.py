"""Admin editing of the portfolio sections, projects and blog posts."""
from conftest import ADMIN_EMAIL, login
from models.about import About
from models.blog import Blog
from models.career import Experience
from models.hero import Hero
from models.project import Project
from models.section import SectionSettings
from models.skill import SkillCategory
from rich_text import render_markdown

HERO = {
    "primary_image": "/uploads/me.png",
    "availability": "AVAILABLE",
    "is_active": "y",
    "greeting": "Hello, I am",
    "name": "Jane Doe",
    "role": "Backend engineer",
    "description": "I build reliable web services.",
    "cta_text": "Hire me",
}

PROJECT = {
    "title": "Portfolio site",
    "slug": "portfolio-site",
    "category": "WEB",
    "description": "A bilingual portfolio built with Flask.",
    "content": "## Features\n\n* Markdown\n\n<script>alert(1)</script>",
    "main_image": "/uploads/cover.png",
    "gallery-0": "/uploads/one.png",
    "gallery-1": "",
    "new_tags": "Flask, SQLite",
    "new_techniques": "Python",
    "is_active": "y",
}

BLOG = {
    "title": "Writing secure actions",
    "slug": "secure-actions",
    "excerpt": "How every mutation is validated.",
    "content": "Every mutation goes through one wrapper. " * 10,
    "image": "/uploads/blog.png",
    "new_category": "Engineering",
    "new_tags": "security",
    "is_published": "y",
}


def test_hero_save_and_render(owner_client, app):
    r = owner_client.post("/en/admin/hero", data=HERO)
    assert r.status_code == 302
    with app.app_context():
        hero = Hero.get("en")
        assert hero["content"]["name"] == "Jane Doe"
        assert hero["availability"] == "AVAILABLE"
    assert "Jane Doe" in owner_client.get("/en/").get_data(as_text=True)


def test_hero_is_translated_per_locale(owner_client, app):
    owner_client.post("/en/admin/hero", data=HERO)
    r = owner_client.post("/en/admin/hero?content_locale=ar", data=dict(HERO, name="جين"))
    assert r.status_code == 302
    assert "content_locale=ar" in r.headers["Location"]
    with app.app_context():
        assert Hero.get("en")["content"]["name"] == "Jane Doe"
        assert Hero.get("ar")["content"]["name"] == "جين"


def test_hero_validation_error(owner_client):
    r = owner_client.post("/en/admin/hero", data=dict(HERO, primary_image="not a url"))
    assert r.status_code == 400
    assert "Please correct the highlighted fields." in r.get_data(as_text=True)


def test_hidden_hero_is_not_rendered(owner_client):
    owner_client.post("/en/admin/hero", data={k: v for k, v in HERO.items() if k != "is_active"})
    assert "Jane Doe" not in owner_client.get("/en/").get_data(as_text=True)


def test_hero_delete_requires_super_role(client, app):
    login(client, "owner@portfolio.io")
    client.post("/en/admin/hero", data=HERO)
    client.post("/en/auth/sign-out")

    login(client, ADMIN_EMAIL)
    client.post("/en/admin/hero/delete")
    with app.app_context():
        assert Hero.get("en") is not None
    client.post("/en/auth/sign-out")

    login(client, "super@portfolio.io")
    client.post("/en/admin/hero/delete")
    with app.app_context():
        assert Hero.get("en") is None


def test_about_with_statuses_and_pillars(owner_client, app):
    r = owner_client.post("/en/admin/about", data={
        "title": "About me",
        "description": "Ten years of shipping software.",
        "statuses-0-label": "Projects",
        "statuses-0-value": "40+",
        "statuses-0-is_active": "y",
        "statuses-1-label": "",
        "statuses-1-value": "",
        "pillars-0-icon": "shield",
        "pillars-0-title": "Security",
        "pillars-0-description": "Secure by default.",
    })
    assert r.status_code == 302
    with app.app_context():
        about = About.get("en")
        assert [s["label"] for s in about["statuses"]] == ["Projects"]
        assert about["pillars"][0]["title"] == "Security"
        status_id = about["statuses"][0]["id"]

    # Resubmitting with the id keeps the row, dropping the pillar deletes it
    owner_client.post("/en/admin/about", data={
        "title": "About me",
        "description": "Ten years of shipping software.",
        "statuses-0-id": str(status_id),
        "statuses-0-label": "Projects",
        "statuses-0-value": "50+",
    })
    with app.app_context():
        about = About.get("en")
        assert about["statuses"][0]["id"] == status_id
        assert about["statuses"][0]["value"] == "50+"
        assert about["pillars"] == []


def test_skill_category_crud(owner_client, app):
    r = owner_client.post("/en/admin/skills/new", data={
        "title": "Backend",
        "icon": "server",
        "is_active": "y",
        "skills-0-name": "Python",
        "skills-0-level": "90",
        "skills-1-name": "SQL",
        "skills-2-name": "",
    })
    assert r.status_code == 302
    with app.app_context():
        category = SkillCategory.get_all("en")[0]
        assert [(s["name"], s["level"]) for s in category["skills"]] == [("Python", 90),
                                                                         ("SQL", 80)]
        category_id = category["id"]

    r = owner_client.post(f"/en/admin/skills/{category_id}/edit", data={
        "title": "Backend", "icon": "server", "skills-0-name": "Go",
    })
    assert r.status_code == 302
    with app.app_context():
        category = SkillCategory.get_by_id(category_id, "en")
        assert [s["name"] for s in category["skills"]] == ["Go"]
        assert not category["is_active"]
        assert SkillCategory.get_all("en", active_only=True) == []
        assert SkillCategory.get_by_id(category_id, "ar")["title"] == "No ar title set"

    assert owner_client.post(f"/en/admin/skills/{category_id}/delete").status_code == 302
    with app.app_context():
        assert SkillCategory.get_all("en") == []


def test_editing_missing_entry_is_404(owner_client):
    assert owner_client.get("/en/admin/experience/999/edit").status_code == 404
    r = owner_client.post("/en/admin/certifications/999/edit", data={
        "title": "Cert", "issuer": "Org", "issue_date": "2024-01-01",
    })
    assert r.status_code == 404


def test_current_experience_clears_end_date(owner_client, app):
    r = owner_client.post("/en/admin/experience/new", data={
        "company_name": "Acme",
        "role": "Engineer",
        "start_date": "2021-03-01",
        "end_date": "2022-01-01",
        "is_current": "y",
        "techniques-0-name": "Flask",
    })
    assert r.status_code == 302
    with app.app_context():
        entry = Experience.get_all("en")[0]
        assert entry["is_current"]
        assert entry["end_date"] == ""
        assert entry["techniques"] == [{"name": "Flask", "icon": ""}]


def test_end_date_before_start_date_is_rejected(owner_client):
    r = owner_client.post("/en/admin/education/new", data={
        "school_name": "University",
        "degree": "BSc",
        "start_date": "2020-09-01",
        "end_date": "2019-06-01",
    })
    assert r.status_code == 400
    assert "End date must be after the start date." in r.get_data(as_text=True)


def test_invalid_date_is_rejected(owner_client):
    r = owner_client.post("/en/admin/certifications/new", data={
        "title": "Cert", "issuer": "Org", "issue_date": "01/02/2024",
    })
    assert r.status_code == 400


def test_project_create_with_new_taxonomy(owner_client, app):
    r = owner_client.post("/en/admin/projects/new", data=PROJECT)
    assert r.status_code == 302
    with app.app_context():
        project = Project.get_all("en")[0]
        assert sorted(tag["name"] for tag in project["tags"]) == ["Flask", "SQLite"]
        assert [tech["name"] for tech in project["techniques"]] == ["Python"]
        assert project["gallery"] == ["/uploads/one.png"]
        project_id = project["id"]

    html = owner_client.get(f"/en/projects/{project_id}").get_data(as_text=True)
    assert "<h2" in html and "Features" in html
    assert "<script>alert(1)</script>" not in html


def test_project_requires_tags_and_techniques(owner_client):
    r = owner_client.post("/en/admin/projects/new",
                          data=dict(PROJECT, new_tags="", new_techniques=""))
    assert r.status_code == 400


def test_project_slug_must_be_unique(owner_client):
    owner_client.post("/en/admin/projects/new", data=PROJECT)
    r = owner_client.post("/en/admin/projects/new", data=dict(PROJECT, title="Another one"))
    assert r.status_code == 409


def test_project_edit_reuses_existing_tags(owner_client, app):
    owner_client.post("/en/admin/projects/new", data=PROJECT)
    with app.app_context():
        project = Project.get_all("en")[0]
        tag_ids = [str(tag["id"]) for tag in project["tags"]]
        technique_ids = [str(tech["id"]) for tech in project["techniques"]]

    data = {k: v for k, v in PROJECT.items() if not k.startswith("new_")}
    data.update(tags=tag_ids, techniques=technique_ids, title="Portfolio site v2")
    r = owner_client.post(f"/en/admin/projects/{project['id']}/edit", data=data)
    assert r.status_code == 302
    with app.app_context():
        project = Project.get_by_id(project["id"], "en")
        assert project["title"] == "Portfolio site v2"
        assert len(project["tags"]) == 2


def test_inactive_project_hidden_from_visitors(owner_client, client, app):
    owner_client.post("/en/admin/projects/new",
                      data={k: v for k, v in PROJECT.items() if k != "is_active"})
    with app.app_context():
        project_id = Project.get_all("en", active_only=False)[0]["id"]
    assert owner_client.get(f"/en/projects/{project_id}").status_code == 200
    owner_client.post("/en/auth/sign-out")
    assert client.get(f"/en/projects/{project_id}").status_code == 404
    assert "Portfolio site" not in client.get("/en/projects").get_data(as_text=True)


def test_admin_cannot_delete_project(client, app):
    login(client, "owner@portfolio.io")
    client.post("/en/admin/projects/new", data=PROJECT)
    client.post("/en/auth/sign-out")

    login(client, ADMIN_EMAIL)
    with app.app_context():
        project_id = Project.get_all("en")[0]["id"]
    r = client.post(f"/en/admin/projects/{project_id}/delete", follow_redirects=True)
    assert "You do not have permission to do that." in r.get_data(as_text=True)
    with app.app_context():
        assert Project.exists(project_id)


def test_blog_publish_flow(owner_client, client, app):
    r = owner_client.post("/en/admin/blogs/new", data=BLOG)
    assert r.status_code == 302
    with app.app_context():
        blog = Blog.get_all("en")[0]
        assert blog["category"] == "Engineering"
        assert blog["published_at"]
        assert blog["reading_time"] == 1
    assert "Writing secure actions" in client.get("/en/blogs").get_data(as_text=True)


def test_draft_blog_is_hidden(owner_client, app):
    owner_client.post("/en/admin/blogs/new",
                      data={k: v for k, v in BLOG.items() if k != "is_published"})
    with app.app_context():
        blog = Blog.get_all("en", published_only=False)[0]
        assert blog["published_at"] is None
    assert owner_client.get(f"/en/blogs/{blog['id']}").status_code == 200
    owner_client.post("/en/auth/sign-out")
    assert owner_client.get(f"/en/blogs/{blog['id']}").status_code == 404
    assert owner_client.get(f"/api/en/blogs/{blog['id']}").status_code == 404


def test_admin_can_write_blog_posts(admin_client):
    assert admin_client.post("/en/admin/blogs/new", data=BLOG).status_code == 302
    r = admin_client.post("/en/admin/blogs/new", data=dict(BLOG, title="Duplicate slug"))
    assert r.status_code == 409
    assert "A blog with this slug already exists." in r.get_data(as_text=True)


def test_section_flags_hide_home_sections(owner_client, app):
    owner_client.post("/en/admin/hero", data=HERO)
    r = owner_client.post("/en/admin/sections", data={"about_active": "y", "contact_active": "y"})
    assert r.status_code == 302
    with app.app_context():
        sections = SectionSettings.get()
        assert not sections["hero_active"]
        assert sections["about_active"]
    assert "Jane Doe" not in owner_client.get("/en/").get_data(as_text=True)


def test_markdown_keeps_safe_links():
    html = str(render_markdown(
        "[site](https://example.com) [post](/en/blogs/1) [top](#intro) "
        "[mail](mailto:owner@portfolio.io)"))
    assert 'href="https://example.com"' in html
    assert 'href="/en/blogs/1"' in html
    assert 'href="#intro"' in html
    assert 'href="mailto:owner@portfolio.io"' in html


def test_markdown_neutralises_script_links():
    for source in (
        "[click](javascript:alert(1))",
        "[click](JavaScript:alert(1))",
        "[click](javascript&#58;alert(document.cookie))",
        "[click](java&#x09;script:alert(1))",
        "[click](javascript&colon;alert(1))",
        "[click](javascript\\:alert(1))",
        "[click](vbscript:msgbox(1))",
        "[click](data:text/html;base64,PHNjcmlwdD4=)",
    ):
        html = str(render_markdown(source))
        assert '<a href="#">click</a>' in html, source


def test_markdown_neutralises_data_images():
    html = str(render_markdown("![pixel](data:image/svg+xml;base64,PHN2Zz4=)"))
    assert 'src="#"' in html
    assert "data:" not in html


def test_blog_with_script_link_is_not_live(owner_client, app):
    owner_client.post("/en/admin/blogs/new", data=dict(
        BLOG, content=BLOG["content"] + "\n\n[more](javascript&#58;alert(document.cookie))"))
    with app.app_context():
        blog_id = Blog.get_all("en")[0]["id"]
    html = owner_client.get(f"/en/blogs/{blog_id}").get_data(as_text=True)
    assert "javascript" not in html
