from flask import (Blueprint, abort, current_app, flash, g, redirect, render_template, request,
                   url_for)
from flask_login import current_user, login_required

from actions import blog_actions, content_actions, message_actions, project_actions
from actions import user_actions
from forms.admin_forms import ROLE_CHOICES, STATUS_CHOICES, SectionSettingsForm
from forms.common import add_blank_rows
from forms.content_forms import (AboutForm, CertificationForm, EducationForm, ExperienceForm,
                                 HeroForm, ProfileForm, SkillCategoryForm)
from forms.project_forms import BlogForm, ProjectForm
from models.about import About
from models.audit_log import AuditLog
from models.blog import Blog
from models.career import Education, Experience
from models.certification import Certification
from models.contact import MESSAGE_ACTIONS, STATUSES as MESSAGE_STATUSES, ContactMessage
from models.hero import Hero
from models.profile import Profile
from models.project import Project
from models.section import SectionSettings
from models.skill import SkillCategory
from models.taxonomy import BlogCategory, Tag, Technique
from models.testimonial import PENDING, STATUSES as TESTIMONIAL_STATUSES, Testimonial
from models.user import User
from secure_action import ADMIN_ROLES
from translations import LOCALES, get_translator, resolve_locale

admin_bp = Blueprint("admin", __name__)


@admin_bp.before_request
@login_required
def require_admin():
    # The session role may be stale; check the stored one
    user = User.get_by_id(current_user.id)
    if user is None or user.role not in ADMIN_ROLES:
        abort(403)


@admin_bp.context_processor
def inject_admin_globals():
    return {"content_locale": content_locale(), "content_locales": LOCALES}


def content_locale():
    return resolve_locale(request.args.get("content_locale") or g.locale)


def _saved(endpoint, **values):
    flash(get_translator(g.locale)("flash_saved"), "success")
    return redirect(url_for(endpoint, content_locale=content_locale(), **values))


def _failed(result):
    flash(get_translator(g.locale)(result.error), "danger")


def _render_form(form, title_key, **context):
    add_blank_rows(form)
    return render_template("admin/form.html", form=form, title_key=title_key, **context)


@admin_bp.route("/")
def dashboard():
    stats = {
        "stat_projects": Project.count_all(),
        "stat_unread_messages": ContactMessage.count_unread(),
        "stat_published_blogs": Blog.count_published(),
        "stat_pending_testimonials": Testimonial.count_by_status(PENDING),
        "stat_users": User.count_all(),
        "stat_actions_today": AuditLog.count_today(),
    }
    return render_template("admin/dashboard.html", stats=stats,
                           recent_logs=AuditLog.get_recent(10))


@admin_bp.route("/hero", methods=["GET", "POST"])
def hero():
    locale = content_locale()
    if request.method == "POST":
        result = content_actions.update_hero(request.form, locale)
        if result.success:
            return _saved("admin.hero")
        _failed(result)
        return _render_form(result.form, "admin_hero",
                            delete_url=url_for("admin.hero_delete")), result.status

    current = Hero.get(locale)
    data = dict(current, **current["content"]) if current else None
    return _render_form(HeroForm(data=data), "admin_hero",
                        delete_url=url_for("admin.hero_delete") if current else None)


@admin_bp.route("/hero/delete", methods=["POST"])
def hero_delete():
    result = content_actions.delete_hero({})
    if result.success:
        flash(get_translator(g.locale)("flash_deleted"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.hero"))


@admin_bp.route("/about", methods=["GET", "POST"])
def about():
    locale = content_locale()
    if request.method == "POST":
        result = content_actions.update_about(request.form, locale)
        if result.success:
            return _saved("admin.about")
        _failed(result)
        return _render_form(result.form, "admin_about"), result.status
    return _render_form(AboutForm(data=About.get(locale)), "admin_about")


@admin_bp.route("/sections", methods=["GET", "POST"])
def sections():
    if request.method == "POST":
        result = content_actions.update_sections(request.form)
        if result.success:
            return _saved("admin.sections")
        _failed(result)
        return _render_form(result.form, "admin_sections"), result.status
    return _render_form(SectionSettingsForm(data=SectionSettings.get()), "admin_sections")


class ContentType:
    def __init__(self, model, form, upsert, delete, title_key, title_field,
                 subtitle_field=None):
        self.model = model
        self.form = form
        self.upsert = upsert
        self.delete = delete
        self.title_key = title_key
        self.title_field = title_field
        self.subtitle_field = subtitle_field


CONTENT_TYPES = {
    "skills": ContentType(SkillCategory, SkillCategoryForm,
                          content_actions.upsert_skill_category,
                          content_actions.delete_skill_category,
                          "admin_skills", "title"),
    "experience": ContentType(Experience, ExperienceForm,
                              content_actions.upsert_experience,
                              content_actions.delete_experience,
                              "admin_experience", "role", "company_name"),
    "education": ContentType(Education, EducationForm,
                             content_actions.upsert_education,
                             content_actions.delete_education,
                             "admin_education", "degree", "school_name"),
    "certifications": ContentType(Certification, CertificationForm,
                                  content_actions.upsert_certification,
                                  content_actions.delete_certification,
                                  "admin_certifications", "title", "issuer"),
}
KINDS = "any(skills, experience, education, certifications)"


@admin_bp.route(f"/<{KINDS}:kind>")
def entries(kind):
    content_type = CONTENT_TYPES[kind]
    rows = [
        {
            "title": item[content_type.title_field],
            "subtitle": item[content_type.subtitle_field] if content_type.subtitle_field else "",
            "edit_url": url_for("admin.entry_edit", kind=kind, entry_id=item["id"],
                                content_locale=content_locale()),
            "delete_url": url_for("admin.entry_delete", kind=kind, entry_id=item["id"]),
        }
        for item in content_type.model.get_all(content_locale())
    ]
    return render_template("admin/list.html", rows=rows, title_key=content_type.title_key,
                           new_url=url_for("admin.entry_edit", kind=kind,
                                           content_locale=content_locale()))


@admin_bp.route(f"/<{KINDS}:kind>/new", methods=["GET", "POST"])
@admin_bp.route(f"/<{KINDS}:kind>/<int:entry_id>/edit", methods=["GET", "POST"])
def entry_edit(kind, entry_id=None):
    content_type = CONTENT_TYPES[kind]
    locale = content_locale()
    if request.method == "POST":
        result = content_type.upsert(request.form, locale, entry_id)
        if result.success:
            return _saved("admin.entries", kind=kind)
        _failed(result)
        return _render_form(result.form, content_type.title_key), result.status

    data = None
    if entry_id:
        data = content_type.model.get_by_id(entry_id, locale, fallback=False)
        if data is None:
            abort(404)
    return _render_form(content_type.form(data=data), content_type.title_key)


@admin_bp.route(f"/<{KINDS}:kind>/<int:entry_id>/delete", methods=["POST"])
def entry_delete(kind, entry_id):
    result = CONTENT_TYPES[kind].delete({"id": entry_id})
    if result.success:
        flash(get_translator(g.locale)("flash_deleted"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.entries", kind=kind, content_locale=content_locale()))


def _project_form(form, locale):
    form.tags.choices = Tag.choices(locale)
    form.techniques.choices = Technique.choices(locale)
    return form


def _blog_form(form, locale):
    form.categories.choices = BlogCategory.choices(locale)
    form.tags.choices = Tag.choices(locale)
    return form


@admin_bp.route("/projects")
def projects():
    locale = content_locale()
    rows = [
        {
            "title": project["title"],
            "subtitle": project["slug"],
            "status": "active" if project["is_active"] else "hidden",
            "edit_url": url_for("admin.project_edit", project_id=project["id"],
                                content_locale=locale),
            "delete_url": url_for("admin.project_delete", project_id=project["id"]),
        }
        for project in Project.get_all(locale, active_only=False)
    ]
    return render_template("admin/list.html", rows=rows, title_key="admin_projects",
                           new_url=url_for("admin.project_edit", content_locale=locale))


@admin_bp.route("/projects/new", methods=["GET", "POST"])
@admin_bp.route("/projects/<int:project_id>/edit", methods=["GET", "POST"])
def project_edit(project_id=None):
    locale = content_locale()
    if request.method == "POST":
        if project_id:
            result = project_actions.update_project(request.form, locale, project_id)
        else:
            result = project_actions.create_project(request.form, locale)
        if result.success:
            return _saved("admin.projects")
        _failed(result)
        return _render_form(_project_form(result.form, locale), "admin_projects"), result.status

    data = None
    if project_id:
        project = Project.get_by_id(project_id, locale, fallback=False)
        if project is None:
            abort(404)
        data = dict(project, tags=[tag["id"] for tag in project["tags"]],
                    techniques=[tech["id"] for tech in project["techniques"]])
    return _render_form(_project_form(ProjectForm(data=data), locale), "admin_projects")


@admin_bp.route("/projects/<int:project_id>/delete", methods=["POST"])
def project_delete(project_id):
    result = project_actions.delete_project({"id": project_id})
    if result.success:
        flash(get_translator(g.locale)("flash_deleted"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.projects", content_locale=content_locale()))


@admin_bp.route("/blogs")
def blogs():
    locale = content_locale()
    rows = [
        {
            "title": blog["title"],
            "subtitle": blog["category"],
            "status": "published" if blog["is_published"] else "draft",
            "edit_url": url_for("admin.blog_edit", blog_id=blog["id"], content_locale=locale),
            "delete_url": url_for("admin.blog_delete", blog_id=blog["id"]),
        }
        for blog in Blog.get_all(locale, published_only=False)
    ]
    return render_template("admin/list.html", rows=rows, title_key="admin_blogs",
                           new_url=url_for("admin.blog_edit", content_locale=locale))


@admin_bp.route("/blogs/new", methods=["GET", "POST"])
@admin_bp.route("/blogs/<int:blog_id>/edit", methods=["GET", "POST"])
def blog_edit(blog_id=None):
    locale = content_locale()
    if request.method == "POST":
        if blog_id:
            result = blog_actions.update_blog(request.form, locale, blog_id)
        else:
            result = blog_actions.create_blog(request.form, locale)
        if result.success:
            return _saved("admin.blogs")
        _failed(result)
        return _render_form(_blog_form(result.form, locale), "admin_blogs"), result.status

    data = None
    if blog_id:
        blog = Blog.get_by_id(blog_id, locale, fallback=False)
        if blog is None:
            abort(404)
        data = dict(blog, tags=[tag["id"] for tag in blog["tags"]],
                    categories=[blog["category_id"]] if blog["category_id"] else [])
    return _render_form(_blog_form(BlogForm(data=data), locale), "admin_blogs")


@admin_bp.route("/blogs/<int:blog_id>/delete", methods=["POST"])
def blog_delete(blog_id):
    result = blog_actions.delete_blog({"id": blog_id})
    if result.success:
        flash(get_translator(g.locale)("flash_deleted"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.blogs", content_locale=content_locale()))


@admin_bp.route("/testimonials")
def testimonials():
    status = request.args.get("status", "")
    return render_template("admin/testimonials.html",
                           testimonials=Testimonial.get_all(status or None),
                           statuses=TESTIMONIAL_STATUSES, filter_status=status)


@admin_bp.route("/testimonials/status", methods=["POST"])
def testimonial_status():
    result = message_actions.update_testimonial_status(request.form)
    if not result.success:
        _failed(result)
    return redirect(url_for("admin.testimonials"))


@admin_bp.route("/testimonials/<int:testimonial_id>/delete", methods=["POST"])
def testimonial_delete(testimonial_id):
    result = message_actions.delete_testimonial({"id": testimonial_id})
    if result.success:
        flash(get_translator(g.locale)("flash_deleted"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.testimonials"))


@admin_bp.route("/testimonials/bulk-delete", methods=["POST"])
def testimonial_bulk_delete():
    result = message_actions.bulk_delete_testimonials(request.form)
    if result.success:
        flash(get_translator(g.locale)("flash_deleted"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.testimonials"))


@admin_bp.route("/messages")
def messages():
    status = request.args.get("status", "")
    starred = request.args.get("starred", "")
    page = request.args.get("page", 1, type=int)
    result = message_actions.get_contact_messages(
        page=page,
        limit=current_app.config["MESSAGES_PER_PAGE"],
        status=status or None,
        priority=1 if starred else None,
    )
    return render_template("admin/messages.html", messages=result["data"],
                           meta=result["meta"], statuses=MESSAGE_STATUSES,
                           actions=MESSAGE_ACTIONS, filter_status=status,
                           filter_starred=starred)


@admin_bp.route("/messages/manage", methods=["POST"])
def message_manage():
    result = message_actions.manage_message(request.form)
    if not result.success:
        _failed(result)
    return redirect(request.referrer or url_for("admin.messages"))


@admin_bp.route("/users")
def users():
    return render_template("admin/users.html", users=user_actions.get_users(),
                           role_choices=ROLE_CHOICES, status_choices=STATUS_CHOICES)


@admin_bp.route("/users/update", methods=["POST"])
def user_update():
    result = user_actions.update_user(request.form)
    if result.success:
        flash(get_translator(g.locale)("flash_saved"), "success")
    else:
        _failed(result)
    return redirect(url_for("admin.users"))


@admin_bp.route("/profile", methods=["GET", "POST"])
def profile():
    locale = content_locale()
    if request.method == "POST":
        result = user_actions.update_profile(request.form, locale)
        if result.success:
            return _saved("admin.profile")
        _failed(result)
        return _render_form(result.form, "admin_profile"), result.status

    data = Profile.get_for_user(current_user.id, locale) or {}
    data.update(name=current_user.name, image=current_user.image)
    return _render_form(ProfileForm(data=data), "admin_profile")


@admin_bp.route("/audit-log")
def audit_log():
    per_page = current_app.config["AUDIT_LOGS_PER_PAGE"]
    page = request.args.get("page", 1, type=int)
    user_id = request.args.get("user_id", type=int)
    action = request.args.get("action", "")

    logs, total = AuditLog.get_logs(page=page, per_page=per_page, user_id=user_id,
                                    action=action if action else None)
    total_pages = max(1, (total + per_page - 1) // per_page)

    return render_template("admin/audit_log.html", logs=logs, page=page,
                           total_pages=total_pages, total=total,
                           actions=AuditLog.get_actions(),
                           filter_user_id=user_id, filter_action=action)
