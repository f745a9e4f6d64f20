from flask import Blueprint, abort, flash, g, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from actions.message_actions import create_testimonial, send_contact_message
from forms.message_forms import ContactForm, TestimonialForm
from models.about import About
from models.blog import Blog
from models.career import Education, Experience
from models.certification import Certification
from models.hero import Hero
from models.profile import Profile
from models.project import CATEGORIES, Project
from models.section import SectionSettings
from models.skill import SkillCategory
from models.testimonial import Testimonial
from translations import get_translator

public_bp = Blueprint("public", __name__)

HOME_PROJECT_LIMIT = 6
HOME_BLOG_LIMIT = 3


def load_home(locale):
    """Everything the home page shows, with disabled sections left out."""
    sections = SectionSettings.get()
    hero = Hero.get(locale) if sections["hero_active"] else None
    if hero and not hero["is_active"]:
        hero = None
    return {
        "sections": sections,
        "hero": hero,
        "about": About.get(locale) if sections["about_active"] else None,
        "skills": SkillCategory.get_all(locale, active_only=True)
        if sections["skill_active"] else [],
        "experiences": Experience.get_all(locale) if sections["experience_active"] else [],
        "educations": Education.get_all(locale) if sections["education_active"] else [],
        "certifications": Certification.get_all(locale, active_only=True)
        if sections["certification_active"] else [],
        "projects": Project.get_all(locale, limit=HOME_PROJECT_LIMIT)
        if sections["project_active"] else [],
        "blogs": Blog.get_all(locale, limit=HOME_BLOG_LIMIT)
        if sections["blog_active"] else [],
        "testimonials": Testimonial.get_public() if sections["testi_active"] else [],
        "profile": Profile.get_owner(locale) if sections["contact_active"] else None,
    }


def _can_preview():
    return current_user.is_authenticated and current_user.is_admin


def _render_home(contact_form):
    return render_template("public/home.html", contact_form=contact_form,
                           **load_home(g.locale))


@public_bp.route("/")
def home():
    return _render_home(ContactForm())


@public_bp.route("/contact", methods=["POST"])
def contact():
    t = get_translator(g.locale)
    result = send_contact_message(request.form)
    if result.success:
        flash(t("flash_message_sent"), "success")
        return redirect(url_for("public.home", _anchor="contact"))
    flash(t(result.error), "danger")
    return _render_home(result.form), result.status


@public_bp.route("/projects")
def projects():
    category = request.args.get("category", "")
    items = Project.get_all(g.locale)
    if category:
        items = [p for p in items if p["category"] == category]
    return render_template("public/projects.html", projects=items, category=category,
                           categories=CATEGORIES)


@public_bp.route("/projects/<int:project_id>")
def project_detail(project_id):
    project = Project.get_by_id(project_id, g.locale)
    if project is None or (not project["is_active"] and not _can_preview()):
        abort(404)
    return render_template("public/project.html", project=project)


@public_bp.route("/blogs")
def blogs():
    return render_template("public/blogs.html", blogs=Blog.get_all(g.locale))


@public_bp.route("/blogs/<int:blog_id>")
def blog_detail(blog_id):
    blog = Blog.get_by_id(blog_id, g.locale)
    if blog is None or (not blog["is_published"] and not _can_preview()):
        abort(404)
    return render_template("public/blog.html", blog=blog)


@public_bp.route("/testimonials/new", methods=["GET", "POST"])
@login_required
def new_testimonial():
    t = get_translator(g.locale)
    form = TestimonialForm(data={"client_name": current_user.name})
    if request.method == "POST":
        result = create_testimonial(request.form)
        if result.success:
            flash(t("flash_testimonial_sent"), "success")
            return redirect(url_for("public.home", _anchor="testimonials"))
        flash(t(result.error), "danger")
        return render_template("public/testimonial_new.html", form=result.form), result.status
    return render_template("public/testimonial_new.html", form=form)
