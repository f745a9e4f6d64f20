from flask import Blueprint, g, jsonify, request
from flask_login import current_user

from models.blog import Blog
from models.project import Project
from models.testimonial import Testimonial
from routes.public import load_home

api_bp = Blueprint("api", __name__)

LOCALE = "<any(en, ar):locale>"
_PRIVATE_TESTIMONIAL_KEYS = ("email",)


def _not_found(what):
    return jsonify({"success": False, "error": f"{what} not found", "status": 404}), 404


def testimonial_to_dict(row):
    return {key: value for key, value in row.items() if key not in _PRIVATE_TESTIMONIAL_KEYS}


@api_bp.route(f"/{LOCALE}/home")
def home():
    data = load_home(g.locale)
    data["testimonials"] = [testimonial_to_dict(row) for row in data["testimonials"]]
    return jsonify({"success": True, "locale": g.locale, "data": data})


@api_bp.route(f"/{LOCALE}/projects")
def projects():
    featured = request.args.get("featured") == "1"
    return jsonify({"success": True, "locale": g.locale,
                    "data": Project.get_all(g.locale, featured_only=featured)})


@api_bp.route(f"/{LOCALE}/projects/<int:project_id>")
def project_detail(project_id):
    project = Project.get_by_id(project_id, g.locale)
    if project is None or not project["is_active"]:
        return _not_found("Project")
    return jsonify({"success": True, "locale": g.locale, "data": project})


@api_bp.route(f"/{LOCALE}/blogs")
def blogs():
    return jsonify({"success": True, "locale": g.locale, "data": Blog.get_all(g.locale)})


@api_bp.route(f"/{LOCALE}/blogs/<int:blog_id>")
def blog_detail(blog_id):
    blog = Blog.get_by_id(blog_id, g.locale)
    if blog is None or not blog["is_published"]:
        return _not_found("Blog")
    return jsonify({"success": True, "locale": g.locale, "data": blog})


@api_bp.route("/testimonials")
def testimonials():
    return jsonify({
        "success": True,
        "data": [testimonial_to_dict(row) for row in Testimonial.get_public()],
    })


@api_bp.route("/me")
def me():
    if not current_user.is_authenticated:
        return jsonify({"success": False, "error": "UNAUTHORIZED", "status": 401}), 401
    return jsonify({
        "success": True,
        "data": {
            "id": current_user.id,
            "name": current_user.name,
            "email": current_user.email,
            "image": current_user.image,
            "role": current_user.role,
            "is_admin": current_user.is_admin,
            "is_verified": current_user.is_verified,
        },
    })
