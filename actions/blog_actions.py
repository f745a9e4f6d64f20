from forms.admin_forms import IdForm
from forms.project_forms import BlogForm
from models.blog import Blog
from secure_action import (ADMIN_ROLES, SUPER_ROLES, ActionError, create_secure_action,
                           secure_action)


def _save_blog(payload, locale, blog_id, name):
    def run(data, ctx):
        if blog_id and not Blog.exists(blog_id):
            raise ActionError("Blog not found", 404)
        if Blog.slug_taken(data["slug"], exclude_id=blog_id):
            raise ActionError("A blog with this slug already exists.", 409)
        saved_id = Blog.save(locale, data, blog_id)
        return {"id": saved_id, "slug": data["slug"]}

    return create_secure_action(payload, BlogForm, ADMIN_ROLES, run, name=name)


def create_blog(payload, locale):
    return _save_blog(payload, locale, None, "CREATE_BLOG")


def update_blog(payload, locale, blog_id):
    return _save_blog(payload, locale, blog_id, "UPDATE_BLOG")


@secure_action(IdForm, SUPER_ROLES, name="DELETE_BLOG")
def delete_blog(data, ctx):
    if not Blog.delete(data["id"]):
        raise ActionError("Blog not found", 404)
    return {"deleted_count": 1}
