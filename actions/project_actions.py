from forms.admin_forms import IdForm
from forms.project_forms import ProjectForm
from models.project import Project
from secure_action import SUPER_ROLES, ActionError, create_secure_action, secure_action


def _save_project(payload, locale, project_id, name):
    def run(data, ctx):
        if project_id and not Project.exists(project_id):
            raise ActionError("Project not found", 404)
        if Project.slug_taken(data["slug"], exclude_id=project_id):
            raise ActionError("A project with this slug already exists.", 409)
        saved_id = Project.save(locale, data, project_id)
        return {"id": saved_id, "slug": data["slug"]}

    return create_secure_action(payload, ProjectForm, SUPER_ROLES, run, name=name)


def create_project(payload, locale):
    return _save_project(payload, locale, None, "CREATE_PROJECT")


def update_project(payload, locale, project_id):
    return _save_project(payload, locale, project_id, "UPDATE_PROJECT")


@secure_action(IdForm, SUPER_ROLES, name="DELETE_PROJECT")
def delete_project(data, ctx):
    if not Project.delete(data["id"]):
        raise ActionError("Project not found", 404)
    return {"deleted_count": 1}

