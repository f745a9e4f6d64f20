from forms.admin_forms import UserAdminForm
from forms.content_forms import ProfileForm
from models.profile import Profile
from models.user import OWNER, User
from secure_action import (AUTHENTICATED, SUPER_ROLES, ActionError, create_secure_action,
                           secure_action)


def update_profile(payload, locale):
    """Edit the signed-in user's own profile."""
    def run(data, ctx):
        Profile.save(ctx.user.id, locale, data)
        return Profile.get_for_user(ctx.user.id, locale)

    return create_secure_action(payload, ProfileForm, AUTHENTICATED, run,
                                name="UPDATE_PROFILE")


@secure_action(UserAdminForm, SUPER_ROLES, name="UPDATE_USER", system_key_field="system_key")
def update_user(data, ctx):
    """Change a user's role and status, optionally marking the email verified.

    Owners are managed only by owners (or with the system key), and nobody
    changes their own role or status.
    """
    target = User.get_by_id(data["id"])
    if target is None:
        raise ActionError("User not found", 404)

    changes = {}
    if data["role"] != target.role:
        changes["role"] = data["role"]
    if data["status"] != target.status:
        changes["status"] = data["status"]

    if changes and target.id == ctx.user.id:
        raise ActionError("You cannot change your own role or status.", 403)
    touches_owner = target.role == OWNER or changes.get("role") == OWNER
    if changes and touches_owner and ctx.user.role != OWNER and not ctx.is_sudo:
        raise ActionError("Only an owner can manage owner accounts.", 403)

    User.update(target.id, **changes)
    if data.get("verify_email"):
        User.mark_verified(target.id)
    return {"id": target.id, "changes": changes,
            "verified": bool(data.get("verify_email")) or target.is_verified}


def get_users():
    return [dict(row) for row in User.get_all()]
