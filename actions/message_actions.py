"""Contact messages and testimonials: the two kinds of visitor input."""
import logging

from forms.admin_forms import IdForm
from forms.message_forms import (BulkDeleteForm, ContactForm, MessageActionForm,
                                 TestimonialForm, TestimonialStatusForm)
from models.contact import ContactMessage
from models.testimonial import Testimonial
from secure_action import (ADMIN_ROLES, AUTHENTICATED, PUBLIC, SUPER_ROLES, ActionError,
                           client_ip, secure_action)

logger = logging.getLogger(__name__)


@secure_action(ContactForm, PUBLIC, name="SEND_CONTACT_MESSAGE")
def send_contact_message(data, ctx):
    message_id = ContactMessage.create(
        name=data["name"],
        email=data["email"],
        subject=data.get("subject") or None,
        message=data["message"],
        ip_address=client_ip(),
    )
    logger.info("Contact message %d received", message_id)
    return {"id": message_id}


def get_contact_messages(page=1, limit=10, status=None, priority=None):
    return ContactMessage.get_page(page=page, limit=limit, status=status, priority=priority)


@secure_action(MessageActionForm, ADMIN_ROLES, name="MANAGE_MESSAGE")
def manage_message(data, ctx):
    message = ContactMessage.get_by_id(data["id"])
    if message is None:
        raise ActionError("Message not found", 404)
    updates = ContactMessage.next_state(message, data["action"])
    ContactMessage.apply(message["id"], updates)
    if updates is None:
        return {"id": message["id"], "deleted": True}
    return dict(message, **updates)


@secure_action(TestimonialForm, AUTHENTICATED, name="CREATE_TESTIMONIAL")
def create_testimonial(data, ctx):
    # Identity comes from the session, never from the submitted form
    testimonial_id = Testimonial.create(
        client_name=data["client_name"],
        client_title=data["client_title"],
        content=data["content"],
        rating=data["rating"],
        email=ctx.user.email,
        role=data.get("role") or None,
        avatar_url=ctx.user.image,
        linkedin_url=data.get("linkedin_url") or None,
        github_url=data.get("github_url") or None,
    )
    return {"id": testimonial_id}


@secure_action(TestimonialStatusForm, SUPER_ROLES, name="UPDATE_TESTIMONIAL_STATUS")
def update_testimonial_status(data, ctx):
    changes = {data["field"]: data[data["field"]]}
    if not Testimonial.update_status(data["id"], **changes):
        raise ActionError("Testimonial not found", 404)
    return Testimonial.get_by_id(data["id"])


@secure_action(IdForm, SUPER_ROLES, name="DELETE_TESTIMONIAL")
def delete_testimonial(data, ctx):
    if not Testimonial.delete(data["id"]):
        raise ActionError("Testimonial not found", 404)
    return {"deleted_count": 1}


@secure_action(BulkDeleteForm, SUPER_ROLES, name="BULK_DELETE_TESTIMONIALS")
def bulk_delete_testimonials(data, ctx):
    return {"deleted_count": Testimonial.bulk_delete(data["ids"])}
