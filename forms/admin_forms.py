from flask_wtf.file import MultipleFileField
from wtforms import BooleanField, IntegerField, PasswordField, SelectField
from wtforms.validators import DataRequired, Optional

from forms.common import SchemaForm
from models.user import ROLES, STATUSES

ROLE_CHOICES = [(role, role.replace("_", " ").title()) for role in ROLES]
STATUS_CHOICES = [(status, status.title()) for status in STATUSES]


class IdForm(SchemaForm):
    id = IntegerField(validators=[DataRequired()])


class UserAdminForm(SchemaForm):
    id = IntegerField(validators=[DataRequired()])
    role = SelectField("Role", choices=ROLE_CHOICES, validators=[DataRequired()])
    status = SelectField("Status", choices=STATUS_CHOICES, validators=[DataRequired()])
    verify_email = BooleanField("Mark email as verified")
    system_key = PasswordField("System key", validators=[Optional()])


class SectionSettingsForm(SchemaForm):
    hero_active = BooleanField("Hero")
    about_active = BooleanField("About")
    project_active = BooleanField("Projects")
    blog_active = BooleanField("Blog")
    skill_active = BooleanField("Skills")
    certification_active = BooleanField("Certifications")
    experience_active = BooleanField("Experience")
    education_active = BooleanField("Education")
    contact_active = BooleanField("Contact")
    testi_active = BooleanField("Testimonials")


class UploadForm(SchemaForm):
    files = MultipleFileField("Files")
