"""Schemas for the singleton sections and timeline entries of the home page."""
from wtforms import (BooleanField, EmailField, Form, FormField, IntegerField, SelectField,
                     StringField, TextAreaField)
from wtforms.validators import DataRequired, Email, Length, NumberRange, Optional, ValidationError

from forms.common import (CompactFieldList, SchemaForm, iso_date, phone_e164,
                          row_id, strip_filter, url_or_path)
from models.hero import AVAILABILITY

AVAILABILITY_CHOICES = [(value, value.replace("_", " ").title()) for value in AVAILABILITY]
DATE_INPUT = {"type": "date"}


class HeroForm(SchemaForm):
    primary_image = StringField("Primary image", validators=[DataRequired(), url_or_path()])
    resume_url = StringField("Resume URL", validators=[Optional(), url_or_path()])
    availability = SelectField("Availability", choices=AVAILABILITY_CHOICES,
                               default="AVAILABLE")
    is_active = BooleanField("Show hero", default=True)
    greeting = StringField("Greeting", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    name = StringField("Name", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    role = StringField("Role", filters=[strip_filter], validators=[
        DataRequired(), Length(max=150)])
    description = TextAreaField("Description", filters=[strip_filter], validators=[
        DataRequired(), Length(max=1000)])
    cta_text = StringField("Call to action", filters=[strip_filter], validators=[
        DataRequired(), Length(max=50)])


class AboutStatusRow(Form):
    id = row_id()
    icon = StringField("Icon", validators=[Optional(), Length(max=50)])
    label = StringField("Label", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    value = StringField("Value", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    is_active = BooleanField("Active", default=True)


class CorePillarRow(Form):
    id = row_id()
    icon = StringField("Icon", validators=[DataRequired(), Length(max=50)])
    title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    description = TextAreaField("Description", filters=[strip_filter], validators=[
        DataRequired(), Length(max=500)])


class AboutForm(SchemaForm):
    title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(max=150)])
    subtitle = StringField("Subtitle", filters=[strip_filter], validators=[
        Optional(), Length(max=200)])
    description = TextAreaField("Description", filters=[strip_filter], validators=[
        DataRequired()])
    statuses = CompactFieldList(FormField(AboutStatusRow), key_field="label",
                                label="Statuses")
    pillars = CompactFieldList(FormField(CorePillarRow), key_field="title",
                               label="Core pillars")


class SkillRow(Form):
    name = StringField("Skill", filters=[strip_filter], validators=[
        DataRequired(), Length(max=50)])
    level = IntegerField("Level", default=80, validators=[Optional(), NumberRange(0, 100)])
    icon = StringField("Icon", validators=[Optional(), Length(max=50)])


class SkillCategoryForm(SchemaForm):
    title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    icon = StringField("Icon", validators=[DataRequired(), Length(max=50)])
    position = IntegerField("Position", default=0, validators=[Optional()])
    is_active = BooleanField("Active", default=True)
    skills = CompactFieldList(FormField(SkillRow), label="Skills")


class TechniqueRow(Form):
    name = StringField("Technique", filters=[strip_filter], validators=[
        DataRequired(), Length(max=50)])
    icon = StringField("Icon", validators=[Optional(), Length(max=50)])


class TimelineForm(SchemaForm):
    location = StringField("Location", filters=[strip_filter], validators=[
        Optional(), Length(max=100)])
    start_date = StringField("Start date", render_kw=DATE_INPUT,
                             validators=[DataRequired(), iso_date])
    end_date = StringField("End date", render_kw=DATE_INPUT,
                           validators=[Optional(), iso_date])
    is_current = BooleanField("Current")
    description = TextAreaField("Description", filters=[strip_filter], validators=[
        Optional(), Length(max=2000)])
    techniques = CompactFieldList(FormField(TechniqueRow), label="Techniques")

    def validate_end_date(self, field):
        if field.data and self.start_date.data and not self.is_current.data:
            if field.data < self.start_date.data:
                raise ValidationError("End date must be after the start date.")


class ExperienceForm(TimelineForm):
    company_name = StringField("Company", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    company_logo = StringField("Company logo", validators=[Optional(), url_or_path()])
    company_website = StringField("Company website", validators=[Optional(), url_or_path()])
    role = StringField("Role", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    employment_type = StringField("Employment type", filters=[strip_filter], validators=[
        Optional(), Length(max=50)])


class EducationForm(TimelineForm):
    school_name = StringField("School", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    school_logo = StringField("School logo", validators=[Optional(), url_or_path()])
    school_website = StringField("School website", validators=[Optional(), url_or_path()])
    degree = StringField("Degree", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    field_of_study = StringField("Field of study", filters=[strip_filter], validators=[
        Optional(), Length(max=100)])


class CertificationForm(SchemaForm):
    title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(max=150)])
    issuer = StringField("Issuer", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    issue_date = StringField("Issue date", render_kw=DATE_INPUT,
                             validators=[DataRequired(), iso_date])
    expire_date = StringField("Expiry date", render_kw=DATE_INPUT,
                              validators=[Optional(), iso_date])
    credential_id = StringField("Credential ID", validators=[Optional(), Length(max=100)])
    credential_url = StringField("Credential URL", validators=[Optional(), url_or_path()])
    cover_url = StringField("Cover image", validators=[Optional(), url_or_path()])
    link = StringField("Link", validators=[Optional(), url_or_path()])
    description = TextAreaField("Description", filters=[strip_filter], validators=[
        Optional(), Length(max=1000)])
    is_active = BooleanField("Active", default=True)


class SocialLinkRow(Form):
    id = row_id()
    name = StringField("Name", filters=[strip_filter], validators=[
        DataRequired(), Length(max=50)])
    url = StringField("URL", validators=[DataRequired(), url_or_path()])
    icon = StringField("Icon", validators=[Optional(), Length(max=50)])


class ProfileForm(SchemaForm):
    name = StringField("Name", filters=[strip_filter], validators=[
        DataRequired(), Length(min=2, max=50)])
    image = StringField("Avatar", validators=[Optional(), url_or_path()])
    professional_email = EmailField("Professional email", validators=[Optional(), Email()])
    phone = StringField("Phone", filters=[strip_filter], validators=[Optional(), phone_e164])
    resume_url = StringField("Resume", validators=[Optional(), url_or_path()])
    bio = TextAreaField("Bio", filters=[strip_filter], validators=[
        Optional(), Length(max=1000)])
    location = StringField("Location", filters=[strip_filter], validators=[
        Optional(), Length(max=100)])
    social_links = CompactFieldList(FormField(SocialLinkRow), label="Social links")
