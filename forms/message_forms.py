from wtforms import (BooleanField, EmailField, HiddenField, IntegerField, SelectField,
                     SelectMultipleField, StringField, TextAreaField)
from wtforms.validators import (AnyOf, DataRequired, Email, Length, NumberRange, Optional,
                                ValidationError)

from forms.common import SchemaForm, lower_filter, strip_filter, url_or_path
from models.contact import MESSAGE_ACTIONS

RATING_CHOICES = [(value, str(value)) for value in range(5, 0, -1)]


class ContactForm(SchemaForm):
    name = StringField("Name", filters=[strip_filter], validators=[
        DataRequired(), Length(min=2, max=100)])
    email = EmailField("Email", filters=[lower_filter], validators=[DataRequired(), Email()])
    subject = StringField("Subject", filters=[strip_filter], validators=[
        Optional(), Length(max=150)])
    message = TextAreaField("Message", filters=[strip_filter], validators=[
        DataRequired(), Length(min=10, max=5000)])


class MessageActionForm(SchemaForm):
    id = IntegerField(validators=[DataRequired()])
    action = HiddenField(validators=[DataRequired(), AnyOf(MESSAGE_ACTIONS)])


class TestimonialForm(SchemaForm):
    client_name = StringField("Name", filters=[strip_filter], validators=[
        DataRequired(), Length(min=2, max=100)])
    client_title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(max=100)])
    role = StringField("Role", filters=[strip_filter], validators=[
        Optional(), Length(max=100)])
    content = TextAreaField("Testimonial", filters=[strip_filter], validators=[
        DataRequired(), Length(min=10, max=2000)])
    rating = SelectField("Rating", coerce=int, choices=RATING_CHOICES, default=5,
                         validators=[NumberRange(1, 5)])
    linkedin_url = StringField("LinkedIn", validators=[Optional(), url_or_path()])
    github_url = StringField("GitHub", validators=[Optional(), url_or_path()])


class TestimonialStatusForm(SchemaForm):
    id = IntegerField(validators=[DataRequired()])
    is_active = BooleanField("Active", false_values=("false", "0", ""))
    is_featured = BooleanField("Featured", false_values=("false", "0", ""))
    # Which of the two switches the request actually sets
    field = HiddenField(validators=[DataRequired(), AnyOf(("is_active", "is_featured"))])


class BulkDeleteForm(SchemaForm):
    ids = SelectMultipleField("Selected", coerce=int, choices=[], validate_choice=False)

    def validate_ids(self, field):
        if not field.data:
            raise ValidationError("Select at least one item.")
