from wtforms import BooleanField, EmailField, PasswordField, StringField
from wtforms.validators import DataRequired, Email, Length, Regexp

from forms.common import SchemaForm, lower_filter, strip_filter


class SignInForm(SchemaForm):
    email = EmailField("Email", filters=[lower_filter], validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])


class SignUpForm(SchemaForm):
    name = StringField("Name", filters=[strip_filter], validators=[
        DataRequired(), Length(min=2, max=50)
    ])
    email = EmailField("Email", filters=[lower_filter], validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[
        DataRequired(),
        Length(min=8, message="Password must be at least 8 characters."),
        Regexp(r".*[A-Z]", message="Password must contain an uppercase letter."),
        Regexp(r".*\d", message="Password must contain a number."),
    ])
    accept_terms = BooleanField("I accept the terms and conditions", validators=[
        DataRequired(message="You must accept the terms.")
    ])
