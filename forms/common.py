import re
from datetime import date

from flask_wtf import FlaskForm
from wtforms import FieldList, IntegerField, SelectMultipleField
from wtforms.validators import Optional, Regexp, ValidationError
from wtforms.utils import unset_value
from wtforms.widgets import CheckboxInput, HiddenInput, ListWidget

SLUG_RE = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
LINK_RE = r"^(https?://[^\s]+|/[^\s]*)$"
E164_RE = r"^\+[1-9]\d{1,14}$"


class SchemaForm(FlaskForm):
    """Base for action schemas; CSRF is checked once per request by CSRFProtect."""

    class Meta:
        csrf = False


class MultiCheckboxField(SelectMultipleField):
    """A multiple-select field displayed as checkboxes."""
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class CompactFieldList(FieldList):
    """A FieldList that drops rows whose ``key_field`` is blank.

    Browsers submit every row of a repeating fieldset, including the empty
    template row; those rows are discarded before validation.
    """

    def __init__(self, unbound_field, key_field="name", **kwargs):
        super().__init__(unbound_field, **kwargs)
        self.key_field = key_field

    def process(self, formdata, data=unset_value, extra_filters=None):
        super().process(formdata, data, extra_filters=extra_filters)
        self.entries = [entry for entry in self.entries if self._filled(entry)]
        self.last_index = len(self.entries) - 1

    def _filled(self, entry):
        value = entry.form[self.key_field].data
        if isinstance(value, str):
            return bool(value.strip())
        return value is not None


def strip_filter(value):
    return value.strip() if isinstance(value, str) else value


def lower_filter(value):
    return value.strip().lower() if isinstance(value, str) else value


def iso_date(form, field):
    if not field.data:
        return
    try:
        date.fromisoformat(field.data)
    except ValueError:
        raise ValidationError("Enter a date as YYYY-MM-DD.")


def url_or_path(message="Enter a full URL or an uploaded file path."):
    return Regexp(LINK_RE, message=message)


def slug_format(message="Use lowercase letters, numbers and hyphens."):
    return Regexp(SLUG_RE, message=message)


def phone_e164(form, field):
    if field.data and not re.match(E164_RE, field.data):
        raise ValidationError("Enter the number in international format, e.g. +15551234567.")


def row_id():
    """Hidden id of an existing child row (blank for new rows)."""
    return IntegerField(widget=HiddenInput(), validators=[Optional()])


def add_blank_rows(form):
    """Give every repeating fieldset of ``form`` empty rows to type into."""
    for field in form:
        if not isinstance(field, FieldList):
            continue
        if field.max_entries:
            while len(field.entries) < field.max_entries:
                field.append_entry()
        else:
            field.append_entry()
    return form
