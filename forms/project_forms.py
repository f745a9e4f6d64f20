from wtforms import BooleanField, FieldList, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional, ValidationError

from forms.common import (MultiCheckboxField, SchemaForm, lower_filter, slug_format, strip_filter,
                          url_or_path)
from models.project import CATEGORIES

CATEGORY_CHOICES = [(value, {"AI_ML": "AI/ML"}.get(value, value.title())) for value in CATEGORIES]


def _taxonomy_field(label):
    # Choices are filled in per locale by the view; unknown ids are dropped on save
    return MultiCheckboxField(label, coerce=int, choices=[], validate_choice=False)


class ProjectForm(SchemaForm):
    title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(min=5, max=150)])
    slug = StringField("Slug", filters=[lower_filter], validators=[
        DataRequired(), Length(min=3, max=50), slug_format()])
    category = SelectField("Category", choices=CATEGORY_CHOICES, default="WEB")
    description = TextAreaField("Description", filters=[strip_filter], validators=[
        DataRequired(), Length(min=10, max=500)])
    content = TextAreaField("Content (Markdown)", validators=[Optional()],
                            render_kw={"rows": 14})
    main_image = StringField("Main image", validators=[DataRequired(), url_or_path()])
    gallery = FieldList(StringField("Image", validators=[Optional(), url_or_path()]),
                        label="Gallery", max_entries=5)
    live_url = StringField("Live URL", validators=[Optional(), url_or_path()])
    repo_url = StringField("Repository URL", validators=[Optional(), url_or_path()])
    tags = _taxonomy_field("Tags")
    new_tags = StringField("New tags (comma separated)", filters=[strip_filter],
                           validators=[Optional(), Length(max=200)])
    techniques = _taxonomy_field("Techniques")
    new_techniques = StringField("New techniques (comma separated)", filters=[strip_filter],
                                 validators=[Optional(), Length(max=200)])
    is_featured = BooleanField("Featured")
    is_active = BooleanField("Active", default=True)

    def validate_tags(self, field):
        if not field.data and not self.new_tags.data:
            raise ValidationError("Select or add at least one tag.")

    def validate_techniques(self, field):
        if not field.data and not self.new_techniques.data:
            raise ValidationError("Select or add at least one technique.")


class BlogForm(SchemaForm):
    title = StringField("Title", filters=[strip_filter], validators=[
        DataRequired(), Length(min=5, max=200)])
    slug = StringField("Slug", filters=[lower_filter], validators=[
        DataRequired(), Length(min=3, max=100), slug_format()])
    excerpt = TextAreaField("Excerpt", filters=[strip_filter], validators=[
        DataRequired(), Length(min=10, max=500)])
    content = TextAreaField("Content (Markdown)", validators=[
        DataRequired(), Length(min=20)], render_kw={"rows": 18})
    image = StringField("Cover image", validators=[DataRequired(), url_or_path()])
    categories = _taxonomy_field("Category")
    new_category = StringField("New category", filters=[strip_filter],
                               validators=[Optional(), Length(max=50)])
    tags = _taxonomy_field("Tags")
    new_tags = StringField("New tags (comma separated)", filters=[strip_filter],
                           validators=[Optional(), Length(max=200)])
    meta_title = StringField("Meta title", filters=[strip_filter], validators=[
        Optional(), Length(max=70)])
    meta_desc = TextAreaField("Meta description", filters=[strip_filter], validators=[
        Optional(), Length(max=160)])
    is_published = BooleanField("Published")
