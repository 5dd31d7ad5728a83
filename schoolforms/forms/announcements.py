# schoolforms/forms/announcements.py
from wtforms import DateField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired

from .base import RecordForm, ReferenceSelectField

PRIORITIES = [("LOW", "Low"), ("MEDIUM", "Medium"), ("HIGH", "High"), ("URGENT", "Urgent")]
AUDIENCES = [
    ("ALL", "All"),
    ("STUDENTS", "Students"),
    ("TEACHERS", "Teachers"),
    ("PARENTS", "Parents"),
    ("STAFF", "Staff"),
]


class AnnouncementForm(RecordForm):
    entity = "announcement"
    noun = "Announcement"

    title = StringField("Title", validators=[DataRequired(message="Title is required!")])
    date = DateField("Date", validators=[InputRequired(message="Date is required!")])
    priority = SelectField(
        "Priority",
        choices=PRIORITIES,
        default="LOW",
        validators=[InputRequired(message="Priority is required!")],
    )
    target_audience = SelectField(
        "Target Audience",
        choices=AUDIENCES,
        default="ALL",
        validators=[InputRequired(message="Target audience is required!")],
    )
    author_id = ReferenceSelectField(
        "Author",
        reference="teachers",
        placeholder="Select a teacher",
        empty_label="No teachers available",
        validators=[DataRequired(message="Author is required!")],
    )
    content = TextAreaField("Content", validators=[DataRequired(message="Content is required!")])
