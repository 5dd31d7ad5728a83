# schoolforms/forms/assignments.py
from wtforms import DateTimeLocalField, IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from .base import RecordForm, ReferenceSelectField, blank_to_none, optional_int

# datetime-local inputs post "YYYY-MM-DDTHH:MM"; the rest are accepted for API callers
DATETIME_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S"]


class AssignmentForm(RecordForm):
    entity = "assignment"
    noun = "Assignment"
    attachments = ("file_url",)

    title = StringField("Title", validators=[DataRequired(message="Assignment title is required!")])
    description = StringField("Description", filters=[blank_to_none], validators=[Optional()])
    points = IntegerField(
        "Points",
        validators=[
            InputRequired(message="Points are required!"),
            NumberRange(min=0, message="Points must be a positive number"),
        ],
    )
    due_date = DateTimeLocalField(
        "Due Date",
        format=DATETIME_FORMATS,
        validators=[InputRequired(message="Due date is required!")],
    )
    lesson_id = ReferenceSelectField(
        "Lesson",
        reference="lessons",
        placeholder="Select a lesson",
        empty_label="No lessons available",
        coerce=optional_int,
        validators=[
            InputRequired(message="Lesson is required!"),
            NumberRange(min=1, message="Lesson is required!"),
        ],
    )
