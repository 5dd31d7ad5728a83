# schoolforms/forms/lessons.py
from wtforms import SelectField, StringField, TimeField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from .base import RecordForm, ReferenceSelectField, blank_to_none, optional_int

DAYS = [
    ("MONDAY", "Monday"),
    ("TUESDAY", "Tuesday"),
    ("WEDNESDAY", "Wednesday"),
    ("THURSDAY", "Thursday"),
    ("FRIDAY", "Friday"),
    ("SATURDAY", "Saturday"),
    ("SUNDAY", "Sunday"),
]
TIME_FORMATS = ["%H:%M", "%H:%M:%S"]


class LessonForm(RecordForm):
    entity = "lesson"
    noun = "Lesson"

    title = StringField("Title", validators=[DataRequired(message="Lesson title is required!")])
    description = StringField("Description", filters=[blank_to_none], validators=[Optional()])
    subject_id = ReferenceSelectField(
        "Subject",
        reference="subjects",
        placeholder="Select a subject",
        empty_label="No subjects available",
        coerce=optional_int,
        validators=[
            InputRequired(message="Subject is required!"),
            NumberRange(min=1, message="Subject is required!"),
        ],
    )
    teacher_id = ReferenceSelectField(
        "Teacher",
        reference="teachers",
        placeholder="Select a teacher",
        empty_label="No teachers available",
        validators=[DataRequired(message="Teacher is required!")],
    )
    class_id = ReferenceSelectField(
        "Class",
        reference="classes",
        placeholder="Select a class",
        empty_label="No classes available",
        coerce=optional_int,
        validators=[
            InputRequired(message="Class is required!"),
            NumberRange(min=1, message="Class is required!"),
        ],
    )
    day = SelectField(
        "Day",
        choices=DAYS,
        default="MONDAY",
        validators=[InputRequired(message="Day is required!")],
    )
    start_time = TimeField(
        "Start Time", format=TIME_FORMATS, validators=[InputRequired(message="Start time is required!")]
    )
    end_time = TimeField(
        "End Time", format=TIME_FORMATS, validators=[InputRequired(message="End time is required!")]
    )
