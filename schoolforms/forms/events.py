# schoolforms/forms/events.py
from wtforms import DateTimeLocalField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired

from .assignments import DATETIME_FORMATS
from .base import RecordForm, ordered

EVENT_TYPES = [
    ("HOLIDAY", "Holiday"),
    ("EXAM", "Exam"),
    ("ACTIVITY", "Activity"),
    ("MEETING", "Meeting"),
    ("OTHER", "Other"),
]


class EventForm(RecordForm):
    entity = "event"
    noun = "Event"
    attachments = ("img_url",)
    refinements = (
        ordered("start_date", "end_date", message="End date must be after start date"),
    )

    title = StringField("Title", validators=[DataRequired(message="Title is required!")])
    location = StringField("Location", validators=[DataRequired(message="Location is required!")])
    start_date = DateTimeLocalField(
        "Start Date & Time",
        format=DATETIME_FORMATS,
        validators=[InputRequired(message="Start date is required!")],
    )
    end_date = DateTimeLocalField(
        "End Date & Time",
        format=DATETIME_FORMATS,
        validators=[InputRequired(message="End date is required!")],
    )
    type = SelectField(
        "Event Type",
        choices=EVENT_TYPES,
        default="HOLIDAY",
        validators=[InputRequired(message="Event type is required!")],
    )
    description = TextAreaField("Description", validators=[DataRequired(message="Description is required!")])
