# schoolforms/forms/attendance.py
from wtforms import DateField, SelectField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from .base import RecordForm, ReferenceSelectField, blank_to_none, optional_int

STATUSES = [("PRESENT", "Present"), ("ABSENT", "Absent"), ("LATE", "Late"), ("EXCUSED", "Excused")]


class AttendanceForm(RecordForm):
    entity = "attendance record"
    noun = "Attendance"

    date = DateField("Date", validators=[InputRequired(message="Date is required!")])
    student_id = ReferenceSelectField(
        "Student",
        reference="students",
        placeholder="Select a student",
        empty_label="No students available",
        validators=[DataRequired(message="Student is required!")],
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
    status = SelectField(
        "Status",
        choices=STATUSES,
        default="PRESENT",
        validators=[InputRequired(message="Status is required!")],
    )
    notes = TextAreaField("Notes", filters=[blank_to_none], validators=[Optional()])
