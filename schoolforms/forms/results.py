# schoolforms/forms/results.py
from wtforms import FloatField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from .base import RecordForm, ReferenceSelectField, any_of, blank_to_none, optional_int


class ResultForm(RecordForm):
    entity = "result"
    noun = "Result"
    refinements = (
        any_of("exam_id", "assignment_id", message="Either Exam or Assignment must be selected"),
    )

    student_id = ReferenceSelectField(
        "Student",
        reference="students",
        placeholder="Select a student",
        empty_label="No students available",
        validators=[DataRequired(message="Student is required!")],
    )
    exam_id = ReferenceSelectField(
        "Exam (Optional)",
        reference="exams",
        placeholder="Select an exam",
        empty_label="No exams available",
        coerce=optional_int,
        validators=[Optional()],
    )
    assignment_id = ReferenceSelectField(
        "Assignment (Optional)",
        reference="assignments",
        placeholder="Select an assignment",
        empty_label="No assignments available",
        coerce=optional_int,
        validators=[Optional()],
    )
    score = FloatField(
        "Score",
        validators=[
            InputRequired(message="Score is required!"),
            NumberRange(min=0, message="Score must be a positive number"),
        ],
    )
    grade = StringField("Grade", validators=[DataRequired(message="Grade is required")])
    feedback = TextAreaField("Feedback", filters=[blank_to_none], validators=[Optional()])
