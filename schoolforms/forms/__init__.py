# Re-export forms so callers can keep using: from schoolforms.forms import EventForm, ...
from .base import RecordForm, ReferenceSelectField, Refinement, any_of, error_map, ordered, raw_input
from .announcements import AnnouncementForm
from .assignments import AssignmentForm
from .attendance import AttendanceForm
from .events import EventForm
from .lessons import LessonForm
from .results import ResultForm

# kind -> form class, as used in /forms/<kind>/... URLs
FORMS = {
    "announcement": AnnouncementForm,
    "assignment": AssignmentForm,
    "attendance": AttendanceForm,
    "event": EventForm,
    "lesson": LessonForm,
    "result": ResultForm,
}

__all__ = [
    "RecordForm", "ReferenceSelectField", "Refinement", "any_of", "ordered",
    "error_map", "raw_input", "FORMS",
    "AnnouncementForm", "AssignmentForm", "AttendanceForm",
    "EventForm", "LessonForm", "ResultForm",
]
