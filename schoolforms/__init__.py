from .errors import (
    FormClosedError,
    FormError,
    SubmissionInProgressError,
    UploadError,
    UploadPendingError,
)
from .models import FormMode, FormState, ReferenceOption, SubmissionResult, options_from_rows
from .workflow import FormWorkflow

__all__ = [
    "FormWorkflow",
    "FormMode", "FormState", "ReferenceOption", "SubmissionResult", "options_from_rows",
    "FormError", "FormClosedError", "SubmissionInProgressError", "UploadError", "UploadPendingError",
]
