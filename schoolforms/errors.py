"""Exceptions raised by the form workflow.

Field and refinement failures are never raised; they come back from
``FormWorkflow.validate`` as a mapping. These exceptions cover misuse of a
workflow instance and failures of its collaborators.
"""


class FormError(Exception):
    """Base exception for all form workflow errors."""

    pass


class FormClosedError(FormError):
    """Raised when a closed form is asked to submit again."""

    pass


class SubmissionInProgressError(FormError):
    """Raised when a second submit is issued while one is still pending.

    The host should keep its submit control disabled while
    ``FormWorkflow.can_submit`` is false instead of relying on this.
    """

    pass


class UploadPendingError(FormError):
    """Raised when submitting while an attachment upload has not finished."""

    pass


class UploadError(FormError):
    """Raised when the upload service fails to return a locator."""

    pass
