from __future__ import annotations

import inspect
import logging
from collections import Counter
from typing import Any, Awaitable, Callable, Mapping, Optional, Type

from pydantic import ValidationError
from starlette.datastructures import MultiDict

from .errors import (
    FormClosedError,
    FormError,
    SubmissionInProgressError,
    UploadError,
    UploadPendingError,
)
from .forms.base import RecordForm, error_map, raw_input
from .models import FormMode, FormState, ReferenceData, SubmissionResult

log = logging.getLogger(__name__)

Action = Callable[[dict[str, Any]], Any]


def _noop(*args: Any) -> None:
    return None


def _as_formdata(raw: Any) -> Any:
    """Accept a plain mapping or anything multidict-like (starlette FormData, werkzeug MultiDict)."""
    if raw is None:
        return MultiDict()
    if hasattr(raw, "getlist"):
        return raw
    items = []
    for key, value in raw.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        # None posts as an empty field so required checks still fire
        items.extend((key, "" if v is None else v if isinstance(v, str) else str(v)) for v in values)
    return MultiDict(items)


def _read(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


class FormWorkflow:
    """
    Drives one open form: pre-fill, validate, submit, and the UI effects after.

    The host supplies the persistence callbacks (`on_create` / `on_update`) and
    the effects run after a successful submit: `notify(message)`, `close()` and
    `refresh()`. Callbacks may be plain functions or coroutines and must return
    a SubmissionResult or a dict of the same shape.
    """

    def __init__(
        self,
        form_class: Type[RecordForm],
        mode: FormMode | str = FormMode.CREATE,
        data: Any = None,
        references: Optional[ReferenceData] = None,
        *,
        on_create: Action,
        on_update: Action,
        notify: Callable[[str], None] = _noop,
        refresh: Callable[[], None] = _noop,
        close: Callable[[], None] = _noop,
    ):
        self.form_class = form_class
        self.mode = FormMode(mode)
        self.references = references or {}
        self.record = data
        self.record_id: Optional[int] = None

        if self.mode is FormMode.UPDATE:
            if data is None:
                raise FormError(f"Updating a {form_class.entity} needs the existing record.")
            record_id = _read(data, "id")
            if record_id is None:
                raise FormError(f"The {form_class.entity} to update has no id.")
            try:
                self.record_id = int(record_id)
            except (TypeError, ValueError) as e:
                raise FormError(f"The {form_class.entity} id {record_id!r} is not a number.") from e

        self._actions = {FormMode.CREATE: on_create, FormMode.UPDATE: on_update}
        self._notify = notify
        self._refresh = refresh
        self._close = close

        self.state = FormState.IDLE
        self.errors: dict[str, str] = {}
        self.error: Optional[str] = None
        # name -> uploads still running; name -> ticket of the latest upload started
        self._pending_uploads: Counter[str] = Counter()
        self._upload_tickets: dict[str, int] = {}
        self.attachments: dict[str, Any] = {
            name: _read(data, name) if data is not None else None for name in form_class.attachments
        }

        self.form = self._build(None)

    # -----------------------------
    # Form state
    # -----------------------------
    def _build(self, formdata: Any) -> RecordForm:
        kwargs: dict[str, Any] = {
            "mode": self.mode,
            "references": self.references,
            "record_id": self.record_id,
        }
        # posted input stands on its own; only the id falls back to the record
        if formdata is None and self.record is not None:
            if isinstance(self.record, Mapping):
                kwargs["data"] = dict(self.record)
            else:
                kwargs["obj"] = self.record
        return self.form_class(formdata, **kwargs)

    def initial_input(self) -> dict[str, str]:
        """Raw values of the pre-filled form, i.e. what an untouched form posts."""
        return raw_input(self._build(None))

    @property
    def can_submit(self) -> bool:
        return self.state is FormState.IDLE and not self._pending_uploads

    @property
    def closed(self) -> bool:
        return self.state is FormState.CLOSED

    # -----------------------------
    # Validation
    # -----------------------------
    def validate(self, raw: Any) -> dict[str, str]:
        """Coerce and check `raw`; returns field -> message, empty when valid."""
        form = self._build(_as_formdata(raw))
        form.validate()
        self.form = form
        self.errors = error_map(form)
        return dict(self.errors)

    def cleaned_data(self) -> dict[str, Any]:
        """Coerced data of the last validated form plus attachment values."""
        data = dict(self.form.data)
        data.update(self.attachments)
        return data

    # -----------------------------
    # Attachments
    # -----------------------------
    async def attach(self, name: str, pending: Awaitable[str]) -> str:
        """
        Wait for an upload to finish and keep its locator for `name`.
        Submitting is refused until every started upload has finished. When
        several uploads for one name overlap, the one started last wins.
        """
        self._check_attachment(name)
        ticket = self._upload_tickets.get(name, 0) + 1
        self._upload_tickets[name] = ticket
        self._pending_uploads[name] += 1
        try:
            locator = await pending
        except Exception as e:
            log.exception("Upload for %s.%s failed: %s", self.form_class.entity, name, e)
            raise UploadError(f"Upload for {name} failed.") from e
        finally:
            self._pending_uploads[name] -= 1
            if self._pending_uploads[name] <= 0:
                del self._pending_uploads[name]
        if ticket != self._upload_tickets[name]:
            log.debug("Ignoring superseded upload for %s.%s", self.form_class.entity, name)
            return self.attachments[name]
        return self.use_upload(name, locator)

    def use_upload(self, name: str, locator: Optional[str]) -> Optional[str]:
        """Record an upload that already finished elsewhere (e.g. in the browser widget)."""
        self._check_attachment(name)
        if locator:
            self.attachments[name] = locator
        return self.attachments[name]

    def _check_attachment(self, name: str) -> None:
        if name not in self.form_class.attachments:
            raise FormError(f"{self.form_class.__name__} has no attachment named {name!r}.")

    # -----------------------------
    # Submission
    # -----------------------------
    async def submit(self, raw: Any) -> SubmissionResult:
        if self.state is FormState.CLOSED:
            raise FormClosedError(f"The {self.form_class.entity} form is closed.")
        if self.state is FormState.SUBMITTING:
            raise SubmissionInProgressError(f"The {self.form_class.entity} form is already submitting.")
        if self._pending_uploads:
            raise UploadPendingError(
                "Wait for the upload to finish: " + ", ".join(sorted(self._pending_uploads))
            )

        self.state = FormState.VALIDATING
        errors = self.validate(raw)
        if errors:
            self.state = FormState.IDLE
            return SubmissionResult(success=False, errors=errors)

        self.state = FormState.SUBMITTING
        self.error = None
        data = self.cleaned_data()
        verb = "created" if self.mode is FormMode.CREATE else "updated"
        log.debug("Submitting %s (%s): %s", self.form_class.entity, self.mode.value, data)

        try:
            outcome = self._actions[self.mode](data)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            log.exception("Submitting %s failed: %s", self.form_class.entity, e)
            action = "create" if self.mode is FormMode.CREATE else "update"
            outcome = SubmissionResult(
                success=False,
                error=f"Could not {action} the {self.form_class.entity} due to a server error.",
            )

        try:
            result = SubmissionResult.model_validate(outcome)
        except ValidationError as e:
            if self.state is not FormState.CLOSED:
                self.state = FormState.IDLE
            raise FormError(
                f"The {self.mode.value} action for {self.form_class.entity} returned {outcome!r}."
            ) from e

        if self.state is FormState.CLOSED:
            # closed by the host while the action was pending; nothing left to update
            log.debug("Discarding %s result for a closed form", self.form_class.entity)
            return result

        if not result.success:
            self.state = FormState.IDLE
            self.error = result.error
            log.info("%s was not %s: %s", self.form_class.noun, verb, result.error)
            return result

        self.state = FormState.CLOSED
        self._notify(f"{self.form_class.noun} has been {verb}!")
        self._close()
        self._refresh()
        return result

    def close(self) -> None:
        """Cancel the form; a submit still in flight is ignored when it returns."""
        self.state = FormState.CLOSED
