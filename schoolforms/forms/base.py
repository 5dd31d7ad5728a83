# schoolforms/forms/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from wtforms import Form, IntegerField, SelectField
from wtforms.fields.choices import SelectFieldBase
from wtforms.validators import ValidationError
from wtforms.widgets import HiddenInput

from ..models import FormMode, ReferenceOption


# -----------------------------
# Coercers / filters
# -----------------------------
def optional_int(value: Any) -> Optional[int]:
    """Select coercer: blank -> None, otherwise int (ValueError bubbles up to WTForms)."""
    if value is None or value == "":
        return None
    return int(value)


def optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def blank_to_none(value: Any) -> Any:
    return value if value not in ("", None) else None


# -----------------------------
# Cross-field rules
# -----------------------------
@dataclass(frozen=True)
class Refinement:
    """
    A rule over the coerced data of the whole form.
    `anchor` is the field the message is shown on; `fields` are the fields
    the check reads (the rule is skipped if any of them already failed).
    """
    check: Callable[[Mapping[str, Any]], bool]
    message: str
    anchor: str
    fields: tuple[str, ...] = ()


def ordered(start: str, end: str, message: str) -> Refinement:
    """end >= start, reported on `end`."""
    return Refinement(
        check=lambda data: data.get(start) is None or data.get(end) is None or data[end] >= data[start],
        message=message,
        anchor=end,
        fields=(start, end),
    )


def any_of(first: str, *others: str, message: str) -> Refinement:
    """At least one of the fields is set, reported on `first`."""
    names = (first,) + others
    return Refinement(
        check=lambda data: any(data.get(name) is not None for name in names),
        message=message,
        anchor=first,
        fields=names,
    )


# -----------------------------
# Fields
# -----------------------------
class ReferenceSelectField(SelectField):
    """
    Select populated from externally supplied reference data.
    The ids are checked by whoever persists the record, so choices are not
    validated here.
    """

    def __init__(
        self,
        label=None,
        validators=None,
        reference: str = "",
        placeholder: Optional[str] = None,
        empty_label: Optional[str] = None,
        coerce=optional_str,
        **kwargs,
    ):
        kwargs.setdefault("validate_choice", False)
        super().__init__(label, validators, coerce=coerce, choices=[], **kwargs)
        self.reference = reference
        self.placeholder = placeholder or "Select an option"
        self.empty_label = empty_label or f"No {reference} available"
        self.populate(None)

    def populate(self, options: Optional[Iterable[Any]]) -> None:
        options = [ReferenceOption.model_validate(o) for o in (options or ())]
        if not options:
            # keep the control usable when there is nothing to pick
            self.choices = [("", self.empty_label, {"disabled": True})]
            return
        self.choices = [("", self.placeholder)] + [(str(o.id), o.label) for o in options]


# -----------------------------
# Base form
# -----------------------------
class RecordForm(Form):
    """
    Base for every entity form.

    Subclasses declare WTForms fields plus:
      entity       heading noun ("Create a new <entity>")
      noun         notification noun ("<Noun> has been created!")
      refinements  ordered cross-field rules; the first failure wins
      attachments  values supplied out-of-band (uploads), not rendered as inputs
    """

    entity = "record"
    noun = "Record"
    refinements: tuple[Refinement, ...] = ()
    attachments: tuple[str, ...] = ()

    id = IntegerField("Id", widget=HiddenInput())

    def __init__(
        self,
        formdata=None,
        obj=None,
        *,
        mode: FormMode | str = FormMode.CREATE,
        references: Optional[Mapping[str, Iterable[Any]]] = None,
        record_id: Optional[int] = None,
        **kwargs,
    ):
        if record_id is not None:
            kwargs.setdefault("id", record_id)
        super().__init__(formdata=formdata, obj=obj, **kwargs)
        self.mode = FormMode(mode)
        self.record_id = record_id
        self.refinement_error: Optional[Refinement] = None
        if self.mode is FormMode.CREATE:
            del self.id

        references = references or {}
        for field in self:
            if isinstance(field, ReferenceSelectField):
                field.populate(references.get(field.reference))

    @property
    def heading(self) -> str:
        if self.mode is FormMode.CREATE:
            return f"Create a new {self.entity}"
        return f"Update the {self.entity}"

    def validate_id(self, field):
        if field.data != self.record_id:
            raise ValidationError("Id cannot be changed.")

    def validate(self, extra_validators=None) -> bool:
        valid = super().validate(extra_validators)
        self.refinement_error = self.refine()
        return valid and self.refinement_error is None

    def refine(self) -> Optional[Refinement]:
        data = self.data
        for rule in self.refinements:
            if any(self[name].errors for name in rule.fields if name in self):
                continue
            if not rule.check(data):
                self[rule.anchor].errors.append(rule.message)
                return rule
        return None


# -----------------------------
# Helpers
# -----------------------------
def error_map(form: Form) -> dict[str, str]:
    """field -> first error message, for every failing field."""
    return {field.name: field.errors[0] for field in form if field.errors}


def raw_value(field) -> str:
    if isinstance(field, SelectFieldBase):
        return "" if field.data is None else str(field.data)
    return field._value()


def raw_input(form: Form) -> dict[str, str]:
    """The form's current state as a browser would post it."""
    return {field.name: raw_value(field) for field in form}
