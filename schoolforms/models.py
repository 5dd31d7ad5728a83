from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class FormState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    CLOSED = "closed"


class ReferenceOption(BaseModel):
    """One entry of a selection list: the stored id and what the user sees."""

    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    label: str


# entity kind ("teachers", "lessons", ...) -> ordered options
ReferenceData = Mapping[str, Sequence[ReferenceOption]]


class SubmissionResult(BaseModel):
    success: bool = False
    error: Optional[str] = None
    # field -> message, set when a submit stopped at validation
    errors: dict[str, str] = Field(default_factory=dict)

    @field_validator("error", mode="before")
    @classmethod
    def falsy_error_is_none(cls, value: Any) -> Any:
        # actions may report "no error" as False or ""
        return value or None


def options_from_rows(rows: Iterable[Any], *label_keys: str) -> list[ReferenceOption]:
    """
    Build options from raw rows (dicts or ORM objects).
    The label joins the given keys with spaces, e.g. ("name", "surname")
    gives "Ada Lovelace". Without keys the row's "label" is used.
    """
    keys = label_keys or ("label",)
    options = []
    for row in rows or ():
        get = row.get if isinstance(row, Mapping) else lambda k, r=row: getattr(r, k, None)
        label = " ".join(str(get(k)) for k in keys if get(k) not in (None, ""))
        options.append(ReferenceOption(id=get("id"), label=label))
    return options
