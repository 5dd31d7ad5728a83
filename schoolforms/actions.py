from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Type

from .forms import FORMS, RecordForm
from .models import ReferenceData, SubmissionResult


async def not_implemented(data: dict[str, Any]) -> SubmissionResult:
    """Placeholder persistence action until a backend is wired in."""
    return SubmissionResult(success=False, error="Not implemented yet")


async def resolve(value: Any) -> Any:
    """Await `value` if a provider handed back a coroutine."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass
class FormBinding:
    """
    Everything the host needs to open one kind of form.
    `load(record_id)` returns the record to edit (or None); `references()`
    returns the ReferenceData for the selects. Both may be async.
    """
    form_class: Type[RecordForm]
    on_create: Callable[[dict[str, Any]], Any] = not_implemented
    on_update: Callable[[dict[str, Any]], Any] = not_implemented
    load: Optional[Callable[[int], Any]] = None
    references: Optional[Callable[[], ReferenceData]] = None


class FormRegistry(dict):
    """kind -> FormBinding"""

    def bind(self, kind: str, form_class: Type[RecordForm], **kwargs: Any) -> FormBinding:
        binding = FormBinding(form_class, **kwargs)
        self[kind] = binding
        return binding


def default_registry() -> FormRegistry:
    registry = FormRegistry()
    for kind, form_class in FORMS.items():
        registry.bind(kind, form_class)
    return registry
