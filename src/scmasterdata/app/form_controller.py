from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from scmasterdata.app.validation_schema import ValidationSchema, validate_field, validate_values


DIRTY_STATE_EMPTY = "empty"
DIRTY_STATE_CLEAN = "clean"
DIRTY_STATE_DIRTY = "dirty"


@dataclass(frozen=True, slots=True)
class SubmitResult:
    ok: bool
    values: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


class FormController:
    """Holds one editor's field values and per-field errors for a schema."""

    def __init__(self, schema: ValidationSchema, *, logger: logging.Logger | None = None) -> None:
        self._schema = schema
        self._logger = logger or logging.getLogger("scmasterdata.forms")
        self._values: dict[str, str] = schema.blank_values()
        self._errors: dict[str, str] = {}
        self._baseline: tuple[str, ...] = self._snapshot()

    @property
    def schema(self) -> ValidationSchema:
        return self._schema

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def value(self, name: str) -> str:
        return self._values[name]

    def error(self, name: str) -> str:
        return self._errors.get(name, "")

    def initialize(self, values: Mapping[str, Any] | None = None) -> None:
        source = values or {}
        self._values = {name: _as_field_text(source.get(name)) for name in self._schema.field_names}
        self._errors = {}
        self._baseline = self._snapshot()

    def reset(self) -> None:
        self.initialize(self._schema.blank_values())

    def set_field(self, name: str, value: Any) -> str:
        if name not in self._values:
            raise KeyError(f"Field '{name}' is not part of schema '{self._schema.name}'")
        text = _as_field_text(value)
        self._values[name] = text
        rows = validate_field(self._schema, name, text, values=self._values)
        if rows:
            self._errors[name] = rows[0]
        else:
            self._errors.pop(name, None)
        return self._errors.get(name, "")

    def validate(self) -> dict[str, str]:
        return validate_values(self._schema, self._values)

    def submit(self) -> SubmitResult:
        errors = self.validate()
        self._errors = dict(errors)
        if errors:
            self._logger.debug(
                "Submit blocked for %s: %s",
                self._schema.name,
                ", ".join(sorted(errors)),
            )
            return SubmitResult(ok=False, errors=dict(errors))
        payload = {name: self._values[name] for name in self._schema.field_names}
        self._logger.debug("Submit accepted for %s", self._schema.name)
        return SubmitResult(ok=True, values=payload)

    @property
    def is_dirty(self) -> bool:
        return self._snapshot() != self._baseline

    @property
    def is_empty(self) -> bool:
        return not any(value.strip() for value in self._values.values())

    def dirty_state(self, *, editing: bool = False) -> str:
        if self.is_dirty:
            return DIRTY_STATE_DIRTY
        if not editing and self.is_empty:
            return DIRTY_STATE_EMPTY
        return DIRTY_STATE_CLEAN

    def _snapshot(self) -> tuple[str, ...]:
        return tuple(self._values[name] for name in self._schema.field_names)


def _as_field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)
