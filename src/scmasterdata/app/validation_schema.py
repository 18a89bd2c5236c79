from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any


_CODE_PATTERN = r"^[A-Z0-9]+$"
_LETTER_CODE_PATTERN = r"^[A-Z]+$"
_EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
_PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"


@dataclass(frozen=True, slots=True)
class FieldRule:
    name: str
    required: bool = False
    min_length: int = 0
    max_length: int | None = None
    pattern: str = ""
    required_message: str = ""
    min_length_message: str = ""
    max_length_message: str = ""
    pattern_message: str = ""
    _compiled: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.pattern:
            object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def violations(self, value: Any) -> list[str]:
        text = _as_form_text(value)
        if not text.strip():
            if self.required:
                return [self.required_message or f"{self.name} is required"]
            return []

        rows: list[str] = []
        if len(text) < self.min_length:
            rows.append(
                self.min_length_message
                or f"{self.name} must be at least {self.min_length} characters"
            )
        if self.max_length is not None and len(text) > self.max_length:
            rows.append(
                self.max_length_message
                or f"{self.name} must be {self.max_length} characters or less"
            )
        if self._compiled is not None and self._compiled.fullmatch(text) is None:
            rows.append(self.pattern_message or f"{self.name} has an invalid format")
        return rows


@dataclass(frozen=True, slots=True)
class CrossFieldRule:
    """Checks ``field_name`` against the whole value mapping."""

    field_name: str
    message: str
    check: Callable[[Mapping[str, str]], bool]


@dataclass(frozen=True, slots=True)
class ValidationSchema:
    name: str
    rules: tuple[FieldRule, ...]
    cross_rules: tuple[CrossFieldRule, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for rule in self.rules:
            if rule.name in seen:
                raise ValueError(f"Duplicate field rule '{rule.name}' in schema '{self.name}'")
            seen.add(rule.name)
        for cross_rule in self.cross_rules:
            if cross_rule.field_name not in seen:
                raise ValueError(
                    f"Cross-field rule targets unknown field '{cross_rule.field_name}'"
                )

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    def rule(self, name: str) -> FieldRule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(f"Field '{name}' is not part of schema '{self.name}'")

    def blank_values(self) -> dict[str, str]:
        return {name: "" for name in self.field_names}


def validate_field(
    schema: ValidationSchema,
    name: str,
    value: Any,
    *,
    values: Mapping[str, str] | None = None,
) -> list[str]:
    """Returns the ordered violations for one field; an empty list means valid.

    Cross-field rules for ``name`` only run when the full ``values`` mapping is
    supplied and the field passed its own rule.
    """
    rows = schema.rule(name).violations(value)
    if rows or values is None:
        return rows
    for cross_rule in schema.cross_rules:
        if cross_rule.field_name != name:
            continue
        if not cross_rule.check(values):
            rows.append(cross_rule.message)
    return rows


def validate_values(schema: ValidationSchema, values: Mapping[str, Any]) -> dict[str, str]:
    """Maps each invalid field to its first violation message."""
    snapshot = {name: _as_form_text(values.get(name)) for name in schema.field_names}
    errors: dict[str, str] = {}
    for name in schema.field_names:
        rows = validate_field(schema, name, snapshot[name], values=snapshot)
        if rows:
            errors[name] = rows[0]
    return errors


def code_rule(label: str, *, max_length: int = 10, letters_only: bool = False, name: str = "code") -> FieldRule:
    if letters_only:
        pattern = _LETTER_CODE_PATTERN
        pattern_message = f"{label} must contain only uppercase letters"
    else:
        pattern = _CODE_PATTERN
        pattern_message = f"{label} must contain only uppercase letters and numbers"
    return FieldRule(
        name=name,
        required=True,
        min_length=1,
        max_length=max_length,
        pattern=pattern,
        required_message=f"{label} is required",
        max_length_message=f"{label} must be {max_length} characters or less",
        pattern_message=pattern_message,
    )


def title_rule(label: str = "Title", *, name: str = "title", min_length: int = 2) -> FieldRule:
    return FieldRule(
        name=name,
        required=True,
        min_length=min_length,
        required_message=f"{label} is required",
        min_length_message=f"{label} must be at least {min_length} characters",
    )


def required_rule(name: str, label: str, *, max_length: int | None = None) -> FieldRule:
    return FieldRule(
        name=name,
        required=True,
        min_length=1,
        max_length=max_length,
        required_message=f"{label} is required",
        max_length_message=(
            f"{label} must be {max_length} characters or less" if max_length is not None else ""
        ),
    )


def email_rule(name: str = "email", label: str = "Email") -> FieldRule:
    return FieldRule(
        name=name,
        required=True,
        min_length=1,
        pattern=_EMAIL_PATTERN,
        required_message=f"{label} is required",
        pattern_message="Please enter a valid email address",
    )


def phone_rule(name: str = "phone", label: str = "Phone number") -> FieldRule:
    return FieldRule(
        name=name,
        required=True,
        min_length=1,
        pattern=_PHONE_PATTERN,
        required_message=f"{label} is required",
        pattern_message="Please enter a valid phone number",
    )


def optional_rule(name: str) -> FieldRule:
    return FieldRule(name=name)


def is_blank_or_number(value: Any) -> bool:
    text = _as_form_text(value).strip()
    if not text:
        return True
    try:
        parsed = float(text)
    except ValueError:
        return False
    return not math.isnan(parsed)


def _as_form_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)
