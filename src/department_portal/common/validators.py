from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required.")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters.")
    return value.strip()


def require_email(value: str) -> str:
    value = (value or "").strip()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Invalid email address.")
    return value


def require_pattern(value: str, pattern: str, message: str) -> str:
    value = (value or "").strip()
    if not re.fullmatch(pattern, value):
        raise ValidationError(message)
    return value


def require_choice(value: Any, enum_cls: Type[E], message: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)


def parse_id(value: Any, field_name: str = "ID") -> int:
    """Parse a positive integer identifier coming from a form or URL."""

    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}.")
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}.")
    if parsed <= 0:
        raise ValidationError(f"Invalid {field_name}.")
    return parsed


def parse_iso_date(value: Any, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name} format.")


def collect(checks: Iterable) -> None:
    """Run every check and raise one ValidationError listing all messages."""

    errors: list[str] = []
    for check in checks:
        try:
            check()
        except ValidationError as e:
            errors.append(str(e))
    if errors:
        raise ValidationError(", ".join(errors))
