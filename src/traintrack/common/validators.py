from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def as_text(value: Any, field_name: str) -> str:
    """Request scalar as text; JSON null becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple, dict)):
        raise ValidationError(f"{field_name} must be a single value.")
    return str(value)


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required.")
    return str(value).strip()


def optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_email(value: Any) -> str:
    return str(value or "").strip().lower()


def require_email(value: Any, field_name: str = "Email") -> str:
    email = normalize_email(value)
    if not email:
        raise ValidationError(f"{field_name} is required.")
    if "@" not in email:
        raise ValidationError(f"{field_name} is not a valid address.")
    return email


def require_session_dates(values: Any) -> List[date]:
    """Validate a list of YYYY-MM-DD strings; returns sorted unique dates."""
    if not isinstance(values, (list, tuple)):
        raise ValidationError("At least one training date is required.")

    dates: set[date] = set()
    for raw in values:
        if isinstance(raw, date):
            dates.add(raw)
            continue
        try:
            dates.add(parse_iso_date(str(raw).strip()))
        except ValueError:
            raise ValidationError(f"Invalid training date: {raw!r}")

    if not dates:
        raise ValidationError("At least one training date is required.")
    return sorted(dates)


def require_choice(value: Any, choices: Iterable[str], field_name: str) -> str:
    allowed = list(choices)
    text = str(value or "").strip()
    if text not in allowed:
        raise ValidationError(f"Invalid {field_name}.")
    return text
