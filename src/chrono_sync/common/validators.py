from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_email(value: str) -> str:
    value = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(value):
        raise ValidationError("Email is not valid")
    return value


def require_month(value: str) -> str:
    """Accept YYYY-MM only."""
    value = require_non_empty(value, "Month")
    if not _MONTH_RE.match(value):
        raise ValidationError("Month must look like YYYY-MM")
    return value


def require_hhmm(value: str, field_name: str) -> str:
    if not value or not _HHMM_RE.match(value):
        raise ValidationError(f"{field_name} must be a zero-padded HH:MM time")
    return value
