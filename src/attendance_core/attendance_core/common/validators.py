from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def has_min_length(value: str | None, min_len: int) -> bool:
    """True when the trimmed text has at least ``min_len`` characters."""
    return value is not None and len(str(value).strip()) >= min_len


def clamp_str(value: object, max_len: int) -> str:
    if value is None:
        return ""
    text = str(value)
    return text[:max_len] if len(text) > max_len else text
