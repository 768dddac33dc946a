"""Field checks shared by the use cases. Each raises `ValidationFailedError`."""

from __future__ import annotations

from taskify.kernel.errors import ValidationFailedError

# Identifiers are stored in signed 64-bit columns.
MAX_ENTITY_ID = 2**63 - 1


def require_text(field: str, value: str | None, *, max_length: int) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailedError(field, "is required")
    if len(cleaned) > max_length:
        raise ValidationFailedError(field, f"must be at most {max_length} characters")
    return cleaned


def optional_text(field: str, value: str | None, *, max_length: int) -> str:
    cleaned = (value or "").strip()
    if len(cleaned) > max_length:
        raise ValidationFailedError(field, f"must be at most {max_length} characters")
    return cleaned


def require_id(field: str, value: int | None) -> int:
    if value is None or value <= 0:
        raise ValidationFailedError(field, "must be a positive integer")
    if value > MAX_ENTITY_ID:
        raise ValidationFailedError(field, "is out of range")
    return value
