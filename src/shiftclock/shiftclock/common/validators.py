from __future__ import annotations

from typing import Any, Optional

from ..core.constants import MAX_NOTE_LENGTH
from ..core.exceptions import ContractViolation, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_field(value: Any, field_name: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ContractViolation(f"Missing required field: {field_name}")
    return value


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ContractViolation(f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ContractViolation(f"{field_name} must be a number") from exc


def require_in_range(value: float, field_name: str, low: float, high: float) -> float:
    if not low <= value <= high:
        raise ContractViolation(f"{field_name} must be between {low} and {high}")
    return value


def validate_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    if not isinstance(note, str):
        raise ContractViolation("note must be text")
    if len(note) > MAX_NOTE_LENGTH:
        raise ContractViolation(f"note must be at most {MAX_NOTE_LENGTH} characters")
    return note
