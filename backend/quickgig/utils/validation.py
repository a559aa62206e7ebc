"""
Validation utilities for request input.

These only check shape and allowed values. They never rewrite what the client sent
(no case folding), since login compares email and password exactly.
"""
import re
from typing import Any
from fastapi import HTTPException

from ..models.application import APPLICATION_STATUSES
from ..models.user import USER_ROLES

_EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'

# Largest value an id column can hold (signed 64-bit INTEGER).
MAX_ID = 2**63 - 1


def validate_email(email: str) -> str:
    """Validate email format."""
    if not email or not isinstance(email, str):
        raise HTTPException(status_code=400, detail="Email is required")

    if len(email) > 255:
        raise HTTPException(status_code=400, detail="Email too long (max 255 characters)")

    if not re.match(_EMAIL_PATTERN, email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    return email


def validate_password(password: str) -> None:
    if not password or not isinstance(password, str):
        raise HTTPException(status_code=400, detail="Password is required")

    if len(password) > 128:
        raise HTTPException(status_code=400, detail="Password too long (max 128 characters)")


def validate_string_field(
    value: Any,
    field_name: str,
    min_length: int = 1,
    max_length: int = 1000,
) -> str:
    """Validate a string field with common rules."""
    if value is None:
        raise HTTPException(status_code=400, detail=f"{field_name} is required")

    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{field_name} must be a string")

    value = value.strip()

    if not value:
        raise HTTPException(status_code=400, detail=f"{field_name} cannot be empty")

    if len(value) < min_length:
        raise HTTPException(
            status_code=400,
            detail=f"{field_name} must be at least {min_length} characters"
        )

    if len(value) > max_length:
        raise HTTPException(
            status_code=400,
            detail=f"{field_name} must not exceed {max_length} characters"
        )

    return value


def validate_integer_field(
    value: Any,
    field_name: str,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Validate an integer field."""
    if value is None:
        raise HTTPException(status_code=400, detail=f"{field_name} is required")

    if isinstance(value, bool) or not isinstance(value, int):
        try:
            value = int(value)
        except (ValueError, TypeError):
            raise HTTPException(status_code=400, detail=f"{field_name} must be a valid integer")

    if min_value is not None and value < min_value:
        raise HTTPException(
            status_code=400,
            detail=f"{field_name} must be at least {min_value}"
        )

    if max_value is not None and value > max_value:
        raise HTTPException(
            status_code=400,
            detail=f"{field_name} must be at most {max_value}"
        )

    return value


def validate_role(role: str) -> str:
    """Validate user role."""
    if not role or not isinstance(role, str):
        raise HTTPException(status_code=400, detail="Role is required")

    if role not in USER_ROLES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid role. Must be one of: {', '.join(USER_ROLES)}"
        )

    return role


def validate_application_status(status: str) -> str:
    """
    Check the value is a known application status.

    Any status may replace any other; transition order is up to the caller.
    """
    if not status or not isinstance(status, str):
        raise HTTPException(status_code=400, detail="Status is required")

    if status not in APPLICATION_STATUSES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status. Must be one of: {', '.join(APPLICATION_STATUSES)}"
        )

    return status
