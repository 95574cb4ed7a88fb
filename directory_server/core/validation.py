# directory_server/core/validation.py
import re
from typing import Optional, Tuple

from directory_server.core.errors import ValidationError
from directory_server.schemas.schema import EmployeePayload

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_employee(name: Optional[str], email: Optional[str],
                      position: Optional[str]) -> Optional[str]:
    """
    Check submitted employee fields

    Returns None when the fields are valid, otherwise the first failing
    reason in the order name, email presence, email format, position.
    """
    if _is_blank(name):
        return "Name is required"

    if _is_blank(email):
        return "Email is required"

    # Matched against the untrimmed value, surrounding whitespace is rejected
    if not EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format"

    if _is_blank(position):
        return "Position is required"

    return None


def check_employee(payload: EmployeePayload) -> None:
    reason = validate_employee(payload.name, payload.email, payload.position)
    if reason:
        raise ValidationError(reason)


def normalize_employee(payload: EmployeePayload) -> Tuple[str, str, str]:
    return payload.name.strip(), payload.email.strip(), payload.position.strip()
