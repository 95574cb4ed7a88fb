# directory_client/utils.py
import functools
import logging
import re
import time
from typing import List, Dict, Any, Optional

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "email", "position")

FORM_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

TABLE_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("email", "Email"),
    ("position", "Position"),
    ("created_at", "Created"),
]


def log_execution_time(func):
    """Decorator to log coroutine execution time"""
    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
            end_time = time.time()
            logger.debug(f"Function {func.__name__} executed in {end_time - start_time:.4f} seconds")
            return result
        except Exception as e:
            end_time = time.time()
            logger.debug(f"Function {func.__name__} failed after {end_time - start_time:.4f} seconds. Error: {str(e)}")
            raise

    return async_wrapper


def filter_employees(employees: List[Dict[str, Any]], term: Optional[str]) -> List[Dict[str, Any]]:
    """
    Filter employees by a search term

    Args:
        employees: Employee records as returned by the API
        term: Case-insensitive substring matched against name, email and position

    Returns:
        Matching employees in their original order; all of them for an empty term
    """
    needle = (term or "").lower()
    if not needle:
        return list(employees)

    return [
        employee for employee in employees
        if any(needle in str(employee.get(key) or "").lower() for key in SEARCH_FIELDS)
    ]


def validate_form(data: Dict[str, Any]) -> Dict[str, str]:
    """
    Check an add/edit form before it is sent

    Args:
        data: Form values keyed by name, email and position

    Returns:
        Field name to error message, empty when the form can be submitted
    """
    errors = {}
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip()
    position = (data.get("position") or "").strip()

    if not name:
        errors["name"] = "Name is required"
    if not email:
        errors["email"] = "Email is required"
    elif not FORM_EMAIL_PATTERN.search(email):
        errors["email"] = "Email is invalid"
    if not position:
        errors["position"] = "Position is required"

    return errors


def format_employee_table(employees: List[Dict[str, Any]]) -> str:
    """Render employees as a fixed-width text table"""
    if not employees:
        return "No employees found"

    rows = [[str(employee.get(key) or "") for key, _ in TABLE_COLUMNS] for employee in employees]
    headers = [title for _, title in TABLE_COLUMNS]
    widths = [
        max(len(headers[i]), *(len(row[i]) for row in rows))
        for i in range(len(headers))
    ]

    lines = ["  ".join(headers[i].ljust(widths[i]) for i in range(len(headers)))]
    lines.append("  ".join("-" * width for width in widths))
    for row in rows:
        lines.append("  ".join(row[i].ljust(widths[i]) for i in range(len(row))))

    return "\n".join(lines)
