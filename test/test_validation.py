import pytest

from directory_server.core.errors import ValidationError
from directory_server.core.validation import check_employee, normalize_employee, validate_employee
from directory_server.schemas.schema import EmployeePayload


def test_valid_employee():
    assert validate_employee("John Doe", "john.doe@example.com", "Developer") is None


@pytest.mark.parametrize("name, email, position, reason", [
    (None, "x@y.com", "Dev", "Name is required"),
    ("   ", "x@y.com", "Dev", "Name is required"),
    ("John", None, "Dev", "Email is required"),
    ("John", "\t", "Dev", "Email is required"),
    ("John", "invalid-email", "Dev", "Invalid email format"),
    ("John", "x@y.com", None, "Position is required"),
    ("John", "x@y.com", "  ", "Position is required"),
    # order: name before email format before position
    ("", "invalid-email", "", "Name is required"),
    ("John", "invalid-email", "", "Invalid email format"),
])
def test_first_failing_reason(name, email, position, reason):
    assert validate_employee(name, email, position) == reason


@pytest.mark.parametrize("email", [
    "a@b.c",
    "first.last@sub.example.org",
    "a@b.c.d",
])
def test_accepted_emails(email):
    assert validate_employee("John", email, "Dev") is None


@pytest.mark.parametrize("email", [
    "no-at-sign.com",
    "user@nodot",
    "@example.com",
    "user@.com",
    "us er@example.com",
    "user@exa mple.com",
    " user@example.com",
    "user@example.com\n",
    "user@@example.com",
])
def test_rejected_emails(email):
    assert validate_employee("John", email, "Dev") == "Invalid email format"


def test_check_employee_raises_reason():
    with pytest.raises(ValidationError) as excinfo:
        check_employee(EmployeePayload(email="x@y.com", position="Dev"))

    assert excinfo.value.message == "Name is required"
    assert excinfo.value.status_code == 400


def test_normalize_employee_trims():
    payload = EmployeePayload(name=" John ", email="john@example.com", position=" Dev\n")
    assert normalize_employee(payload) == ("John", "john@example.com", "Dev")
