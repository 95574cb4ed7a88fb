# directory_client/directory_view.py
import logging
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

from directory_client.employee_client import ApiError, DirectoryClient
from directory_client.utils import filter_employees, validate_form

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this employee?"


@dataclass
class Notification:
    severity: str
    message: str


class DirectoryView:
    """
    Local state of the directory screen

    Holds the last list fetched from the API, the current search term and
    the notifications raised by user actions. A failed call never touches
    the list it already holds.
    """

    def __init__(self, client: DirectoryClient):
        self.client = client
        self.employees: List[Dict[str, Any]] = []
        self.search_term = ""
        self.form_errors: Dict[str, str] = {}
        self.notifications: List[Notification] = []

    @property
    def filtered(self) -> List[Dict[str, Any]]:
        return filter_employees(self.employees, self.search_term)

    def notify(self, message: str, severity: str = "success"):
        self.notifications.append(Notification(severity=severity, message=message))
        if severity == "error":
            logger.warning(message)
        else:
            logger.info(message)

    async def refresh(self) -> bool:
        try:
            self.employees = await self.client.list_employees()
        except ApiError as e:
            self.notify(e.message, "error")
            return False
        return True

    def search(self, term: str) -> List[Dict[str, Any]]:
        self.search_term = term
        return self.filtered

    async def save(self, data: Dict[str, Any], employee_id: Optional[int] = None) -> Optional[Dict[str, Any]]:
        self.form_errors = validate_form(data)
        if self.form_errors:
            return None

        try:
            if employee_id is None:
                result = await self.client.create_employee(data)
                self.notify("Employee added successfully")
            else:
                result = await self.client.update_employee(employee_id, data)
                self.notify("Employee updated successfully")
        except ApiError as e:
            self.notify(e.message, "error")
            return None

        await self.refresh()
        return result

    async def remove(self, employee_id: int, confirm: Callable[[str], bool]) -> bool:
        if not confirm(DELETE_PROMPT):
            return False

        try:
            await self.client.delete_employee(employee_id)
        except ApiError as e:
            self.notify(e.message, "error")
            return False

        self.notify("Employee deleted successfully")
        await self.refresh()
        return True
