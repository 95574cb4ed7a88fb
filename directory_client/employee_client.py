# directory_client/employee_client.py
import aiohttp
import logging
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from directory_client.config import settings
from directory_client.utils import log_execution_time

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-success answer from the directory API, or no answer at all"""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}" if status else message)


@dataclass
class DirectoryClient:
    server_url: str = field(default_factory=lambda: settings.SERVER_URL)
    timeout: float = field(default_factory=lambda: settings.TIMEOUT)

    session: Optional[aiohttp.ClientSession] = field(default=None)

    async def initialize(self):
        if not self.session:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        logger.debug(f"Client ready for {self.server_url}")

    async def close(self):
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _url(self, path: str) -> str:
        return f"{self.server_url.rstrip('/')}/api{path}"

    @staticmethod
    async def _read_body(response) -> Any:
        try:
            return await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return None

    @log_execution_time
    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        if not self.session:
            raise ApiError(0, "Client not initialized")

        url = self._url(path)
        try:
            async with self.session.request(method, url, json=payload) as response:
                body = await self._read_body(response)

                if response.status >= 400:
                    message = body.get("error") if isinstance(body, dict) else None
                    raise ApiError(response.status, message or response.reason or f"HTTP {response.status}")

                return body
        except aiohttp.ClientError as e:
            logger.error(f"{method} {url} failed: {str(e)}")
            raise ApiError(0, f"Could not reach {self.server_url}") from e

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    async def list_employees(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/employees")

    async def get_employee(self, employee_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/employees/{employee_id}")

    async def create_employee(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/employees", payload=data)

    async def update_employee(self, employee_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/employees/{employee_id}", payload=data)

    async def delete_employee(self, employee_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/employees/{employee_id}")
