import os

# No server.log from test runs
os.environ.setdefault("LOG_FILE", "")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from directory_server.core.database import EmployeeStore
from directory_server.main import create_app


@pytest.fixture
def database_url(tmp_path):
    """URL of a throwaway SQLite database"""
    return f"sqlite+aiosqlite:///{tmp_path / 'test_employees.db'}"


@pytest.fixture
def client(database_url):
    """FastAPI test client backed by its own store"""
    app = create_app(store=EmployeeStore(database_url))
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def store(database_url):
    """Initialized store, closed after the test"""
    employee_store = EmployeeStore(database_url)
    await employee_store.init_db()
    yield employee_store
    await employee_store.close()


@pytest.fixture
def employee_data():
    """Sample employee data"""
    return {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "position": "Software Developer"
    }
