from fastapi import APIRouter, Body, Depends, Path, Request, status
from typing import List, Optional
import logging

from directory_server.core.database import EmployeeStore
from directory_server.core.decorators import log_execution_time, log_requests
from directory_server.core.errors import NotFoundError
from directory_server.core.validation import check_employee, normalize_employee
from directory_server.schemas.schema import (
    EmployeePayload,
    EmployeeRecord,
    DeleteResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

# Largest value a 64-bit INTEGER primary key can hold
MAX_EMPLOYEE_ID = 2**63 - 1

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    responses={
        404: {"model": ErrorResponse, "description": "Not found"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)


def get_store(request: Request) -> EmployeeStore:
    """Store injected into the application by create_app"""
    return request.app.state.store


@router.get("", response_model=List[EmployeeRecord])
@log_requests
@log_execution_time
async def list_employees(
    request: Request,
    store: EmployeeStore = Depends(get_store)
):
    return await store.list_all()

@router.get("/{employee_id}", response_model=EmployeeRecord)
@log_requests
@log_execution_time
async def get_employee(
    request: Request,
    employee_id: int = Path(..., ge=1, le=MAX_EMPLOYEE_ID),
    store: EmployeeStore = Depends(get_store)
):
    employee = await store.get(employee_id)

    if employee is None:
        raise NotFoundError()

    return employee

@router.post(
    "",
    response_model=EmployeeRecord,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Validation failure or duplicate email"}},
)
@log_requests
@log_execution_time
async def create_employee(
    request: Request,
    payload: Optional[EmployeePayload] = Body(None),
    store: EmployeeStore = Depends(get_store)
):
    payload = payload or EmployeePayload()
    check_employee(payload)

    name, email, position = normalize_employee(payload)
    return await store.create(name, email, position)

@router.put(
    "/{employee_id}",
    response_model=EmployeeRecord,
    responses={400: {"model": ErrorResponse, "description": "Validation failure or duplicate email"}},
)
@log_requests
@log_execution_time
async def update_employee(
    request: Request,
    employee_id: int = Path(..., ge=1, le=MAX_EMPLOYEE_ID),
    payload: Optional[EmployeePayload] = Body(None),
    store: EmployeeStore = Depends(get_store)
):
    # An unknown id is reported before the body is looked at
    if await store.get(employee_id, "Failed to update employee") is None:
        raise NotFoundError()

    payload = payload or EmployeePayload()
    check_employee(payload)

    name, email, position = normalize_employee(payload)
    return await store.update(employee_id, name, email, position)

@router.delete("/{employee_id}", response_model=DeleteResponse)
@log_requests
@log_execution_time
async def delete_employee(
    request: Request,
    employee_id: int = Path(..., ge=1, le=MAX_EMPLOYEE_ID),
    store: EmployeeStore = Depends(get_store)
):
    deleted = await store.delete(employee_id)

    if not deleted:
        raise NotFoundError()

    return DeleteResponse(
        message="Employee deleted successfully",
        deletedId=request.path_params["employee_id"],
    )
