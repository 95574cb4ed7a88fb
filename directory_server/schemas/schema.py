# directory_server/schemas/schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class EmployeePayload(BaseModel):
    """Request body for create and update.

    Every field is optional here; presence and format are checked by
    core.validation so that the first failing reason can be reported.
    """
    name: Optional[str] = Field(None, description="Employee name", examples=["John Doe"])
    email: Optional[str] = Field(None, description="Employee email", examples=["john.doe@example.com"])
    position: Optional[str] = Field(None, description="Employee position", examples=["Software Developer"])


class EmployeeRecord(BaseModel):
    """Stored employee as returned by the store and the API"""
    id: int = Field(..., description="Employee ID", examples=[1])
    name: str = Field(..., description="Employee name")
    email: str = Field(..., description="Employee email")
    position: str = Field(..., description="Employee position")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class DeleteResponse(BaseModel):
    message: str = Field(..., description="Response message")
    deletedId: str = Field(..., description="ID of the deleted employee")


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["OK"])
    timestamp: str = Field(..., description="Current server time, ISO-8601")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")
