"""
Pydantic schemas for the /api/v1/customers endpoints
Handles request validation and response serialization
The credential is accepted on input and never serialized on output
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

IDENTIFICATION_PATTERN = r"^[0-9]{10,20}$"
PHONE_PATTERN = r"^[0-9+\-\s()]{7,15}$"


def _blank_to_none(v):
    """Treat empty strings and the literal "null" as a missing value"""
    if isinstance(v, str) and v.strip().lower() in ("", "null"):
        return None
    return v


class CreateCustomerRequest(BaseModel):
    """
    Request schema for creating a customer
    name, identification and password are required
    """
    name: str = Field(
        min_length=2,
        max_length=100,
        description="Customer full name",
        examples=["Maria Lopez"]
    )
    gender: Optional[str] = Field(
        None,
        max_length=20,
        description="Customer gender",
        examples=["Female"]
    )
    identification: str = Field(
        pattern=IDENTIFICATION_PATTERN,
        description="National id or passport number (10-20 digits)",
        examples=["2222222222"]
    )
    address: Optional[str] = Field(
        None,
        max_length=200,
        description="Home address",
        examples=["Quito, La Mariscal"]
    )
    phone: Optional[str] = Field(
        None,
        pattern=PHONE_PATTERN,
        description="Phone number: digits, +, -, spaces or parentheses",
        examples=["0999999999"]
    )
    password: str = Field(
        min_length=4,
        max_length=255,
        description="Customer credential",
        examples=["pass123"]
    )

    @field_validator('name', 'identification', mode='before')
    @classmethod
    def strip_required(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('gender', 'address', 'phone', mode='before')
    @classmethod
    def clean_optional(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "name": "Maria Lopez",
                "gender": "Female",
                "identification": "2222222222",
                "address": "Quito, La Mariscal",
                "phone": "0999999999",
                "password": "pass123"
            }
        }


class UpdateCustomerRequest(BaseModel):
    """
    Request schema for a partial update
    Only the fields sent are applied; identification cannot be changed
    """
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    gender: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    password: Optional[str] = Field(None, min_length=4, max_length=255)
    status: Optional[bool] = Field(None, description="Active flag")

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        # Same trimming as on create, before the length check
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('gender', 'address', 'phone', mode='before')
    @classmethod
    def clean_optional(cls, v):
        return _blank_to_none(v)

    def present_fields(self) -> Dict[str, Any]:
        """Fields that carry a value in this request"""
        return self.model_dump(exclude_none=True)

    class Config:
        # Rejects identification along with any other unknown field
        extra = "forbid"
        json_schema_extra = {
            "examples": [
                {"address": "Quito"},
                {"phone": "0988888888", "status": False}
            ]
        }


class CustomerResponse(BaseModel):
    """
    Customer view returned by every read and write endpoint
    """
    id: int
    name: str
    gender: Optional[str] = None
    identification: str
    address: Optional[str] = None
    phone: Optional[str] = None
    status: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Maria Lopez",
                "gender": "Female",
                "identification": "2222222222",
                "address": "Quito, La Mariscal",
                "phone": "0999999999",
                "status": True,
                "created_at": "2025-10-19T10:30:00",
                "updated_at": "2025-10-19T15:45:00"
            }
        }


class ErrorResponse(BaseModel):
    """
    Error response schema for API errors
    """
    error: str = Field(
        description="Stable error code"
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "error": "CUSTOMER_NOT_FOUND",
                    "message": "Customer not found with ID: 42"
                },
                {
                    "error": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {"errors": [{"field": "body -> identification", "message": "String should match pattern"}]}
                }
            ]
        }
