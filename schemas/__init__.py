"""
Pydantic schemas for the Customer Service API
Contains request/response models and data validation schemas
for API endpoints and data transfer objects.
"""

from .customer import (
    CreateCustomerRequest,
    UpdateCustomerRequest,
    CustomerResponse,
    ErrorResponse
)

# Export all schemas for easy importing
__all__ = [
    "CreateCustomerRequest",
    "UpdateCustomerRequest",
    "CustomerResponse",
    "ErrorResponse"
]
