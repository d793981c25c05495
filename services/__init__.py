"""
Business logic services for the Customer Service API
Contains customer orchestration (existence checks, partial-update merge,
soft and hard delete) on top of the reconciliation repository.
"""

from .customer_service import CustomerService, apply_update, customer_service

# Export all services for easy importing
__all__ = [
    "CustomerService",
    "apply_update",
    "customer_service"
]
