"""
Persistence layer for the Customer Service
PersonRepository and ClientRepository are the per-table stores;
CustomerRepository reconciles them into Customer aggregates.
"""

from .person_repository import PersonRepository
from .client_repository import ClientRepository
from .customer_repository import CustomerRepository

__all__ = [
    "PersonRepository",
    "ClientRepository",
    "CustomerRepository"
]
