"""
Database models package for the Customer Service
Contains the SQLAlchemy models for person (identity) and client (account)
records and the merged Customer aggregate
"""

from .base import Base, TimestampMixin
from .person import Person
from .client import Client
from .customer import Customer, merge_customer

__all__ = ['Base', 'TimestampMixin', 'Person', 'Client', 'Customer', 'merge_customer']
