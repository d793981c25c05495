"""
SQLAlchemy base configuration for the Customer Service
This module sets up the SQLAlchemy declarative base and the timestamp
columns shared by the person and client tables
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models"""
    pass


class TimestampMixin:
    """
    Creation and modification timestamps
    Repositories set both explicitly so the values are known before flush
    """
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the record was first persisted"
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the record was last modified"
    )
