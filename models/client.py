"""
Client model for the Customer Service
This module defines the account record: the banking-specific data
(credential and active status) of a customer. A client row shares its
primary key with exactly one person row.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, CheckConstraint
from .base import Base, TimestampMixin


class Client(TimestampMixin, Base):
    """
    Client model representing the account half of a customer

    The id is not generated here: it is the id of the owning person and must
    be supplied by the caller. The foreign key makes an account without an
    identity impossible at the storage level.

    Database Table: clients
    """
    __tablename__ = "clients"

    id = Column(
        Integer,
        ForeignKey("persons.id"),
        primary_key=True,
        autoincrement=False,
        comment="Same value as persons.id"
    )

    password = Column(
        String(255),
        nullable=False,
        comment="Salted credential digest, never returned by the API"
    )

    status = Column(
        Boolean,
        nullable=False,
        default=True,
        comment="False once the customer has been deactivated"
    )

    __table_args__ = (
        CheckConstraint("length(password) >= 4", name="client_password_min_length"),
    )

    def __repr__(self):
        # Credential deliberately left out
        return f"<Client(id={self.id}, status={self.status})>"
