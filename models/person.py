"""
Person model for the Customer Service
This module defines the identity record: the person-level data (name,
identification, contact details) shared by every customer. The account
record in models/client.py reuses this table's primary key.
"""

from sqlalchemy import Column, Integer, String, CheckConstraint, UniqueConstraint
from .base import Base, TimestampMixin

# Range of the INTEGER primary key shared by persons and clients
MIN_PERSON_ID = 1
MAX_PERSON_ID = 2**31 - 1


class Person(TimestampMixin, Base):
    """
    Person model representing the identity half of a customer

    The surrogate id is generated by the database on insert and never
    changes afterwards. Identification is unique across all persons.

    Database Table: persons
    """
    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(
        String(100),
        nullable=False,
        comment="Full name, 2 to 100 characters"
    )

    gender = Column(
        String(20),
        nullable=True
    )

    identification = Column(
        String(20),
        nullable=False,
        index=True,
        comment="National id or passport number, 10 to 20 digits"
    )

    address = Column(
        String(200),
        nullable=True
    )

    phone = Column(
        String(15),
        nullable=True
    )

    __table_args__ = (
        # The only reliable guard against two concurrent creates
        UniqueConstraint("identification", name="uq_persons_identification"),

        CheckConstraint("length(name) >= 2", name="person_name_min_length"),
        CheckConstraint("length(identification) >= 10", name="person_identification_min_length"),
    )

    def __repr__(self):
        return f"<Person(id={self.id}, identification={self.identification}, name={self.name})>"
