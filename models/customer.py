"""
Customer aggregate for the Customer Service
A customer is never stored as such: it is the merge of one Person row and
one Client row sharing the same id. This module holds the in-memory
aggregate and the explicit merge step used by the reconciliation repository.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .client import Client
from .person import Person


@dataclass
class Customer:
    """
    Logical customer built from a person (identity) and a client (account)

    An instance with id None is a draft that has not been persisted yet.
    """
    name: str
    identification: str
    password: str
    gender: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    status: bool = True
    id: Optional[int] = None

    # Identity timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Account timestamps
    client_created_at: Optional[datetime] = None
    client_updated_at: Optional[datetime] = None

    def is_active(self) -> bool:
        return bool(self.status)

    def deactivate(self):
        # The account timestamp is refreshed by the store on write
        self.status = False

    def has_valid_basic_info(self) -> bool:
        return bool(self.name and self.name.strip()) and bool(
            self.identification and self.identification.strip()
        )

    def __repr__(self):
        return (
            f"Customer(id={self.id}, name={self.name}, "
            f"identification={self.identification}, active={self.is_active()})"
        )


def merge_customer(person: Person, client: Client) -> Customer:
    """
    Join an identity record and an account record into one Customer

    Raises ValueError when the two records do not share the same id.
    """
    if person.id != client.id:
        raise ValueError(f"Cannot merge person {person.id} with client {client.id}")

    return Customer(
        id=person.id,
        name=person.name,
        gender=person.gender,
        identification=person.identification,
        address=person.address,
        phone=person.phone,
        password=client.password,
        status=client.status,
        created_at=person.created_at,
        updated_at=person.updated_at,
        client_created_at=client.created_at,
        client_updated_at=client.updated_at,
    )
