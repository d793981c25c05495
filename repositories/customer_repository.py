"""
Customer Repository - reconciliation of person and client records
Composes PersonRepository and ClientRepository into Customer aggregates.

Write ordering:
1. Create: person first (to obtain the generated id), then client under that id
2. Update: person overwrite, then targeted client update
3. Delete: client first (it references the person), then person

Every public operation is one unit of work: both writes commit together or
neither does, so a failure on the second write never leaves half a customer.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from database import DatabaseManager, db_manager
from exceptions import CustomerNotFoundError
from models.client import Client
from models.customer import Customer, merge_customer
from models.person import MAX_PERSON_ID, MIN_PERSON_ID, Person

from .client_repository import ClientRepository
from .person_repository import PersonRepository

logger = logging.getLogger(__name__)


def _person_from_customer(customer: Customer) -> Person:
    return Person(
        id=customer.id,
        name=customer.name,
        gender=customer.gender,
        identification=customer.identification,
        address=customer.address,
        phone=customer.phone,
        created_at=customer.created_at,
    )


def _client_from_customer(customer: Customer, client_id: int) -> Client:
    return Client(
        id=client_id,
        password=customer.password,
        status=True if customer.status is None else customer.status,
    )


class CustomerRepository:
    """
    Reconciliation repository for the person/client pair

    Owns the invariant that a customer exists if and only if both its person
    row and its client row exist.
    """

    def __init__(
        self,
        database: Optional[DatabaseManager] = None,
        person_repository: Optional[PersonRepository] = None,
        client_repository: Optional[ClientRepository] = None
    ):
        self.db_manager = database or db_manager
        self.persons = person_repository or PersonRepository()
        self.clients = client_repository or ClientRepository()

    async def _load(self, session: AsyncSession, customer_id: int) -> Optional[Customer]:
        """
        Read the client and its person and merge them
        A missing side on either table means no customer
        """
        if not MIN_PERSON_ID <= customer_id <= MAX_PERSON_ID:
            # The driver refuses values past the column range
            return None

        client = await self.clients.find_by_id(session, customer_id)
        if client is None:
            return None

        person = await self.persons.find_by_id(session, customer_id)
        if person is None:
            logger.error(f"Integrity risk: client {customer_id} has no person row")
            return None

        return merge_customer(person, client)

    async def create(self, draft: Customer) -> Customer:
        """
        Persist a new customer and return the stored view
        """
        logger.info(f"Saving customer with identification: {draft.identification}")

        async with self.db_manager.get_session() as session:
            person = await self.persons.save(session, _person_from_customer(draft))
            try:
                await self.clients.save(session, _client_from_customer(draft, person.id))
            except Exception as e:
                logger.error(
                    f"Integrity risk: client write failed after person {person.id} was written, "
                    f"rolling back both: {e}"
                )
                raise

            created = await self._load(session, person.id)

        logger.info(f"Customer saved successfully with ID: {created.id}")
        return created

    async def find_by_id(self, customer_id: int) -> Optional[Customer]:
        logger.debug(f"Finding customer by ID: {customer_id}")
        async with self.db_manager.get_session() as session:
            return await self._load(session, customer_id)

    async def find_all(self) -> List[Customer]:
        """
        Every client merged with its person

        One person lookup per client; fine for this service's volumes but
        a join would be needed for a large table.
        """
        customers = []
        async with self.db_manager.get_session() as session:
            for client in await self.clients.find_all(session):
                person = await self.persons.find_by_id(session, client.id)
                if person is None:
                    logger.error(f"Integrity risk: client {client.id} has no person row, skipping")
                    continue
                customers.append(merge_customer(person, client))

        logger.debug(f"Finished retrieving {len(customers)} customers")
        return customers

    async def find_by_identification(self, identification: str) -> Optional[Customer]:
        logger.debug(f"Finding customer by identification: {identification}")
        async with self.db_manager.get_session() as session:
            person = await self.persons.find_by_identification(session, identification)
            if person is None:
                return None

            client = await self.clients.find_by_id(session, person.id)
            if client is None:
                logger.warning(f"Person {person.id} has no client row")
                return None

            return merge_customer(person, client)

    async def update(self, customer: Customer) -> Customer:
        """
        Overwrite the person fields and the client's mutable fields

        Raises CustomerNotFoundError if either row has disappeared since the
        caller read the customer.
        """
        logger.info(f"Updating customer with ID: {customer.id}")

        async with self.db_manager.get_session() as session:
            if await self.persons.find_by_id(session, customer.id) is None:
                raise CustomerNotFoundError(f"Customer not found with ID: {customer.id}")

            await self.persons.save(session, _person_from_customer(customer))
            rows = await self.clients.update_fields(
                session, customer.id, customer.password, customer.status
            )
            if rows == 0:
                logger.error(f"Integrity risk: client {customer.id} vanished during update, rolling back")
                raise CustomerNotFoundError(f"Customer not found with ID: {customer.id}")

            updated = await self._load(session, customer.id)

        logger.info(f"Customer {customer.id} updated successfully")
        return updated

    async def delete_by_id(self, customer_id: int) -> None:
        logger.info(f"Deleting customer with ID: {customer_id}")
        async with self.db_manager.get_session() as session:
            await self.clients.delete_by_id(session, customer_id)
            await self.persons.delete_by_id(session, customer_id)
        logger.info(f"Customer {customer_id} deleted successfully")

    async def exists_by_identification(self, identification: str) -> bool:
        async with self.db_manager.get_session() as session:
            return await self.persons.exists_by_identification(session, identification)
