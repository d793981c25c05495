"""
Person Repository - identity record storage
CRUD primitives over the persons table. Knows nothing about clients.
"""

import logging
from typing import Optional

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from exceptions import DuplicateIdentificationError
from models.base import utcnow
from models.person import Person

logger = logging.getLogger(__name__)


def _is_identification_violation(error: IntegrityError) -> bool:
    # PostgreSQL reports the constraint name, SQLite the column
    message = str(error.orig).lower()
    return "uq_persons_identification" in message or "persons.identification" in message


class PersonRepository:
    """
    Storage primitives for Person rows

    Every method runs inside the caller's session; nothing here commits.
    """

    async def save(self, session: AsyncSession, person: Person) -> Person:
        """
        Insert a new person or overwrite an existing one

        A person without an id is inserted and flushed so the generated id is
        available to the caller. A person with an id is merged over the
        stored row. updated_at is refreshed either way.
        """
        now = utcnow()
        if person.created_at is None:
            person.created_at = now
        person.updated_at = now

        try:
            if person.id is None:
                session.add(person)
            else:
                person = await session.merge(person)
            await session.flush()
        except IntegrityError as e:
            if _is_identification_violation(e):
                logger.warning(f"Unique constraint rejected identification: {person.identification}")
                raise DuplicateIdentificationError(person.identification) from e
            raise

        logger.debug(f"Saved person {person.id}")
        return person

    async def find_by_id(self, session: AsyncSession, person_id: int) -> Optional[Person]:
        return await session.get(Person, person_id, populate_existing=True)

    async def find_by_identification(self, session: AsyncSession, identification: str) -> Optional[Person]:
        query = select(Person).where(Person.identification == identification)
        result = await session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def exists_by_identification(self, session: AsyncSession, identification: str) -> bool:
        query = select(exists().where(Person.identification == identification))
        result = await session.execute(query)
        return bool(result.scalar())

    async def delete_by_id(self, session: AsyncSession, person_id: int) -> None:
        await session.execute(delete(Person).where(Person.id == person_id))
