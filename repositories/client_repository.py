"""
Client Repository - account record storage
CRUD primitives over the clients table. Knows nothing about persons: the
id of every client is supplied by the caller.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utcnow
from models.client import Client

logger = logging.getLogger(__name__)


class ClientRepository:
    """
    Storage primitives for Client rows

    Every method runs inside the caller's session; nothing here commits.
    """

    async def save(self, session: AsyncSession, client: Client) -> Client:
        """
        Insert a client under an id taken from its person row
        """
        if client.id is None:
            raise ValueError("Client id must be the id of an existing person")

        now = utcnow()
        if client.created_at is None:
            client.created_at = now
        client.updated_at = now
        if client.status is None:
            client.status = True

        session.add(client)
        await session.flush()
        logger.debug(f"Saved client {client.id}")
        return client

    async def update_fields(
        self,
        session: AsyncSession,
        client_id: int,
        password: str,
        status: bool
    ) -> int:
        """
        Targeted update of the mutable account columns
        Returns the number of rows touched (0 when the client is gone)
        """
        statement = (
            update(Client)
            .where(Client.id == client_id)
            .values(password=password, status=status, updated_at=utcnow())
        )
        result = await session.execute(statement)
        return result.rowcount

    async def find_by_id(self, session: AsyncSession, client_id: int) -> Optional[Client]:
        return await session.get(Client, client_id, populate_existing=True)

    async def find_all(self, session: AsyncSession) -> List[Client]:
        query = select(Client).order_by(Client.id)
        result = await session.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def delete_by_id(self, session: AsyncSession, client_id: int) -> None:
        await session.execute(delete(Client).where(Client.id == client_id))
