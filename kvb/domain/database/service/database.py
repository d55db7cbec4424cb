"""DatabaseService - lookup of registered database connections."""

import logging

from kvb.domain.database.model import Database
from kvb.domain.database.port.repository import DatabaseRepository
from kvb.domain.shared.error import NotFoundError
from kvb.domain.shared.service import Service

logger = logging.getLogger(__name__)

INVALID_DATABASE_ID = "Invalid database instance id."


class DatabaseService(Service):
    database_repo: DatabaseRepository

    async def get(self, database_id: str) -> Database:
        """Retrieve a registered database by id."""
        database = await self.database_repo.get(database_id)
        if database is None:
            logger.error("Database with id %s was not found", database_id)
            raise NotFoundError(INVALID_DATABASE_ID, code="INVALID_DATABASE_ID")
        return database

    async def list(self) -> list[Database]:
        return await self.database_repo.list()
