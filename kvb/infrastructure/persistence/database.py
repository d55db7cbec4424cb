from kvb.config import DatabaseConfig
from kvb.domain.database.model import Database
from kvb.domain.database.port.repository import DatabaseRepository


class ConfigDatabaseRepository(DatabaseRepository):
    """Databases registered in the application config; read-only."""

    def __init__(self, databases: list[DatabaseConfig]) -> None:
        self._databases = {entry.id: _to_database(entry) for entry in databases}

    async def get(self, database_id: str) -> Database | None:
        return self._databases.get(database_id)

    async def list(self) -> list[Database]:
        return list(self._databases.values())


def _to_database(entry: DatabaseConfig) -> Database:
    return Database(
        id=entry.id,
        name=entry.name or f"{entry.host}:{entry.port}",
        host=entry.host,
        port=entry.port,
        connection_type=entry.connection_type,
        username=entry.username,
        password=entry.password,
        db=entry.db,
        tls=entry.tls,
    )
