"""ClientAccessor over redis-py, one shared handle per logical database."""

import logging

from redis.asyncio import Redis, RedisCluster
from redis.asyncio.cluster import ClusterNode

from kvb.config import RedisConfig
from kvb.domain.database.model import ConnectionType, Database
from kvb.domain.database.service import DatabaseService
from kvb.domain.keys.port.client import ClientAccessor, ClientHandle, ReplyError
from kvb.domain.shared.error import ConnectionUnavailableError
from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.infrastructure.redis.client import RedisClientHandle, RedisClusterClientHandle

logger = logging.getLogger(__name__)


class RedisClientAccessor(ClientAccessor):
    """Caches connected handles by ``(database_id, db)``.

    redis-py reconnects dropped connections on its own, so a cached handle
    stays valid for the application lifetime; ``close`` releases them all.
    """

    def __init__(self, database_service: DatabaseService, config: RedisConfig) -> None:
        self._database_service = database_service
        self._config = config
        self._handles: dict[tuple[str, int], RedisClientHandle | RedisClusterClientHandle] = {}

    async def get_client(self, metadata: ClientMetadata) -> ClientHandle:
        database = await self._database_service.get(metadata.database_id)
        db = database.db if metadata.db is None else metadata.db
        key = (database.id, db)

        handle = self._handles.get(key)
        if handle is not None:
            return handle

        handle = await self._connect(database, db)
        # A concurrent request may have connected first.
        existing = self._handles.setdefault(key, handle)
        if existing is not handle:
            await handle.close()
        return existing

    async def close(self) -> None:
        handles, self._handles = list(self._handles.values()), {}
        for handle in handles:
            await handle.close()
        logger.info("Closed %s store connection(s)", len(handles))

    async def _connect(self, database: Database, db: int) -> RedisClientHandle | RedisClusterClientHandle:
        if database.connection_type == ConnectionType.NOT_CONNECTED:
            raise ConnectionUnavailableError(
                f"Database {database.id} is not connected", code="CONNECTION_UNAVAILABLE"
            )

        password = database.password.get_secret_value() if database.password else None
        options = {
            "username": database.username,
            "password": password,
            "ssl": database.tls,
            "socket_timeout": self._config.socket_timeout,
            "socket_connect_timeout": self._config.socket_connect_timeout,
            "client_name": self._config.client_name,
            "decode_responses": False,
        }

        handle: RedisClientHandle | RedisClusterClientHandle
        if database.connection_type == ConnectionType.CLUSTER:
            cluster = RedisCluster(
                startup_nodes=[ClusterNode(database.host, database.port)],
                **options,
            )
            handle = RedisClusterClientHandle(cluster)
            connect = handle.initialize
        else:
            client = Redis(host=database.host, port=database.port, db=db, **options)
            handle = RedisClientHandle(client, host=database.host, port=database.port, db=db)
            connect = handle.ping

        try:
            await connect()
        except (ConnectionUnavailableError, ReplyError) as e:
            await handle.close()
            logger.error(
                "Failed to connect to database %s at %s:%s: %s",
                database.id,
                database.host,
                database.port,
                e,
            )
            if isinstance(e, ConnectionUnavailableError):
                raise
            raise ConnectionUnavailableError(e.message, code="CONNECTION_UNAVAILABLE") from e

        logger.info(
            "Connected to %s database %s at %s:%s",
            database.connection_type,
            database.id,
            database.host,
            database.port,
        )
        return handle
