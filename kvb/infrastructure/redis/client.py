"""ClientHandle adapters over redis-py's asyncio clients.

Replies keep raw bytes (``decode_responses=False``). redis-py exceptions are
converted at this boundary: error replies become ReplyError, lost
connections become ConnectionUnavailableError.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from redis.asyncio import Redis, RedisCluster
from redis.asyncio.cluster import ClusterNode
from redis.exceptions import ClusterDownError, NoPermissionError, RedisClusterException, ResponseError
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from kvb.domain.keys.model.command import KeysCommand
from kvb.domain.keys.port.client import ClientHandle, NodeHandle, ReplyError, StoreCommand
from kvb.domain.shared.error import ConnectionUnavailableError

logger = logging.getLogger(__name__)


def to_reply_error(error: Exception, command: Any = None) -> ReplyError:
    """redis-py strips the NOPERM prefix into the exception class; put it back."""
    message = str(error)
    if isinstance(error, NoPermissionError):
        message = f"NOPERM {message}"
    return ReplyError(message, command=None if command is None else str(command))


@contextmanager
def redis_errors(command: Any = None) -> Iterator[None]:
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError, ClusterDownError) as e:
        logger.warning("Connection failure running %s: %s", command, e)
        raise ConnectionUnavailableError(str(e), code="CONNECTION_UNAVAILABLE") from e
    except (ResponseError, RedisClusterException) as e:
        raise to_reply_error(e, command) from e


def _convert_replies(replies: list[Any], commands: Sequence[StoreCommand]) -> list[Any]:
    return [
        to_reply_error(reply, command[0]) if isinstance(reply, (ResponseError, RedisClusterException)) else reply
        for reply, command in zip(replies, commands)
    ]


class RedisClientHandle(ClientHandle, NodeHandle):
    """Standalone server; it is also its own single node."""

    def __init__(self, client: Redis, host: str, port: int, db: int = 0) -> None:
        self._client = client
        self.host = host
        self.port = port
        self._db = db

    @property
    def is_cluster(self) -> bool:
        return False

    @property
    def db(self) -> int:
        return self._db

    async def execute(self, *args: Any) -> Any:
        with redis_errors(args[0]):
            return await self._client.execute_command(*args)

    async def pipeline(
        self, commands: Sequence[StoreCommand], *, raise_on_error: bool = True
    ) -> list[Any]:
        pipe = self._client.pipeline(transaction=False)
        for command in commands:
            pipe.execute_command(*command)
        with redis_errors("PIPELINE"):
            replies = await pipe.execute(raise_on_error=raise_on_error)
        return _convert_replies(replies, commands)

    async def nodes(self) -> list[NodeHandle]:
        return [self]

    async def ping(self) -> None:
        with redis_errors("PING"):
            await self._client.ping()

    async def close(self) -> None:
        await self._client.aclose()


class RedisClusterNodeHandle(NodeHandle):
    """One cluster primary, addressed directly."""

    def __init__(self, client: RedisCluster, node: ClusterNode) -> None:
        self._client = client
        self._node = node
        self.host = node.host
        self.port = node.port

    async def execute(self, *args: Any) -> Any:
        with redis_errors(args[0]):
            reply = await self._client.execute_command(*args, target_nodes=self._node)
        if args[0] == KeysCommand.SCAN:
            return self._unwrap_scan(reply)
        return reply

    def _unwrap_scan(self, reply: Any) -> tuple[int, list[Any]]:
        # Cluster result callbacks key the SCAN cursor by node name.
        cursor, keys = reply
        if isinstance(cursor, dict):
            cursor = cursor[self._node.name]
        return int(cursor), list(keys)


class RedisClusterClientHandle(ClientHandle):
    """Cluster-aware handle; single commands are routed by key slot."""

    def __init__(self, client: RedisCluster) -> None:
        self._client = client

    @property
    def is_cluster(self) -> bool:
        return True

    @property
    def db(self) -> int:
        return 0

    async def execute(self, *args: Any) -> Any:
        with redis_errors(args[0]):
            # DEL over keys in different slots has to be split per slot.
            if args[0] == KeysCommand.DEL and len(args) > 2:
                return await self._client.delete(*args[1:])
            return await self._client.execute_command(*args)

    async def pipeline(
        self, commands: Sequence[StoreCommand], *, raise_on_error: bool = True
    ) -> list[Any]:
        pipe = self._client.pipeline()
        for command in commands:
            pipe.execute_command(*command)
        with redis_errors("PIPELINE"):
            replies = await pipe.execute(raise_on_error=raise_on_error)
        return _convert_replies(replies, commands)

    async def nodes(self) -> list[NodeHandle]:
        return [RedisClusterNodeHandle(self._client, node) for node in self._client.get_primaries()]

    async def initialize(self) -> None:
        with redis_errors("CLUSTER SLOTS"):
            await self._client.initialize()

    async def close(self) -> None:
        await self._client.aclose()
