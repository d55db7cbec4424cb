"""In-memory store fakes shared by the keys tests.

The fakes answer the subset of commands the browser sends, with the same
reply shapes redis-py produces for ``decode_responses=False`` connections.
Commands listed in ``refused`` raise ReplyError instead.
"""

import zlib
from collections.abc import Sequence
from fnmatch import fnmatchcase
from typing import Any

import pytest

from kvb.domain.keys.port.client import ClientAccessor, ClientHandle, NodeHandle, ReplyError
from kvb.domain.shared.model.client_metadata import ClientMetadata

ENCODINGS = {
    "string": b"embstr",
    "hash": b"listpack",
    "list": b"quicklist",
    "set": b"hashtable",
    "zset": b"skiplist",
    "stream": b"stream",
}

JSON_TYPES = {dict: b"object", list: b"array", str: b"string", bool: b"boolean", int: b"integer"}


class FakeStore:
    def __init__(self) -> None:
        self.values: dict[bytes, tuple[str, Any]] = {}
        self.ttls: dict[bytes, int] = {}
        self.refused: dict[str, str] = {}
        self.calls: list[tuple] = []

    def set(self, key: bytes, key_type: str, value: Any, ttl: int | None = None) -> None:
        self.values[key] = (key_type, value)
        if ttl is not None:
            self.ttls[key] = ttl

    def refuse(self, command: str, message: str | None = None) -> None:
        self.refused[command] = message or f"NOPERM this user has no permissions to run the '{command}' command"

    def commands(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def execute(self, *args: Any) -> Any:
        name = str(args[0])
        self.calls.append((name, *args[1:]))
        if name in self.refused:
            raise ReplyError(self.refused[name], command=name)
        handler = getattr(self, "_" + name.lower().replace(" ", "_").replace(".", "_"))
        return handler(*args[1:])

    def _scan(self, cursor: int, *options: Any) -> tuple[int, list[bytes]]:
        opts = dict(zip(options[::2], options[1::2]))
        keys = sorted(self.values)
        count = int(opts.get("COUNT", 10))
        batch = keys[cursor : cursor + count]
        next_cursor = cursor + count if cursor + count < len(keys) else 0
        match = opts.get("MATCH", "*")
        found = [key for key in batch if fnmatchcase(key.decode(), match)]
        if "TYPE" in opts:
            found = [key for key in found if self.values[key][0] == opts["TYPE"]]
        return next_cursor, found

    def _type(self, key: bytes) -> str:
        return self.values[key][0] if key in self.values else "none"

    def _ttl(self, key: bytes) -> int:
        if key not in self.values:
            return -2
        return self.ttls.get(key, -1)

    def _memory_usage(self, key: bytes, *options: Any) -> int | None:
        if key not in self.values:
            return None
        return 50 + len(repr(self.values[key][1]))

    def _exists(self, *keys: bytes) -> int:
        return sum(1 for key in keys if key in self.values)

    def _del(self, *keys: bytes) -> int:
        removed = 0
        for key in keys:
            if self.values.pop(key, None) is not None:
                self.ttls.pop(key, None)
                removed += 1
        return removed

    def _renamenx(self, key: bytes, new_key: bytes) -> int:
        if key not in self.values:
            raise ReplyError("ERR no such key", command="RENAMENX")
        if new_key in self.values:
            return 0
        self.values[new_key] = self.values.pop(key)
        if key in self.ttls:
            self.ttls[new_key] = self.ttls.pop(key)
        return 1

    def _expire(self, key: bytes, ttl: int) -> int:
        if key not in self.values:
            return 0
        if ttl <= 0:
            self._del(key)
        else:
            self.ttls[key] = ttl
        return 1

    def _persist(self, key: bytes) -> int:
        return 1 if self.ttls.pop(key, None) is not None else 0

    def _dbsize(self) -> int:
        return len(self.values)

    def _info(self, section: str) -> dict:
        return {"db0": {"keys": len(self.values), "expires": len(self.ttls)}} if self.values else {}

    def _object_encoding(self, key: bytes) -> bytes:
        return ENCODINGS[self.values[key][0]]

    def _length(self, key: bytes) -> int:
        return len(self.values[key][1]) if key in self.values else 0

    _strlen = _hlen = _llen = _scard = _zcard = _xlen = _length
    _json_objlen = _json_arrlen = _json_strlen = _length

    def _json_type(self, key: bytes) -> list[bytes]:
        return [JSON_TYPES.get(type(self.values[key][1]), b"null")]


def run_pipeline(execute, commands: Sequence[Sequence[Any]], raise_on_error: bool) -> list[Any]:
    replies: list[Any] = []
    for command in commands:
        try:
            replies.append(execute(*command))
        except ReplyError as e:
            if raise_on_error:
                raise
            replies.append(e)
    return replies


class FakeNode(NodeHandle):
    def __init__(self, store: FakeStore, host: str = "127.0.0.1", port: int = 6379) -> None:
        self.store = store
        self.host = host
        self.port = port

    async def execute(self, *args: Any) -> Any:
        return self.store.execute(*args)


class FakeClient(ClientHandle, NodeHandle):
    """Standalone connection over a single store."""

    def __init__(self, store: FakeStore, db: int = 0) -> None:
        self.store = store
        self.host = "127.0.0.1"
        self.port = 6379
        self._db = db

    @property
    def is_cluster(self) -> bool:
        return False

    @property
    def db(self) -> int:
        return self._db

    async def execute(self, *args: Any) -> Any:
        return self.store.execute(*args)

    async def pipeline(self, commands, *, raise_on_error: bool = True) -> list[Any]:
        return run_pipeline(self.store.execute, commands, raise_on_error)

    async def nodes(self) -> list[NodeHandle]:
        return [self]


class FakeClusterClient(ClientHandle):
    """Cluster connection routing each key to one of several primaries."""

    def __init__(self, size: int = 3) -> None:
        self.primaries = [FakeNode(FakeStore(), "10.0.0.1", 7000 + index) for index in range(size)]

    @property
    def is_cluster(self) -> bool:
        return True

    @property
    def db(self) -> int:
        return 0

    def node_for(self, key: bytes) -> FakeNode:
        return self.primaries[zlib.crc32(key) % len(self.primaries)]

    def set(self, key: bytes, key_type: str, value: Any, ttl: int | None = None) -> None:
        self.node_for(key).store.set(key, key_type, value, ttl)

    def all_keys(self) -> set[bytes]:
        return {key for node in self.primaries for key in node.store.values}

    def _execute(self, *args: Any) -> Any:
        if str(args[0]) == "DEL":
            return sum(self.node_for(key).store.execute("DEL", key) for key in args[1:])
        if len(args) > 1 and isinstance(args[1], bytes):
            return self.node_for(args[1]).store.execute(*args)
        return self.primaries[0].store.execute(*args)

    async def execute(self, *args: Any) -> Any:
        return self._execute(*args)

    async def pipeline(self, commands, *, raise_on_error: bool = True) -> list[Any]:
        return run_pipeline(self._execute, commands, raise_on_error)

    async def nodes(self) -> list[NodeHandle]:
        return list(self.primaries)


class FakeAccessor(ClientAccessor):
    def __init__(self, client: ClientHandle) -> None:
        self.client = client
        self.requests: list[ClientMetadata] = []

    async def get_client(self, metadata: ClientMetadata) -> ClientHandle:
        self.requests.append(metadata)
        return self.client


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def client(store: FakeStore) -> FakeClient:
    return FakeClient(store)


@pytest.fixture
def accessor(client: FakeClient) -> FakeAccessor:
    return FakeAccessor(client)


@pytest.fixture
def cluster_client() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def cluster_accessor(cluster_client: FakeClusterClient) -> FakeAccessor:
    return FakeAccessor(cluster_client)


@pytest.fixture
def metadata() -> ClientMetadata:
    return ClientMetadata(database_id="db-1")
