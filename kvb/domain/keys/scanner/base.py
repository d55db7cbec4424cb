"""Scanner strategy contract and helpers shared by both topologies."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from kvb.domain.keys.model import GetKeys, GetKeysResult, KeyInfo, KeyName, KeyType
from kvb.domain.keys.model.command import KeysCommand
from kvb.domain.keys.port.client import ClientAccessor, ClientHandle, NodeHandle, ReplyError
from kvb.domain.keys.scanner.glob import is_glob, unescape_glob
from kvb.domain.shared.model.client_metadata import ClientMetadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanSettings:
    """Limits applied to one getKeys call."""

    count_max: int = 2000  # upper bound for the SCAN COUNT hint
    threshold: int = 10000  # stop iterating once this many entries were scanned


class ScannerStrategy(ABC):
    """Cursor iteration and batched metadata lookup for one topology."""

    def __init__(self, client_accessor: ClientAccessor, settings: ScanSettings | None = None) -> None:
        self.client_accessor = client_accessor
        self.settings = settings or ScanSettings()

    @abstractmethod
    async def get_keys(self, metadata: ClientMetadata, dto: GetKeys) -> list[GetKeysResult]:
        """Continue the scan described by ``dto.cursor``; one result per node."""
        ...

    @abstractmethod
    async def get_keys_info(
        self,
        client: ClientHandle,
        keys: Sequence[KeyName],
        key_type: KeyType | None = None,
    ) -> list[KeyInfo]:
        """Fetch type, ttl and size for keys the caller already knows.

        When ``key_type`` is given the TYPE probe is skipped and every key is
        reported with that type.
        """
        ...

    async def resolve_keys(
        self, client: ClientHandle, keys: list[KeyName], dto: GetKeys
    ) -> list[KeyInfo]:
        """Turn scanned names into the result's key entries."""
        if not keys:
            return []
        if dto.keys_info:
            return await self.get_keys_info(client, keys, dto.type)
        return [KeyInfo(name=key, type=dto.type or KeyType.UNKNOWN) for key in keys]

    async def get_exact_key(self, client: ClientHandle, dto: GetKeys) -> list[KeyInfo]:
        """Look a non-glob pattern up directly instead of scanning for it."""
        key = unescape_glob(dto.match).encode()
        key_type = KeyType(await client.execute(KeysCommand.TYPE, key))
        if key_type == KeyType.NONE or (dto.type is not None and key_type != dto.type):
            return []
        infos = await self.resolve_keys(client, [key], dto.model_copy(update={"type": key_type}))
        return [info for info in infos if info.ttl != -2]

    def count_hint(self, dto: GetKeys) -> int:
        return min(dto.count, self.settings.count_max)

    @staticmethod
    def is_exact_match(dto: GetKeys) -> bool:
        return not is_glob(dto.match)


def scan_command(cursor: int, dto: GetKeys, count: int) -> list[Any]:
    args: list[Any] = [KeysCommand.SCAN, cursor, "MATCH", dto.match, "COUNT", count]
    if dto.type:
        args.extend(["TYPE", dto.type.value])
    return args


def parse_scan_reply(reply: Any) -> tuple[int, list[KeyName]]:
    """Accept both the raw ``[cursor, keys]`` reply and redis-py's parsed tuple."""
    cursor, keys = reply
    return int(cursor), list(keys)


async def get_total(node: NodeHandle, db: int) -> int | None:
    """Estimated number of keys on a node.

    Falls back to INFO keyspace when DBSIZE is refused, and to None when both
    are refused.
    """
    try:
        return int(await node.execute(KeysCommand.DBSIZE))
    except ReplyError as e:
        logger.debug("DBSIZE refused on %s: %s", node.node_id, e.message)

    try:
        info = await node.execute(KeysCommand.INFO, "keyspace")
    except ReplyError as e:
        logger.debug("INFO keyspace refused on %s: %s", node.node_id, e.message)
        return None
    return parse_keyspace_total(info, db)


def parse_keyspace_total(info: Any, db: int) -> int:
    """Key count of ``db`` from an INFO keyspace reply (parsed dict or raw text)."""
    if isinstance(info, dict):
        keyspace = info.get(f"db{db}")
        if isinstance(keyspace, dict):
            return int(keyspace.get("keys", 0))
        return 0

    text = info.decode() if isinstance(info, bytes) else str(info)
    prefix = f"db{db}:"
    for line in text.splitlines():
        if line.startswith(prefix):
            fields = dict(item.split("=", 1) for item in line[len(prefix) :].split(","))
            return int(fields.get("keys", 0))
    return 0


def to_key_info(key: KeyName, key_type: Any, ttl: Any, size: Any) -> KeyInfo:
    """Assemble one KeyInfo from positional replies.

    A failed TYPE or TTL reply aborts the batch; a failed MEMORY USAGE reply
    (refused or unsupported) leaves ``size`` unset.
    """
    for reply in (key_type, ttl):
        if isinstance(reply, Exception):
            raise reply
    if isinstance(size, Exception):
        logger.debug("MEMORY USAGE unavailable for key: %s", size)
        size = None

    ttl = int(ttl)
    resolved_type = KeyType.NONE if ttl == -2 else KeyType(key_type)
    return KeyInfo(
        name=key,
        type=resolved_type,
        ttl=ttl,
        size=None if size is None else int(size),
    )
