"""Scanner for cluster databases.

Every primary keeps its own cursor. A call continues each unfinished primary
in lock-step rounds and reports one result per primary; the caller carries
the combined cursor to the next call.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from kvb.domain.keys.model import GetKeys, GetKeysResult, KeyInfo, KeyName, KeyType
from kvb.domain.keys.model.command import KeysCommand
from kvb.domain.keys.port.client import ClientHandle, NodeHandle, ReplyError
from kvb.domain.keys.scanner.base import (
    ScannerStrategy,
    get_total,
    parse_scan_reply,
    scan_command,
    to_key_info,
)
from kvb.domain.keys.scanner.cursor import INITIAL_CURSOR, parse_cluster_cursor
from kvb.domain.shared.model.client_metadata import ClientMetadata

logger = logging.getLogger(__name__)


@dataclass
class _NodeScan:
    handle: NodeHandle
    result: GetKeysResult
    names: list[KeyName] = field(default_factory=list)
    started: bool = False

    @property
    def finished(self) -> bool:
        return self.started and self.result.cursor == 0


class ClusterScanner(ScannerStrategy):
    async def get_keys(self, metadata: ClientMetadata, dto: GetKeys) -> list[GetKeysResult]:
        client = await self.client_accessor.get_client(metadata)
        nodes = self._nodes_to_scan(await client.nodes(), dto.cursor)
        if not nodes:
            return []

        totals = await asyncio.gather(*(get_total(node.handle, 0) for node in nodes))
        for node, total in zip(nodes, totals):
            node.result.total = total
            if total == 0:
                node.result.cursor = 0
                node.started = True

        if self.is_exact_match(dto):
            for node in nodes:
                node.result.cursor = 0
                node.result.scanned = 1 if node.result.total is None else node.result.total
            nodes[0].result.keys = await self.get_exact_key(client, dto)
            return [node.result for node in nodes]

        await self._scan(nodes, dto)

        for node in nodes:
            node.result.keys = await self.resolve_keys(client, node.names, dto)
        return [node.result for node in nodes]

    def _nodes_to_scan(self, primaries: list[NodeHandle], cursor: str) -> list[_NodeScan]:
        """Pair primaries with their resume cursors.

        A fresh cursor starts every primary; otherwise only primaries listed
        with a non-zero cursor are continued.
        """
        if cursor == INITIAL_CURSOR:
            return [
                _NodeScan(handle=node, result=GetKeysResult(host=node.host, port=node.port))
                for node in primaries
            ]

        cursors = parse_cluster_cursor(cursor)
        by_id = {node.node_id: node for node in primaries}
        for node_id in cursors.keys() - by_id.keys():
            logger.warning("Skipping unknown cluster node in cursor: %s", node_id)

        return [
            _NodeScan(
                handle=by_id[node_id],
                result=GetKeysResult(cursor=value, host=by_id[node_id].host, port=by_id[node_id].port),
                started=True,
            )
            for node_id, value in cursors.items()
            if node_id in by_id
        ]

    async def _scan(self, nodes: list[_NodeScan], dto: GetKeys) -> None:
        count = self.count_hint(dto)
        while True:
            pending = [node for node in nodes if not node.finished]
            if not pending:
                break

            replies = await asyncio.gather(
                *(node.handle.execute(*scan_command(node.result.cursor, dto, count)) for node in pending)
            )
            for node, reply in zip(pending, replies):
                node.result.cursor, batch = parse_scan_reply(reply)
                node.result.scanned += count
                node.started = True
                node.names.extend(batch)

            matched = sum(len(node.names) for node in nodes)
            scanned = sum(node.result.scanned for node in nodes)
            if matched >= dto.count or scanned >= self.settings.threshold:
                break

        logger.debug(
            "Cluster scan round finished: %s",
            ", ".join(
                f"{node.handle.node_id} cursor={node.result.cursor} matched={len(node.names)}"
                for node in nodes
            ),
        )

    async def get_keys_info(
        self,
        client: ClientHandle,
        keys: Sequence[KeyName],
        key_type: KeyType | None = None,
    ) -> list[KeyInfo]:
        """Resolve keys one by one; each key may live on a different slot."""
        return list(await asyncio.gather(*(self._key_info(client, key, key_type) for key in keys)))

    async def _key_info(self, client: ClientHandle, key: KeyName, key_type: KeyType | None) -> KeyInfo:
        type_reply = key_type if key_type is not None else await client.execute(KeysCommand.TYPE, key)
        ttl, size = await asyncio.gather(
            client.execute(KeysCommand.TTL, key),
            self._memory_usage(client, key),
        )
        return to_key_info(key, type_reply, ttl, size)

    @staticmethod
    async def _memory_usage(client: ClientHandle, key: KeyName) -> int | None:
        try:
            return await client.execute(KeysCommand.MEMORY_USAGE, key, "SAMPLES", 0)
        except ReplyError as e:
            logger.debug("MEMORY USAGE unavailable for key: %s", e.message)
            return None
