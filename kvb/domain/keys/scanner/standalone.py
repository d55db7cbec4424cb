"""Scanner for single-node databases."""

import logging
from collections.abc import Sequence

from kvb.domain.keys.model import GetKeys, GetKeysResult, KeyInfo, KeyName, KeyType
from kvb.domain.keys.model.command import KeysCommand
from kvb.domain.keys.port.client import ClientHandle, NodeHandle
from kvb.domain.keys.scanner.base import (
    ScannerStrategy,
    get_total,
    parse_scan_reply,
    scan_command,
    to_key_info,
)
from kvb.domain.keys.scanner.cursor import parse_standalone_cursor
from kvb.domain.shared.model.client_metadata import ClientMetadata

logger = logging.getLogger(__name__)


class StandaloneScanner(ScannerStrategy):
    async def get_keys(self, metadata: ClientMetadata, dto: GetKeys) -> list[GetKeysResult]:
        client = await self.client_accessor.get_client(metadata)
        [node_handle] = await client.nodes()

        node = GetKeysResult(
            cursor=parse_standalone_cursor(dto.cursor),
            host=node_handle.host,
            port=node_handle.port,
        )
        node.total = await get_total(node_handle, client.db)
        if node.total == 0:
            node.cursor = 0
            return [node]

        if self.is_exact_match(dto):
            node.cursor = 0
            node.scanned = 1 if node.total is None else node.total
            node.keys = await self.get_exact_key(client, dto)
            return [node]

        keys = await self._scan(node_handle, node, dto)
        node.keys = await self.resolve_keys(client, keys, dto)
        return [node]

    async def _scan(self, node_handle: NodeHandle, node: GetKeysResult, dto: GetKeys) -> list[KeyName]:
        """Iterate until enough keys matched, the cursor wrapped, or the threshold was hit."""
        count = self.count_hint(dto)
        keys: list[KeyName] = []
        while True:
            reply = await node_handle.execute(*scan_command(node.cursor, dto, count))
            node.cursor, batch = parse_scan_reply(reply)
            node.scanned += count
            keys.extend(batch)
            if node.cursor == 0 or len(keys) >= dto.count or node.scanned >= self.settings.threshold:
                break

        logger.debug(
            "Scanned %s entries on %s, %s matched, cursor=%s",
            node.scanned,
            node_handle.node_id,
            len(keys),
            node.cursor,
        )
        return keys

    async def get_keys_info(
        self,
        client: ClientHandle,
        keys: Sequence[KeyName],
        key_type: KeyType | None = None,
    ) -> list[KeyInfo]:
        """Resolve all keys in a single pipelined round trip."""
        commands: list[tuple] = []
        for key in keys:
            if key_type is None:
                commands.append((KeysCommand.TYPE, key))
            commands.append((KeysCommand.TTL, key))
            commands.append((KeysCommand.MEMORY_USAGE, key, "SAMPLES", 0))

        replies = await client.pipeline(commands, raise_on_error=False)

        step = 2 if key_type is not None else 3
        result = []
        for index, key in enumerate(keys):
            chunk = replies[index * step : (index + 1) * step]
            if key_type is None:
                type_reply, ttl, size = chunk
            else:
                type_reply = key_type
                ttl, size = chunk
            result.append(to_key_info(key, type_reply, ttl, size))
        return result
