"""KeysService - browse, inspect and manage keys of a registered database."""

import logging

import logfire

from kvb.domain.database.service import DatabaseService
from kvb.domain.history.model import CreateBrowserHistory, ScanFilter
from kvb.domain.keys.key_info import KeyInfoProvider
from kvb.domain.keys.messages import (
    KEY_NOT_EXIST,
    NEW_KEY_NAME_EXIST,
    SCAN_PER_KEY_TYPE_NOT_SUPPORT,
)
from kvb.domain.keys.model import (
    DEFAULT_MATCH,
    DeleteKeysResult,
    GetKeys,
    GetKeysInfo,
    GetKeysResult,
    KeyInfo,
    KeyName,
    KeyTtlResult,
    KeyType,
    RenameKey,
    RenameKeyResult,
    UpdateKeyTtl,
)
from kvb.domain.keys.model.command import KeysCommand
from kvb.domain.keys.port.client import ClientAccessor, ReplyError
from kvb.domain.keys.port.history import HistoryRecorder
from kvb.domain.keys.port.recommendation import RecommendationChecks
from kvb.domain.keys.scanner import Scanner
from kvb.domain.keys.util.errors import is_no_such_key, is_syntax_error, translate_store_error
from kvb.domain.recommendation.model import RecommendationName
from kvb.domain.shared.error import KVBError, NotFoundError, ValidationError
from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.domain.shared.service import Service

logger = logging.getLogger(__name__)

NO_EXPIRY = -1
KEY_ABSENT = -2


class KeysService(Service):
    """Orchestrates scans and key metadata lookups.

    Store error replies are translated here and nowhere else: a permission
    error becomes ForbiddenError, anything else is logged and surfaced as an
    opaque StoreCommandError. KVB errors raised by collaborators pass through.
    """

    database_service: DatabaseService
    client_accessor: ClientAccessor
    scanner: Scanner
    key_info_provider: KeyInfoProvider
    history: HistoryRecorder
    recommendations: RecommendationChecks

    async def get_keys(self, metadata: ClientMetadata, dto: GetKeys) -> list[GetKeysResult]:
        """Continue a scan; returns one result per scanned node.

        Patterns other than the match-all wildcard are recorded in the
        search history before returning.
        """
        try:
            with logfire.span("GetKeys", database_id=metadata.database_id, match=dto.match):
                database = await self.database_service.get(metadata.database_id)
                strategy = self.scanner.get_strategy(database.connection_type)
                result = await strategy.get_keys(metadata, dto)
        except ReplyError as e:
            if dto.type is not None and is_syntax_error(e):
                raise ValidationError(
                    SCAN_PER_KEY_TYPE_NOT_SUPPORT, code="SCAN_PER_KEY_TYPE_NOT_SUPPORT"
                ) from e
            raise self._store_error(e, "get keys") from e

        if dto.match != DEFAULT_MATCH:
            await self.history.create(
                metadata,
                CreateBrowserHistory(filter=ScanFilter(type=dto.type, match=dto.match)),
            )

        self.recommendations.check(
            metadata,
            RecommendationName.USE_SMALLER_KEYS,
            result[0].total if result else None,
        )
        return result

    async def get_keys_info(self, metadata: ClientMetadata, dto: GetKeysInfo) -> list[KeyInfo]:
        """Metadata for keys the caller already knows by name."""
        try:
            with logfire.span("GetKeysInfo", database_id=metadata.database_id, keys=len(dto.keys)):
                client = await self.client_accessor.get_client(metadata)
                strategy = self.scanner.for_client(client.is_cluster)
                result = await strategy.get_keys_info(client, dto.keys, dto.type)
        except ReplyError as e:
            raise self._store_error(e, "get keys info") from e

        payload = {"keys": result, "client": client, "database_id": metadata.database_id}
        self.recommendations.check(metadata, RecommendationName.SEARCH_JSON, payload)
        self.recommendations.check(metadata, RecommendationName.FUNCTIONS_WITH_STREAMS, payload)
        return result

    async def get_key_info(self, metadata: ClientMetadata, key: KeyName) -> KeyInfo:
        try:
            with logfire.span("GetKeyInfo", database_id=metadata.database_id):
                client = await self.client_accessor.get_client(metadata)
                key_type = KeyType(await client.execute(KeysCommand.TYPE, key))
                if key_type == KeyType.NONE:
                    raise NotFoundError(KEY_NOT_EXIST, code="KEY_NOT_EXIST")

                strategy = self.key_info_provider.get_strategy(key_type)
                result = await strategy.get_info(metadata, key, key_type)
        except ReplyError as e:
            raise self._store_error(e, "get key info") from e

        for name in (
            RecommendationName.BIG_SETS,
            RecommendationName.BIG_STRINGS,
            RecommendationName.COMPRESSION_FOR_LIST,
        ):
            self.recommendations.check(metadata, name, result)
        return result

    async def delete_keys(self, metadata: ClientMetadata, keys: list[KeyName]) -> DeleteKeysResult:
        try:
            client = await self.client_accessor.get_client(metadata)
            affected = await client.execute(KeysCommand.DEL, *keys)
        except ReplyError as e:
            raise self._store_error(e, "delete keys") from e

        if not affected:
            raise NotFoundError(KEY_NOT_EXIST, code="KEY_NOT_EXIST")
        return DeleteKeysResult(affected=affected)

    async def rename_key(self, metadata: ClientMetadata, dto: RenameKey) -> RenameKeyResult:
        """Rename a key unless the new name is taken.

        The existence check and RENAMENX are two round trips. A key deleted
        in between makes RENAMENX fail with "no such key", reported as
        NotFoundError like an absent key.
        """
        try:
            client = await self.client_accessor.get_client(metadata)
            if not await client.execute(KeysCommand.EXISTS, dto.key_name):
                raise NotFoundError(KEY_NOT_EXIST, code="KEY_NOT_EXIST")
            renamed = await client.execute(KeysCommand.RENAMENX, dto.key_name, dto.new_key_name)
        except ReplyError as e:
            if is_no_such_key(e):
                raise NotFoundError(KEY_NOT_EXIST, code="KEY_NOT_EXIST") from e
            raise self._store_error(e, "rename key") from e

        if not renamed:
            raise ValidationError(NEW_KEY_NAME_EXIST, code="NEW_KEY_NAME_EXIST")
        return RenameKeyResult(key_name=dto.new_key_name)

    async def update_ttl(self, metadata: ClientMetadata, dto: UpdateKeyTtl) -> KeyTtlResult:
        if dto.ttl == NO_EXPIRY:
            return await self.remove_key_expiration(metadata, dto)
        return await self.set_key_expiration(metadata, dto)

    async def set_key_expiration(self, metadata: ClientMetadata, dto: UpdateKeyTtl) -> KeyTtlResult:
        """EXPIRE the key; a negative ttl deletes it and is reported as -2."""
        try:
            client = await self.client_accessor.get_client(metadata)
            updated = await client.execute(KeysCommand.EXPIRE, dto.key_name, dto.ttl)
        except ReplyError as e:
            raise self._store_error(e, "set key expiration") from e

        if not updated:
            raise NotFoundError(KEY_NOT_EXIST, code="KEY_NOT_EXIST")
        return KeyTtlResult(ttl=dto.ttl if dto.ttl >= 0 else KEY_ABSENT)

    async def remove_key_expiration(self, metadata: ClientMetadata, dto: UpdateKeyTtl) -> KeyTtlResult:
        try:
            client = await self.client_accessor.get_client(metadata)
            current_ttl = await client.execute(KeysCommand.TTL, dto.key_name)
            if current_ttl == KEY_ABSENT:
                raise NotFoundError(KEY_NOT_EXIST, code="KEY_NOT_EXIST")
            if current_ttl > 0:
                await client.execute(KeysCommand.PERSIST, dto.key_name)
        except ReplyError as e:
            raise self._store_error(e, "remove key expiration") from e

        return KeyTtlResult(ttl=NO_EXPIRY)

    def _store_error(self, error: ReplyError, operation: str) -> KVBError:
        translated = translate_store_error(error)
        logger.error(f"Failed to {operation}: {error.message}")
        return translated
