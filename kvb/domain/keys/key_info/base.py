"""Type-specific metadata lookup for a single key."""

from abc import ABC
from typing import Any, ClassVar

from kvb.domain.keys.model import KeyInfo, KeyName, KeyType
from kvb.domain.keys.model.command import KeysCommand, TypeCommand
from kvb.domain.keys.port.client import ClientAccessor, ClientHandle
from kvb.domain.shared.model.client_metadata import ClientMetadata


class TypeInfoStrategy(ABC):
    """Fetches ttl, size, length and encoding for one key of a known type.

    Subclasses name the structural length command. Store errors are never
    caught here; they reach the keys service untouched.
    """

    length_command: ClassVar[TypeCommand]
    with_encoding: ClassVar[bool] = True

    def __init__(self, client_accessor: ClientAccessor) -> None:
        self.client_accessor = client_accessor

    async def get_info(self, metadata: ClientMetadata, key: KeyName, key_type: KeyType) -> KeyInfo:
        client = await self.client_accessor.get_client(metadata)
        length_command = await self.resolve_length_command(client, key)

        commands: list[tuple] = [
            (KeysCommand.TTL, key),
            (KeysCommand.MEMORY_USAGE, key, "SAMPLES", 0),
        ]
        if length_command is not None:
            commands.append((length_command, key))
        if self.with_encoding:
            commands.append((KeysCommand.OBJECT_ENCODING, key))

        replies = iter(await client.pipeline(commands, raise_on_error=False))
        ttl = _required(next(replies))
        size = next(replies)
        length = _required(next(replies)) if length_command is not None else None
        encoding = _required(next(replies)) if self.with_encoding else None

        return KeyInfo(
            name=key,
            type=key_type,
            ttl=int(ttl),
            size=None if isinstance(size, Exception) or size is None else int(size),
            length=None if length is None else int(length),
            encoding=as_text(encoding),
        )

    async def resolve_length_command(self, client: ClientHandle, key: KeyName) -> TypeCommand | None:
        return self.length_command


def _required(reply: Any) -> Any:
    if isinstance(reply, Exception):
        raise reply
    return reply


def as_text(reply: Any) -> str | None:
    if reply is None:
        return None
    if isinstance(reply, bytes):
        return reply.decode("utf-8", errors="replace")
    return str(reply)
