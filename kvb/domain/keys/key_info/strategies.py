"""Concrete type-info strategies, one per supported data type."""

import logging

from kvb.domain.keys.key_info.base import TypeInfoStrategy, as_text
from kvb.domain.keys.model import KeyName
from kvb.domain.keys.model.command import TypeCommand
from kvb.domain.keys.port.client import ClientHandle

logger = logging.getLogger(__name__)


class StringTypeInfoStrategy(TypeInfoStrategy):
    length_command = TypeCommand.STRLEN


class HashTypeInfoStrategy(TypeInfoStrategy):
    length_command = TypeCommand.HLEN


class ListTypeInfoStrategy(TypeInfoStrategy):
    length_command = TypeCommand.LLEN


class SetTypeInfoStrategy(TypeInfoStrategy):
    length_command = TypeCommand.SCARD


class ZSetTypeInfoStrategy(TypeInfoStrategy):
    length_command = TypeCommand.ZCARD


class StreamTypeInfoStrategy(TypeInfoStrategy):
    length_command = TypeCommand.XLEN


class JsonTypeInfoStrategy(TypeInfoStrategy):
    """RedisJSON documents: the length command depends on the root value type.

    Scalars (numbers, booleans, null) have no length. Module types carry no
    OBJECT ENCODING.
    """

    with_encoding = False

    _LENGTH_BY_ROOT_TYPE = {
        "object": TypeCommand.JSON_OBJLEN,
        "array": TypeCommand.JSON_ARRLEN,
        "string": TypeCommand.JSON_STRLEN,
    }

    async def resolve_length_command(self, client: ClientHandle, key: KeyName) -> TypeCommand | None:
        reply = await client.execute(TypeCommand.JSON_TYPE, key)
        # JSONPath queries reply with a list, the legacy root path with a scalar.
        if isinstance(reply, list):
            reply = reply[0] if reply else None
        root_type = as_text(reply)
        logger.debug("JSON root type: %s", root_type)
        return self._LENGTH_BY_ROOT_TYPE.get(root_type or "")
