from kvb.domain.keys.key_info.base import TypeInfoStrategy
from kvb.domain.keys.key_info.strategies import (
    HashTypeInfoStrategy,
    JsonTypeInfoStrategy,
    ListTypeInfoStrategy,
    SetTypeInfoStrategy,
    StreamTypeInfoStrategy,
    StringTypeInfoStrategy,
    ZSetTypeInfoStrategy,
)
from kvb.domain.keys.model import KeyType
from kvb.domain.keys.port.client import ClientAccessor
from kvb.domain.shared.error import UnsupportedTypeError


class KeyInfoProvider:
    """Maps a key type to the strategy that knows how to describe it."""

    def __init__(self, strategies: dict[KeyType, TypeInfoStrategy]) -> None:
        self._strategies = strategies

    @classmethod
    def default(cls, client_accessor: ClientAccessor) -> "KeyInfoProvider":
        return cls(
            {
                KeyType.STRING: StringTypeInfoStrategy(client_accessor),
                KeyType.HASH: HashTypeInfoStrategy(client_accessor),
                KeyType.LIST: ListTypeInfoStrategy(client_accessor),
                KeyType.SET: SetTypeInfoStrategy(client_accessor),
                KeyType.ZSET: ZSetTypeInfoStrategy(client_accessor),
                KeyType.STREAM: StreamTypeInfoStrategy(client_accessor),
                KeyType.JSON: JsonTypeInfoStrategy(client_accessor),
            }
        )

    def get_strategy(self, key_type: KeyType) -> TypeInfoStrategy:
        """Raises UnsupportedTypeError for ``none``, ``unknown`` and unmapped types."""
        strategy = self._strategies.get(key_type)
        if strategy is None:
            raise UnsupportedTypeError(
                f"Unsupported key type: {key_type}", code="UNSUPPORTED_KEY_TYPE"
            )
        return strategy
