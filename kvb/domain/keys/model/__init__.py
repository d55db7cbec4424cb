from kvb.domain.keys.model.dto import (
    DeleteKeysResult,
    GetKeys,
    GetKeysInfo,
    KeyTtlResult,
    RenameKey,
    RenameKeyResult,
    UpdateKeyTtl,
)
from kvb.domain.keys.model.key import (
    DEFAULT_MATCH,
    GetKeysResult,
    KeyInfo,
    KeyName,
    KeyType,
)

__all__ = [
    "DEFAULT_MATCH",
    "DeleteKeysResult",
    "GetKeys",
    "GetKeysInfo",
    "GetKeysResult",
    "KeyInfo",
    "KeyName",
    "KeyTtlResult",
    "KeyType",
    "RenameKey",
    "RenameKeyResult",
    "UpdateKeyTtl",
]
