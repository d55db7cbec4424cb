"""Key metadata value types."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

# A key name is an opaque byte sequence; never re-encoded inside the domain.
KeyName = bytes

DEFAULT_MATCH = "*"


class KeyType(StrEnum):
    """Data-type tags reported by the TYPE command.

    Tags the browser does not know about collapse to ``UNKNOWN``.
    """

    STRING = "string"
    LIST = "list"
    SET = "set"
    ZSET = "zset"
    HASH = "hash"
    STREAM = "stream"
    JSON = "ReJSON-RL"
    NONE = "none"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: Any) -> "KeyType":
        if isinstance(value, bytes):
            return cls(value.decode("utf-8", errors="replace"))
        return cls.UNKNOWN


class KeyInfo(BaseModel):
    """Metadata for one key. Produced fresh per request."""

    name: KeyName
    type: KeyType = KeyType.UNKNOWN
    ttl: int | None = None  # -1 no expiry, -2 absent key
    size: int | None = None  # approximate bytes, None when not reported
    length: int | None = None  # type-specific cardinality
    encoding: str | None = None  # internal object encoding


class GetKeysResult(BaseModel):
    """Scan result for a single node.

    ``cursor`` is that node's own resume position; 0 means the node is done.
    """

    cursor: int = 0
    total: int | None = None
    scanned: int = 0
    keys: list[KeyInfo] = Field(default_factory=list)
    host: str | None = None
    port: int | None = None
