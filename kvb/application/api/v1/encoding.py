"""Key name encodings at the HTTP boundary.

Key names are bytes everywhere below the routes. Requests may send a name as
text or as a Buffer object (``{"type": "Buffer", "data": [...]}``); the
``encoding`` query parameter decides how text is turned into bytes and how
names are rendered in responses.
"""

import re
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

from kvb.domain.keys.model import KeyName


class KeyEncoding(StrEnum):
    UTF8 = "utf8"
    ASCII = "ascii"
    BUFFER = "buffer"


class BufferPayload(BaseModel):
    type: Literal["Buffer"] = "Buffer"
    data: list[int] = Field(default_factory=list)


RequestKeyName = str | BufferPayload
ResponseKeyName = str | BufferPayload

_PRINTABLE = range(0x20, 0x7F)
_BACKSLASH = 0x5C
_ESCAPE = re.compile(rb"\\(x[0-9a-fA-F]{2}|\\)")


def to_key_name(value: RequestKeyName, encoding: KeyEncoding = KeyEncoding.UTF8) -> KeyName:
    if isinstance(value, BufferPayload):
        return bytes(value.data)
    if encoding == KeyEncoding.ASCII:
        return _unescape_ascii(value)
    return value.encode("utf-8")


def from_key_name(name: KeyName, encoding: KeyEncoding = KeyEncoding.UTF8) -> ResponseKeyName:
    if encoding == KeyEncoding.BUFFER:
        return BufferPayload(data=list(name))
    if encoding == KeyEncoding.ASCII:
        return _escape_ascii(name)
    return name.decode("utf-8", errors="replace")


def _escape_ascii(name: bytes) -> str:
    """Printable ASCII as is, ``\\`` doubled, every other byte as ``\\xNN``."""
    parts = []
    for byte in name:
        if byte == _BACKSLASH:
            parts.append("\\\\")
        elif byte in _PRINTABLE:
            parts.append(chr(byte))
        else:
            parts.append(f"\\x{byte:02x}")
    return "".join(parts)


def _unescape_ascii(value: str) -> bytes:
    raw = value.encode("utf-8")
    return _ESCAPE.sub(
        lambda m: b"\\" if m.group(1) == b"\\" else bytes([int(m.group(1)[1:], 16)]),
        raw,
    )
