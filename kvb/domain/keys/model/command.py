"""Store commands issued by the keys browser."""

from enum import StrEnum


class KeysCommand(StrEnum):
    TYPE = "TYPE"
    TTL = "TTL"
    EXISTS = "EXISTS"
    DEL = "DEL"
    RENAMENX = "RENAMENX"
    EXPIRE = "EXPIRE"
    PERSIST = "PERSIST"
    SCAN = "SCAN"
    DBSIZE = "DBSIZE"
    INFO = "INFO"
    MEMORY_USAGE = "MEMORY USAGE"
    OBJECT_ENCODING = "OBJECT ENCODING"


class TypeCommand(StrEnum):
    """Structural length command per data type."""

    STRLEN = "STRLEN"
    HLEN = "HLEN"
    LLEN = "LLEN"
    SCARD = "SCARD"
    ZCARD = "ZCARD"
    XLEN = "XLEN"
    JSON_TYPE = "JSON.TYPE"
    JSON_OBJLEN = "JSON.OBJLEN"
    JSON_ARRLEN = "JSON.ARRLEN"
    JSON_STRLEN = "JSON.STRLEN"
