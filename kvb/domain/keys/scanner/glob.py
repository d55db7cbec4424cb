"""Glob pattern helpers for SCAN MATCH patterns."""

import re

_GLOB_CHARS = frozenset("*?[")
_ESCAPED = re.compile(r"\\(.)", re.DOTALL)


def is_glob(pattern: str) -> bool:
    """Whether ``pattern`` contains an unescaped glob metacharacter."""
    escaped = False
    for char in pattern:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _GLOB_CHARS:
            return True
    return False


def unescape_glob(pattern: str) -> str:
    """Strip backslash escapes so a literal pattern becomes a key name."""
    return _ESCAPED.sub(r"\1", pattern)
