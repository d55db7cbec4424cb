"""Scan cursor encoding.

A standalone cursor is the server's numeric cursor. A cluster cursor maps
each primary's ``host:port`` to its own numeric cursor and travels as
``host:port@cursor||host:port@cursor``; ``"0"`` starts a fresh scan on every
primary. Nodes with cursor 0 are finished and are left out.
"""

from collections.abc import Iterable

from kvb.domain.keys.messages import INVALID_CLUSTER_CURSOR
from kvb.domain.keys.model import GetKeysResult
from kvb.domain.shared.error import ValidationError

INITIAL_CURSOR = "0"
NODE_SEPARATOR = "||"
CURSOR_SEPARATOR = "@"


def parse_standalone_cursor(cursor: str) -> int:
    try:
        value = int(cursor)
    except ValueError:
        raise ValidationError(f"Invalid cursor: {cursor}", field="cursor") from None
    if value < 0:
        raise ValidationError(f"Invalid cursor: {cursor}", field="cursor")
    return value


def parse_cluster_cursor(cursor: str) -> dict[str, int]:
    """Parse a cluster cursor into ``{node_id: cursor}`` for unfinished nodes."""
    if cursor == INITIAL_CURSOR:
        return {}

    cursors: dict[str, int] = {}
    for part in cursor.split(NODE_SEPARATOR):
        node_id, sep, value = part.rpartition(CURSOR_SEPARATOR)
        host, colon, port = node_id.rpartition(":")
        if not sep or not colon or not host or not port.isdigit() or not value.isdigit():
            raise ValidationError(
                INVALID_CLUSTER_CURSOR, code="INVALID_CLUSTER_CURSOR", field="cursor"
            )
        if int(value) > 0:
            cursors[node_id] = int(value)
    return cursors


def format_cluster_cursor(results: Iterable[GetKeysResult]) -> str | None:
    """Build the cursor for the next call, or None once every node is done."""
    parts = [
        f"{result.host}:{result.port}{CURSOR_SEPARATOR}{result.cursor}"
        for result in results
        if result.cursor
    ]
    return NODE_SEPARATOR.join(parts) or None
