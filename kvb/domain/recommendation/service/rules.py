"""Recommendation rules.

Each rule receives the payload the keys service passed to ``check`` and
decides whether its recommendation applies.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from kvb.domain.keys.model import KeyInfo, KeyType
from kvb.domain.keys.port.client import ClientHandle, ReplyError
from kvb.domain.keys.util.errors import is_unknown_command
from kvb.domain.recommendation.model import RecommendationName

logger = logging.getLogger(__name__)

Rule = Callable[[Any], Awaitable[bool]]

KEYS_TOTAL_LIMIT = 1_000_000
SET_LENGTH_LIMIT = 5_000
STRING_SIZE_LIMIT = 100_000
LIST_LENGTH_LIMIT = 1_000


async def use_smaller_keys(total: int | None) -> bool:
    return total is not None and total > KEYS_TOTAL_LIMIT


async def big_sets(key: KeyInfo) -> bool:
    return key.type == KeyType.SET and (key.length or 0) > SET_LENGTH_LIMIT


async def big_strings(key: KeyInfo) -> bool:
    return key.type == KeyType.STRING and (key.size or 0) > STRING_SIZE_LIMIT


async def compression_for_list(key: KeyInfo) -> bool:
    return key.type == KeyType.LIST and (key.length or 0) > LIST_LENGTH_LIMIT


async def search_json(payload: dict[str, Any]) -> bool:
    """JSON documents exist but no search index is defined."""
    if not _has_type(payload["keys"], KeyType.JSON):
        return False
    indexes = await _list_or_empty(payload["client"], "FT._LIST")
    return not indexes


async def functions_with_streams(payload: dict[str, Any]) -> bool:
    """Streams exist but no server-side function library is loaded."""
    if not _has_type(payload["keys"], KeyType.STREAM):
        return False
    libraries = await _list_or_empty(payload["client"], "FUNCTION", "LIST")
    return not libraries


def _has_type(keys: list[KeyInfo], key_type: KeyType) -> bool:
    return any(key.type == key_type for key in keys)


async def _list_or_empty(client: ClientHandle, *command: str) -> list:
    """Reply of a listing command; none when the server does not know it.

    Any other failure propagates so the recommendation is skipped.
    """
    try:
        return list(await client.execute(*command) or [])
    except ReplyError as e:
        if not is_unknown_command(e):
            raise
        logger.debug("%s unavailable: %s", " ".join(command), e.message)
        return []


DEFAULT_RULES: dict[RecommendationName, Rule] = {
    RecommendationName.USE_SMALLER_KEYS: use_smaller_keys,
    RecommendationName.BIG_SETS: big_sets,
    RecommendationName.BIG_STRINGS: big_strings,
    RecommendationName.COMPRESSION_FOR_LIST: compression_for_list,
    RecommendationName.SEARCH_JSON: search_json,
    RecommendationName.FUNCTIONS_WITH_STREAMS: functions_with_streams,
}
