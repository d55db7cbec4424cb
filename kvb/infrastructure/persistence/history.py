from collections import defaultdict

from kvb.domain.history.model import BrowserHistory, BrowserHistoryMode
from kvb.domain.history.port.repository import BrowserHistoryRepository


class InMemoryBrowserHistoryRepository(BrowserHistoryRepository):
    """Process-local history, newest entry last in each bucket."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, BrowserHistoryMode], list[BrowserHistory]] = defaultdict(list)

    async def save(self, entry: BrowserHistory) -> None:
        self._entries[(entry.database_id, entry.mode)].append(entry)

    async def list(self, database_id: str, mode: BrowserHistoryMode) -> list[BrowserHistory]:
        return list(reversed(self._entries.get((database_id, mode), [])))

    async def prune(self, database_id: str, mode: BrowserHistoryMode, keep: int) -> int:
        bucket = self._entries.get((database_id, mode), [])
        dropped = max(len(bucket) - keep, 0)
        if dropped:
            del bucket[:dropped]
        return dropped
