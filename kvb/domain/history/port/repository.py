from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from kvb.domain.history.model import BrowserHistory, BrowserHistoryMode
from kvb.domain.shared.port import Port


class BrowserHistoryRepository(Port, Protocol):
    @abstractmethod
    async def save(self, entry: BrowserHistory) -> None: ...

    @abstractmethod
    async def list(self, database_id: str, mode: BrowserHistoryMode) -> list[BrowserHistory]:
        """Entries for one database and mode, newest first."""
        ...

    @abstractmethod
    async def prune(self, database_id: str, mode: BrowserHistoryMode, keep: int) -> int:
        """Drop all but the newest ``keep`` entries; returns how many were dropped."""
        ...
