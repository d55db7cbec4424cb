from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from kvb.domain.history.model import CreateBrowserHistory
from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.domain.shared.port import Port


class HistoryRecorder(Port, Protocol):
    """Records browser search history for non-trivial patterns."""

    @abstractmethod
    async def create(self, metadata: ClientMetadata, dto: CreateBrowserHistory) -> None: ...
