from datetime import UTC, datetime
from uuid import uuid4

from kvb.domain.history.model import BrowserHistory, BrowserHistoryMode, CreateBrowserHistory
from kvb.domain.history.port.repository import BrowserHistoryRepository
from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.domain.shared.service import Service


class BrowserHistoryService(Service):
    history_repo: BrowserHistoryRepository
    max_items: int = 10

    async def create(self, metadata: ClientMetadata, dto: CreateBrowserHistory) -> None:
        entry = BrowserHistory(
            id=str(uuid4()),
            database_id=metadata.database_id,
            filter=dto.filter,
            mode=dto.mode,
            created_at=datetime.now(UTC),
        )
        await self.history_repo.save(entry)
        await self.history_repo.prune(metadata.database_id, dto.mode, keep=self.max_items)

    async def list(
        self, metadata: ClientMetadata, mode: BrowserHistoryMode = BrowserHistoryMode.PATTERN
    ) -> list[BrowserHistory]:
        return await self.history_repo.list(metadata.database_id, mode)
