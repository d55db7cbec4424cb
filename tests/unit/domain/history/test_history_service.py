"""Unit tests for BrowserHistoryService."""

import pytest

from kvb.domain.history.model import BrowserHistoryMode, CreateBrowserHistory, ScanFilter
from kvb.domain.history.service import BrowserHistoryService
from kvb.domain.keys.model import KeyType
from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.infrastructure.persistence.history import InMemoryBrowserHistoryRepository


@pytest.fixture
def repo() -> InMemoryBrowserHistoryRepository:
    return InMemoryBrowserHistoryRepository()


@pytest.fixture
def service(repo) -> BrowserHistoryService:
    return BrowserHistoryService(history_repo=repo, max_items=3)


def pattern(match: str, key_type: KeyType | None = None) -> CreateBrowserHistory:
    return CreateBrowserHistory(filter=ScanFilter(type=key_type, match=match))


class TestBrowserHistoryService:
    async def test_create_records_filter(self, service):
        metadata = ClientMetadata(database_id="db-1")

        await service.create(metadata, pattern("user:*", KeyType.HASH))

        [entry] = await service.list(metadata)
        assert entry.database_id == "db-1"
        assert entry.filter == ScanFilter(type=KeyType.HASH, match="user:*")
        assert entry.mode == BrowserHistoryMode.PATTERN
        assert entry.id

    async def test_keeps_newest_entries_only(self, service):
        metadata = ClientMetadata(database_id="db-1")
        for index in range(5):
            await service.create(metadata, pattern(f"p{index}*"))

        entries = await service.list(metadata)

        assert [entry.filter.match for entry in entries] == ["p4*", "p3*", "p2*"]

    async def test_history_is_scoped_per_database_and_mode(self, service):
        first = ClientMetadata(database_id="db-1")
        second = ClientMetadata(database_id="db-2")

        await service.create(first, pattern("a*"))
        await service.create(
            first,
            CreateBrowserHistory(filter=ScanFilter(match="b*"), mode=BrowserHistoryMode.REDISEARCH),
        )

        assert [entry.filter.match for entry in await service.list(first)] == ["a*"]
        assert [
            entry.filter.match for entry in await service.list(first, BrowserHistoryMode.REDISEARCH)
        ] == ["b*"]
        assert await service.list(second) == []


class TestInMemoryBrowserHistoryRepository:
    async def test_prune_reports_dropped_count(self, repo):
        service = BrowserHistoryService(history_repo=repo, max_items=10)
        metadata = ClientMetadata(database_id="db-1")
        for index in range(4):
            await service.create(metadata, pattern(f"p{index}*"))

        dropped = await repo.prune("db-1", BrowserHistoryMode.PATTERN, keep=1)

        assert dropped == 3
        assert [entry.filter.match for entry in await repo.list("db-1", BrowserHistoryMode.PATTERN)] == [
            "p3*"
        ]

    async def test_prune_unknown_bucket(self, repo):
        assert await repo.prune("nope", BrowserHistoryMode.PATTERN, keep=5) == 0
