"""Unit tests for the in-memory recommendation store."""

from datetime import UTC, datetime

from kvb.domain.recommendation.model import Recommendation, RecommendationName
from kvb.domain.recommendation.service import RecommendationService
from kvb.infrastructure.persistence.recommendation import InMemoryRecommendationRepository


def recommendation(database_id: str, name: RecommendationName) -> Recommendation:
    return Recommendation(database_id=database_id, name=name, created_at=datetime.now(UTC))


class TestInMemoryRecommendationRepository:
    async def test_stores_each_name_once_per_database(self):
        repo = InMemoryRecommendationRepository()

        assert await repo.add(recommendation("db-1", RecommendationName.BIG_SETS))
        assert not await repo.add(recommendation("db-1", RecommendationName.BIG_SETS))
        assert await repo.add(recommendation("db-2", RecommendationName.BIG_SETS))

        assert len(await repo.list("db-1")) == 1
        assert len(await repo.list("db-2")) == 1

    async def test_service_lists_by_database(self):
        repo = InMemoryRecommendationRepository()
        service = RecommendationService(recommendation_repo=repo)
        await repo.add(recommendation("db-1", RecommendationName.BIG_STRINGS))
        await repo.add(recommendation("db-1", RecommendationName.SEARCH_JSON))

        names = [item.name for item in await service.list("db-1")]

        assert names == [RecommendationName.BIG_STRINGS, RecommendationName.SEARCH_JSON]
        assert await service.list("db-3") == []
