from collections import defaultdict

from kvb.domain.recommendation.model import Recommendation, RecommendationName
from kvb.domain.recommendation.port.repository import RecommendationRepository


class InMemoryRecommendationRepository(RecommendationRepository):
    def __init__(self) -> None:
        self._by_database: dict[str, dict[RecommendationName, Recommendation]] = defaultdict(dict)

    async def add(self, recommendation: Recommendation) -> bool:
        stored = self._by_database[recommendation.database_id]
        if recommendation.name in stored:
            return False
        stored[recommendation.name] = recommendation
        return True

    async def list(self, database_id: str) -> list[Recommendation]:
        return list(self._by_database.get(database_id, {}).values())
