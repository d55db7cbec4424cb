from kvb.domain.recommendation.model import Recommendation
from kvb.domain.recommendation.port.repository import RecommendationRepository
from kvb.domain.shared.service import Service


class RecommendationService(Service):
    recommendation_repo: RecommendationRepository

    async def list(self, database_id: str) -> list[Recommendation]:
        return await self.recommendation_repo.list(database_id)
