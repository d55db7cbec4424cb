from kvb.domain.recommendation.service.checker import RecommendationChecker
from kvb.domain.recommendation.service.recommendation import RecommendationService

__all__ = ["RecommendationChecker", "RecommendationService"]
