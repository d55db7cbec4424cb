from kvb.domain.recommendation.model.recommendation import Recommendation, RecommendationName

__all__ = ["Recommendation", "RecommendationName"]
