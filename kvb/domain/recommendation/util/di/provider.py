from typing import AsyncIterable

from dishka import provide

from kvb.config import Config
from kvb.domain.keys.port.recommendation import RecommendationChecks
from kvb.domain.recommendation.port.repository import RecommendationRepository
from kvb.domain.recommendation.service import RecommendationChecker, RecommendationService
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class RecommendationProvider(Provider):
    recommendation_service = provide(RecommendationService, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    async def get_checker(
        self, repository: RecommendationRepository, config: Config
    ) -> AsyncIterable[RecommendationChecker]:
        checker = RecommendationChecker(repository, enabled=config.recommendations.enabled)
        yield checker
        await checker.drain()

    @provide(scope=Scope.APP)
    def get_checks(self, checker: RecommendationChecker) -> RecommendationChecks:
        return checker
