from dishka import provide

from kvb.config import Config
from kvb.domain.database.port.repository import DatabaseRepository
from kvb.domain.history.port.repository import BrowserHistoryRepository
from kvb.domain.recommendation.port.repository import RecommendationRepository
from kvb.infrastructure.persistence.database import ConfigDatabaseRepository
from kvb.infrastructure.persistence.history import InMemoryBrowserHistoryRepository
from kvb.infrastructure.persistence.recommendation import InMemoryRecommendationRepository
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class PersistenceProvider(Provider):
    # State lives for the application lifetime
    history_repo = provide(
        InMemoryBrowserHistoryRepository, scope=Scope.APP, provides=BrowserHistoryRepository
    )
    recommendation_repo = provide(
        InMemoryRecommendationRepository, scope=Scope.APP, provides=RecommendationRepository
    )

    @provide(scope=Scope.APP)
    def get_database_repo(self, config: Config) -> DatabaseRepository:
        return ConfigDatabaseRepository(config.databases)
