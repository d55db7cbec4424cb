from dishka import AsyncContainer, from_context, make_async_container

from kvb.config import Config
from kvb.domain.database.util.di.provider import DatabaseProvider
from kvb.domain.history.util.di.provider import HistoryProvider
from kvb.domain.keys.util.di.provider import KeysProvider
from kvb.domain.recommendation.util.di.provider import RecommendationProvider
from kvb.infrastructure.persistence import PersistenceProvider
from kvb.infrastructure.redis import RedisProvider
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None, *providers: Provider) -> AsyncContainer:
    """Build the application container.

    Extra ``providers`` are appended last and override earlier bindings.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        DatabaseProvider(),
        RedisProvider(),
        HistoryProvider(),
        RecommendationProvider(),
        KeysProvider(),
        *providers,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
