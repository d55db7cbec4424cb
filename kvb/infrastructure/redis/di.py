from typing import AsyncIterable

from dishka import provide

from kvb.config import Config
from kvb.domain.database.service import DatabaseService
from kvb.domain.keys.port.client import ClientAccessor
from kvb.infrastructure.redis.accessor import RedisClientAccessor
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class RedisProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_client_accessor(
        self, database_service: DatabaseService, config: Config
    ) -> AsyncIterable[ClientAccessor]:
        accessor = RedisClientAccessor(database_service, config.redis)
        yield accessor
        await accessor.close()
