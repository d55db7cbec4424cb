from dishka import provide

from kvb.domain.database.service import DatabaseService
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class DatabaseProvider(Provider):
    # APP-scoped: the client accessor resolves databases outside requests
    database_service = provide(DatabaseService, scope=Scope.APP)
