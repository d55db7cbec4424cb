from dishka import provide

from kvb.config import Config
from kvb.domain.history.port.repository import BrowserHistoryRepository
from kvb.domain.history.service import BrowserHistoryService
from kvb.domain.keys.port.history import HistoryRecorder
from kvb.util.di.base import Provider
from kvb.util.di.scope import Scope


class HistoryProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_history_service(
        self, history_repo: BrowserHistoryRepository, config: Config
    ) -> BrowserHistoryService:
        return BrowserHistoryService(
            history_repo=history_repo,
            max_items=config.history.max_items,
        )

    @provide(scope=Scope.UOW)
    def get_history_recorder(self, service: BrowserHistoryService) -> HistoryRecorder:
        return service
