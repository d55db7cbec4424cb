from kvb.domain.history.service.history import BrowserHistoryService

__all__ = ["BrowserHistoryService"]
