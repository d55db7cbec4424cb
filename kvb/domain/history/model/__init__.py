from kvb.domain.history.model.history import (
    BrowserHistory,
    BrowserHistoryMode,
    CreateBrowserHistory,
    ScanFilter,
)

__all__ = ["BrowserHistory", "BrowserHistoryMode", "CreateBrowserHistory", "ScanFilter"]
