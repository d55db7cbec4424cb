from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel

from kvb.domain.keys.model.key import DEFAULT_MATCH, KeyType


class BrowserHistoryMode(StrEnum):
    PATTERN = "pattern"
    REDISEARCH = "redisearch"


class ScanFilter(BaseModel):
    """The filter a user searched keys with."""

    type: KeyType | None = None
    match: str = DEFAULT_MATCH


class CreateBrowserHistory(BaseModel):
    filter: ScanFilter
    mode: BrowserHistoryMode = BrowserHistoryMode.PATTERN


class BrowserHistory(BaseModel):
    """A recorded key search."""

    id: str
    database_id: str
    filter: ScanFilter
    mode: BrowserHistoryMode
    created_at: datetime
