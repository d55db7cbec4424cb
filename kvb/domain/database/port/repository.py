from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from kvb.domain.database.model import Database
from kvb.domain.shared.port import Port


class DatabaseRepository(Port, Protocol):
    @abstractmethod
    async def get(self, database_id: str) -> Database | None: ...

    @abstractmethod
    async def list(self) -> list[Database]: ...
