from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from kvb.domain.recommendation.model import Recommendation
from kvb.domain.shared.port import Port


class RecommendationRepository(Port, Protocol):
    @abstractmethod
    async def add(self, recommendation: Recommendation) -> bool:
        """Store a recommendation once per database and name.

        Returns False when it was already stored.
        """
        ...

    @abstractmethod
    async def list(self, database_id: str) -> list[Recommendation]: ...
