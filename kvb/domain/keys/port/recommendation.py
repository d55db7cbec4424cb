from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol

from kvb.domain.recommendation.model import RecommendationName
from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.domain.shared.port import Port


class RecommendationChecks(Port, Protocol):
    """Best-effort advisory analysis; never raises into the caller."""

    @abstractmethod
    def check(self, metadata: ClientMetadata, name: RecommendationName, payload: Any) -> None: ...
