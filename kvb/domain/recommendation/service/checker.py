"""RecommendationChecker - best-effort advisory checks after key reads."""

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

from kvb.domain.recommendation.model import Recommendation, RecommendationName
from kvb.domain.recommendation.port.repository import RecommendationRepository
from kvb.domain.recommendation.service.rules import DEFAULT_RULES, Rule
from kvb.domain.shared.model.client_metadata import ClientMetadata

logger = logging.getLogger(__name__)


class RecommendationChecker:
    """Runs recommendation rules as tracked background tasks.

    ``check`` returns immediately. Failures are logged and never reach the
    caller; ``drain`` waits for checks still in flight (shutdown, tests).
    """

    def __init__(
        self,
        repository: RecommendationRepository,
        rules: dict[RecommendationName, Rule] | None = None,
        enabled: bool = True,
    ) -> None:
        self._repository = repository
        self._rules = rules if rules is not None else DEFAULT_RULES
        self._enabled = enabled
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def check(self, metadata: ClientMetadata, name: RecommendationName, payload: Any) -> None:
        if not self._enabled:
            return

        task = asyncio.create_task(
            self._run(metadata, name, payload),
            name=f"recommendation-{name}-{metadata.database_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*self._tasks)

    async def _run(self, metadata: ClientMetadata, name: RecommendationName, payload: Any) -> None:
        try:
            rule = self._rules.get(name)
            if rule is None:
                logger.warning(f"No rule registered for recommendation '{name}'")
                return
            if not await rule(payload):
                return

            added = await self._repository.add(
                Recommendation(
                    database_id=metadata.database_id,
                    name=name,
                    created_at=datetime.now(UTC),
                )
            )
            if added:
                logger.info(f"Recommendation '{name}' triggered for database {metadata.database_id}")
        except Exception:
            logger.exception(f"Recommendation check '{name}' failed")
