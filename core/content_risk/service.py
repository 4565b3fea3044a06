"""Content risk service: one oracle, one classifier, batch and aggregate."""

import logging
from collections.abc import Sequence
from typing import Callable, Optional

from core.utils.cleanup import register_cleanup

from .aggregator import aggregate
from .batch import classify_batch
from .classifier import ItemClassifier
from .config import ContentRiskConfig, get_content_risk_config
from .oracle import AnthropicRiskOracle, ClassificationOracle
from .types import AggregateSummary, ClassifiedItem, ContentItem

logger = logging.getLogger(__name__)


class ContentRiskService:
    """Entry point for classifying social content for visa-status risk.

    The pipeline is a pure function of its inputs plus the oracle: no
    results are stored between calls.

    Usage:
        async with ContentRiskService() as service:
            summary = await service.assess(items)
            print(summary.overall_risk_level)

        # Deterministic substitute for tests
        service = ContentRiskService(oracle=FakeOracle(...))
    """

    def __init__(
        self,
        config: ContentRiskConfig | None = None,
        oracle: ClassificationOracle | None = None,
    ):
        self._config = config or get_content_risk_config()
        self._oracle = oracle or AnthropicRiskOracle(self._config)
        self._classifier = ItemClassifier(self._oracle)

    @property
    def config(self) -> ContentRiskConfig:
        return self._config

    async def classify(self, item: ContentItem) -> ClassifiedItem:
        """Classify a single item (one oracle call, never raises)."""
        return await self._classifier.classify(item)

    async def classify_batch(
        self,
        items: Sequence[ContentItem],
        concurrency: int | None = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> list[ClassifiedItem]:
        """Classify items in input order under the configured limits.

        Raises:
            BatchError: Empty input or invalid concurrency
        """
        return await classify_batch(
            items,
            self._classifier,
            concurrency=concurrency if concurrency is not None else self._config.concurrency,
            batch_size=self._config.batch_size,
            max_retries=self._config.max_retries,
            retry_backoff=self._config.retry_backoff,
            progress_callback=progress_callback,
        )

    async def assess(
        self,
        items: Sequence[ContentItem],
        concurrency: int | None = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> AggregateSummary:
        """Classify a batch and reduce it to an AggregateSummary.

        Raises:
            BatchError: Empty input or invalid concurrency
        """
        results = await self.classify_batch(
            items, concurrency=concurrency, progress_callback=progress_callback
        )
        summary = aggregate(results)
        logger.info(
            f"Assessed {summary.total_items} items: average "
            f"{summary.average_risk_score:.1f}, overall {summary.overall_risk_level.value}"
        )
        return summary

    async def close(self) -> None:
        """Close the oracle's client resources."""
        await self._oracle.close()

    async def __aenter__(self) -> "ContentRiskService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


# Module singleton
_service: ContentRiskService | None = None


def get_content_risk_service() -> ContentRiskService:
    """Get global ContentRiskService instance."""
    global _service
    if _service is None:
        _service = ContentRiskService()
        register_cleanup("ContentRiskService", close_content_risk_service)
    return _service


async def close_content_risk_service() -> None:
    """Close the global ContentRiskService."""
    global _service
    if _service:
        await _service.close()
        _service = None
