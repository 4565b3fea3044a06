"""Content risk classification and aggregation.

Classify social media posts for risks to a student's F-1 visa status and
summarize a batch into one overall risk level.

Example:
    from core.content_risk import ContentItem, assess_batch

    items = [
        ContentItem(text="Landed a cash job at a cafe!", platform="instagram",
                    content_type="post"),
        ContentItem(text="Midterms done", platform="twitter", content_type="tweet"),
    ]
    summary = await assess_batch(items)
    print(summary.overall_risk_level, summary.average_risk_score)

    for result in summary.per_item:
        print(result.assessment.risk_level, result.succeeded)

Environment Variables:
    ANTHROPIC_API_KEY: Required by the default Claude oracle
    RISKSCAN_*: Batching, retry and model settings (see ContentRiskConfig)
"""

from collections.abc import Sequence

from .aggregator import aggregate, overall_risk_level
from .batch import classify_batch
from .classifier import ItemClassifier, fallback_assessment
from .config import ContentRiskConfig, get_content_risk_config
from .errors import (
    BatchError,
    BatchErrorKind,
    ContentRiskError,
    OracleError,
    OracleErrorKind,
)
from .oracle import AnthropicRiskOracle, ClassificationOracle
from .service import (
    ContentRiskService,
    close_content_risk_service,
    get_content_risk_service,
)
from .types import (
    AggregateSummary,
    ClassifiedItem,
    ContentItem,
    ContentType,
    OracleRequest,
    OracleVerdict,
    OverallRiskLevel,
    Platform,
    RiskAssessment,
    RiskLevel,
)


async def assess_content(item: ContentItem) -> ClassifiedItem:
    """Classify one item with the global service (never raises)."""
    return await get_content_risk_service().classify(item)


async def assess_batch(
    items: Sequence[ContentItem],
    concurrency: int | None = None,
) -> AggregateSummary:
    """Classify a batch with the global service and summarize it.

    Raises:
        BatchError: Empty input or invalid concurrency
    """
    return await get_content_risk_service().assess(items, concurrency=concurrency)


__all__ = [
    # Main functions
    "assess_content",
    "assess_batch",
    # Pipeline stages
    "ItemClassifier",
    "classify_batch",
    "aggregate",
    "overall_risk_level",
    "fallback_assessment",
    # Service
    "ContentRiskService",
    "get_content_risk_service",
    "close_content_risk_service",
    # Oracles
    "ClassificationOracle",
    "AnthropicRiskOracle",
    # Types
    "ContentItem",
    "Platform",
    "ContentType",
    "RiskLevel",
    "OverallRiskLevel",
    "RiskAssessment",
    "OracleRequest",
    "OracleVerdict",
    "ClassifiedItem",
    "AggregateSummary",
    # Config
    "ContentRiskConfig",
    "get_content_risk_config",
    # Errors
    "ContentRiskError",
    "OracleError",
    "OracleErrorKind",
    "BatchError",
    "BatchErrorKind",
]
