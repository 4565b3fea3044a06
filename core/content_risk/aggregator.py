"""Reduce per-item results into an overall risk summary."""

from collections.abc import Sequence

from .types import AggregateSummary, ClassifiedItem, OverallRiskLevel

HIGH_THRESHOLD = 75
MEDIUM_THRESHOLD = 50


def overall_risk_level(average_risk_score: float) -> OverallRiskLevel:
    """Bucket an average score. Strict comparisons: exactly 75 is medium, 50 is low."""
    if average_risk_score > HIGH_THRESHOLD:
        return OverallRiskLevel.HIGH
    if average_risk_score > MEDIUM_THRESHOLD:
        return OverallRiskLevel.MEDIUM
    return OverallRiskLevel.LOW


def aggregate(results: Sequence[ClassifiedItem]) -> AggregateSummary:
    """Summarize a completed batch.

    The average covers every item, fallback assessments included, so
    failing analysis still raises the aggregate instead of hiding items.
    An empty sequence yields a zero average and a low overall level.
    """
    results = list(results)
    total = len(results)
    succeeded = sum(1 for r in results if r.succeeded)
    average = (
        sum(r.assessment.risk_score for r in results) / total if total else 0.0
    )

    return AggregateSummary(
        total_items=total,
        succeeded_count=succeeded,
        average_risk_score=average,
        overall_risk_level=overall_risk_level(average),
        per_item=results,
    )
