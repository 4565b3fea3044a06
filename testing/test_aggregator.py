"""Tests for batch aggregation and overall risk bucketing."""

import pytest

from core.content_risk import OverallRiskLevel, aggregate, overall_risk_level
from testing.utils import make_classified


class TestOverallRiskLevel:
    """Three-tier bucketing with strict thresholds."""

    @pytest.mark.parametrize(
        "score, expected",
        [
            (0, OverallRiskLevel.LOW),
            (50, OverallRiskLevel.LOW),
            (50.0001, OverallRiskLevel.MEDIUM),
            (51, OverallRiskLevel.MEDIUM),
            (75, OverallRiskLevel.MEDIUM),
            (75.0001, OverallRiskLevel.HIGH),
            (76, OverallRiskLevel.HIGH),
            (100, OverallRiskLevel.HIGH),
        ],
    )
    def test_thresholds(self, score, expected):
        assert overall_risk_level(score) is expected


class TestAggregate:
    """Tests for aggregate()."""

    def test_empty_results(self):
        summary = aggregate([])
        assert summary.total_items == 0
        assert summary.succeeded_count == 0
        assert summary.average_risk_score == 0
        assert summary.overall_risk_level is OverallRiskLevel.LOW
        assert summary.per_item == []

    @pytest.mark.parametrize(
        "scores, expected",
        [
            ([75, 75], OverallRiskLevel.MEDIUM),
            ([70, 80], OverallRiskLevel.MEDIUM),
            ([50], OverallRiskLevel.LOW),
            ([40, 60], OverallRiskLevel.LOW),
            ([76], OverallRiskLevel.HIGH),
            ([52, 100], OverallRiskLevel.HIGH),
            ([51], OverallRiskLevel.MEDIUM),
            ([2, 100], OverallRiskLevel.MEDIUM),
        ],
    )
    def test_bucket_boundaries(self, scores, expected):
        summary = aggregate([make_classified(s) for s in scores])
        assert summary.average_risk_score == sum(scores) / len(scores)
        assert summary.overall_risk_level is expected

    def test_fallback_items_count_toward_average(self):
        results = [make_classified(90), make_classified(50, succeeded=False)]

        summary = aggregate(results)

        assert summary.total_items == 2
        assert summary.succeeded_count == 1
        assert summary.failed_count == 1
        assert summary.average_risk_score == 70
        assert summary.overall_risk_level is OverallRiskLevel.MEDIUM

    def test_total_oracle_failure(self):
        results = [make_classified(50, succeeded=False) for _ in range(3)]

        summary = aggregate(results)

        assert summary.succeeded_count == 0
        assert summary.average_risk_score == 50
        assert summary.overall_risk_level is OverallRiskLevel.LOW
        assert all(r.assessment.categories == ["analysis_error"] for r in summary.per_item)

    def test_per_item_order_preserved(self):
        results = [make_classified(s, text=f"item {s}") for s in (30, 10, 20)]
        summary = aggregate(results)
        assert [r.item.text for r in summary.per_item] == ["item 30", "item 10", "item 20"]

    def test_accepts_any_sequence(self):
        summary = aggregate(tuple(make_classified(s) for s in (10, 20)))
        assert summary.average_risk_score == 15
