"""Item classifier: one oracle call per item, always a ClassifiedItem back.

Whatever goes wrong (empty input, oracle failure, an assessment outside the
allowed enum/range) the item is returned with the fixed fallback assessment
and succeeded=False, so no item silently drops out of aggregation.
"""

import logging
from typing import Any

from pydantic import ValidationError

from .errors import OracleError, OracleErrorKind
from .oracle import ClassificationOracle
from .types import ClassifiedItem, ContentItem, OracleVerdict, RiskAssessment, RiskLevel

logger = logging.getLogger(__name__)

EMPTY_CONTENT_DETAIL = "empty content"

FALLBACK_CATEGORY = "analysis_error"
FALLBACK_SCORE = 50
FALLBACK_EXPLANATION = (
    "Automated analysis could not be completed for this content. "
    "Manual review is recommended."
)
FALLBACK_RECOMMENDATION = (
    "Consider reviewing this content manually with an immigration advisor."
)


def fallback_assessment() -> RiskAssessment:
    """The conservative medium/50 verdict used whenever classification fails."""
    return RiskAssessment(
        risk_level=RiskLevel.MEDIUM,
        risk_score=FALLBACK_SCORE,
        categories=[FALLBACK_CATEGORY],
        explanation=FALLBACK_EXPLANATION,
        recommendations=[FALLBACK_RECOMMENDATION],
    )


def repair_verdict(verdict: OracleVerdict) -> dict[str, Any]:
    """Fix common LLM shape slips before strict validation.

    - A string returned for a list field becomes a single-item list
    - An empty or whitespace-only string for a list field becomes []

    Level casing is normalized by RiskAssessment itself.
    """
    data = verdict.model_dump()
    for field_name in ("categories", "recommendations"):
        value = data[field_name]
        if isinstance(value, str):
            data[field_name] = [value] if value.strip() else []
    return data


def _summarize_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
        for err in error.errors()
    )


class ItemClassifier:
    """Classify single content items against a ClassificationOracle.

    Usage:
        classifier = ItemClassifier(AnthropicRiskOracle())
        result = await classifier.classify(item)
        if not result.succeeded:
            print(result.error_detail)
    """

    def __init__(self, oracle: ClassificationOracle):
        self._oracle = oracle

    @property
    def oracle(self) -> ClassificationOracle:
        return self._oracle

    async def classify(self, item: ContentItem, attempt: int = 1) -> ClassifiedItem:
        """Classify one item with exactly one oracle call. Never raises.

        Args:
            item: Content to classify
            attempt: Attempt number recorded on the result (set by retry
                policies layered above this classifier)
        """
        if item.is_empty:
            logger.info("Rejected empty content without calling the oracle")
            return self._failed(item, EMPTY_CONTENT_DETAIL, kind=None, attempts=0)

        try:
            verdict = await self._oracle.classify(item)
            assessment = RiskAssessment.model_validate(repair_verdict(verdict))
        except OracleError as e:
            logger.warning(f"Oracle failed for '{item.preview()}': {e}")
            return self._failed(item, str(e), kind=e.kind, attempts=attempt)
        except ValidationError as e:
            detail = _summarize_validation_error(e)
            logger.warning(f"Invalid assessment for '{item.preview()}': {detail}")
            return self._failed(
                item,
                f"Invalid assessment from oracle: {detail}",
                kind=OracleErrorKind.MALFORMED_RESPONSE,
                attempts=attempt,
            )
        except Exception as e:
            logger.exception(f"Unexpected oracle error for '{item.preview()}'")
            return self._failed(
                item,
                f"Unexpected oracle error: {type(e).__name__}: {e}",
                kind=OracleErrorKind.UNAVAILABLE,
                attempts=attempt,
            )

        logger.debug(
            f"Classified '{item.preview()}': {assessment.risk_level.value} "
            f"({assessment.risk_score})"
        )
        return ClassifiedItem(
            item=item,
            assessment=assessment,
            succeeded=True,
            attempts=attempt,
        )

    @staticmethod
    def _failed(
        item: ContentItem,
        detail: str,
        kind: OracleErrorKind | None,
        attempts: int,
    ) -> ClassifiedItem:
        return ClassifiedItem(
            item=item,
            assessment=fallback_assessment(),
            succeeded=False,
            error_detail=detail,
            error_kind=kind,
            attempts=attempts,
        )
