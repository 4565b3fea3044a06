"""Type definitions for the content risk pipeline.

Python attribute names are snake_case; the wire format (oracle responses,
HTTP payloads, CLI JSON) uses camelCase aliases. Both spellings validate.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .errors import OracleErrorKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Platform(str, Enum):
    """Social platforms content can come from."""

    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    FACEBOOK = "facebook"


class ContentType(str, Enum):
    """Kind of post on the source platform."""

    POST = "post"
    TWEET = "tweet"
    STORY = "story"


class RiskLevel(str, Enum):
    """Per-item risk tier reported by the oracle."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class OverallRiskLevel(str, Enum):
    """Aggregate tier. Deliberately has no CRITICAL bucket."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentItem(WireModel):
    """One piece of user-authored text to classify."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(
        validation_alias=AliasChoices("text", "content"),
        description="Post text; blank text is rejected by the classifier, not here",
    )
    platform: Platform
    content_type: ContentType

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    def preview(self, length: int = 50) -> str:
        """Short single-line excerpt for logs and error messages."""
        flat = " ".join(self.text.split())
        return flat if len(flat) <= length else flat[:length] + "..."


class OracleRequest(WireModel):
    """Payload sent to the classification oracle for one item."""

    content: str
    platform: Platform
    content_type: ContentType


class OracleVerdict(WireModel):
    """Parsed oracle response before range and enum checks.

    Exactly the five keys must be present, no more; their values are
    validated into a RiskAssessment by the item classifier.
    """

    model_config = ConfigDict(extra="forbid")

    risk_level: Any
    risk_score: Any
    categories: Any
    explanation: Any
    recommendations: Any


class RiskAssessment(WireModel):
    """Validated per-item risk verdict."""

    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel
    risk_score: int = Field(ge=0, le=100)
    categories: list[str] = Field(default_factory=list)
    explanation: str
    recommendations: list[str] = Field(default_factory=list)

    @field_validator("risk_level", mode="before")
    @classmethod
    def normalize_risk_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("risk_score", mode="before")
    @classmethod
    def require_integral_score(cls, v: Any) -> Any:
        """Accept ints and integral floats only (42, 42.0; not True, "42", 42.5)."""
        if isinstance(v, bool):
            raise ValueError("riskScore must be an integer, got a boolean")
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError(f"riskScore must be an integer, got {v}")
            return int(v)
        if not isinstance(v, int):
            raise ValueError(f"riskScore must be an integer, got {type(v).__name__}")
        return v

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class ClassifiedItem(WireModel):
    """Outcome of classifying one ContentItem.

    Attributes:
        item: The input item, unchanged
        assessment: Real assessment, or the fixed fallback when succeeded=False
        succeeded: Whether the assessment came from a valid oracle verdict
        error_detail: Human-readable failure reason (None on success)
        error_kind: Oracle failure category behind a fallback (None on success
            and on empty-content rejection)
        attempts: Classifier invocations spent on this item (0 when rejected
            before reaching the oracle)
        timestamp: Completion time (UTC)
    """

    model_config = ConfigDict(frozen=True)

    item: ContentItem
    assessment: RiskAssessment
    succeeded: bool
    error_detail: Optional[str] = None
    error_kind: Optional[OracleErrorKind] = None
    attempts: int = 1
    timestamp: datetime = Field(default_factory=_utcnow)


class AggregateSummary(WireModel):
    """Overall risk across a completed batch."""

    total_items: int
    succeeded_count: int
    average_risk_score: float
    overall_risk_level: OverallRiskLevel
    per_item: list[ClassifiedItem] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=_utcnow)

    @computed_field
    @property
    def failed_count(self) -> int:
        return self.total_items - self.succeeded_count
