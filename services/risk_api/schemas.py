"""Request and response models for the risk API (camelCase on the wire)."""

from datetime import datetime
from typing import Optional

from core.content_risk import (
    ContentType,
    OverallRiskLevel,
    Platform,
    RiskAssessment,
)
from core.content_risk.types import WireModel


class AnalysisRequest(WireModel):
    """Single-item request. Missing content or platform is answered with 400."""

    content: Optional[str] = None
    platform: Optional[Platform] = None
    content_type: ContentType = ContentType.POST


class BatchItemRequest(WireModel):
    """One entry of a batch request; blank content gets a fallback result."""

    content: str = ""
    platform: Platform
    content_type: ContentType = ContentType.POST


class BatchAnalysisRequest(WireModel):
    contents: Optional[list[BatchItemRequest]] = None


class AnalysisResponse(WireModel):
    success: bool
    analysis: RiskAssessment
    original_content: str
    platform: Platform
    content_type: ContentType
    analyzed_at: datetime
    error: Optional[str] = None


class BatchAnalysis(WireModel):
    total_items: int
    analyzed_successfully: int
    average_risk_score: float
    overall_risk_level: OverallRiskLevel
    analyses: list[AnalysisResponse]


class BatchAnalysisResponse(WireModel):
    success: bool
    batch_analysis: BatchAnalysis
    analyzed_at: datetime


class HealthResponse(WireModel):
    status: str
