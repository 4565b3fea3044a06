"""FastAPI application exposing content risk assessment.

Run with:
    python -m services.risk_api.main
    uvicorn services.risk_api.main:app --port 8010
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from core.config import configure_logging
from core.content_risk import (
    BatchError,
    ClassifiedItem,
    ContentItem,
    ContentRiskService,
    get_content_risk_service,
)
from core.logging import end_run, start_run
from core.utils.cleanup import cleanup_all

from .schemas import (
    AnalysisRequest,
    AnalysisResponse,
    BatchAnalysis,
    BatchAnalysisRequest,
    BatchAnalysisResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging("risk_api")
    start_run("risk-api")
    try:
        yield
    finally:
        await cleanup_all()
        end_run()


app = FastAPI(
    title="Content Risk API",
    description="Screens social media content for F-1 student visa compliance risk",
    version="1.0.0",
    lifespan=lifespan,
)


def get_service() -> ContentRiskService:
    """Service dependency (overridden in tests)."""
    return get_content_risk_service()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def to_analysis_response(result: ClassifiedItem) -> AnalysisResponse:
    return AnalysisResponse(
        success=result.succeeded,
        analysis=result.assessment,
        original_content=result.item.text,
        platform=result.item.platform,
        content_type=result.item.content_type,
        analyzed_at=result.timestamp,
        error=result.error_detail,
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")


@app.post("/api/analyze", response_model=AnalysisResponse, response_model_exclude_none=True)
async def analyze(
    request: AnalysisRequest,
    service: ContentRiskService = Depends(get_service),
):
    """Assess one piece of content."""
    if not request.content or request.platform is None:
        return _error(400, "Content and platform are required")

    item = ContentItem(
        text=request.content,
        platform=request.platform,
        content_type=request.content_type,
    )
    result = await service.classify(item)
    return to_analysis_response(result)


@app.put("/api/analyze", response_model=BatchAnalysisResponse, response_model_exclude_none=True)
async def analyze_batch(
    request: BatchAnalysisRequest,
    service: ContentRiskService = Depends(get_service),
):
    """Assess many pieces of content and summarize the overall risk."""
    if not request.contents:
        return _error(400, "Contents array is required")

    items = [
        ContentItem(text=entry.content, platform=entry.platform, content_type=entry.content_type)
        for entry in request.contents
    ]
    try:
        summary = await service.assess(items)
    except BatchError as e:
        logger.warning(f"Batch rejected: {e}")
        return _error(400, e.message)

    return BatchAnalysisResponse(
        success=True,
        batch_analysis=BatchAnalysis(
            total_items=summary.total_items,
            analyzed_successfully=summary.succeeded_count,
            average_risk_score=summary.average_risk_score,
            overall_risk_level=summary.overall_risk_level,
            analyses=[to_analysis_response(r) for r in summary.per_item],
        ),
        analyzed_at=summary.generated_at,
    )


__all__ = ["app", "get_service"]


if __name__ == "__main__":
    uvicorn.run(
        "services.risk_api.main:app",
        host=os.getenv("RISKSCAN_API_HOST", "127.0.0.1"),
        port=int(os.getenv("RISKSCAN_API_PORT", "8010")),
    )
