"""Configuration for the content risk pipeline."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from core.llm.models import ModelTier

load_dotenv()


@dataclass
class ContentRiskConfig:
    """Configuration for classification and batching.

    Environment Variables:
        RISKSCAN_BATCH_SIZE: Items per chunk (default: 5)
        RISKSCAN_CONCURRENCY: Max oracle calls in flight (default: 5)
        RISKSCAN_MAX_RETRIES: Extra attempts for unavailable/timeout items (default: 0)
        RISKSCAN_RETRY_BACKOFF: Backoff base in seconds (default: 2.0)
        RISKSCAN_ORACLE_TIMEOUT: Per-call timeout in seconds (default: 60)
        RISKSCAN_MODEL_TIER: haiku, sonnet or opus (default: sonnet)
        RISKSCAN_MAX_TOKENS: Max output tokens per verdict (default: 1000)
        RISKSCAN_TEMPERATURE: Sampling temperature (default: 0.3)
    """

    batch_size: int = field(
        default_factory=lambda: int(os.environ.get("RISKSCAN_BATCH_SIZE", "5"))
    )
    concurrency: int = field(
        default_factory=lambda: int(os.environ.get("RISKSCAN_CONCURRENCY", "5"))
    )
    max_retries: int = field(
        default_factory=lambda: int(os.environ.get("RISKSCAN_MAX_RETRIES", "0"))
    )
    retry_backoff: float = field(
        default_factory=lambda: float(os.environ.get("RISKSCAN_RETRY_BACKOFF", "2.0"))
    )
    oracle_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RISKSCAN_ORACLE_TIMEOUT", "60"))
    )
    model_tier: ModelTier = field(
        default_factory=lambda: ModelTier.from_name(
            os.environ.get("RISKSCAN_MODEL_TIER", "sonnet")
        )
    )
    max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("RISKSCAN_MAX_TOKENS", "1000"))
    )
    temperature: float = field(
        default_factory=lambda: float(os.environ.get("RISKSCAN_TEMPERATURE", "0.3"))
    )

    @property
    def anthropic_available(self) -> bool:
        """Check if the Anthropic oracle can be used."""
        return bool(os.environ.get("ANTHROPIC_API_KEY"))


_config: ContentRiskConfig | None = None


def get_content_risk_config() -> ContentRiskConfig:
    """Get global ContentRiskConfig instance."""
    global _config
    if _config is None:
        _config = ContentRiskConfig()
    return _config
