"""Classification oracle adapters."""

from .base import ClassificationOracle, build_oracle_request, parse_verdict
from .claude import AnthropicRiskOracle

__all__ = [
    "ClassificationOracle",
    "AnthropicRiskOracle",
    "build_oracle_request",
    "parse_verdict",
]
