"""LLM utilities shared by the riskscan pipeline.

- Tiered Anthropic model selection (Haiku/Sonnet/Opus) through LangChain
- Response text and JSON extraction tolerant of markdown fences
"""

from .models import ModelTier, get_llm
from .response_parsing import extract_json_from_response, extract_response_content

__all__ = [
    "ModelTier",
    "get_llm",
    "extract_json_from_response",
    "extract_response_content",
]
