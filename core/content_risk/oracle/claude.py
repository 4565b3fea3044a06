"""Classification oracle backed by Anthropic Claude through LangChain."""

import asyncio
import logging

import anthropic
from langchain_anthropic import ChatAnthropic
from langsmith import traceable

from core.llm.models import get_llm
from core.llm.response_parsing import extract_response_content

from ..config import ContentRiskConfig, get_content_risk_config
from ..errors import OracleError, OracleErrorKind
from ..prompts import RISK_SYSTEM_PROMPT, RISK_USER_TEMPLATE
from ..types import ContentItem, OracleVerdict
from .base import ClassificationOracle, build_oracle_request, parse_verdict

logger = logging.getLogger(__name__)


class AnthropicRiskOracle(ClassificationOracle):
    """Prompts Claude for a JSON risk verdict and parses the reply.

    The chat model is created lazily so a missing ANTHROPIC_API_KEY surfaces
    as an UNAVAILABLE OracleError on the first call rather than at import.
    """

    def __init__(self, config: ContentRiskConfig | None = None):
        self._config = config or get_content_risk_config()
        self._llm: ChatAnthropic | None = None

    def _get_llm(self) -> ChatAnthropic:
        if self._llm is None:
            try:
                self._llm = get_llm(
                    tier=self._config.model_tier,
                    max_tokens=self._config.max_tokens,
                    temperature=self._config.temperature,
                    timeout=self._config.oracle_timeout,
                )
            except ValueError as e:
                raise OracleError(str(e), OracleErrorKind.UNAVAILABLE) from e
        return self._llm

    def _build_messages(self, item: ContentItem) -> list[dict]:
        request = build_oracle_request(item)
        user_prompt = RISK_USER_TEMPLATE.format(
            content_type=request.content_type.value,
            platform=request.platform.value,
            content=request.content,
        )
        return [
            {"role": "system", "content": RISK_SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ]

    @traceable(run_type="llm", name="content_risk_oracle")
    async def classify(self, item: ContentItem) -> OracleVerdict:
        preview = item.preview()
        llm = self._get_llm()
        messages = self._build_messages(item)
        timeout = self._config.oracle_timeout

        try:
            response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
        except (asyncio.TimeoutError, anthropic.APITimeoutError) as e:
            raise OracleError(
                f"Oracle call timed out after {timeout:g}s",
                OracleErrorKind.TIMEOUT,
                item_preview=preview,
            ) from e
        except anthropic.APIError as e:
            raise OracleError(
                f"Oracle unavailable: {type(e).__name__}: {e}",
                OracleErrorKind.UNAVAILABLE,
                item_preview=preview,
            ) from e

        content = extract_response_content(response)
        logger.debug(f"Oracle replied with {len(content)} chars for '{preview}'")
        return parse_verdict(content, item_preview=preview)
