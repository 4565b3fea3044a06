"""Classification oracle interface and shared response parsing."""

import json
from abc import ABC, abstractmethod

from pydantic import ValidationError

from core.llm.response_parsing import extract_json_from_response

from ..errors import OracleError, OracleErrorKind
from ..types import ContentItem, OracleRequest, OracleVerdict


def build_oracle_request(item: ContentItem) -> OracleRequest:
    """Build the request payload the oracle receives for one item."""
    return OracleRequest(
        content=item.text,
        platform=item.platform,
        content_type=item.content_type,
    )


def parse_verdict(raw: str | None, item_preview: str | None = None) -> OracleVerdict:
    """Parse raw oracle text into an OracleVerdict.

    Raises:
        OracleError: EMPTY_RESPONSE for blank text, MALFORMED_RESPONSE for
            non-JSON, non-object JSON, missing keys or extra keys
    """
    if raw is None or not raw.strip():
        raise OracleError(
            "Oracle returned an empty response",
            OracleErrorKind.EMPTY_RESPONSE,
            item_preview=item_preview,
        )

    try:
        data = extract_json_from_response(raw)
    except json.JSONDecodeError as e:
        raise OracleError(
            f"Oracle response is not valid JSON: {e}",
            OracleErrorKind.MALFORMED_RESPONSE,
            item_preview=item_preview,
        ) from e

    if not isinstance(data, dict):
        raise OracleError(
            f"Oracle response is a JSON {type(data).__name__}, expected an object",
            OracleErrorKind.MALFORMED_RESPONSE,
            item_preview=item_preview,
        )

    try:
        return OracleVerdict.model_validate(data)
    except ValidationError as e:
        problems = []
        for label, error_type in (("missing", "missing"), ("unexpected", "extra_forbidden")):
            keys = sorted(str(err["loc"][0]) for err in e.errors() if err["type"] == error_type)
            if keys:
                problems.append(f"{label} fields: {', '.join(keys)}")
        raise OracleError(
            f"Oracle response does not match the verdict shape ({'; '.join(problems)})",
            OracleErrorKind.MALFORMED_RESPONSE,
            item_preview=item_preview,
        ) from e


class ClassificationOracle(ABC):
    """Abstract base for classification oracles.

    Implementations make exactly one external call per classify() and either
    return a parsed verdict or raise OracleError. They never fabricate a
    verdict.
    """

    @abstractmethod
    async def classify(self, item: ContentItem) -> OracleVerdict:
        """Classify one item.

        Raises:
            OracleError: Call failed, timed out, or returned unusable output
        """
        pass

    async def close(self) -> None:
        """Release client resources. Override in subclass."""
        pass
