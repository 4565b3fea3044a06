"""Exceptions for the content risk pipeline."""

from enum import Enum


class OracleErrorKind(str, Enum):
    """Why a classification oracle call produced no usable verdict."""

    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_RESPONSE = "empty_response"


class BatchErrorKind(str, Enum):
    """Precondition violations on a whole batch."""

    EMPTY_INPUT = "empty_input"
    INVALID_CONCURRENCY = "invalid_concurrency"


class ContentRiskError(Exception):
    """Base content risk exception."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class OracleError(ContentRiskError):
    """The oracle could not be reached, timed out, or answered unusably."""

    def __init__(
        self,
        message: str,
        kind: OracleErrorKind,
        item_preview: str | None = None,
    ):
        self.kind = kind
        self.item_preview = item_preview
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class BatchError(ContentRiskError):
    """The batch input was rejected before any classification started."""

    def __init__(self, message: str, kind: BatchErrorKind):
        self.kind = kind
        super().__init__(message)
