"""Process-wide registry of async closers run at shutdown."""

import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

_cleanup_registry: list[tuple[str, Callable[[], Awaitable[None]]]] = []


def register_cleanup(name: str, closer: Callable[[], Awaitable[None]]) -> None:
    """Register a cleanup function to be called on shutdown."""
    _cleanup_registry.append((name, closer))


async def cleanup_all() -> None:
    """Run every registered closer (idempotent); errors are logged, not raised."""
    for name, closer in _cleanup_registry:
        try:
            await closer()
        except Exception as e:
            logger.warning(f"Error closing {name}: {e}")
