"""Core utilities for async resource lifecycle."""

from .cleanup import cleanup_all, register_cleanup

__all__ = [
    "cleanup_all",
    "register_cleanup",
]
