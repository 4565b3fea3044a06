"""
Shared testing utilities.

- fake_oracle: deterministic ClassificationOracle double with call counting
- builders: shorthand constructors for items, verdicts and results
"""

from .builders import make_classified, make_item, make_verdict
from .fake_oracle import FakeOracle

__all__ = [
    "FakeOracle",
    "make_item",
    "make_verdict",
    "make_classified",
]
