"""
Pytest configuration for the riskscan test suite.

Usage:
    pytest
    pytest testing/test_batch_orchestrator.py -v
    pytest -m "not integration"
"""

from collections.abc import Generator

import pytest

from core.content_risk import ContentRiskConfig, ContentRiskService
from core.llm.models import ModelTier
from core.logging import end_run, start_run
from testing.utils import FakeOracle


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Give each test module its own logging run."""
    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


@pytest.fixture
def risk_config() -> ContentRiskConfig:
    """Explicit config so tests don't depend on RISKSCAN_* variables."""
    return ContentRiskConfig(
        batch_size=5,
        concurrency=5,
        max_retries=0,
        retry_backoff=0.0,
        oracle_timeout=5.0,
        model_tier=ModelTier.HAIKU,
        max_tokens=1000,
        temperature=0.3,
    )


@pytest.fixture
def fake_oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def risk_service(risk_config, fake_oracle) -> ContentRiskService:
    return ContentRiskService(config=risk_config, oracle=fake_oracle)


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests requiring a live Anthropic key",
    )
