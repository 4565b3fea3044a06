"""Riskscan configuration and environment setup.

This module provides centralized configuration for the riskscan process,
including development mode detection, LangSmith tracing setup and the
module-based logging handlers.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers whose records go to per-module files; everything else is third-party
PROJECT_LOGGER_PREFIXES = ("core", "services", "testing", "__main__")

_logging_configured = False


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if RISKSCAN_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("RISKSCAN_MODE", "prod").lower() == "dev"


def configure_langsmith() -> None:
    """Configure LangSmith tracing based on RISKSCAN_MODE.

    When RISKSCAN_MODE=dev:
        - Enables LangSmith tracing
        - Sets project to 'riskscan-dev'

    When RISKSCAN_MODE=prod (or unset):
        - Disables LangSmith tracing

    This function is idempotent and safe to call multiple times.
    """
    if is_dev_mode():
        os.environ.setdefault("LANGSMITH_TRACING", "true")
        os.environ.setdefault("LANGSMITH_PROJECT", "riskscan-dev")
    else:
        os.environ["LANGSMITH_TRACING"] = "false"


def get_log_dir() -> Path:
    """Resolve and create the log directory (RISKSCAN_LOG_DIR, default logs/)."""
    log_dir = Path(os.getenv("RISKSCAN_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


class _ProjectFilter(logging.Filter):
    def __init__(self, project: bool):
        super().__init__()
        self.project = project

    def filter(self, record: logging.LogRecord) -> bool:
        is_project = record.name.split(".")[0] in PROJECT_LOGGER_PREFIXES
        return is_project == self.project


def configure_logging(name: str, level: int = logging.INFO) -> None:
    """Install module-dispatch and third-party file handlers on the root logger.

    Safe to call from every entry point; handlers are installed once per
    process. The name is only used to label the first log line.

    Args:
        name: Entry point name (e.g. "cli", "risk_api")
        level: Root logger level
    """
    global _logging_configured

    from core.logging import ModuleDispatchHandler, ThirdPartyHandler

    if not _logging_configured:
        log_dir = get_log_dir()
        formatter = logging.Formatter(LOG_FORMAT)

        module_handler = ModuleDispatchHandler(log_dir)
        module_handler.setFormatter(formatter)
        module_handler.addFilter(_ProjectFilter(project=True))

        third_party_handler = ThirdPartyHandler(log_dir)
        third_party_handler.setFormatter(formatter)
        third_party_handler.addFilter(_ProjectFilter(project=False))

        root = logging.getLogger()
        root.addHandler(module_handler)
        root.addHandler(third_party_handler)
        root.setLevel(level)
        _logging_configured = True

    logging.getLogger(__name__).info(f"Logging configured for {name}")
