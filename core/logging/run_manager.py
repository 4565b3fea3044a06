"""Run-based log rotation manager.

A "run" is one logical unit of work (a CLI invocation, an API process
start, or a test module). The first write to each module's log file within
a run rotates the previous file out of the way.

Usage:
    from core.logging import start_run, end_run

    start_run("cli-batch")
    try:
        ...
    finally:
        end_run()
"""

from contextvars import ContextVar

# ContextVars so concurrent async runs do not share rotation state
_current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)
_rotated_this_run: ContextVar[set[str] | None] = ContextVar("rotated_this_run", default=None)

# Module names don't change, so this cache is shared across runs
_module_log_cache: dict[str, str] = {}

# Longest-prefix match from module path to log file name.
# Unmapped modules go to "misc.log"
MODULE_TO_LOG = {
    # Pipeline
    "core.content_risk.oracle": "oracle",
    "core.content_risk": "content-risk",
    # Shared core
    "core.llm": "llm",
    "core.config": "config",
    "core.logging": "logging-internal",
    # Request-handling layer
    "services.risk_api": "risk-api",
    "testing": "testing",
}

_SORTED_PREFIXES = sorted(MODULE_TO_LOG.keys(), key=len, reverse=True)


def start_run(run_id: str) -> None:
    """Signal start of new run.

    Calling again replaces the run and resets rotation tracking.

    Args:
        run_id: Unique identifier for this run (e.g. "cli", a test module path)
    """
    _current_run_id.set(run_id)
    _rotated_this_run.set(set())


def end_run() -> None:
    """Signal end of run.

    Rotation is driven by start_run(), so a missed end_run() is harmless.
    """
    _current_run_id.set(None)
    _rotated_this_run.set(None)


def get_current_run_id() -> str | None:
    """Get the current run ID, if any."""
    return _current_run_id.get()


def should_rotate(log_name: str) -> bool:
    """Return True the first time a log file is written within the current run.

    Marks the log as rotated, so later calls in the same run return False.
    Always False outside a run.
    """
    run_id = _current_run_id.get()
    rotated = _rotated_this_run.get()

    if run_id is None or rotated is None:
        return False

    if log_name in rotated:
        return False

    rotated.add(log_name)
    return True


def module_to_log_name(module_name: str) -> str:
    """Resolve a module __name__ to its log file name (without extension).

    Example:
        module_to_log_name("core.content_risk.batch") -> "content-risk"
    """
    if module_name not in _module_log_cache:
        _module_log_cache[module_name] = _compute_log_name(module_name)
    return _module_log_cache[module_name]


def _compute_log_name(module_name: str) -> str:
    for prefix in _SORTED_PREFIXES:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return MODULE_TO_LOG[prefix]
    return "misc"
