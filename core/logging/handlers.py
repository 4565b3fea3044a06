"""Logging handlers that write one file per log name, rotated per run.

ModuleDispatchHandler names files after the MODULE_TO_LOG entry for the
record's logger; ThirdPartyHandler sends everything it sees to run-3p.log.
On the first write of a run, <name>.log becomes <name>.previous.log.
"""

import logging
from pathlib import Path
from typing import TextIO

from .run_manager import module_to_log_name, should_rotate


class RunRotatingHandler(logging.Handler):
    """Base handler: lazily opened per-name streams with run rotation.

    Subclasses choose the log name for a record via log_name_for().
    """

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = Path(log_dir)
        self._streams: dict[str, TextIO] = {}

    def log_name_for(self, record: logging.LogRecord) -> str:
        raise NotImplementedError

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = self._stream_for(self.log_name_for(record))
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)

    def _stream_for(self, log_name: str) -> TextIO:
        if should_rotate(log_name):
            stale = self._streams.pop(log_name, None)
            if stale:
                stale.close()
            current = self.log_dir / f"{log_name}.log"
            if current.exists():
                current.replace(self.log_dir / f"{log_name}.previous.log")

        if log_name not in self._streams:
            path = self.log_dir / f"{log_name}.log"
            self._streams[log_name] = path.open("a", encoding="utf-8")
        return self._streams[log_name]

    @property
    def open_logs(self) -> list[str]:
        return list(self._streams)

    def close(self) -> None:
        self.acquire()
        try:
            while self._streams:
                _, stream = self._streams.popitem()
                stream.close()
        finally:
            self.release()
        super().close()


class ModuleDispatchHandler(RunRotatingHandler):
    """Project records, one file per MODULE_TO_LOG name (misc.log otherwise).

    Usage:
        handler = ModuleDispatchHandler(Path("logs"))
        handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
        logging.getLogger().addHandler(handler)
    """

    def log_name_for(self, record: logging.LogRecord) -> str:
        return module_to_log_name(record.name)


class ThirdPartyHandler(RunRotatingHandler):
    """Library output (httpx, anthropic, uvicorn) in a single run-3p.log."""

    LOG_NAME = "run-3p"

    def log_name_for(self, record: logging.LogRecord) -> str:
        return self.LOG_NAME
