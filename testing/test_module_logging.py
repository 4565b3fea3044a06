"""Unit tests for module-based logging."""

import logging

import pytest

import core.config as config_module
from core.config import configure_logging
from core.logging import (
    MODULE_TO_LOG,
    ModuleDispatchHandler,
    ThirdPartyHandler,
    end_run,
    get_current_run_id,
    module_to_log_name,
    start_run,
)
from core.logging.run_manager import _compute_log_name, _module_log_cache, should_rotate


def _record(name: str, msg: str) -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestModuleToLogName:
    """Tests for module_to_log_name()."""

    def test_pipeline_modules(self):
        assert module_to_log_name("core.content_risk") == "content-risk"
        assert module_to_log_name("core.content_risk.batch") == "content-risk"
        assert module_to_log_name("core.content_risk.classifier") == "content-risk"

    def test_longest_prefix_wins(self):
        assert module_to_log_name("core.content_risk.oracle.claude") == "oracle"

    def test_other_mappings(self):
        assert module_to_log_name("core.llm.models") == "llm"
        assert module_to_log_name("services.risk_api.main") == "risk-api"
        assert module_to_log_name("core.config") == "config"

    def test_prefix_must_end_on_module_boundary(self):
        assert module_to_log_name("core.content_risky") == "misc"

    def test_fallback_to_misc(self):
        assert module_to_log_name("unknown.module") == "misc"
        assert module_to_log_name("__main__") == "misc"

    def test_caching(self):
        _module_log_cache.clear()
        result = module_to_log_name("core.content_risk.test_module")
        assert _module_log_cache["core.content_risk.test_module"] == result

    def test_all_mappings_valid(self):
        for prefix, log_name in MODULE_TO_LOG.items():
            assert _compute_log_name(prefix) == log_name


class TestRunLifecycle:
    """Tests for start_run/end_run and should_rotate."""

    def test_start_and_end(self):
        end_run()
        assert get_current_run_id() is None

        start_run("run-123")
        assert get_current_run_id() == "run-123"

        end_run()
        assert get_current_run_id() is None

    def test_no_rotation_without_run(self):
        end_run()
        assert should_rotate("content-risk") is False

    def test_rotates_once_per_log_per_run(self):
        start_run("run")
        assert should_rotate("content-risk") is True
        assert should_rotate("content-risk") is False
        assert should_rotate("oracle") is True
        end_run()

    def test_new_run_resets_rotation(self):
        start_run("run-1")
        assert should_rotate("content-risk") is True
        start_run("run-2")
        assert should_rotate("content-risk") is True
        end_run()


class TestModuleDispatchHandler:
    """Tests for ModuleDispatchHandler."""

    def test_routes_to_module_files(self, tmp_path):
        handler = ModuleDispatchHandler(tmp_path)
        handler.setFormatter(logging.Formatter("%(message)s"))

        handler.emit(_record("core.content_risk.batch", "Batch message"))
        handler.emit(_record("core.content_risk.oracle.claude", "Oracle message"))
        handler.close()

        assert "Batch message" in (tmp_path / "content-risk.log").read_text()
        assert "Oracle message" in (tmp_path / "oracle.log").read_text()

    def test_rotation_on_new_run(self, tmp_path):
        handler = ModuleDispatchHandler(tmp_path)
        handler.setFormatter(logging.Formatter("%(message)s"))

        start_run("run-1")
        handler.emit(_record("core.content_risk", "Run 1 message"))
        start_run("run-2")
        handler.emit(_record("core.content_risk", "Run 2 message"))
        end_run()
        handler.close()

        assert "Run 2 message" in (tmp_path / "content-risk.log").read_text()
        assert "Run 1 message" in (tmp_path / "content-risk.previous.log").read_text()

    def test_close_releases_streams(self, tmp_path):
        handler = ModuleDispatchHandler(tmp_path)
        handler.setFormatter(logging.Formatter("%(message)s"))
        for name in ("core.content_risk", "core.llm", "services.risk_api"):
            handler.emit(_record(name, f"from {name}"))
        assert sorted(handler.open_logs) == ["content-risk", "llm", "risk-api"]

        handler.close()

        assert handler.open_logs == []

    def test_only_one_previous_file_kept(self, tmp_path):
        handler = ModuleDispatchHandler(tmp_path)
        handler.setFormatter(logging.Formatter("%(message)s"))

        for run in ("run-1", "run-2", "run-3"):
            start_run(run)
            handler.emit(_record("core.llm", f"{run} message"))
        end_run()
        handler.close()

        assert "run-3 message" in (tmp_path / "llm.log").read_text()
        previous = (tmp_path / "llm.previous.log").read_text()
        assert "run-2 message" in previous
        assert "run-1 message" not in previous
        assert sorted(p.name for p in tmp_path.iterdir()) == ["llm.log", "llm.previous.log"]


class TestThirdPartyHandler:
    """Tests for ThirdPartyHandler."""

    def test_single_file_with_rotation(self, tmp_path):
        handler = ThirdPartyHandler(tmp_path)
        handler.setFormatter(logging.Formatter("%(message)s"))

        start_run("run-1")
        handler.emit(_record("httpx", "Run 1 httpx"))
        start_run("run-2")
        handler.emit(_record("anthropic", "Run 2 anthropic"))
        end_run()
        handler.close()

        assert "Run 2 anthropic" in (tmp_path / "run-3p.log").read_text()
        assert "Run 1 httpx" in (tmp_path / "run-3p.previous.log").read_text()


class TestConfigureLogging:
    """Tests for core.config.configure_logging()."""

    @pytest.fixture
    def clean_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RISKSCAN_LOG_DIR", str(tmp_path))
        monkeypatch.setattr(config_module, "_logging_configured", False)
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        yield tmp_path
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)

    def test_splits_project_and_third_party(self, clean_root):
        end_run()
        configure_logging("test")
        configure_logging("test")  # second call is a no-op

        logging.getLogger("core.content_risk.batch").info("pipeline line")
        logging.getLogger("httpx").info("library line")
        for handler in logging.getLogger().handlers:
            handler.flush()

        project_log = (clean_root / "content-risk.log").read_text()
        third_party_log = (clean_root / "run-3p.log").read_text()
        assert "pipeline line" in project_log
        assert "library line" not in project_log
        assert "library line" in third_party_log
        assert "pipeline line" not in third_party_log

    def test_dev_mode(self, monkeypatch):
        monkeypatch.setenv("RISKSCAN_MODE", "dev")
        assert config_module.is_dev_mode()
        monkeypatch.setenv("RISKSCAN_MODE", "prod")
        assert not config_module.is_dev_mode()
