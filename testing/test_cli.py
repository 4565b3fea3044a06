"""Tests for the content risk CLI."""

import json

import pytest

import core.content_risk.cli as cli
from core.content_risk import ContentRiskService, OracleError, OracleErrorKind
from testing.utils import FakeOracle, make_verdict


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "posts.json"
    path.write_text(
        json.dumps(
            [
                {"text": "Got an off-campus cash job", "platform": "instagram", "contentType": "post"},
                {"content": "Studying for finals", "platform": "twitter", "contentType": "tweet"},
            ]
        )
    )
    return path


@pytest.fixture
def fake_service(monkeypatch):
    oracle = FakeOracle(
        responses={
            "Got an off-campus cash job": make_verdict(level="high", score=80),
            "Studying for finals": OracleError("down", OracleErrorKind.UNAVAILABLE),
        }
    )
    monkeypatch.setattr(
        cli, "ContentRiskService", lambda config: ContentRiskService(config=config, oracle=oracle)
    )
    return oracle


class TestLoadItems:
    def test_accepts_text_and_content_keys(self, items_file):
        items = cli.load_items(items_file)
        assert [i.text for i in items] == ["Got an off-campus cash job", "Studying for finals"]

    def test_invalid_items(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"text": "x", "platform": "myspace", "contentType": "post"}]))
        with pytest.raises(ValueError):
            cli.load_items(path)


class TestRun:
    async def test_prints_summary_and_writes_output(self, items_file, tmp_path, fake_service, capsys):
        output = tmp_path / "summary.json"
        args = cli.build_parser().parse_args([str(items_file), "--output", str(output)])

        exit_code = await cli.run(args)

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Overall risk:     MEDIUM" in out
        assert "fallback" in out
        saved = json.loads(output.read_text())
        assert saved["totalItems"] == 2
        assert saved["succeededCount"] == 1
        assert saved["averageRiskScore"] == 65
        assert saved["perItem"][1]["succeeded"] is False

    async def test_overrides_batch_size(self, items_file, fake_service):
        args = cli.build_parser().parse_args([str(items_file), "--batch-size", "1", "--concurrency", "1"])

        assert await cli.run(args) == 0
        assert fake_service.max_in_flight == 1

    async def test_unreadable_input(self, tmp_path, capsys):
        args = cli.build_parser().parse_args([str(tmp_path / "missing.json")])

        assert await cli.run(args) == 2
        assert "Could not read items" in capsys.readouterr().err

    async def test_empty_batch(self, tmp_path, fake_service, capsys):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        args = cli.build_parser().parse_args([str(path)])

        assert await cli.run(args) == 2
        assert "Batch rejected" in capsys.readouterr().err
