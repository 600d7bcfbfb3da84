"""Unit tests for the command-line interface."""

import json
import sys
from datetime import date
from unittest.mock import patch

import pytest

from wattwise.cli import run_cli


@pytest.fixture
def run(monkeypatch, capsys):
    """Invoke the CLI with arguments and return (exit_code, stdout)."""

    def invoke(*argv):
        monkeypatch.setattr(sys, "argv", ["wattwise", *argv])
        with pytest.raises(SystemExit) as exc_info:
            run_cli()
        return exc_info.value.code, capsys.readouterr().out

    return invoke


@pytest.fixture
def usage_file(tmp_path, half_year_xml):
    path = tmp_path / "usage.xml"
    path.write_text(half_year_xml, encoding="utf-8")
    return path


@pytest.fixture
def catalog_file(tmp_path, catalog_payload):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"plans": catalog_payload}), encoding="utf-8")
    return path


class TestAnalyze:
    """Tests for the analyze command."""

    def test_prints_months_and_score(self, run, usage_file):
        code, out = run("analyze", str(usage_file))

        assert code == 0
        assert "2024-01-01 to 2024-06-30 (good)" in out
        assert "- 2024-01: 744.00 kWh over 31 days (24.00 kWh/day)" in out
        assert "Quality score: 82 (high confidence)" in out

    def test_short_feed(self, run, tmp_path, feed_builder, daily_blocks):
        path = tmp_path / "short.xml"
        path.write_text(feed_builder(daily_blocks(date(2024, 1, 1), 60)), encoding="utf-8")

        code, out = run("analyze", str(path))

        assert code == 1
        assert "found 2 months" in out

    def test_missing_file(self, run, tmp_path):
        code, out = run("analyze", str(tmp_path / "nope.xml"))

        assert code == 1
        assert "Cannot read file" in out


class TestRecommend:
    """Tests for the recommend command."""

    def test_recommends_three_plans(self, run, usage_file, catalog_file):
        code, out = run(
            "recommend",
            str(usage_file),
            "--catalog",
            str(catalog_file),
            "--current-rate",
            "15",
            "--cost-priority",
            "100",
        )

        assert code == 0
        assert out.startswith("1. ")
        assert "3. " in out
        assert "Annual cost: $" in out
        assert "Confidence: high" in out
        assert "Sign up: https://www.powertochoose.org/" in out

    def test_contract_scenarios(self, run, usage_file, catalog_file):
        code, out = run(
            "recommend",
            str(usage_file),
            "-c",
            str(catalog_file),
            "--current-rate",
            "15",
            "--etf",
            "100",
        )

        assert code == 0
        assert "Continue with your current plan" in out
        assert "Switch now (+$100 fee)" in out

    def test_contract_end_uses_default_fee(self, run, usage_file, catalog_file):
        code, out = run(
            "recommend",
            str(usage_file),
            "-c",
            str(catalog_file),
            "--current-rate",
            "15",
            "--contract-end",
            "12/2030",
        )

        assert code == 0
        assert "Switch now (+$150 fee)" in out

    def test_bad_priorities(self, run, usage_file, catalog_file):
        code, out = run(
            "recommend",
            str(usage_file),
            "-c",
            str(catalog_file),
            "--current-rate",
            "15",
            "--cost-priority",
            "60",
            "--renewable-priority",
            "60",
        )

        assert code == 1
        assert "Invalid input" in out

    def test_invalid_catalog_json(self, run, usage_file, tmp_path):
        catalog = tmp_path / "broken.json"
        catalog.write_text("{", encoding="utf-8")

        code, out = run("recommend", str(usage_file), "-c", str(catalog), "--current-rate", "15")

        assert code == 1
        assert "Invalid JSON" in out

    def test_empty_catalog(self, run, usage_file, tmp_path):
        catalog = tmp_path / "empty.json"
        catalog.write_text("[]", encoding="utf-8")

        code, out = run("recommend", str(usage_file), "-c", str(catalog), "--current-rate", "15")

        assert code == 1
        assert "No plans available" in out


class TestGlobalOptions:
    """Tests for top-level CLI behaviour."""

    def test_no_command_prints_help(self, run):
        code, out = run()

        assert code == 0
        assert "Available commands" in out

    def test_invalid_log_level(self, run, usage_file):
        code, out = run("--log-level", "chatty", "analyze", str(usage_file))

        assert code == 1
        assert "Invalid log level" in out

    def test_serve_delegates_to_server(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["wattwise", "serve", "--port", "9001"])

        with patch("wattwise.api.server.run_server") as mock_run:
            run_cli()

        mock_run.assert_called_once_with(host=None, port=9001, reload=None, workers=None)
