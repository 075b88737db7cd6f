from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from src.cli import report as report_cli
from src.cli.main import app
from src.fetchers.scorecard import ScorecardFetcher

from tests.conftest import FakeScorecardApi, make_record

runner = CliRunner()


@pytest.fixture
def cli_api(monkeypatch, fake_api: FakeScorecardApi) -> FakeScorecardApi:
    """Route the CLI's fetcher to the fake API and ignore any local scorecard.yaml."""

    def no_config(name: str):
        raise FileNotFoundError(name)

    monkeypatch.setenv("COLLEGE_API", "cli-key")
    monkeypatch.setattr(report_cli, "load_config", no_config)
    monkeypatch.setattr(
        report_cli,
        "ScorecardFetcher",
        lambda config: ScorecardFetcher(config, transport=fake_api.transport),
    )
    return fake_api


def _run_args(output: Path, *extra: str) -> list[str]:
    return [
        "report", "run",
        "--base-year", "2010",
        "--years", "1",
        "--page-size", "2",
        "--output", str(output),
        *extra,
    ]


def test_run_writes_report(cli_api: FakeScorecardApi, scenario_2010, report_path: Path) -> None:
    cli_api.add_year(2010, scenario_2010)

    result = runner.invoke(app, _run_args(report_path))

    assert result.exit_code == 0, result.output
    assert "Report completed" in result.output
    lines = report_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "2010 schools,id,pass"
    assert lines[-2:] == [
        "2010 number of passed schools: 1",
        "2010 number of failed schools: 2",
    ]
    assert cli_api.requests[0].url.params["api_key"] == "cli-key"
    assert cli_api.requests[0].url.params["per_page"] == "2"


def test_run_fetch_failure_exits_non_zero(
    cli_api: FakeScorecardApi, scenario_2010, report_path: Path
) -> None:
    cli_api.add_year(2010, scenario_2010)
    cli_api.fail(2010, 1, httpx.Response(500, text="boom"))

    result = runner.invoke(app, _run_args(report_path))

    assert result.exit_code == 1
    assert "Year 2010 page 1" in result.output
    assert "cli-key" not in result.output


def test_run_skip_policy_exits_zero(cli_api: FakeScorecardApi, report_path: Path) -> None:
    cli_api.fail(2010, 0, httpx.Response(500, text="boom"))

    result = runner.invoke(app, _run_args(report_path, "--on-error", "skip"))

    assert result.exit_code == 0, result.output
    assert "Skipped years: 2010" in result.output


def test_run_rejects_unknown_error_policy(cli_api: FakeScorecardApi, report_path: Path) -> None:
    result = runner.invoke(app, _run_args(report_path, "--on-error", "retry"))

    assert result.exit_code == 1
    assert "Unknown --on-error value" in result.output


def test_run_rejects_invalid_page_size(cli_api: FakeScorecardApi, report_path: Path) -> None:
    result = runner.invoke(app, ["report", "run", "--page-size", "500", "--output", str(report_path)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert cli_api.requests == []


def test_run_unwritable_output_exits_non_zero(
    cli_api: FakeScorecardApi, scenario_2010, tmp_path: Path
) -> None:
    cli_api.add_year(2010, scenario_2010)
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    result = runner.invoke(app, _run_args(blocker / "report.csv"))

    assert result.exit_code == 1
    assert "Report file failed" in result.output


def test_url_command_redacts_key(cli_api: FakeScorecardApi) -> None:
    result = runner.invoke(app, ["report", "url", "--year", "2001", "--page", "2"])

    assert result.exit_code == 0, result.output
    assert "page=2" in result.output
    assert "2001.repayment.3_yr_default_rate" in result.output
    assert "api_key=***" in result.output
    assert "cli-key" not in result.output


def test_run_never_prints_api_key(
    cli_api: FakeScorecardApi, scenario_2010, report_path: Path
) -> None:
    cli_api.add_year(2010, scenario_2010)

    result = runner.invoke(app, _run_args(report_path))

    assert result.exit_code == 0, result.output
    assert len(cli_api.requests) == 2
    assert "cli-key" not in result.output


def test_run_reports_skipped_records(cli_api: FakeScorecardApi, report_path: Path) -> None:
    cli_api.add_year(2010, [
        make_record(1, "Good College", 2010, 60000, 0.01),
        make_record(None, "No Id College", 2010, 60000, 0.01),
        make_record(3, "Poor College", 2010, 20000, 0.01),
    ])

    result = runner.invoke(app, _run_args(report_path))

    assert result.exit_code == 0, result.output
    assert "Schools: 3" in result.output
    assert "Skipped records: 1" in result.output


def test_url_command_rejects_invalid_config(monkeypatch) -> None:
    monkeypatch.setattr(
        report_cli, "load_config", lambda name: {"pagination": {"page_size": 0}}
    )

    result = runner.invoke(app, ["report", "url"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
