from __future__ import annotations

from pathlib import Path

import pytest

from src.evaluators import evaluate_year
from src.evaluators.outcome import YearEvaluation, YearTally
from src.exceptions import FileIOError
from src.models.config import ScorecardConfig
from src.models.school import SchoolOutcome
from src.storage import ReportWriter


def test_write_year_block_format(
    config: ScorecardConfig, scenario_2010, report_path: Path
) -> None:
    evaluation = evaluate_year(scenario_2010, 2010, config)

    with ReportWriter(report_path) as writer:
        writer.write_year(evaluation)

    assert report_path.read_text(encoding="utf-8") == (
        "2010 schools,id,pass\n"
        "Alpha College,100001,1\n"
        "Beta University,100002,0\n"
        "Gamma Institute,100003,0\n"
        "2010 number of passed schools: 1\n"
        "2010 number of failed schools: 2\n"
    )
    assert writer.years_written == 1
    assert writer.rows_written == 3


def test_writer_appends_across_runs(report_path: Path) -> None:
    report_path.parent.mkdir(parents=True)
    report_path.write_text("existing line\n", encoding="utf-8")
    evaluation = YearEvaluation(year=1996, tally=YearTally())

    with ReportWriter(report_path) as writer:
        writer.write_year(evaluation)

    assert report_path.read_text(encoding="utf-8").splitlines() == [
        "existing line",
        "1996 schools,id,pass",
        "1996 number of passed schools: 0",
        "1996 number of failed schools: 0",
    ]


def test_name_with_comma_is_quoted(report_path: Path) -> None:
    evaluation = YearEvaluation(
        year=2010,
        outcomes=[SchoolOutcome(school_id="7", name='Saint "X" College, Chicago', passed=True)],
        tally=YearTally(passed=1),
    )

    with ReportWriter(report_path) as writer:
        writer.write_year(evaluation)

    lines = report_path.read_text(encoding="utf-8").splitlines()
    assert lines[1] == '"Saint ""X"" College, Chicago",7,1'


def test_open_failure_raises_file_io_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(FileIOError) as exc_info:
        with ReportWriter(blocker / "report.csv"):
            pass

    assert exc_info.value.context["operation"] == "open"


def test_write_on_closed_writer_raises_file_io_error(report_path: Path) -> None:
    writer = ReportWriter(report_path)

    with pytest.raises(FileIOError, match="not open"):
        writer.write_year(YearEvaluation(year=2010))
