"""Tests for :mod:`binomtest.reporting`."""

from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from binomtest import reporting
from binomtest.alternative import Alternative
from binomtest.app import RunResult
from binomtest.core import BinomTestResult


def _build_run_result(tmp_path: Path, *, trials: int = 711) -> RunResult:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[test]\n", encoding="utf-8")
    return RunResult(
        test_result=BinomTestResult(
            successes=342 if trials else 0,
            trials=trials,
            p_null=0.2,
            alternative=Alternative.TWO_SIDED,
            p_value=5.29655579272766e-63,
        ),
        significance_level=0.05,
        relative_tolerance=1e-7,
        config_path=config_path,
        started_at=datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        duration=timedelta(seconds=1.234),
        warnings=("Ignoring unknown section [extras].",),
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, "0.500000"), (1.0, "1.000000"), (0.0, "0.000000"), (2.5e-42, "2.500000e-42")],
)
def test_format_p_value(value: float, expected: str) -> None:
    assert reporting.format_p_value(value) == expected


def test_print_console_summary_short(tmp_path: Path) -> None:
    buffer = io.StringIO()
    reporting.print_console_summary(_build_run_result(tmp_path), stream=buffer)

    assert buffer.getvalue() == "Result: REJECT | p-value: 5.296556e-63 (alpha 0.05)\n"


def test_print_console_summary_verbose(tmp_path: Path) -> None:
    buffer = io.StringIO()
    reporting.print_console_summary(_build_run_result(tmp_path), verbose=True, stream=buffer)
    output = buffer.getvalue()

    assert "Successes: 342 of 711 trials" in output
    assert "Observed proportion: 0.4810" in output
    assert "Null hypothesis: p = 0.2" in output
    assert "Alternative hypothesis: p != 0.2" in output
    assert "Relative tolerance: 1e-07" in output
    assert "note: Ignoring unknown section [extras]." in output


def test_verbose_summary_without_trials(tmp_path: Path) -> None:
    buffer = io.StringIO()
    reporting.print_console_summary(
        _build_run_result(tmp_path, trials=0), verbose=True, stream=buffer
    )

    assert "Observed proportion: undefined (no trials)" in buffer.getvalue()


def test_write_markdown_report_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    result = _build_run_result(tmp_path)
    monkeypatch.chdir(tmp_path)

    report_path = reporting.write_markdown_report(result)

    expected = (tmp_path / "reports" / "binomtest-20230102-030405.md").resolve()
    assert report_path == expected
    content = report_path.read_text(encoding="utf-8")

    assert "# Binomial Test Report" in content
    assert "- **Decision:** REJECT" in content
    assert "- **Null (H0):** p = 0.2" in content
    assert "- **Alternative (H1):** p != 0.2 (two-sided)" in content
    assert "| 342 | 711 | 0.4810 | 0.2 | 1e-07 |" in content
    assert "Ignoring unknown section [extras]." in content
    assert "Generated on 2023-01-02T03:04:05+00:00 (duration: 1.23 s)" in content


def test_write_markdown_report_custom_path(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path)
    custom_path = tmp_path / "custom" / "report.md"

    written_path = reporting.write_markdown_report(result, path=custom_path)

    assert written_path == custom_path.resolve()
    assert custom_path.exists()
