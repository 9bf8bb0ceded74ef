"""Reporting utilities for console and markdown output."""

from __future__ import annotations

import math
import sys
import textwrap
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from string import Template
from typing import Sequence, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from datetime import timedelta
    from .app import RunResult


_HYPOTHESES = {
    "two-sided": ("p = {p}", "p != {p}"),
    "greater": ("p <= {p}", "p > {p}"),
    "less": ("p >= {p}", "p < {p}"),
}


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        textwrap.dedent(
            """
            # Binomial Test Report

            ## Summary
            ${summary}

            ## Hypotheses
            ${hypotheses}

            ## Inputs
            ${inputs}

            ## Notes
            ${notes}

            _Generated on ${timestamp} (duration: ${duration})._
            """
        ).strip()
    )


DEFAULT_TEMPLATE = ReportTemplate()


def format_p_value(value: float) -> str:
    """Render ``value`` with fixed notation when readable, scientific otherwise."""

    if value == 0.0 or value >= 1e-4:
        return f"{value:.6f}"
    return f"{value:.6e}"


def print_console_summary(result: "RunResult", *, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Print a short summary of the test to ``stream``."""

    output = stream if stream is not None else sys.stdout
    test = result.test_result
    print(
        f"Result: {result.decision} | p-value: {format_p_value(test.p_value)}"
        f" (alpha {result.significance_level:g})",
        file=output,
    )
    if not verbose:
        return

    null, alternative = _hypotheses(result)
    print(f"Successes: {test.successes} of {test.trials} trials", file=output)
    print(f"Observed proportion: {_format_proportion(test.proportion_estimate)}", file=output)
    print(f"Null hypothesis: {null}", file=output)
    print(f"Alternative hypothesis: {alternative}", file=output)
    print(f"Relative tolerance: {result.relative_tolerance:g}", file=output)
    for warning in result.warnings:
        print(f"   note: {warning}", file=output)


def build_markdown_report(result: "RunResult", *, template: Template | None = None) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    return template.substitute(
        summary=_format_summary_section(result),
        hypotheses=_format_hypotheses_section(result),
        inputs=_format_inputs_section(result),
        notes=_format_notes(result.warnings),
        timestamp=result.started_at.astimezone(timezone.utc).isoformat(),
        duration=_format_duration(result.duration),
    )


def write_markdown_report(
    result: "RunResult",
    path: Path | None = None,
    *,
    template: Template | None = None,
) -> Path:
    """Render and persist a markdown report for ``result``."""

    target = _resolve_report_path(result, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    content = build_markdown_report(result, template=template)
    target.write_text(content, encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _hypotheses(result: "RunResult") -> tuple[str, str]:
    null, alternative = _HYPOTHESES[result.test_result.alternative.value]
    p = f"{result.test_result.p_null:g}"
    return null.format(p=p), alternative.format(p=p)


def _format_proportion(value: float) -> str:
    if math.isnan(value):
        return "undefined (no trials)"
    return f"{value:.4f}"


def _format_summary_section(result: "RunResult") -> str:
    return textwrap.dedent(
        f"""
        - **Decision:** {result.decision}
        - **p-value:** {format_p_value(result.test_result.p_value)}
        - **Significance level:** {result.significance_level:g}
        """
    ).strip()


def _format_hypotheses_section(result: "RunResult") -> str:
    null, alternative = _hypotheses(result)
    lines = [
        f"- **Null (H0):** {null}",
        f"- **Alternative (H1):** {alternative} ({result.test_result.alternative.value})",
    ]
    return "\n".join(lines)


def _format_inputs_section(result: "RunResult") -> str:
    test = result.test_result
    header = "| Successes | Trials | Observed proportion | Null probability | Tolerance |"
    separator = "| --- | --- | --- | --- | --- |"
    row = "| {} | {} | {} | {:g} | {:g} |".format(
        test.successes,
        test.trials,
        _format_proportion(test.proportion_estimate),
        test.p_null,
        result.relative_tolerance,
    )
    lines = [header, separator, row]
    if result.config_path is not None:
        lines.extend(["", f"- **Configuration file:** {result.config_path}"])
    return "\n".join(lines)


def _format_notes(warnings: Sequence[str]) -> str:
    if not warnings:
        return "- No additional notes were recorded."
    return "\n".join(f"- {note}" for note in warnings)


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return (Path("reports") / f"binomtest-{timestamp}.md").resolve()


__all__ = [
    "ReportTemplate",
    "build_markdown_report",
    "format_p_value",
    "print_console_summary",
    "write_markdown_report",
]
