"""Application orchestration for the binomial test CLI."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TextIO

from .alternative import Alternative
from .config import BinomTestConfig, load_config
from .core import BinomTestResult, run_binomial_test
from .errors import InvalidConfigurationError
from .logging import log_run_result
from .reporting import print_console_summary, write_markdown_report

REJECT = "REJECT"
FAIL_TO_REJECT = "FAIL TO REJECT"


@dataclass(frozen=True)
class RunResult:
    """Summary of a full application run."""

    test_result: BinomTestResult
    significance_level: float
    relative_tolerance: float
    config_path: Path | None
    started_at: datetime
    duration: timedelta
    warnings: tuple[str, ...] = ()

    @property
    def rejected(self) -> bool:
        """Return whether the null hypothesis is rejected at the configured level."""

        return self.test_result.p_value < self.significance_level

    @property
    def decision(self) -> str:
        return REJECT if self.rejected else FAIL_TO_REJECT


class BinomialTestApp:
    """High level service wiring configuration, execution, and rendering."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        successes: int | None = None,
        trials: int | None = None,
        p_null: float | None = None,
        alternative: Alternative | str | None = None,
        *,
        config_path: Path | None = None,
        report_path: Path | None = None,
        significance_level: float | None = None,
        rel_tol: float | None = None,
        verbose: bool = False,
        stream: TextIO | None = None,
    ) -> RunResult:
        """Execute the binomial test workflow.

        Values passed explicitly take precedence over the configuration file.
        """

        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()

        config = load_config(config_path) if config_path is not None else BinomTestConfig()
        k, n, p, alt = self._resolve_inputs(config, successes, trials, p_null, alternative)
        level = self._resolve_significance_level(config, significance_level)
        tolerance = config.numerics.relative_tolerance if rel_tol is None else rel_tol

        test_result = run_binomial_test(k, n, p, alt, rel_tol=tolerance)
        run_result = RunResult(
            test_result=test_result,
            significance_level=level,
            relative_tolerance=tolerance,
            config_path=config_path,
            started_at=started_at,
            duration=timedelta(seconds=time.perf_counter() - start),
            warnings=config.warnings,
        )

        print_console_summary(run_result, verbose=verbose, stream=stream)
        target_report = report_path if report_path is not None else config.output.report_path
        written_report: Path | None = None
        if target_report is not None:
            written_report = write_markdown_report(run_result, target_report)
        if config.output.log_results:
            log_run_result(
                run_result,
                written_report,
                log_path=config.output.run_log_path,
                fmt=config.output.run_log_format,
                retention=config.output.run_log_retention,
            )
        return run_result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _resolve_inputs(
        self,
        config: BinomTestConfig,
        successes: int | None,
        trials: int | None,
        p_null: float | None,
        alternative: Alternative | str | None,
    ) -> tuple[int, int, float, Alternative]:
        section = config.test
        k = successes if successes is not None else section.successes
        n = trials if trials is not None else section.trials
        p = p_null if p_null is not None else section.p_null
        missing = [
            name
            for name, value in (("successes", k), ("trials", n), ("p_null", p))
            if value is None
        ]
        if missing:
            raise InvalidConfigurationError(
                "Missing test inputs: " + ", ".join(missing)
                + ". Provide them on the command line or in the [test] section."
            )
        if alternative is None:
            return k, n, p, section.alternative
        return k, n, p, Alternative.parse(alternative)

    def _resolve_significance_level(
        self, config: BinomTestConfig, override: float | None
    ) -> float:
        if override is None:
            return config.output.significance_level
        if not 0.0 < override < 1.0:
            raise InvalidConfigurationError("Significance level must be between 0 and 1.")
        return override


__all__ = ["BinomialTestApp", "FAIL_TO_REJECT", "REJECT", "RunResult"]
