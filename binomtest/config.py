"""Configuration parsing utilities for the binomial test command line."""

from __future__ import annotations

import configparser
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .alternative import Alternative
from .errors import InvalidAlternativeError, InvalidConfigurationError, MissingFileError
from .tails import DEFAULT_RELATIVE_TOLERANCE

DEFAULT_SIGNIFICANCE_LEVEL: float = 0.05
"""Significance level used to turn a p-value into a decision."""

LOG_FORMATS = frozenset({"jsonl", "csv"})


@dataclass(frozen=True)
class TestSection:
    """Inputs of the binomial test; any of them may be supplied on the CLI."""

    __test__ = False  # not a pytest test class

    successes: int | None = None
    trials: int | None = None
    p_null: float | None = None
    alternative: Alternative = Alternative.TWO_SIDED


@dataclass(frozen=True)
class NumericsSection:
    """Tunable numeric settings."""

    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE


@dataclass(frozen=True)
class OutputSection:
    """Options controlling how results are presented and recorded."""

    significance_level: float = DEFAULT_SIGNIFICANCE_LEVEL
    report_path: Path | None = None
    log_results: bool = False
    run_log_path: Path = Path("logs") / "run_log.jsonl"
    run_log_format: str = "jsonl"
    run_log_retention: int | None = 100


@dataclass(frozen=True)
class BinomTestConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    test: TestSection = field(default_factory=TestSection)
    numerics: NumericsSection = field(default_factory=NumericsSection)
    output: OutputSection = field(default_factory=OutputSection)
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def load_config(path: Path) -> BinomTestConfig:
    """Load and validate an INI configuration file."""

    parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
    try:
        with path.open("r", encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except FileNotFoundError as exc:
        raise MissingFileError(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read configuration file: {path}") from exc
    except configparser.Error as exc:
        raise InvalidConfigurationError(f"Configuration is not valid INI: {exc}") from exc

    warnings: list[str] = []
    test_section = _parse_test(parser)
    numerics_section = _parse_numerics(parser)
    output_section = _parse_output(parser, path)

    known = {"test", "numerics", "output", "logging"}
    for name in parser.sections():
        if name not in known:
            warnings.append(f"Ignoring unknown section [{name}].")

    return BinomTestConfig(
        test=test_section,
        numerics=numerics_section,
        output=output_section,
        warnings=tuple(warnings),
    )


def _parse_test(parser: configparser.ConfigParser) -> TestSection:
    if not parser.has_section("test"):
        return TestSection()
    section = parser["test"]

    successes = _get_int(section, "successes", section_name="test")
    trials = _get_int(section, "trials", section_name="test")
    p_null: float | None = None
    if "p_null" in section:
        p_null = _get_float(section, "p_null", section_name="test")

    alternative = Alternative.TWO_SIDED
    if "alternative" in section:
        try:
            alternative = Alternative.parse(section["alternative"])
        except InvalidAlternativeError as exc:
            raise InvalidConfigurationError(
                f"Option 'alternative' in [test] is invalid: {exc}"
            ) from exc

    return TestSection(
        successes=successes,
        trials=trials,
        p_null=p_null,
        alternative=alternative,
    )


def _parse_numerics(parser: configparser.ConfigParser) -> NumericsSection:
    if not parser.has_section("numerics"):
        return NumericsSection()
    section = parser["numerics"]
    if "relative_tolerance" not in section:
        return NumericsSection()
    tolerance = _get_float(section, "relative_tolerance", section_name="numerics")
    if not tolerance >= 0.0:
        raise InvalidConfigurationError(
            "Option 'relative_tolerance' in [numerics] must be zero or greater."
        )
    return NumericsSection(relative_tolerance=tolerance)


def _parse_output(
    parser: configparser.ConfigParser, config_path: Path
) -> OutputSection:
    significance_level = DEFAULT_SIGNIFICANCE_LEVEL
    report_path: Path | None = None
    base_dir = config_path.resolve().parent
    log_results = False
    log_path = (base_dir / "logs" / "run_log.jsonl").resolve()
    log_format = "jsonl"
    log_retention: int | None = 100

    if parser.has_section("output"):
        section = parser["output"]
        if "significance_level" in section:
            significance_level = _get_float(
                section, "significance_level", section_name="output"
            )
        if "report_path" in section:
            raw_report = section["report_path"].strip()
            if raw_report:
                report_path = _resolve_path(raw_report, base_dir)

    if parser.has_section("logging"):
        section = parser["logging"]
        if "enabled" in section:
            try:
                log_results = section.getboolean("enabled")
            except ValueError as exc:
                raise InvalidConfigurationError(
                    "Option 'enabled' in [logging] must be a boolean value."
                ) from exc
        if "path" in section:
            raw_path = section["path"].strip()
            if raw_path:
                log_path = _resolve_path(raw_path, base_dir)
        if "format" in section:
            raw_format = section["format"].strip().lower()
            if raw_format not in LOG_FORMATS:
                raise InvalidConfigurationError(
                    "Option 'format' in [logging] must be either 'jsonl' or 'csv'."
                )
            log_format = raw_format
        if "retention" in section:
            parsed = _get_int(section, "retention", section_name="logging")
            if parsed is not None:
                log_retention = parsed if parsed > 0 else None

    if not 0.0 < significance_level < 1.0:
        raise InvalidConfigurationError(
            "Option 'significance_level' in [output] must be between 0 and 1."
        )

    return OutputSection(
        significance_level=significance_level,
        report_path=report_path,
        log_results=log_results,
        run_log_path=log_path,
        run_log_format=log_format,
        run_log_retention=log_retention,
    )


def _get_int(
    section: configparser.SectionProxy, key: str, *, section_name: str
) -> int | None:
    if key not in section:
        return None
    raw_value = section[key].strip()
    if not raw_value:
        return None
    try:
        return int(raw_value)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section_name}] must be an integer value."
        ) from exc


def _get_float(
    section: configparser.SectionProxy, key: str, *, section_name: str
) -> float:
    raw_value = section[key].strip()
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section_name}] must be numeric."
        ) from exc
    if math.isnan(value):
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section_name}] must not be NaN."
        )
    return value


def _resolve_path(raw_path: str, base_dir: Path) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


__all__ = [
    "BinomTestConfig",
    "DEFAULT_SIGNIFICANCE_LEVEL",
    "NumericsSection",
    "OutputSection",
    "TestSection",
    "load_config",
]
