"""Command line entry point for the exact binomial test."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .alternative import Alternative
from .app import BinomialTestApp
from .errors import InvalidConfigurationError, InvalidInputError, MissingFileError

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_MISSING_FILE = 2
EXIT_INVALID_CONFIG = 3
EXIT_INVALID_INPUT = 4


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binomtest",
        description="Compute the exact p-value of a one-sample binomial test.",
    )
    parser.add_argument(
        "--successes",
        "-k",
        type=int,
        help="Number of observed successes.",
    )
    parser.add_argument(
        "--trials",
        "-n",
        type=int,
        help="Total number of independent trials.",
    )
    parser.add_argument(
        "--p-null",
        "-p",
        type=float,
        dest="p_null",
        help="Success probability under the null hypothesis.",
    )
    parser.add_argument(
        "--alternative",
        "-a",
        choices=[member.value for member in Alternative],
        help="Alternative hypothesis (default: two-sided, or the value from --config).",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        help="Relative tolerance used to compare masses in the two-sided test.",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        help="Significance level used for the reject/fail-to-reject decision.",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Path to an INI configuration file providing defaults.",
    )
    parser.add_argument(
        "--report",
        "-r",
        type=Path,
        help="Optional path where a markdown report will be written.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print the inputs and hypotheses alongside the result.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    app = BinomialTestApp()
    try:
        app.run(
            args.successes,
            args.trials,
            args.p_null,
            args.alternative,
            config_path=args.config,
            report_path=args.report,
            significance_level=args.alpha,
            rel_tol=args.tolerance,
            verbose=args.verbose,
        )
    except MissingFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except InvalidConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except InvalidInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except Exception as exc:  # pragma: no cover - defensive guard
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
