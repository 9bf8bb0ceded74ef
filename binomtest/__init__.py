"""Exact one-sample binomial hypothesis test."""

from .alternative import Alternative
from .core import BinomTestResult, binomial_test, run_binomial_test
from .errors import (
    BinomTestError,
    InvalidAlternativeError,
    InvalidProbabilityError,
    InvalidSuccessCountError,
    InvalidTrialCountError,
)
from .tails import DEFAULT_RELATIVE_TOLERANCE

__all__ = [
    "Alternative",
    "BinomTestError",
    "BinomTestResult",
    "DEFAULT_RELATIVE_TOLERANCE",
    "InvalidAlternativeError",
    "InvalidProbabilityError",
    "InvalidSuccessCountError",
    "InvalidTrialCountError",
    "binomial_test",
    "run_binomial_test",
]
