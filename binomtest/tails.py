"""Tail summation for one-sided and two-sided binomial p-values.

The two-sided p-value follows the likelihood ordering used by exact binomial
tests: every outcome whose probability mass does not exceed the mass of the
observed outcome counts as "at least as extreme".  Because the binomial
distribution is skewed whenever ``p != 0.5`` this is not the same as doubling
the smaller one-sided tail.

Masses that are mathematically equal can differ in their last bits once they
have been evaluated in floating point, so the comparison is made against
``m * (1 + rel_tol)`` where ``m`` is the observed mass.
"""

from __future__ import annotations

import math

import numpy as np

from .alternative import Alternative
from .distribution import log_pmf_range, pmf_range
from .errors import InvalidToleranceError, NumericalError

DEFAULT_RELATIVE_TOLERANCE: float = 1e-7
"""Relative tolerance applied when comparing masses in the two-sided test."""


def greater_tail(k: int, n: int, p: float) -> float:
    """Return ``P(X >= k)`` for ``X ~ Binomial(n, p)``."""

    return _finalise(pmf_range(n, p, k, n + 1))


def less_tail(k: int, n: int, p: float) -> float:
    """Return ``P(X <= k)`` for ``X ~ Binomial(n, p)``."""

    return _finalise(pmf_range(n, p, 0, k + 1))


def two_sided(
    k: int, n: int, p: float, rel_tol: float = DEFAULT_RELATIVE_TOLERANCE
) -> float:
    """Return the two-sided p-value of observing ``k`` successes.

    Sums ``P(X = i)`` over every outcome ``i`` whose mass is at most
    ``P(X = k) * (1 + rel_tol)``.  The comparison happens on the log masses so
    outcomes whose mass underflows are still ordered correctly.
    """

    _check_tolerance(rel_tol)
    log_masses = log_pmf_range(n, p)
    threshold = log_masses[k] + math.log1p(rel_tol)
    extreme = log_masses[log_masses <= threshold]
    return _finalise(np.exp(extreme))


def tail_p_value(
    k: int,
    n: int,
    p: float,
    alternative: Alternative,
    rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
) -> float:
    """Return the p-value for ``alternative``."""

    if alternative is Alternative.GREATER:
        return greater_tail(k, n, p)
    if alternative is Alternative.LESS:
        return less_tail(k, n, p)
    if alternative is Alternative.TWO_SIDED:
        return two_sided(k, n, p, rel_tol)
    raise ValueError(f"Unsupported alternative: {alternative!r}")


def _finalise(masses: np.ndarray) -> float:
    total = math.fsum(masses)
    if not math.isfinite(total):
        raise NumericalError(f"Tail summation produced a non-finite value: {total}")
    return _clamp(total)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _check_tolerance(rel_tol: float) -> None:
    if not rel_tol >= 0.0:
        raise InvalidToleranceError(
            f"Relative tolerance must be a non-negative number, got {rel_tol!r}."
        )


__all__ = [
    "DEFAULT_RELATIVE_TOLERANCE",
    "greater_tail",
    "less_tail",
    "tail_p_value",
    "two_sided",
]
