"""Probability mass evaluation for the binomial distribution.

All values are computed in log space so that large trial counts neither
overflow the binomial coefficient nor underflow the individual powers of
``p`` and ``1 - p``:

.. math::
    \\log P(X = k) = \\log\\binom{n}{k} + k \\log p + (n - k) \\log(1 - p)

with the coefficient obtained from the log-gamma function.  Only the final
log-probability is exponentiated.

The degenerate distributions ``p = 0`` and ``p = 1`` put all of their mass on
a single outcome and are answered before any logarithm of ``p`` or ``1 - p``
is taken.

The array variants evaluate a whole range of outcomes with NumPy.  Log-gamma
values of small integers come from a table filled by :func:`math.lgamma`;
larger arguments use the Stirling series, whose truncation error is below
``1e-19`` past the table.
"""

from __future__ import annotations

import math

import numpy as np

_LGAMMA_TABLE_SIZE = 64
_LGAMMA_TABLE = np.array([math.lgamma(x) for x in range(1, _LGAMMA_TABLE_SIZE + 1)])
_HALF_LOG_TWO_PI = 0.5 * math.log(2.0 * math.pi)


def _log_gamma_integers(x: np.ndarray) -> np.ndarray:
    """Return ``lgamma(x)`` element-wise for an array of integers ``x >= 1``."""

    result = np.empty(x.shape, dtype=float)
    small = x <= _LGAMMA_TABLE_SIZE
    result[small] = _LGAMMA_TABLE[x[small] - 1]

    large = x[~small].astype(float)
    inverse = 1.0 / large
    inverse_sq = inverse * inverse
    series = inverse * (
        1.0 / 12.0
        - inverse_sq * (1.0 / 360.0 - inverse_sq * (1.0 / 1260.0 - inverse_sq / 1680.0))
    )
    result[~small] = (large - 0.5) * np.log(large) - large + _HALF_LOG_TWO_PI + series
    return result


def log_binomial_coefficient(n: int, k: int) -> float:
    """Return ``log(n choose k)`` for ``0 <= k <= n``."""

    return math.lgamma(n + 1) - math.lgamma(k + 1) - math.lgamma(n - k + 1)


def log_pmf(k: int, n: int, p: float) -> float:
    """Return ``log P(X = k)`` for ``X ~ Binomial(n, p)``.

    Outcomes outside ``[0, n]`` and outcomes with zero probability yield
    ``-inf``.
    """

    if k < 0 or k > n:
        return -math.inf
    if p == 0.0:
        return 0.0 if k == 0 else -math.inf
    if p == 1.0:
        return 0.0 if k == n else -math.inf
    return (
        log_binomial_coefficient(n, k)
        + k * math.log(p)
        + (n - k) * math.log1p(-p)
    )


def pmf(k: int, n: int, p: float) -> float:
    """Return ``P(X = k)`` for ``X ~ Binomial(n, p)``."""

    return math.exp(log_pmf(k, n, p))


def log_pmf_range(
    n: int, p: float, start: int = 0, stop: int | None = None
) -> np.ndarray:
    """Return ``log P(X = i)`` for ``start <= i < stop`` as a float array.

    The range is clipped to the support ``[0, n]``; ``stop`` defaults to
    ``n + 1``.
    """

    upper = n + 1 if stop is None else min(stop, n + 1)
    lower = max(start, 0)
    if upper <= lower:
        return np.zeros(0, dtype=float)
    outcomes = np.arange(lower, upper, dtype=np.int64)
    if p == 0.0:
        return np.where(outcomes == 0, 0.0, -np.inf)
    if p == 1.0:
        return np.where(outcomes == n, 0.0, -np.inf)

    as_float = outcomes.astype(float)
    return (
        math.lgamma(n + 1)
        - _log_gamma_integers(outcomes + 1)
        - _log_gamma_integers(n - outcomes + 1)
        + as_float * math.log(p)
        + (n - as_float) * math.log1p(-p)
    )


def pmf_range(n: int, p: float, start: int = 0, stop: int | None = None) -> np.ndarray:
    """Return ``P(X = i)`` for ``start <= i < stop`` as a float array."""

    return np.exp(log_pmf_range(n, p, start, stop))


__all__ = [
    "log_binomial_coefficient",
    "log_pmf",
    "log_pmf_range",
    "pmf",
    "pmf_range",
]
