"""Entry point of the exact one-sample binomial test."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from .alternative import Alternative
from .errors import (
    InvalidProbabilityError,
    InvalidSuccessCountError,
    InvalidTrialCountError,
)
from .tails import DEFAULT_RELATIVE_TOLERANCE, tail_p_value


@dataclass(frozen=True)
class BinomTestResult:
    """Outcome of a binomial test together with the inputs that produced it."""

    successes: int
    trials: int
    p_null: float
    alternative: Alternative
    p_value: float

    @property
    def proportion_estimate(self) -> float:
        """Observed success proportion ``k / n`` (``nan`` when ``n == 0``)."""

        if self.trials == 0:
            return math.nan
        return self.successes / self.trials


def binomial_test(
    successes: int,
    trials: int,
    p_null: float,
    alternative: Alternative | str = Alternative.TWO_SIDED,
    *,
    rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
) -> float:
    """Return the exact p-value of observing ``successes`` out of ``trials``.

    Parameters
    ----------
    successes:
        Number of observed successes, ``0 <= successes <= trials``.
    trials:
        Number of independent Bernoulli trials.  Zero trials is a valid,
        degenerate experiment.
    p_null:
        Success probability under the null hypothesis, in ``[0, 1]``.
    alternative:
        :class:`Alternative` member or its string value (``"two-sided"``,
        ``"greater"`` or ``"less"``).
    rel_tol:
        Relative tolerance of the mass comparison in the two-sided test.

    Raises
    ------
    InvalidSuccessCountError
        ``successes`` is not an integer, is negative or exceeds ``trials``.
    InvalidTrialCountError
        ``trials`` is not an integer.
    InvalidProbabilityError
        ``p_null`` is not a real number in ``[0, 1]``.
    InvalidAlternativeError
        ``alternative`` is not one of the supported variants.
    """

    return run_binomial_test(
        successes, trials, p_null, alternative, rel_tol=rel_tol
    ).p_value


def run_binomial_test(
    successes: int,
    trials: int,
    p_null: float,
    alternative: Alternative | str = Alternative.TWO_SIDED,
    *,
    rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
) -> BinomTestResult:
    """Validate the inputs, compute the p-value and return a full result."""

    k, n, p, alt = _validate(successes, trials, p_null, alternative)
    p_value = tail_p_value(k, n, p, alt, rel_tol)
    return BinomTestResult(
        successes=k,
        trials=n,
        p_null=p,
        alternative=alt,
        p_value=p_value,
    )


def _validate(
    successes: object, trials: object, p_null: object, alternative: object
) -> tuple[int, int, float, Alternative]:
    if not _is_integer(successes):
        raise InvalidSuccessCountError(
            f"Number of successes must be an integer, got {successes!r}."
        )
    if not _is_integer(trials):
        raise InvalidTrialCountError(
            f"Number of trials must be an integer, got {trials!r}."
        )
    k = int(successes)
    n = int(trials)
    if k < 0:
        raise InvalidSuccessCountError(
            f"Number of successes must be non-negative, got {k}."
        )
    if k > n:
        raise InvalidSuccessCountError(
            f"Number of successes ({k}) exceeds the number of trials ({n})."
        )

    if isinstance(p_null, bool) or not isinstance(p_null, numbers.Real):
        raise InvalidProbabilityError(
            f"Null probability must be a real number, got {p_null!r}."
        )
    p = float(p_null)
    if not 0.0 <= p <= 1.0:
        raise InvalidProbabilityError(
            f"Null probability out of range [0, 1]: {p_null!r}."
        )

    return k, n, p, Alternative.parse(alternative)


def _is_integer(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


__all__ = ["BinomTestResult", "binomial_test", "run_binomial_test"]
