"""Unit tests for :mod:`binomtest.tails`."""

from __future__ import annotations

import pytest

from binomtest.alternative import Alternative
from binomtest.errors import InvalidToleranceError
from binomtest.tails import (
    DEFAULT_RELATIVE_TOLERANCE,
    greater_tail,
    less_tail,
    tail_p_value,
    two_sided,
)

# Binomial(10, 0.1) masses used by the skewed two-sided cases below.
SKEWED_MASSES = (
    0.3486784401,
    0.387420489,
    0.1937102445,
    0.057395628,
    0.011160261,
    0.0014880348,
    0.000137781,
    0.0000087480,
    0.0000003645,
    0.000000009,
    0.0000000001,
)


def test_one_sided_tails_for_fair_coin() -> None:
    assert greater_tail(8, 10, 0.5) == pytest.approx(56 / 1024, rel=1e-12)
    assert less_tail(2, 10, 0.5) == pytest.approx(56 / 1024, rel=1e-12)
    assert greater_tail(0, 10, 0.5) == pytest.approx(1.0)
    assert less_tail(10, 10, 0.5) == pytest.approx(1.0)


def test_one_sided_tails_are_complementary() -> None:
    for k in range(1, 25):
        total = less_tail(k - 1, 24, 0.37) + greater_tail(k, 24, 0.37)
        assert total == pytest.approx(1.0, rel=1e-12)


def test_two_sided_fair_coin_is_sum_of_both_tails() -> None:
    assert two_sided(8, 10, 0.5) == pytest.approx(112 / 1024, rel=1e-12)
    assert two_sided(2, 10, 0.5) == pytest.approx(112 / 1024, rel=1e-12)
    assert two_sided(5, 10, 0.5) == pytest.approx(1.0)
    # Odd n has two modes of equal mass.
    assert two_sided(4, 9, 0.5) == pytest.approx(1.0)
    assert two_sided(5, 9, 0.5) == pytest.approx(1.0)


def test_two_sided_skewed_probability_uses_mass_ordering() -> None:
    """Outcome 2 is farther from the mean than outcome 0 yet more likely."""

    expected = 1.0 - SKEWED_MASSES[1]

    result = two_sided(0, 10, 0.1)

    assert result == pytest.approx(expected, rel=1e-8)
    # Doubling the smaller tail would give a different, incorrect answer.
    assert result != pytest.approx(min(1.0, 2 * less_tail(0, 10, 0.1)), rel=1e-3)


def test_two_sided_skewed_upper_tail_only() -> None:
    expected = sum(SKEWED_MASSES[3:])

    assert two_sided(3, 10, 0.1) == pytest.approx(expected, rel=1e-8)
    assert two_sided(3, 10, 0.1) == pytest.approx(greater_tail(3, 10, 0.1), rel=1e-12)


def test_two_sided_includes_masses_that_tie_with_the_observed_one() -> None:
    """Binomial(3, 0.25) gives outcomes 0 and 1 the identical mass 27/64."""

    assert two_sided(0, 3, 0.25) == pytest.approx(1.0)
    assert two_sided(1, 3, 0.25) == pytest.approx(1.0)


def test_two_sided_tolerance_is_tunable() -> None:
    assert DEFAULT_RELATIVE_TOLERANCE == 1e-7
    assert two_sided(3, 10, 0.1, rel_tol=10.0) == pytest.approx(1.0)
    assert two_sided(3, 10, 0.5, rel_tol=10.0) == pytest.approx(1.0)
    assert two_sided(3, 10, 0.1, rel_tol=0.0) == pytest.approx(two_sided(3, 10, 0.1))


def test_negative_tolerance_is_rejected() -> None:
    with pytest.raises(InvalidToleranceError):
        two_sided(3, 10, 0.1, rel_tol=-1e-3)
    with pytest.raises(InvalidToleranceError):
        two_sided(3, 10, 0.1, rel_tol=float("nan"))


def test_two_sided_degenerate_probabilities() -> None:
    assert two_sided(0, 5, 0.0) == 1.0
    assert two_sided(1, 5, 0.0) == 0.0
    assert two_sided(5, 5, 1.0) == 1.0
    assert two_sided(4, 5, 1.0) == 0.0


def test_two_sided_underflowing_observed_mass_yields_zero() -> None:
    assert two_sided(675, 8064, 0.85) == 0.0


@pytest.mark.parametrize(
    ("alternative", "expected"),
    [
        (Alternative.GREATER, 56 / 1024),
        (Alternative.LESS, 1 - 56 / 1024 + 45 / 1024),
        (Alternative.TWO_SIDED, 112 / 1024),
    ],
)
def test_tail_p_value_dispatch(alternative: Alternative, expected: float) -> None:
    assert tail_p_value(8, 10, 0.5, alternative) == pytest.approx(expected, rel=1e-12)


def test_two_sided_fair_coin_is_continuous_in_probability() -> None:
    for k in (0, 3, 7, 10):
        assert two_sided(k, 10, 0.5) == pytest.approx(two_sided(k, 10, 0.500000001), rel=1e-5)
        assert two_sided(k, 10, 0.5, rel_tol=10.0) == pytest.approx(
            two_sided(k, 10, 0.500000001, rel_tol=10.0), rel=1e-5
        )
