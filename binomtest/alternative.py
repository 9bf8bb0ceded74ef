"""Alternative hypotheses supported by the binomial test."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidAlternativeError


class Alternative(Enum):
    """Direction of the deviation from the null probability being tested.

    The values match the strings accepted by ``scipy.stats.binomtest``.
    """

    TWO_SIDED = "two-sided"
    GREATER = "greater"
    LESS = "less"

    @classmethod
    def parse(cls, value: "Alternative | str") -> "Alternative":
        """Return the member matching ``value``.

        Strings are matched case-insensitively and underscores are accepted in
        place of hyphens, so ``"TWO_SIDED"`` resolves to :attr:`TWO_SIDED`.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalised = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == normalised:
                    return member
        choices = ", ".join(repr(member.value) for member in cls)
        raise InvalidAlternativeError(
            f"Unknown alternative hypothesis {value!r}; expected one of {choices}."
        )


__all__ = ["Alternative"]
