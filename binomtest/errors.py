"""Custom exceptions for the binomial test package."""

from __future__ import annotations


class BinomTestError(Exception):
    """Base error type for package specific failures."""


class InvalidInputError(BinomTestError):
    """Raised when the arguments of a binomial test violate its constraints."""


class InvalidSuccessCountError(InvalidInputError):
    """Raised when the success count is negative, non-integral or exceeds the trials."""


class InvalidTrialCountError(InvalidInputError):
    """Raised when the number of trials is not an integer."""


class InvalidProbabilityError(InvalidInputError):
    """Raised when the null probability lies outside ``[0, 1]``."""


class InvalidAlternativeError(InvalidInputError):
    """Raised when the alternative hypothesis is not a known variant."""


class InvalidToleranceError(InvalidInputError):
    """Raised when the two-sided mass comparison tolerance is negative."""


class NumericalError(BinomTestError):
    """Raised when a tail summation produces a non-finite value."""


class MissingFileError(BinomTestError):
    """Raised when a required input file could not be located."""


class InvalidConfigurationError(BinomTestError):
    """Raised when the configuration file is malformed or invalid."""
