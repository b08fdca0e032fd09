"""Exception types raised at the boundary of the numerical helpers.

Every error subclasses :class:`ValueError` so existing ``except ValueError``
handlers keep catching invalid input.
"""

from __future__ import annotations


class LifestatsError(ValueError):
    """Base class for invalid-input errors raised by this package."""


class InvalidDimensionError(LifestatsError):
    """Matrix is empty, not two-dimensional, ragged or non-finite."""


class InvalidRankError(LifestatsError):
    """Truncation rank or variance threshold outside the valid range."""


class InsufficientSampleSizeError(LifestatsError):
    """Fewer than two finite observations are available."""


class InvalidConfidenceLevelError(LifestatsError):
    """Confidence level is not a finite number strictly between 0 and 1."""


class DegenerateInputError(LifestatsError):
    """Input has no spread: all singular values or the standard error are zero."""
