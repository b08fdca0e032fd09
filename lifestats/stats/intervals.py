"""Confidence intervals for a mean and for a difference of means.

Critical values come from the standard normal distribution or from Student's
t distribution. With the population standard deviation estimated from the
sample, normal critical values under-cover for small ``N``; the heavier tails
of the t distribution give wider intervals whose coverage stays close to the
nominal level.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.stats import norm
from scipy.stats import t as student_t

from ..errors import (
    DegenerateInputError,
    InsufficientSampleSizeError,
    InvalidConfidenceLevelError,
)

DEFAULT_CONFIDENCE_LEVEL = 0.95
MIN_SAMPLE_SIZE = 2


@dataclass(frozen=True)
class Interval:
    """Two-sided confidence interval tagged with its construction."""

    lower: float
    upper: float
    confidence_level: float
    distribution: str
    df: Optional[float] = None
    estimate: float = math.nan
    standard_error: float = math.nan
    critical_value: float = math.nan

    @property
    def half_width(self) -> float:
        return 0.5 * (self.upper - self.lower)

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= float(value) <= self.upper


def _check_level(confidence_level) -> float:
    if isinstance(confidence_level, bool):
        raise InvalidConfidenceLevelError("Confidence level must be a number, got a bool.")
    try:
        level = float(confidence_level)
    except (TypeError, ValueError) as exc:
        raise InvalidConfidenceLevelError(
            f"Confidence level must be a number, got {confidence_level!r}."
        ) from exc
    if not math.isfinite(level) or level <= 0.0 or level >= 1.0:
        raise InvalidConfidenceLevelError(
            f"Confidence level must lie strictly between 0 and 1, got {confidence_level!r}."
        )
    return level


def _finite_sample(sample, label: str = "sample") -> np.ndarray:
    arr = np.asarray(sample, dtype=float).ravel()
    arr = arr[np.isfinite(arr)]
    if arr.size < MIN_SAMPLE_SIZE:
        raise InsufficientSampleSizeError(
            f"{label} needs at least {MIN_SAMPLE_SIZE} finite observations, got {arr.size}."
        )
    return arr


def _sample_variance(arr: np.ndarray) -> float:
    # Constant samples get exactly zero, including values not exact in binary.
    if np.ptp(arr) == 0:
        return 0.0
    return float(np.var(arr, ddof=1))


def critical_value(confidence_level: float, df: Optional[float] = None) -> float:
    """Two-sided quantile ``Q`` with ``P(|Z| <= Q) = confidence_level``.

    Args:
        confidence_level (float): Nominal coverage in ``(0, 1)``.
        df (float, optional): Degrees of freedom. ``None`` selects the
            standard normal distribution.

    Returns:
        float: ``Phi^{-1}(1 - alpha/2)`` or ``t_{df}^{-1}(1 - alpha/2)``.

    Raises:
        InvalidConfidenceLevelError: If the level is outside ``(0, 1)``.
        ValueError: If ``df`` is not positive.
    """
    level = _check_level(confidence_level)
    q = 1.0 - (1.0 - level) / 2.0
    if df is None:
        return float(norm.ppf(q))
    if not float(df) > 0:
        raise ValueError(f"Degrees of freedom must be positive, got {df!r}.")
    return float(student_t.ppf(q, float(df)))


def standard_error(sample) -> float:
    """Standard error of the mean, ``s / sqrt(N)`` with ``ddof=1``."""
    arr = _finite_sample(sample)
    return math.sqrt(_sample_variance(arr) / arr.size)


def _build(
    estimate: float,
    se: float,
    confidence_level: float,
    df: Optional[float],
) -> Interval:
    if not se > 0.0:
        raise DegenerateInputError(
            "Standard error is zero; the sample has no spread to build an interval from."
        )
    q = critical_value(confidence_level, df)
    return Interval(
        lower=float(estimate - q * se),
        upper=float(estimate + q * se),
        confidence_level=float(confidence_level),
        distribution="normal" if df is None else "t",
        df=None if df is None else float(df),
        estimate=float(estimate),
        standard_error=float(se),
        critical_value=q,
    )


def mean_confidence_interval(
    sample,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    use_t: bool = False,
) -> Interval:
    """Confidence interval for a population mean.

    Args:
        sample (array-like): Observations; non-finite entries are dropped.
        confidence_level (float, optional): Nominal coverage in ``(0, 1)``.
            Defaults to ``0.95``.
        use_t (bool, optional): Use a t critical value with ``N - 1`` degrees
            of freedom instead of the normal quantile. Defaults to ``False``.

    Returns:
        Interval: ``[mean - Q*SE, mean + Q*SE]`` with ``SE = s / sqrt(N)``.

    Raises:
        InsufficientSampleSizeError: If fewer than two finite observations
            remain.
        InvalidConfidenceLevelError: If the level is outside ``(0, 1)``.
        DegenerateInputError: If every observation is identical.

    Note:
        With the normal quantile the long-run coverage only approaches the
        nominal level once ``N`` is large enough for the Central Limit Theorem
        to apply. For small ``N`` use ``use_t=True``.
    """
    level = _check_level(confidence_level)
    arr = _finite_sample(sample)
    n = arr.size
    se = math.sqrt(_sample_variance(arr) / n)
    df = float(n - 1) if use_t else None
    return _build(float(np.mean(arr)), se, level, df)


def _difference_components(
    sample_a, sample_b, equal_var: bool
) -> Tuple[float, float, float]:
    """Return ``(mean_b - mean_a, standard error, degrees of freedom)``."""
    a = _finite_sample(sample_a, label="sample_a")
    b = _finite_sample(sample_b, label="sample_b")
    na, nb = a.size, b.size
    va = _sample_variance(a)
    vb = _sample_variance(b)
    diff = float(np.mean(b) - np.mean(a))

    if equal_var:
        dof = float(na + nb - 2)
        pooled = ((na - 1) * va + (nb - 1) * vb) / dof
        se = math.sqrt(pooled * (1.0 / na + 1.0 / nb))
        return diff, se, dof

    wa = va / na
    wb = vb / nb
    se = math.sqrt(wa + wb)
    if se == 0.0:
        return diff, se, math.nan
    # Welch-Satterthwaite
    dof = (wa + wb) ** 2 / (wa**2 / (na - 1) + wb**2 / (nb - 1))
    return diff, se, float(dof)


def difference_confidence_interval(
    sample_a,
    sample_b,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    use_t: bool = False,
    equal_var: bool = False,
) -> Interval:
    """Confidence interval for ``mean(sample_b) - mean(sample_a)``.

    Args:
        sample_a (array-like): Reference group observations.
        sample_b (array-like): Comparison group observations.
        confidence_level (float, optional): Nominal coverage in ``(0, 1)``.
        use_t (bool, optional): Use a t critical value. Defaults to ``False``.
        equal_var (bool, optional): ``False`` (default) uses the Welch
            standard error ``sqrt(s_a^2/n_a + s_b^2/n_b)`` with
            Welch-Satterthwaite degrees of freedom. ``True`` uses the pooled
            standard error with ``n_a + n_b - 2`` degrees of freedom.

    Returns:
        Interval: Interval for the difference of means.

    Raises:
        InsufficientSampleSizeError: If either sample has fewer than two
            finite observations.
        InvalidConfidenceLevelError: If the level is outside ``(0, 1)``.
        DegenerateInputError: If both samples are constant.
    """
    level = _check_level(confidence_level)
    diff, se, dof = _difference_components(sample_a, sample_b, equal_var)
    return _build(diff, se, level, dof if use_t else None)


def interval_excludes_zero(interval: Interval) -> bool:
    """True when zero lies strictly outside ``interval``.

    A ``100(1 - alpha)%`` interval excludes zero exactly when the matching
    two-sided test of "no effect" has a p-value below ``alpha``.
    """
    return bool(interval.lower > 0.0 or interval.upper < 0.0)


def _two_sided_pvalue(stat: float, df: Optional[float]) -> float:
    if df is None:
        return float(2.0 * norm.sf(abs(stat)))
    return float(2.0 * student_t.sf(abs(stat), df))


def one_sample_pvalue(sample, null_mean: float = 0.0, use_t: bool = False) -> float:
    """Two-sided p-value for ``mean == null_mean``, dual to the mean interval."""
    arr = _finite_sample(sample)
    se = math.sqrt(_sample_variance(arr) / arr.size)
    if not se > 0.0:
        raise DegenerateInputError("Standard error is zero; the test statistic is undefined.")
    stat = (float(np.mean(arr)) - float(null_mean)) / se
    return _two_sided_pvalue(stat, float(arr.size - 1) if use_t else None)


def difference_pvalue(
    sample_a, sample_b, use_t: bool = False, equal_var: bool = False
) -> float:
    """Two-sided p-value for equal means, dual to the difference interval."""
    diff, se, dof = _difference_components(sample_a, sample_b, equal_var)
    if not se > 0.0:
        raise DegenerateInputError("Standard error is zero; the test statistic is undefined.")
    return _two_sided_pvalue(diff / se, dof if use_t else None)
