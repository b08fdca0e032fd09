"""Format confidence intervals for human-readable reports.

The half-width sets the reported precision: it is rounded to one significant
figure (two when the leading digit is 1), and the estimate and both end points
are rounded to the same decimal place.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd

from .schema import SummaryColumns
from .stats.intervals import Interval

_COLS = SummaryColumns()


def _decimal_places(half_width: float) -> Optional[int]:
    """Decimal places implied by ``half_width``; ``None`` when it is zero or non-finite."""
    hw = abs(float(half_width))
    if hw == 0 or not math.isfinite(hw):
        return None
    exponent = math.floor(math.log10(hw))
    sig_figs = 2 if hw / 10**exponent < 2.0 else 1
    return int(sig_figs - 1 - exponent)


def _format_fixed(x: float, ndigits: int) -> str:
    return f"{round(float(x), ndigits):.{max(ndigits, 0)}f}"


def round_to_uncertainty(value: float, uncertainty: float) -> Tuple[float, float]:
    """Round ``uncertainty`` to 1-2 s.f. and ``value`` to the same decimal place.

    Zero or non-finite uncertainties carry no precision information, so both
    numbers are returned unchanged.
    """
    ndigits = _decimal_places(uncertainty)
    if ndigits is None:
        return float(value), float(uncertainty)
    return float(round(float(value), ndigits)), float(round(abs(float(uncertainty)), ndigits))


def round_interval(interval: Interval) -> Dict[str, float]:
    """Round estimate, half-width and both end points to one shared precision.

    Args:
        interval (Interval): Interval to round.

    Returns:
        dict[str, float]: Keys ``estimate``, ``half_width``, ``lower``,
        ``upper`` and ``decimals``. ``decimals`` is ``nan`` and the values are
        left unrounded when the half-width is zero or non-finite.

    Note:
        End points are rounded independently rather than recomputed from the
        rounded estimate and half-width, so they stay the closest reportable
        numbers to the true bounds.
    """
    ndigits = _decimal_places(interval.half_width)
    values = {
        "estimate": float(interval.estimate),
        "half_width": float(interval.half_width),
        "lower": float(interval.lower),
        "upper": float(interval.upper),
    }
    if ndigits is None:
        return {**values, "decimals": math.nan}
    rounded = {key: float(round(val, ndigits)) for key, val in values.items()}
    return {**rounded, "decimals": float(ndigits)}


def format_interval(interval: Interval, unit: str = "") -> str:
    """Render ``estimate ± half-width unit [lower, upper] (95% t, df=4)``.

    Args:
        interval (Interval): Interval to format.
        unit (str, optional): Unit appended after the half-width.

    Returns:
        str: Report string. Falls back to six significant figures when the
        half-width is zero or non-finite.
    """
    level_pct = f"{100.0 * interval.confidence_level:g}%"
    if interval.df is None:
        tag = f"({level_pct} normal)"
    else:
        tag = f"({level_pct} t, df={interval.df:.3g})"

    ndigits = _decimal_places(interval.half_width)
    if ndigits is None:
        parts = [
            f"{interval.estimate:.6g}",
            f"{interval.half_width:.6g}",
            f"{interval.lower:.6g}",
            f"{interval.upper:.6g}",
        ]
    else:
        parts = [
            _format_fixed(val, ndigits)
            for val in (
                interval.estimate,
                interval.half_width,
                interval.lower,
                interval.upper,
            )
        ]
    est, hw, lo, hi = parts
    body = f"{est} ± {hw} {unit}".strip()
    return f"{body} [{lo}, {hi}] {tag}"


def interval_frame(intervals: Iterable[Interval]) -> pd.DataFrame:
    """Tabulate intervals, one row each, with schema column names."""
    rows = [
        {
            _COLS.estimate: iv.estimate,
            _COLS.lower: iv.lower,
            _COLS.upper: iv.upper,
            _COLS.standard_error: iv.standard_error,
            _COLS.distribution: iv.distribution,
            _COLS.df: math.nan if iv.df is None else iv.df,
            _COLS.nominal: iv.confidence_level,
            _COLS.reported: format_interval(iv),
        }
        for iv in intervals
    ]
    columns = [
        _COLS.estimate,
        _COLS.lower,
        _COLS.upper,
        _COLS.standard_error,
        _COLS.distribution,
        _COLS.df,
        _COLS.nominal,
        _COLS.reported,
    ]
    return pd.DataFrame(rows, columns=columns)
