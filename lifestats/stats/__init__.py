"""
Statistical utilities for dimension reduction and interval estimation.

This subpackage provides the numerical routines behind the course material.
All functions operate on arrays and primitive types and keep no state.

Modules:
    decomposition:
        Thin singular value decomposition, low-rank reconstruction, residual
        norms and variance-explained summaries. Rows are observations and
        columns are variables.

    intervals:
        Confidence intervals for a mean and for a difference of means with
        normal or t critical values, plus the dual two-sided p-values.

Design Principle:
    This subpackage has no dependencies on simulation, reporting or demo
    modules. It provides pure numerical utilities that can be independently
    tested.
"""

from .decomposition import (
    Factorization,
    center_columns,
    choose_rank,
    cumulative_variance_explained,
    decompose,
    principal_components,
    reconstruct,
    residual_norm,
    singular_value_summary,
    variance_explained,
)
from .intervals import (
    Interval,
    critical_value,
    difference_confidence_interval,
    difference_pvalue,
    interval_excludes_zero,
    mean_confidence_interval,
    one_sample_pvalue,
    standard_error,
)

__all__ = [
    "Factorization",
    "center_columns",
    "choose_rank",
    "cumulative_variance_explained",
    "decompose",
    "principal_components",
    "reconstruct",
    "residual_norm",
    "singular_value_summary",
    "variance_explained",
    "Interval",
    "critical_value",
    "difference_confidence_interval",
    "difference_pvalue",
    "interval_excludes_zero",
    "mean_confidence_interval",
    "one_sample_pvalue",
    "standard_error",
]
