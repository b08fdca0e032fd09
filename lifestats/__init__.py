"""
A Python package for the numerical side of two statistics course pages.

Covers singular value decomposition for dimension reduction and confidence
intervals for means, with simulations showing why small samples need t
critical values.

Modules:
    - stats.decomposition: SVD factorization, low-rank reconstruction and variance explained.
    - stats.intervals: Normal and t confidence intervals for a mean or a difference of means.
    - simulation: Repeated-sampling coverage studies driven by a caller-supplied generator.
    - reporting: Rounded interval strings and summary tables.
    - demos: Command-line demonstrations.
"""

__version__ = "1.0.0"

from .errors import (
    DegenerateInputError,
    InsufficientSampleSizeError,
    InvalidConfidenceLevelError,
    InvalidDimensionError,
    InvalidRankError,
    LifestatsError,
)
from .reporting import (
    format_interval,
    interval_frame,
    round_interval,
    round_to_uncertainty,
)
from .simulation import (
    CoverageResult,
    correlated_columns,
    coverage_table,
    draw_sample,
    null_difference_pairs,
    simulate_coverage,
)
from .stats import (
    Factorization,
    Interval,
    center_columns,
    choose_rank,
    critical_value,
    cumulative_variance_explained,
    decompose,
    difference_confidence_interval,
    difference_pvalue,
    interval_excludes_zero,
    mean_confidence_interval,
    one_sample_pvalue,
    principal_components,
    reconstruct,
    residual_norm,
    singular_value_summary,
    standard_error,
    variance_explained,
)

__all__ = [
    # Errors
    "LifestatsError",
    "InvalidDimensionError",
    "InvalidRankError",
    "InsufficientSampleSizeError",
    "InvalidConfidenceLevelError",
    "DegenerateInputError",
    # Decomposition
    "Factorization",
    "decompose",
    "reconstruct",
    "residual_norm",
    "variance_explained",
    "cumulative_variance_explained",
    "choose_rank",
    "center_columns",
    "principal_components",
    "singular_value_summary",
    # Intervals
    "Interval",
    "critical_value",
    "standard_error",
    "mean_confidence_interval",
    "difference_confidence_interval",
    "interval_excludes_zero",
    "one_sample_pvalue",
    "difference_pvalue",
    # Simulation
    "CoverageResult",
    "draw_sample",
    "simulate_coverage",
    "coverage_table",
    "correlated_columns",
    "null_difference_pairs",
    # Reporting
    "round_to_uncertainty",
    "round_interval",
    "format_interval",
    "interval_frame",
]
