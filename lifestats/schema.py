"""Define standardized column names for summary DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryColumns:
    """Container for standardized column labels.

    These column names are shared by the singular value summary, the coverage
    tables and the interval report so that tables built in different places
    can be concatenated or compared directly.

    Attributes:
        component: 1-based index of a principal component. Component 1 has the
            largest singular value.

        singular_value: Singular value ``D_i`` of the (optionally centered)
            data matrix. Squared singular values are proportional to the
            variance carried by each component.

        variance_explained: Fraction ``D_i^2 / sum(D^2)`` of the total sum of
            squares carried by one component.

        cumulative_variance: Running sum of ``variance_explained`` over
            components ``1..i``. Reaches 1.0 at the last component.

        sample_size: Number of observations per simulated sample (N).

        distribution: Source of the critical value, ``"normal"`` or ``"t"``.

        coverage: Empirical fraction of intervals that contained the true
            population mean.

        nominal: Requested confidence level, for example 0.95.
    """

    component: str = "Component"
    singular_value: str = "Singular Value"
    variance_explained: str = "Variance Explained"
    cumulative_variance: str = "Cumulative Variance Explained"
    sample_size: str = "Sample Size (N)"
    distribution: str = "Distribution"
    coverage: str = "Coverage"
    nominal: str = "Nominal Level"
    mean_width: str = "Mean Interval Width"
    estimate: str = "Estimate"
    lower: str = "Lower"
    upper: str = "Upper"
    standard_error: str = "Standard Error"
    df: str = "Degrees of Freedom"
    reported: str = "Reported"
