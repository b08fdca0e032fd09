import math

import numpy as np
import pytest
from scipy import stats as scipy_stats

from lifestats.errors import (
    DegenerateInputError,
    InsufficientSampleSizeError,
    InvalidConfidenceLevelError,
)
from lifestats.simulation import null_difference_pairs
from lifestats.stats.intervals import (
    Interval,
    critical_value,
    difference_confidence_interval,
    difference_pvalue,
    interval_excludes_zero,
    mean_confidence_interval,
    one_sample_pvalue,
    standard_error,
)

SAMPLE = np.array([4.71, 4.80, 4.76, 4.69, 4.83, 4.77])


def test_critical_values():
    assert math.isclose(critical_value(0.95), 1.959963984540054, rel_tol=1e-9)
    assert math.isclose(critical_value(0.95, df=4), 2.7764451051977987, rel_tol=1e-9)
    assert critical_value(0.99) > critical_value(0.95)
    assert critical_value(0.95, df=3) > critical_value(0.95, df=30) > critical_value(0.95)


def test_critical_value_rejects_bad_df():
    with pytest.raises(ValueError):
        critical_value(0.95, df=0)


def test_standard_error_matches_scipy():
    assert math.isclose(standard_error(SAMPLE), float(scipy_stats.sem(SAMPLE)))


def test_mean_interval_t_matches_scipy():
    iv = mean_confidence_interval(SAMPLE, 0.95, use_t=True)
    lo, hi = scipy_stats.t.interval(
        0.95, len(SAMPLE) - 1, loc=SAMPLE.mean(), scale=scipy_stats.sem(SAMPLE)
    )
    assert math.isclose(iv.lower, lo)
    assert math.isclose(iv.upper, hi)
    assert iv.distribution == "t"
    assert iv.df == len(SAMPLE) - 1
    assert math.isclose(iv.estimate, SAMPLE.mean())


def test_mean_interval_normal_matches_scipy():
    iv = mean_confidence_interval(SAMPLE, 0.90)
    lo, hi = scipy_stats.norm.interval(0.90, loc=SAMPLE.mean(), scale=scipy_stats.sem(SAMPLE))
    assert math.isclose(iv.lower, lo)
    assert math.isclose(iv.upper, hi)
    assert iv.distribution == "normal"
    assert iv.df is None
    assert math.isclose(iv.half_width, iv.critical_value * iv.standard_error)


def test_t_interval_is_wider_than_normal():
    normal = mean_confidence_interval(SAMPLE, use_t=False)
    student = mean_confidence_interval(SAMPLE, use_t=True)
    assert student.width > normal.width
    assert math.isclose(student.estimate, normal.estimate)


def test_non_finite_observations_are_dropped():
    iv = mean_confidence_interval([1.0, np.nan, 3.0, np.inf])
    assert math.isclose(iv.estimate, 2.0)


@pytest.mark.parametrize("sample", [[1.0], [], [np.nan, 2.0]])
def test_mean_interval_insufficient_sample(sample):
    with pytest.raises(InsufficientSampleSizeError):
        mean_confidence_interval(sample)


@pytest.mark.parametrize("level", [1.0, 0.0, -0.1, 1.5, float("nan"), "high", True])
def test_mean_interval_invalid_level(level):
    with pytest.raises(InvalidConfidenceLevelError):
        mean_confidence_interval(SAMPLE, level)


@pytest.mark.parametrize("sample", [[2.0] * 3, [0.1] * 3, [1.1] * 7, [68.3] * 30])
@pytest.mark.parametrize("use_t", [True, False])
def test_mean_interval_constant_sample(sample, use_t):
    with pytest.raises(DegenerateInputError):
        mean_confidence_interval(sample, use_t=use_t)
    with pytest.raises(DegenerateInputError):
        one_sample_pvalue(sample, 0.0, use_t=use_t)
    assert standard_error(sample) == 0.0


@pytest.mark.parametrize("equal_var", [False, True])
def test_difference_interval_both_constant(equal_var):
    with pytest.raises(DegenerateInputError):
        difference_confidence_interval([0.1] * 3, [0.7] * 3, use_t=True, equal_var=equal_var)
    with pytest.raises(DegenerateInputError):
        difference_pvalue([0.1] * 3, [0.7] * 3, use_t=True, equal_var=equal_var)


def test_difference_interval_one_constant_sample():
    b = [4.9, 5.3, 5.1, 4.7]
    iv = difference_confidence_interval([0.1] * 3, b, use_t=True)
    assert math.isclose(iv.df, len(b) - 1)
    assert math.isclose(iv.standard_error, standard_error(b))


def test_difference_interval_welch_matches_ttest():
    rng = np.random.default_rng(5)
    a = rng.normal(0.0, 1.0, size=8)
    b = rng.normal(1.0, 2.0, size=12)
    iv = difference_confidence_interval(a, b, 0.95, use_t=True)
    assert math.isclose(iv.estimate, b.mean() - a.mean())

    va, vb = a.var(ddof=1) / 8, b.var(ddof=1) / 12
    welch_df = (va + vb) ** 2 / (va**2 / 7 + vb**2 / 11)
    assert math.isclose(iv.df, welch_df)
    assert math.isclose(iv.standard_error, math.sqrt(va + vb))

    res = scipy_stats.ttest_ind(b, a, equal_var=False)
    assert math.isclose(difference_pvalue(a, b, use_t=True), res.pvalue, rel_tol=1e-9)


def test_difference_interval_pooled_matches_ttest():
    rng = np.random.default_rng(6)
    a = rng.normal(0.0, 1.0, size=10)
    b = rng.normal(0.5, 1.0, size=7)
    iv = difference_confidence_interval(a, b, use_t=True, equal_var=True)
    assert iv.df == 15
    res = scipy_stats.ttest_ind(b, a, equal_var=True)
    p = difference_pvalue(a, b, use_t=True, equal_var=True)
    assert math.isclose(p, res.pvalue, rel_tol=1e-9)


def test_difference_interval_errors():
    with pytest.raises(InsufficientSampleSizeError, match="sample_b"):
        difference_confidence_interval([1.0, 2.0], [3.0])
    with pytest.raises(InvalidConfidenceLevelError):
        difference_confidence_interval([1.0, 2.0], [3.0, 4.0], confidence_level=1.0)
    with pytest.raises(DegenerateInputError):
        difference_confidence_interval([1.0, 1.0], [3.0, 3.0], use_t=True)


def test_interval_excludes_zero():
    assert interval_excludes_zero(Interval(0.1, 0.5, 0.95, "normal"))
    assert interval_excludes_zero(Interval(-0.5, -0.1, 0.95, "normal"))
    assert not interval_excludes_zero(Interval(-0.1, 0.5, 0.95, "normal"))
    assert not interval_excludes_zero(Interval(0.0, 0.5, 0.95, "normal"))


def test_one_sample_pvalue_matches_ttest():
    res = scipy_stats.ttest_1samp(SAMPLE, popmean=4.76)
    assert math.isclose(one_sample_pvalue(SAMPLE, 4.76, use_t=True), res.pvalue, rel_tol=1e-9)


@pytest.mark.parametrize("use_t", [True, False])
@pytest.mark.parametrize("equal_var", [False, True])
def test_difference_interval_agrees_with_two_sample_test(use_t, equal_var):
    rng = np.random.default_rng(2024)
    level = 0.95
    outcomes = set()
    for shift in (0.0, 0.6, 1.2):
        for a, b in null_difference_pairs(rng, 60, 10, 14, shift=shift, sd_b=1.5):
            iv = difference_confidence_interval(
                a, b, level, use_t=use_t, equal_var=equal_var
            )
            p = difference_pvalue(a, b, use_t=use_t, equal_var=equal_var)
            assert interval_excludes_zero(iv) == (p < 1.0 - level)
            outcomes.add(interval_excludes_zero(iv))
            if use_t:
                ref = scipy_stats.ttest_ind(b, a, equal_var=equal_var).pvalue
                assert (ref < 1.0 - level) == interval_excludes_zero(iv)
    assert outcomes == {True, False}


def test_mean_interval_agrees_with_one_sample_test():
    rng = np.random.default_rng(99)
    for _ in range(100):
        sample = rng.normal(0.3, 1.0, size=12)
        iv = mean_confidence_interval(sample, 0.95, use_t=True)
        p = scipy_stats.ttest_1samp(sample, popmean=0.0).pvalue
        assert interval_excludes_zero(iv) == (p < 0.05)


def test_interval_contains():
    iv = mean_confidence_interval(SAMPLE, use_t=True)
    assert iv.contains(iv.estimate)
    assert not iv.contains(iv.upper + 1.0)
