"""Provide singular value decomposition utilities for dimension reduction.

This module supports:
- thin SVD factorization ``Y = U diag(D) V^T`` of a data matrix,
- low-rank reconstruction from the leading ``k`` components, and
- variance-explained summaries used to justify a truncation rank.

Orientation: rows of ``Y`` are observations (samples) and columns are
variables (measured features). Principal components are ``U * D`` with one row
per observation; loadings are the columns of ``V`` with one row per variable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
import pandas as pd

from ..errors import DegenerateInputError, InvalidDimensionError, InvalidRankError
from ..schema import SummaryColumns

DEFAULT_VARIANCE_THRESHOLD = 0.95

_COLS = SummaryColumns()


@dataclass(frozen=True)
class Factorization:
    """Thin SVD factors of an ``m x n`` matrix with ``p = min(m, n)``.

    Iterating yields ``U, D, V`` so ``reconstruct(*decompose(Y), k)`` works.
    """

    U: np.ndarray
    D: np.ndarray
    V: np.ndarray

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.U, self.D, self.V))

    @property
    def rank(self) -> int:
        return int(len(self.D))

    @property
    def shape(self) -> Tuple[int, int]:
        return int(self.U.shape[0]), int(self.V.shape[0])


def _as_matrix(Y) -> np.ndarray:
    try:
        arr = np.array(Y, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidDimensionError(
            f"Matrix must be rectangular and numeric: {exc}"
        ) from exc
    if arr.ndim != 2:
        raise InvalidDimensionError(
            f"Matrix must be two-dimensional, got {arr.ndim} dimension(s)."
        )
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise InvalidDimensionError(f"Matrix must be non-empty, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise InvalidDimensionError("Matrix contains non-finite entries.")
    return arr


def _check_rank(k: int, p: int) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidRankError(f"Truncation rank must be an integer, got {k!r}.")
    if k < 0 or k > p:
        raise InvalidRankError(f"Truncation rank must lie in [0, {p}], got {k}.")
    return int(k)


def _total_sum_of_squares(D) -> Tuple[np.ndarray, float]:
    d = np.asarray(D, dtype=float).ravel()
    if d.size == 0 or not np.all(np.isfinite(d)):
        raise InvalidDimensionError("Singular values must be a non-empty finite sequence.")
    total = float(np.sum(d**2))
    if total <= 0.0:
        raise DegenerateInputError(
            "All singular values are zero; variance explained is undefined."
        )
    return d, total


def decompose(Y) -> Factorization:
    """Factor a real matrix with the thin singular value decomposition.

    Args:
        Y (array-like): ``m x n`` data matrix with observations in rows and
            variables in columns. The input is copied and never modified.

    Returns:
        Factorization: ``U`` (``m x p``) and ``V`` (``n x p``) with
        orthonormal columns and ``D`` (length ``p``) holding non-negative
        singular values in descending order, where ``p = min(m, n)``.

    Raises:
        InvalidDimensionError: If ``Y`` is empty, ragged, not two-dimensional
            or contains non-finite values.

    Note:
        Duplicated or linearly dependent columns show up as near-zero trailing
        singular values. No truncation is applied here; choosing ``k`` is left
        to the caller (see :func:`choose_rank`).

    References:
        Golub and Van Loan, Matrix Computations, thin SVD.
    """
    arr = _as_matrix(Y)
    U, D, Vt = np.linalg.svd(arr, full_matrices=False)
    return Factorization(U=U, D=D, V=Vt.T)


def reconstruct(U, D, V, k: int) -> np.ndarray:
    """Rebuild ``Yhat = U[:, :k] diag(D[:k]) V[:, :k]^T`` from leading factors.

    Args:
        U (numpy.ndarray): Left singular vectors, ``m x p``.
        D (numpy.ndarray): Singular values, length ``p``, descending.
        V (numpy.ndarray): Right singular vectors, ``n x p``.
        k (int): Number of leading components to keep, ``0 <= k <= p``.

    Returns:
        numpy.ndarray: ``m x n`` rank-``k`` approximation. ``k = 0`` gives the
        zero matrix and ``k = p`` recovers the original matrix up to rounding.

    Raises:
        InvalidDimensionError: If the factor shapes are inconsistent.
        InvalidRankError: If ``k`` is not an integer in ``[0, p]``.
    """
    U_arr = np.asarray(U, dtype=float)
    D_arr = np.asarray(D, dtype=float).ravel()
    V_arr = np.asarray(V, dtype=float)
    if U_arr.ndim != 2 or V_arr.ndim != 2:
        raise InvalidDimensionError("U and V must be two-dimensional.")
    p = int(D_arr.size)
    if U_arr.shape[1] != p or V_arr.shape[1] != p:
        raise InvalidDimensionError(
            f"Factor shapes are inconsistent: U {U_arr.shape}, D ({p},), V {V_arr.shape}."
        )
    k = _check_rank(k, p)

    return (U_arr[:, :k] * D_arr[:k]) @ V_arr[:, :k].T


def residual_norm(Y, U, D, V, k: int) -> float:
    """Frobenius norm of ``Y - reconstruct(U, D, V, k)``; non-increasing in ``k``."""
    arr = _as_matrix(Y)
    Yhat = reconstruct(U, D, V, k)
    if Yhat.shape != arr.shape:
        raise InvalidDimensionError(
            f"Matrix shape {arr.shape} does not match factors {Yhat.shape}."
        )
    return float(np.linalg.norm(arr - Yhat, ord="fro"))


def variance_explained(D, k: int) -> float:
    """Return the fraction ``sum_{i<=k} D_i^2 / sum_i D_i^2``.

    Args:
        D (numpy.ndarray): Singular values, length ``p``.
        k (int): Number of leading components, ``0 <= k <= p``.

    Returns:
        float: Value in ``[0, 1]``; exactly ``1.0`` when ``k = p``.

    Raises:
        DegenerateInputError: If all singular values are zero.
        InvalidRankError: If ``k`` is outside ``[0, p]``.
    """
    d, total = _total_sum_of_squares(D)
    k = _check_rank(k, int(d.size))
    if k == d.size:
        return 1.0
    frac = float(np.sum(d[:k] ** 2)) / total
    return min(max(frac, 0.0), 1.0)


def cumulative_variance_explained(D) -> np.ndarray:
    """Running variance-explained fraction for ``k = 1..p``."""
    d, total = _total_sum_of_squares(D)
    cumulative = np.cumsum(d**2) / total
    cumulative[-1] = 1.0
    return np.clip(cumulative, 0.0, 1.0)


def choose_rank(D, threshold: float = DEFAULT_VARIANCE_THRESHOLD) -> int:
    """Smallest ``k`` whose cumulative variance explained reaches ``threshold``.

    This is an explicit heuristic for callers who want one; nothing in this
    module applies it implicitly.
    """
    t = float(threshold)
    if not math.isfinite(t) or t <= 0.0 or t > 1.0:
        raise InvalidRankError(f"Variance threshold must lie in (0, 1], got {threshold!r}.")
    cumulative = cumulative_variance_explained(D)
    # Tolerance absorbs rounding in the cumulative sum.
    hits = np.nonzero(cumulative >= t - 1e-12)[0]
    return int(hits[0]) + 1


def center_columns(Y) -> Tuple[np.ndarray, np.ndarray]:
    """Subtract each column mean; returns ``(centered, column_means)``."""
    arr = _as_matrix(Y)
    means = arr.mean(axis=0)
    return arr - means, means


def principal_components(factorization: Factorization, k: int) -> np.ndarray:
    """Rotated data ``U[:, :k] * D[:k]``, one row per observation."""
    U, D, _ = factorization
    k = _check_rank(k, factorization.rank)
    return U[:, :k] * D[:k]


def singular_value_summary(D) -> pd.DataFrame:
    """Tabulate singular values with per-component and cumulative variance.

    Args:
        D (numpy.ndarray): Singular values in descending order.

    Returns:
        pandas.DataFrame: One row per component with columns from
        :class:`lifestats.schema.SummaryColumns`.

    Raises:
        DegenerateInputError: If all singular values are zero.
    """
    d, total = _total_sum_of_squares(D)
    return pd.DataFrame(
        {
            _COLS.component: np.arange(1, d.size + 1, dtype=int),
            _COLS.singular_value: d,
            _COLS.variance_explained: d**2 / total,
            _COLS.cumulative_variance: cumulative_variance_explained(d),
        }
    )
