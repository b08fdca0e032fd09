"""Command-line demonstrations of interval coverage and SVD truncation."""

from __future__ import annotations

import argparse
import logging

import numpy as np

from .simulation import (
    DEFAULT_SAMPLE_SIZES,
    DEFAULT_TRIALS,
    correlated_columns,
    coverage_table,
    draw_sample,
)
from .reporting import format_interval
from .schema import SummaryColumns
from .stats.decomposition import (
    DEFAULT_VARIANCE_THRESHOLD,
    center_columns,
    choose_rank,
    decompose,
    residual_norm,
    singular_value_summary,
)
from .stats.intervals import DEFAULT_CONFIDENCE_LEVEL, mean_confidence_interval

DEFAULT_SEED = 2024

_COLS = SummaryColumns()


def run_coverage_demo(
    rng: np.random.Generator,
    sample_sizes=DEFAULT_SAMPLE_SIZES,
    n_trials: int = DEFAULT_TRIALS,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
):
    """Log one example interval per size and the normal-vs-t coverage table."""
    for n in sample_sizes:
        sample = draw_sample(rng, n)
        for use_t in (False, True):
            logging.info(
                "N=%d example interval: %s",
                n,
                format_interval(mean_confidence_interval(sample, confidence_level, use_t)),
            )

    table = coverage_table(
        rng, sample_sizes, n_trials=n_trials, confidence_level=confidence_level
    )
    logging.info("Coverage over %d trials per row:\n%s", n_trials, table.to_string(index=False))

    undercovered = table[table[_COLS.coverage] < confidence_level - 0.02]
    for _, row in undercovered.iterrows():
        logging.warning(
            "N=%d with %s critical values covers only %.3f (nominal %.2f)",
            int(row[_COLS.sample_size]),
            row[_COLS.distribution],
            float(row[_COLS.coverage]),
            confidence_level,
        )
    return table


def run_svd_demo(
    rng: np.random.Generator,
    n_obs: int = 100,
    noise_sd: float = 0.1,
    threshold: float = DEFAULT_VARIANCE_THRESHOLD,
):
    """Log the singular value summary for two nearly identical columns."""
    Y = correlated_columns(rng, n_obs, noise_sd=noise_sd, mean=68.0, sd=3.0)
    Yc, means = center_columns(Y)
    logging.info("Column means removed: %s", np.array2string(means, precision=2))

    fact = decompose(Yc)
    summary = singular_value_summary(fact.D)
    logging.info("Singular value summary:\n%s", summary.to_string(index=False))

    k = choose_rank(fact.D, threshold)
    logging.info(
        "Rank %d reaches %.0f%% of variance; residual norm %.4g",
        k,
        100.0 * threshold,
        residual_norm(Yc, *fact, k),
    )
    return summary


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        description="Confidence interval coverage and SVD dimension reduction demos."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Seed for the random generator (default: {DEFAULT_SEED}).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    cov = sub.add_parser("coverage", help="Normal vs t interval coverage.")
    cov.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=list(DEFAULT_SAMPLE_SIZES),
        help="Sample sizes to simulate.",
    )
    cov.add_argument("--trials", type=int, default=DEFAULT_TRIALS)
    cov.add_argument("--level", type=float, default=DEFAULT_CONFIDENCE_LEVEL)

    svd = sub.add_parser("svd", help="Variance explained for correlated columns.")
    svd.add_argument("--n-obs", type=int, default=100)
    svd.add_argument("--noise", type=float, default=0.1)
    svd.add_argument("--threshold", type=float, default=DEFAULT_VARIANCE_THRESHOLD)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for the demonstrations."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    rng = np.random.default_rng(args.seed)
    logging.info("Running '%s' demo with seed %d", args.command, args.seed)

    if args.command == "coverage":
        run_coverage_demo(
            rng, tuple(args.sizes), n_trials=args.trials, confidence_level=args.level
        )
    else:
        run_svd_demo(rng, n_obs=args.n_obs, noise_sd=args.noise, threshold=args.threshold)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
