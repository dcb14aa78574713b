"""
Sample size sensitivity across minimum detectable effects.

One row per candidate MDE so a planner can see how the required sample
and the test duration trade off against the size of the lift.
"""

import logging
from typing import Iterable

import pandas as pd

from ..config import (
    DEFAULT_MDE_GRID,
    DEFAULT_POWER,
    DEFAULT_SIGNIFICANCE,
    DEFAULT_VARIANT_COUNT,
)
from ..errors import DegenerateComputationError
from ..formatting import format_test_duration
from .power import calculate_sample_size, calculate_test_duration

logger = logging.getLogger(__name__)

COLUMNS = [
    "mde_pct",
    "target_rate_pct",
    "sample_size_per_variant",
    "total_sample_size",
    "duration_weeks",
    "duration_label",
]


def sensitivity_table(
    baseline_rate_pct: float,
    weekly_users: float,
    mde_values: Iterable[float] = DEFAULT_MDE_GRID,
    variant_count: int = DEFAULT_VARIANT_COUNT,
    significance: float = DEFAULT_SIGNIFICANCE,
    power: float = DEFAULT_POWER,
) -> pd.DataFrame:
    """
    Sample size and duration for each MDE in `mde_values`.

    MDEs that make the computation degenerate (e.g. pooled rate above 100%)
    are skipped.

    Returns:
        DataFrame with columns: mde_pct, target_rate_pct, sample_size_per_variant,
        total_sample_size, duration_weeks, duration_label (sorted by mde_pct)
    """
    rows = []
    for mde in sorted(mde_values):
        try:
            n = calculate_sample_size(
                baseline_rate_pct, mde, significance, power, variant_count
            )
        except DegenerateComputationError as e:
            logger.warning(f"Skipping MDE {mde}%: {e}")
            continue
        weeks = calculate_test_duration(n, weekly_users, variant_count)
        rows.append({
            "mde_pct": float(mde),
            "target_rate_pct": baseline_rate_pct * (1 + mde / 100),
            "sample_size_per_variant": n,
            "total_sample_size": n * variant_count,
            "duration_weeks": weeks,
            "duration_label": format_test_duration(weeks),
        })
    return pd.DataFrame(rows, columns=COLUMNS)
