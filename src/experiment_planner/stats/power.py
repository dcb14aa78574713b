"""
Sample size and duration calculator for conversion-rate experiments.

Baseline rate from weekly traffic, per-variant sample size for a relative
lift (two-proportion z-test approximation), test duration in weeks, and the
inverse: the lift detectable with a given sample.

All rates and effects are percentages (5 = 5%).
"""

import math
from typing import Tuple

import numpy as np
from scipy import optimize, stats

from ..config import (
    CONVENTIONAL_Z_ALPHA,
    CONVENTIONAL_Z_BETA,
    DEFAULT_POWER,
    DEFAULT_SIGNIFICANCE,
    DEFAULT_VARIANT_COUNT,
)
from ..errors import DegenerateComputationError, InvalidInputError


def estimate_baseline_rate(weekly_conversions: float, weekly_users: float) -> float:
    """
    Baseline conversion rate (%) from historical weekly counts.

    Not clamped: conversions above users give a rate above 100.

    Args:
        weekly_conversions: Conversions per week (>= 0)
        weekly_users: Users per week (> 0)

    Returns:
        Conversion rate as a percentage
    """
    if not (np.isfinite(weekly_users) and weekly_users > 0):
        raise InvalidInputError(
            "Weekly users must be a positive number", field="weekly_users"
        )
    if not (np.isfinite(weekly_conversions) and weekly_conversions >= 0):
        raise InvalidInputError(
            "Weekly conversions must be zero or a positive number",
            field="weekly_conversions",
        )
    return 100 * weekly_conversions / weekly_users


def critical_z_values(
    significance: float = DEFAULT_SIGNIFICANCE,
    power: float = DEFAULT_POWER,
) -> Tuple[float, float]:
    """
    Critical values (z_alpha, z_beta) for a two-sided test.

    The conventional 95% / 80% settings map to the rounded 1.96 / 0.84
    used in planning tables; anything else comes from the inverse normal.
    Only the exact values 0.95 and 0.80 are rounded, so sample sizes are not
    continuous around them: 0.9500001 gives an unrounded z_alpha of about
    1.95997 and a sample one smaller than 0.95, while 0.8000001 gives
    z_beta of about 0.8416 and a larger sample than 0.80.
    """
    if not 0 < significance < 1:
        raise InvalidInputError("Significance level must be between 0 and 1", field="significance")
    if not 0 < power < 1:
        raise InvalidInputError("Statistical power must be between 0 and 1", field="power")

    z_alpha = CONVENTIONAL_Z_ALPHA.get(significance)
    if z_alpha is None:
        z_alpha = float(stats.norm.ppf((1 + significance) / 2))
    z_beta = CONVENTIONAL_Z_BETA.get(power)
    if z_beta is None:
        z_beta = float(stats.norm.ppf(power))
    return z_alpha, z_beta


def _raw_sample_size(
    p1: float,
    p2: float,
    z_alpha: float,
    z_beta: float,
    variant_count: int,
) -> float:
    p_pool = (p1 + p2) / 2
    return (z_alpha + z_beta) ** 2 * p_pool * (1 - p_pool) * variant_count / (p2 - p1) ** 2


def calculate_sample_size(
    baseline_rate_pct: float,
    mde_pct: float,
    significance: float = DEFAULT_SIGNIFICANCE,
    power: float = DEFAULT_POWER,
    variant_count: int = DEFAULT_VARIANT_COUNT,
) -> int:
    """
    Sample size per variant to detect a relative lift in conversion rate.

    n = (z_alpha + z_beta)^2 * p(1-p) * variants / (p2 - p1)^2, with
    p2 = p1 * (1 + mde) and p the pooled rate. The variant count scales the
    requirement linearly; no multiple-comparison correction is applied.
    A target rate above 100% is still sized as long as the pooled rate
    stays below 100%.

    Args:
        baseline_rate_pct: Baseline conversion rate (e.g. 5 for 5%)
        mde_pct: Minimum detectable effect as relative lift (e.g. 10 for +10%)
        significance: Confidence level of the two-sided test
        power: Statistical power (1 - Type II)
        variant_count: Number of arms including control

    Returns:
        Required sample size per variant, rounded up
    """
    p1 = baseline_rate_pct / 100
    p2 = p1 * (1 + mde_pct / 100)

    if p2 - p1 == 0:
        raise DegenerateComputationError(
            "Target conversion rate equals the baseline; the effect is too small to size a test"
        )
    z_alpha, z_beta = critical_z_values(significance, power)
    n = _raw_sample_size(p1, p2, z_alpha, z_beta, variant_count)

    if not np.isfinite(n) or n <= 0:
        raise DegenerateComputationError(f"Sample size is undefined for these inputs (got {n})")
    return int(np.ceil(n))


def calculate_test_duration(
    sample_size_per_variant: int,
    weekly_users: float,
    variant_count: int = DEFAULT_VARIANT_COUNT,
) -> int:
    """
    Weeks needed to collect the total sample across all variants.

    Partial weeks round up to a full week.
    """
    if not (np.isfinite(weekly_users) and weekly_users > 0):
        raise InvalidInputError(
            "Weekly users must be a positive number", field="weekly_users"
        )
    total_required = sample_size_per_variant * variant_count
    return int(math.ceil(total_required / weekly_users))


def detectable_effect(
    baseline_rate_pct: float,
    sample_size_per_variant: int,
    significance: float = DEFAULT_SIGNIFICANCE,
    power: float = DEFAULT_POWER,
    variant_count: int = DEFAULT_VARIANT_COUNT,
    tol: float = 1e-6,
) -> float:
    """
    Smallest relative lift (%) detectable with a fixed sample per variant.

    Solves the un-rounded sample size formula for the effect with Brent's
    method. The search range ends where the target rate reaches 100%.

    Raises:
        DegenerateComputationError: if no lift up to that point is detectable
    """
    if not 0 < baseline_rate_pct < 100:
        raise InvalidInputError(
            "Baseline conversion rate must be between 0 and 100%", field="baseline_rate_pct"
        )
    if not sample_size_per_variant > 0:
        raise InvalidInputError(
            "Sample size per variant must be a positive number", field="sample_size_per_variant"
        )

    z_alpha, z_beta = critical_z_values(significance, power)
    p1 = baseline_rate_pct / 100

    def excess(mde_pct: float) -> float:
        p2 = p1 * (1 + mde_pct / 100)
        return _raw_sample_size(p1, p2, z_alpha, z_beta, variant_count) - sample_size_per_variant

    mde_lo = 1e-6
    mde_hi = (1 / p1 - 1) * 100
    if excess(mde_hi) > 0:
        raise DegenerateComputationError(
            f"{sample_size_per_variant:,} per variant cannot detect any lift "
            f"from a {baseline_rate_pct}% baseline"
        )
    if excess(mde_lo) <= 0:
        return mde_lo

    return float(optimize.brentq(excess, mde_lo, mde_hi, xtol=tol))
