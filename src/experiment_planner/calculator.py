"""
Test duration calculator entrypoint.

Input: baseline conversion rate, minimum detectable effect, weekly users,
number of variants (raw form strings or numbers).
Output: SizingResult with sample size per variant, duration in weeks and
their display strings, or an InvalidInputError naming the first violated
constraint.
"""

import logging
import math
from numbers import Integral
from typing import Any, Mapping, Optional

import numpy as np

from .config import DEFAULT_VARIANT_COUNT, MAX_VARIANTS, MIN_VARIANTS
from .errors import InvalidInputError
from .formatting import format_sample_size, format_test_duration
from .schema import CalculatorInputs, SizingResult
from .stats import calculate_sample_size, calculate_test_duration, estimate_baseline_rate

logger = logging.getLogger(__name__)

BASELINE_MESSAGE = "Baseline conversion rate must be between 0 and 100%"
MDE_MESSAGE = "Minimum detectable effect must be a positive number"
USERS_MESSAGE = "Weekly users must be a positive number"
VARIANTS_MESSAGE = f"Number of variants must be between {MIN_VARIANTS} and {MAX_VARIANTS}"


def _to_float(value: Any) -> float:
    """Parse a number; anything unparsable becomes NaN."""
    if isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _is_whole_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_inputs(inputs: CalculatorInputs) -> None:
    """
    Check calculator preconditions in order: baseline, MDE, weekly users,
    variant count. The first violation raises InvalidInputError.
    """
    baseline = _to_float(inputs.baseline_rate_pct)
    mde = _to_float(inputs.mde_pct)
    users = _to_float(inputs.weekly_users)
    if not (np.isfinite(baseline) and 0 < baseline < 100):
        raise InvalidInputError(BASELINE_MESSAGE, field="baseline_rate_pct")
    if not (np.isfinite(mde) and mde > 0):
        raise InvalidInputError(MDE_MESSAGE, field="mde_pct")
    if not (np.isfinite(users) and users > 0):
        raise InvalidInputError(USERS_MESSAGE, field="weekly_users")
    if not (
        _is_whole_number(inputs.variant_count)
        and MIN_VARIANTS <= inputs.variant_count <= MAX_VARIANTS
    ):
        raise InvalidInputError(VARIANTS_MESSAGE, field="variant_count")


def run_calculation(inputs: CalculatorInputs) -> SizingResult:
    """
    Validate inputs, then compute sample size, duration and display strings.

    Either every derived value is returned or an error is raised; nothing is
    computed when validation fails.

    Raises:
        InvalidInputError: a precondition is violated
        DegenerateComputationError: the sizing formula is undefined for the inputs
    """
    validate_inputs(inputs)

    baseline = _to_float(inputs.baseline_rate_pct)
    mde = _to_float(inputs.mde_pct)
    users = _to_float(inputs.weekly_users)
    variants = int(inputs.variant_count)
    significance = _to_float(inputs.significance)
    power = _to_float(inputs.power)

    sample_size = calculate_sample_size(baseline, mde, significance, power, variants)
    duration = calculate_test_duration(sample_size, users, variants)

    result = SizingResult(
        baseline_rate_pct=baseline,
        mde_pct=mde,
        target_rate_pct=baseline * (1 + mde / 100),
        variant_count=variants,
        significance=significance,
        power=power,
        sample_size_per_variant=sample_size,
        total_sample_size=sample_size * variants,
        duration_weeks=duration,
        formatted_sample_size=format_sample_size(sample_size),
        formatted_duration=format_test_duration(duration),
    )
    logger.info(
        f"Sized test: baseline={baseline}%, mde={mde}%, variants={variants} -> "
        f"{result.formatted_sample_size} per variant, {result.formatted_duration}"
    )
    return result


def parse_calculator_inputs(raw: Mapping[str, Any]) -> CalculatorInputs:
    """
    Build CalculatorInputs from raw form values.

    Unparsable numbers become NaN (rejected by validation); a blank or
    unparsable variant count falls back to the default.
    """
    variants_raw = raw.get("variant_count")
    try:
        variant_count = float(variants_raw)
        if variant_count.is_integer():
            variant_count = int(variant_count)
    except (TypeError, ValueError):
        variant_count = DEFAULT_VARIANT_COUNT

    return CalculatorInputs(
        baseline_rate_pct=_to_float(raw.get("baseline_rate_pct")),
        mde_pct=_to_float(raw.get("mde_pct")),
        weekly_users=_to_float(raw.get("weekly_users")),
        variant_count=variant_count,
    )


def clamp_variant_count(raw: str) -> Optional[str]:
    """
    Normalize the variant count box while the user types.

    Blank stays blank, whole numbers are clamped into the allowed range,
    anything else is ignored (None).
    """
    raw = (raw or "").strip()
    if raw == "":
        return ""
    try:
        value = int(float(raw))
    except (ValueError, OverflowError):
        return None
    return str(min(max(value, MIN_VARIANTS), MAX_VARIANTS))


def baseline_from_weekly_metrics(users_raw: Any, conversions_raw: Any) -> Optional[str]:
    """
    Baseline rate for the form, to two decimals ("5.00"), once both weekly
    counts are present and users is positive; otherwise None.
    """
    users = _to_float(users_raw)
    conversions = _to_float(conversions_raw)
    if not (np.isfinite(users) and np.isfinite(conversions)) or users <= 0 or conversions < 0:
        return None
    return f"{estimate_baseline_rate(conversions, users):.2f}"
