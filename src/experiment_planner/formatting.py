"""Display strings for sizing results."""

import math


def format_sample_size(sample_size: int) -> str:
    """Sample size with thousands separators (2784 -> "2,784")."""
    return f"{sample_size:,}"


def format_test_duration(duration_weeks: float) -> str:
    """
    Human phrasing of a duration in weeks.

    Sub-week durations are bucketed into day ranges; exactly one week reads
    "1 week"; anything longer is rounded up to whole weeks.
    """
    if duration_weeks < 0.25:
        return "1-2 days"
    elif duration_weeks < 0.5:
        return "2-3 days"
    elif duration_weeks < 1:
        return "Less than a week"
    elif duration_weeks == 1:
        return "1 week"
    else:
        return f"{math.ceil(duration_weeks)} weeks"
