"""Experiment sizing statistics."""

from .power import (
    estimate_baseline_rate,
    critical_z_values,
    calculate_sample_size,
    calculate_test_duration,
    detectable_effect,
)
from .sensitivity import sensitivity_table

__all__ = [
    "estimate_baseline_rate",
    "critical_z_values",
    "calculate_sample_size",
    "calculate_test_duration",
    "detectable_effect",
    "sensitivity_table",
]
