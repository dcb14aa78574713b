"""A/B test planner: plan builder, experiment sizing engine and export."""

from .schema import (
    TestPlan,
    ExperimentSetup,
    SuccessMetrics,
    Variants,
    Conclusions,
    CalculatorInputs,
    SizingResult,
    StepId,
)
from .errors import InvalidInputError, DegenerateComputationError
from .stats import (
    estimate_baseline_rate,
    calculate_sample_size,
    calculate_test_duration,
    detectable_effect,
    sensitivity_table,
)
from .formatting import format_sample_size, format_test_duration
from .calculator import run_calculation, validate_inputs, parse_calculator_inputs
from .plan_store import TestPlanStore, save_plan, load_plan, list_plans
from .report import plan_to_markdown, render_plan_summary

__all__ = [
    "TestPlan",
    "ExperimentSetup",
    "SuccessMetrics",
    "Variants",
    "Conclusions",
    "CalculatorInputs",
    "SizingResult",
    "StepId",
    "InvalidInputError",
    "DegenerateComputationError",
    "estimate_baseline_rate",
    "calculate_sample_size",
    "calculate_test_duration",
    "detectable_effect",
    "sensitivity_table",
    "format_sample_size",
    "format_test_duration",
    "run_calculation",
    "validate_inputs",
    "parse_calculator_inputs",
    "TestPlanStore",
    "save_plan",
    "load_plan",
    "list_plans",
    "plan_to_markdown",
    "render_plan_summary",
]
