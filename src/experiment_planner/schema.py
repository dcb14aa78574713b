"""
Data models for the A/B test planner.

Dataclass schemas for the test plan record, the form step definitions,
and the inputs/outputs of the sizing calculator.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import DEFAULT_POWER, DEFAULT_SIGNIFICANCE, DEFAULT_VARIANT_COUNT


class StepId(str, Enum):
    """Planner form step."""
    CONTEXT = "context"
    HYPOTHESIS = "hypothesis"
    IMPACT = "impact"
    SETUP = "setup"
    METRICS = "metrics"
    VARIANTS = "variants"
    CONCLUSIONS = "conclusions"
    REVIEW = "review"


class FieldType(str, Enum):
    """Input widget type for a form field."""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    SELECT = "select"
    FILE = "file"


@dataclass
class FormField:
    """Definition of a single form field."""
    id: str
    label: str
    field_type: FieldType
    placeholder: str = ""
    default_value: Optional[str] = None
    options: List[Dict[str, str]] = field(default_factory=list)
    required: bool = False


@dataclass
class FormStep:
    """A step of the planner form and the fields it collects."""
    id: StepId
    title: str
    description: str
    fields: List[FormField] = field(default_factory=list)


@dataclass
class ExperimentSetup:
    sample_size: str = ""
    duration: str = ""
    significance: str = "95%"
    power: str = "80%"


@dataclass
class SuccessMetrics:
    primary: str = ""
    secondary_metrics: List[str] = field(default_factory=list)
    registration_start: str = ""
    registration_complete: str = ""


@dataclass
class Variants:
    control: str = ""
    variant_a: str = ""
    control_image: Optional[str] = None  # data URL
    variant_a_image: Optional[str] = None  # data URL


@dataclass
class Conclusions:
    summary: str = ""
    outcome: str = ""
    significant: str = ""
    primary_goal: str = ""
    control_rate: str = ""
    test_rate: str = ""
    relative_change: str = ""
    confidence_level: str = ""
    next_steps: str = ""
    notes: str = ""


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass
class TestPlan:
    """Complete A/B test plan as collected by the planner form."""
    __test__ = False  # not a pytest test class

    context: str = ""
    hypothesis: str = ""
    expected_impact: str = ""
    experiment_setup: ExperimentSetup = field(default_factory=ExperimentSetup)
    metrics: SuccessMetrics = field(default_factory=SuccessMetrics)
    variants: Variants = field(default_factory=Variants)
    conclusions: Conclusions = field(default_factory=Conclusions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TestPlan":
        """Build a plan from a dict produced by `to_dict` (unknown keys are ignored)."""
        data = data or {}
        metrics = _known_fields(SuccessMetrics, data.get("metrics", {}))
        metrics["secondary_metrics"] = list(metrics.get("secondary_metrics") or [])
        return cls(
            context=data.get("context", ""),
            hypothesis=data.get("hypothesis", ""),
            expected_impact=data.get("expected_impact", ""),
            experiment_setup=ExperimentSetup(
                **_known_fields(ExperimentSetup, data.get("experiment_setup", {}))
            ),
            metrics=SuccessMetrics(**metrics),
            variants=Variants(**_known_fields(Variants, data.get("variants", {}))),
            conclusions=Conclusions(
                **_known_fields(Conclusions, data.get("conclusions", {}))
            ),
        )


@dataclass
class CalculatorInputs:
    """Caller-supplied inputs of the sizing calculator (percentages as 0-100)."""
    baseline_rate_pct: float
    mde_pct: float
    weekly_users: float
    variant_count: int = DEFAULT_VARIANT_COUNT
    significance: float = DEFAULT_SIGNIFICANCE
    power: float = DEFAULT_POWER


@dataclass(frozen=True)
class SizingResult:
    """Derived sample size and duration for one set of calculator inputs."""
    baseline_rate_pct: float
    mde_pct: float
    target_rate_pct: float
    variant_count: int
    significance: float
    power: float
    sample_size_per_variant: int
    total_sample_size: int
    duration_weeks: int
    formatted_sample_size: str
    formatted_duration: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return asdict(self)
