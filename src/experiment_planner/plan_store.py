"""
Form-state store for a test plan being edited, plus JSON persistence.

Routes form edits into the right section of the plan, tracks which fields
were rewritten by an enhancement service, and saves plans to
data/plans/<plan_id>/plan.json.
"""

import base64
import json
import logging
import mimetypes
import re
from dataclasses import fields
from pathlib import Path
from typing import List, Optional, Set, Union

from .config import DEFAULT_PLANS_DIR
from .errors import InvalidInputError
from .form_steps import FORM_STEPS, setup_defaults
from .schema import SizingResult, StepId, TestPlan

logger = logging.getLogger(__name__)

IMAGE_FIELDS = ("controlImage", "variantAImage")

# Steps whose single field maps onto a top-level plan attribute
_TOP_LEVEL = {
    StepId.CONTEXT: "context",
    StepId.HYPOTHESIS: "hypothesis",
    StepId.IMPACT: "expected_impact",
}

_SECTIONS = {
    StepId.SETUP: "experiment_setup",
    StepId.METRICS: "metrics",
    StepId.VARIANTS: "variants",
    StepId.CONCLUSIONS: "conclusions",
}


def field_attr_name(field_id: str) -> str:
    """Form field ids are camelCase (variantAImage -> variant_a_image)."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", field_id).lower()


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


class TestPlanStore:
    """Holds the plan being edited and the set of enhanced field keys."""
    __test__ = False  # not a pytest test class

    def __init__(self, plan: Optional[TestPlan] = None):
        self.plan = plan or self._initial_plan()
        self.enhanced_fields: Set[str] = set()
        self.is_enhanced = False

    @staticmethod
    def _initial_plan() -> TestPlan:
        plan = TestPlan()
        for field_id, value in setup_defaults().items():
            attr = field_attr_name(field_id)
            if not getattr(plan.experiment_setup, attr):
                setattr(plan.experiment_setup, attr, value)
        return plan

    def handle_input_change(self, field_id: str, value: str, step: Union[StepId, str]) -> None:
        """
        Apply a manual edit. The edited field loses its enhanced mark.

        Args:
            field_id: Form field id (e.g. 'secondaryMetrics')
            value: Raw text entered by the user
            step: Step the field belongs to
        """
        try:
            step = StepId(step)
        except ValueError:
            raise InvalidInputError(f"Unknown form step '{step}'", field=field_id) from None

        self.enhanced_fields.discard(f"{step.value}-{field_id}")

        if step in _TOP_LEVEL:
            setattr(self.plan, _TOP_LEVEL[step], value)
            return

        if step not in _SECTIONS:
            raise InvalidInputError(f"Step '{step.value}' has no editable fields", field=field_id)

        section = getattr(self.plan, _SECTIONS[step])
        attr = field_attr_name(field_id)
        if attr not in {f.name for f in fields(section)}:
            raise InvalidInputError(
                f"Unknown field '{field_id}' for step '{step.value}'", field=field_id
            )

        if field_id == "secondaryMetrics":
            setattr(section, attr, [item.strip() for item in value.split(",")])
        else:
            setattr(section, attr, value)

    def handle_upload(self, field_id: str, data: bytes, mime_type: str) -> None:
        """Store uploaded image bytes on a variant as a data URL."""
        if field_id not in IMAGE_FIELDS:
            raise InvalidInputError(f"'{field_id}' is not an image field", field=field_id)
        setattr(self.plan.variants, field_attr_name(field_id), to_data_url(data, mime_type))

    def handle_file_change(self, field_id: str, path: Optional[Union[str, Path]]) -> None:
        """Read an image from disk into a variant. A missing path is a no-op."""
        if not path:
            return
        path = Path(path)
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        self.handle_upload(field_id, path.read_bytes(), mime_type)

    def apply_sizing(self, result: SizingResult) -> None:
        """Copy calculator output into the experiment setup section."""
        self.handle_input_change("sampleSize", result.formatted_sample_size, StepId.SETUP)
        self.handle_input_change("duration", result.formatted_duration, StepId.SETUP)

    def mark_field_enhanced(self, step: Union[StepId, str], field_id: str) -> None:
        self.enhanced_fields.add(f"{StepId(step).value}-{field_id}")

    def mark_all_fields_enhanced(self) -> None:
        self.enhanced_fields = {
            f"{step.id.value}-{f.id}" for step in FORM_STEPS for f in step.fields
        }
        self.is_enhanced = True

    def is_field_enhanced(self, step: Union[StepId, str], field_id: str) -> bool:
        return f"{StepId(step).value}-{field_id}" in self.enhanced_fields

    def update_plan(self, plan: TestPlan) -> None:
        """Replace the whole plan (e.g. with an enhanced rewrite)."""
        self.plan = plan


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _plan_path(plan_id: str, base_dir: str = DEFAULT_PLANS_DIR) -> Path:
    return Path(base_dir) / plan_id / "plan.json"


def save_plan(plan: TestPlan, plan_id: str, base_dir: str = DEFAULT_PLANS_DIR) -> Path:
    """
    Write a plan to the store.

    Args:
        plan: Test plan
        plan_id: Plan identifier
        base_dir: Base directory for plan data

    Returns:
        Path of the written JSON file
    """
    path = _plan_path(plan_id, base_dir)
    _ensure_dir(path.parent)
    with open(path, "w") as f:
        json.dump(plan.to_dict(), f, indent=2)
    logger.info(f"Plan saved to {path}")
    return path


def load_plan(plan_id: str, base_dir: str = DEFAULT_PLANS_DIR) -> TestPlan:
    """Read a saved plan. Raises FileNotFoundError if it does not exist."""
    path = _plan_path(plan_id, base_dir)
    if not path.exists():
        raise FileNotFoundError(f"No saved plan '{plan_id}' in {base_dir}")
    with open(path) as f:
        return TestPlan.from_dict(json.load(f))


def list_plans(base_dir: str = DEFAULT_PLANS_DIR) -> List[str]:
    """Plan IDs with a saved plan.json, most recently modified first."""
    root = Path(base_dir)
    if not root.exists():
        return []
    dirs = [d for d in root.iterdir() if (d / "plan.json").exists()]
    dirs.sort(key=lambda d: (d / "plan.json").stat().st_mtime, reverse=True)
    return [d.name for d in dirs]
