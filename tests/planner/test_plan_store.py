"""Tests for the form-state store and plan persistence."""
import base64

import pytest
from experiment_planner.calculator import run_calculation
from experiment_planner.errors import InvalidInputError
from experiment_planner.plan_store import TestPlanStore, list_plans, load_plan, save_plan
from experiment_planner.schema import CalculatorInputs, StepId


def test_initial_plan_has_setup_defaults():
    store = TestPlanStore()
    assert store.plan.experiment_setup.significance == "95%"
    assert store.plan.experiment_setup.power == "80%"
    assert store.plan.experiment_setup.sample_size == ""


def test_input_change_routes_to_sections():
    store = TestPlanStore()
    store.handle_input_change("context", "Checkout drop-off is high", StepId.CONTEXT)
    store.handle_input_change("expectedImpact", "+5% conversions", "impact")
    store.handle_input_change("primary", "orders", StepId.METRICS)
    store.handle_input_change("variantA", "One-page checkout", StepId.VARIANTS)
    store.handle_input_change("nextSteps", "Roll out", StepId.CONCLUSIONS)

    assert store.plan.context == "Checkout drop-off is high"
    assert store.plan.expected_impact == "+5% conversions"
    assert store.plan.metrics.primary == "orders"
    assert store.plan.variants.variant_a == "One-page checkout"
    assert store.plan.conclusions.next_steps == "Roll out"


def test_secondary_metrics_split_on_commas():
    store = TestPlanStore()
    store.handle_input_change("secondaryMetrics", "activations , registrations,refunds", StepId.METRICS)
    assert store.plan.metrics.secondary_metrics == ["activations", "registrations", "refunds"]


def test_manual_edit_clears_enhanced_mark():
    store = TestPlanStore()
    store.mark_field_enhanced(StepId.HYPOTHESIS, "hypothesis")
    assert store.is_field_enhanced("hypothesis", "hypothesis")
    store.handle_input_change("hypothesis", "If we ...", StepId.HYPOTHESIS)
    assert not store.is_field_enhanced(StepId.HYPOTHESIS, "hypothesis")


def test_mark_all_fields_enhanced():
    store = TestPlanStore()
    store.mark_all_fields_enhanced()
    assert store.is_enhanced
    assert store.is_field_enhanced(StepId.SETUP, "sampleSize")
    assert store.is_field_enhanced(StepId.VARIANTS, "variantAImage")


@pytest.mark.parametrize("field_id,step", [
    ("unknown", StepId.METRICS),
    ("context", "not-a-step"),
    ("anything", StepId.REVIEW),
])
def test_input_change_rejects_unknown_targets(field_id, step):
    with pytest.raises(InvalidInputError):
        TestPlanStore().handle_input_change(field_id, "x", step)


def test_file_change_stores_data_url(tmp_path):
    img = tmp_path / "control.png"
    img.write_bytes(b"\x89PNG fake")
    store = TestPlanStore()
    store.handle_file_change("controlImage", img)
    url = store.plan.variants.control_image
    assert url.startswith("data:image/png;base64,")
    assert base64.b64decode(url.split(",", 1)[1]) == b"\x89PNG fake"


def test_file_change_without_file_is_noop():
    store = TestPlanStore()
    store.handle_file_change("controlImage", None)
    assert store.plan.variants.control_image is None


def test_upload_rejects_non_image_field():
    with pytest.raises(InvalidInputError):
        TestPlanStore().handle_upload("control", b"data", "image/png")


def test_apply_sizing_fills_setup():
    store = TestPlanStore()
    result = run_calculation(CalculatorInputs(5, 10, 10000))
    store.apply_sizing(result)
    assert store.plan.experiment_setup.sample_size == "31,200"
    assert store.plan.experiment_setup.duration == "7 weeks"


def test_save_and_load_plan(tmp_path):
    store = TestPlanStore()
    store.handle_input_change("hypothesis", "If we simplify checkout, orders rise", StepId.HYPOTHESIS)
    store.handle_input_change("secondaryMetrics", "aov, refunds", StepId.METRICS)

    path = save_plan(store.plan, "checkout_q3", base_dir=str(tmp_path))
    assert path.exists()

    loaded = load_plan("checkout_q3", base_dir=str(tmp_path))
    assert loaded == store.plan
    assert list_plans(base_dir=str(tmp_path)) == ["checkout_q3"]


def test_load_missing_plan(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_plan("nope", base_dir=str(tmp_path))
    assert list_plans(base_dir=str(tmp_path / "absent")) == []
