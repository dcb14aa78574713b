"""
A/B Test Planner - Streamlit front-end.

Tabs: Plan (form sections), Calculator (sample size and duration), Review (export).
"""

import sys
from pathlib import Path

# Add src/ for running without an install
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))

import streamlit as st

from experiment_planner.calculator import (
    baseline_from_weekly_metrics,
    parse_calculator_inputs,
    run_calculation,
)
from experiment_planner.config import MAX_VARIANTS, MIN_VARIANTS
from experiment_planner.errors import DegenerateComputationError, InvalidInputError
from experiment_planner.form_steps import FORM_STEPS
from experiment_planner.plan_store import (
    TestPlanStore,
    field_attr_name,
    list_plans,
    load_plan,
    save_plan,
)
from experiment_planner.report import plan_to_markdown, render_plan_summary
from experiment_planner.schema import FieldType, StepId
from experiment_planner.stats import detectable_effect, sensitivity_table

st.set_page_config(page_title="A/B Test Planner", page_icon="🧪", layout="wide")

PLANS_DIR = ROOT / "data" / "plans"
ARTIFACTS_DIR = ROOT / "artifacts" / "plans"


def get_store() -> TestPlanStore:
    if "store" not in st.session_state:
        st.session_state["store"] = TestPlanStore()
    return st.session_state["store"]


def _current_value(store: TestPlanStore, step_id: StepId, field_id: str) -> str:
    plan = store.plan
    if step_id == StepId.CONTEXT:
        return plan.context
    if step_id == StepId.HYPOTHESIS:
        return plan.hypothesis
    if step_id == StepId.IMPACT:
        return plan.expected_impact
    section = {
        StepId.SETUP: plan.experiment_setup,
        StepId.METRICS: plan.metrics,
        StepId.VARIANTS: plan.variants,
    }[step_id]
    value = getattr(section, field_attr_name(field_id))
    return ", ".join(value) if isinstance(value, list) else (value or "")


def render_plan_tab(store: TestPlanStore):
    st.header("Test Plan")
    for step in FORM_STEPS:
        with st.expander(step.title, expanded=step.id == StepId.CONTEXT):
            st.caption(step.description)
            for f in step.fields:
                key = f"{step.id.value}-{f.id}"
                label = f.label + (" ✨" if store.is_field_enhanced(step.id, f.id) else "")
                if f.field_type == FieldType.FILE:
                    upload = st.file_uploader(label, type=["png", "jpg", "jpeg", "gif"], key=key)
                    if upload is not None:
                        store.handle_upload(f.id, upload.getvalue(), upload.type)
                    continue
                current = _current_value(store, step.id, f.id)
                if f.field_type == FieldType.TEXTAREA:
                    value = st.text_area(label, value=current, placeholder=f.placeholder, key=key)
                else:
                    value = st.text_input(label, value=current, placeholder=f.placeholder, key=key)
                if value != current:
                    store.handle_input_change(f.id, value, step.id)


def render_calculator_tab(store: TestPlanStore):
    st.header("Test Duration Calculator")
    st.caption(
        "Enter your metrics to calculate the required sample size and test duration "
        "(95% significance, 80% power)."
    )

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Traffic Metrics")
        weekly_users = st.text_input("Weekly Total Users", placeholder="e.g., 10000")
        weekly_conversions = st.text_input("Weekly Conversions", placeholder="e.g., 500")
        variant_count = st.number_input(
            "Number of Variants (including control)",
            min_value=MIN_VARIANTS, max_value=MAX_VARIANTS, value=2, step=1,
        )
    with c2:
        st.subheader("Statistical Parameters")
        derived = baseline_from_weekly_metrics(weekly_users, weekly_conversions)
        baseline = st.text_input(
            "Baseline Conversion Rate (%)",
            value=derived or "",
            placeholder="e.g., 5",
            help="Calculated from your weekly metrics." if derived else None,
        )
        mde = st.text_input("Minimum Detectable Effect (% relative change)", value="10")

    if st.button("Calculate"):
        inputs = parse_calculator_inputs({
            "baseline_rate_pct": baseline,
            "mde_pct": mde,
            "weekly_users": weekly_users,
            "variant_count": variant_count,
        })
        try:
            result = run_calculation(inputs)
        except (InvalidInputError, DegenerateComputationError) as e:
            st.error(str(e))
        else:
            st.session_state["sizing"] = result
            st.session_state["weekly_users"] = inputs.weekly_users
            store.apply_sizing(result)

    result = st.session_state.get("sizing")
    if result:
        m1, m2, m3 = st.columns(3)
        m1.metric("Sample Size per Variant", result.formatted_sample_size)
        m2.metric("Total Sample", f"{result.total_sample_size:,}")
        m3.metric("Estimated Duration", result.formatted_duration)

        st.subheader("Sensitivity")
        df = sensitivity_table(
            result.baseline_rate_pct,
            st.session_state["weekly_users"],
            variant_count=result.variant_count,
        )
        st.dataframe(df, use_container_width=True)
        try:
            half = max(result.sample_size_per_variant // 2, 1)
            mde_half = detectable_effect(result.baseline_rate_pct, half, variant_count=result.variant_count)
            st.info(f"With {half:,} per variant, detectable MDE: **{mde_half:.1f}%** relative")
        except DegenerateComputationError as e:
            st.warning(str(e))


def render_review_tab(store: TestPlanStore):
    st.header("Review & Export")
    plan_id = st.text_input("Plan ID", value="checkout_test_q3")
    md = plan_to_markdown(store.plan)
    st.markdown(md)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.download_button("Download Markdown", md, file_name=f"{plan_id}.md")
    with c2:
        if st.button("Export HTML"):
            out = render_plan_summary(store.plan.to_dict(), plan_id, artifacts_dir=str(ARTIFACTS_DIR))
            st.download_button("Download HTML", out.read_text(encoding="utf-8"), file_name=out.name)
    with c3:
        if st.button("Save plan"):
            path = save_plan(store.plan, plan_id, base_dir=str(PLANS_DIR))
            st.success(f"Saved to {path}")

    saved = list_plans(base_dir=str(PLANS_DIR))
    if saved:
        sel = st.selectbox("Load saved plan", ["---"] + saved)
        if sel != "---" and st.button("Load"):
            store.update_plan(load_plan(sel, base_dir=str(PLANS_DIR)))
            st.success(f"Loaded {sel}")


def main():
    st.title("🧪 A/B Test Planner")
    store = get_store()
    tab1, tab2, tab3 = st.tabs(["Plan", "Calculator", "Review"])
    with tab1:
        render_plan_tab(store)
    with tab2:
        render_calculator_tab(store)
    with tab3:
        render_review_tab(store)


if __name__ == "__main__":
    main()
