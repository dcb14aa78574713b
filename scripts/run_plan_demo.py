#!/usr/bin/env python3
"""
Run full planner demo: size -> fill plan -> save -> export.

Creates data/plans/<id>/plan.json and artifacts/plans/<id>/plan_summary.html,
plan.md and sensitivity.csv.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))


def main():
    plan_id = "checkout_demo_001"
    plans_dir = ROOT / "data" / "plans"
    artifacts_dir = ROOT / "artifacts" / "plans"

    from experiment_planner.calculator import baseline_from_weekly_metrics, parse_calculator_inputs, run_calculation
    from experiment_planner.plan_store import TestPlanStore, save_plan
    from experiment_planner.report import plan_to_markdown, render_plan_summary
    from experiment_planner.schema import StepId
    from experiment_planner.stats import sensitivity_table

    weekly_users, weekly_conversions = "10000", "500"

    print("1. Sizing the test...")
    baseline = baseline_from_weekly_metrics(weekly_users, weekly_conversions)
    result = run_calculation(parse_calculator_inputs({
        "baseline_rate_pct": baseline,
        "mde_pct": "10",
        "weekly_users": weekly_users,
        "variant_count": "2",
    }))
    print(f"   Baseline {baseline}% -> {result.formatted_sample_size} per variant, {result.formatted_duration}")

    print("2. Filling the plan...")
    store = TestPlanStore()
    store.handle_input_change("context", "Checkout abandonment rose after the Q2 redesign.", StepId.CONTEXT)
    store.handle_input_change(
        "hypothesis",
        "If we collapse checkout into one page, then orders will rise because fewer users drop between steps.",
        StepId.HYPOTHESIS,
    )
    store.handle_input_change("expectedImpact", "10% relative increase in orders", StepId.IMPACT)
    store.apply_sizing(result)
    store.handle_input_change("primary", "orders per checkout visitor", StepId.METRICS)
    store.handle_input_change("secondaryMetrics", "average order value, refund rate", StepId.METRICS)
    store.handle_input_change("control", "Current three-step checkout.", StepId.VARIANTS)
    store.handle_input_change("variantA", "Single-page checkout with inline payment.", StepId.VARIANTS)

    print("3. Saving and exporting...")
    save_plan(store.plan, plan_id, base_dir=str(plans_dir))
    render_plan_summary(store.plan.to_dict(), plan_id, artifacts_dir=str(artifacts_dir))

    out_dir = artifacts_dir / plan_id
    (out_dir / "plan.md").write_text(plan_to_markdown(store.plan), encoding="utf-8")
    sensitivity_table(result.baseline_rate_pct, float(weekly_users)).to_csv(out_dir / "sensitivity.csv", index=False)

    print(f"\n[OK] Demo complete. Artifacts in {out_dir}:")
    for f in sorted(out_dir.iterdir()):
        print(f"   - {f.name}")


if __name__ == "__main__":
    main()
