"""End-to-end: size -> fill plan -> save -> export produces artifacts."""
from experiment_planner.calculator import baseline_from_weekly_metrics, parse_calculator_inputs, run_calculation
from experiment_planner.plan_store import TestPlanStore, load_plan, save_plan
from experiment_planner.report import render_plan_summary
from experiment_planner.schema import StepId


def test_e2e_size_save_export(tmp_path):
    data_dir = tmp_path / "data" / "plans"
    artifacts_dir = tmp_path / "artifacts" / "plans"

    baseline = baseline_from_weekly_metrics("10000", "500")
    assert baseline == "5.00"
    result = run_calculation(parse_calculator_inputs({
        "baseline_rate_pct": baseline,
        "mde_pct": "10",
        "weekly_users": "10000",
        "variant_count": "2",
    }))

    store = TestPlanStore()
    store.handle_input_change("hypothesis", "If we shorten checkout, orders rise", StepId.HYPOTHESIS)
    store.apply_sizing(result)

    save_plan(store.plan, "e2e_test", base_dir=str(data_dir))
    reloaded = load_plan("e2e_test", base_dir=str(data_dir))
    out = render_plan_summary(reloaded.to_dict(), "e2e_test", artifacts_dir=str(artifacts_dir))

    assert (data_dir / "e2e_test" / "plan.json").exists()
    assert out.exists()
    html = out.read_text(encoding="utf-8")
    assert "31,200" in html
    assert "7 weeks" in html
