"""Tests for the MDE sensitivity table."""
from experiment_planner.stats.power import calculate_sample_size
from experiment_planner.stats.sensitivity import COLUMNS, sensitivity_table


def test_sensitivity_table_rows():
    df = sensitivity_table(5, 10000, mde_values=[20, 5, 10])
    assert list(df.columns) == COLUMNS
    assert df["mde_pct"].tolist() == [5.0, 10.0, 20.0]
    row = df[df["mde_pct"] == 10.0].iloc[0]
    assert row["sample_size_per_variant"] == calculate_sample_size(5, 10) == 31200
    assert row["total_sample_size"] == 62400
    assert row["duration_label"] == "7 weeks"


def test_sensitivity_table_monotone():
    df = sensitivity_table(3, 5000, variant_count=3)
    sizes = df["sample_size_per_variant"].tolist()
    weeks = df["duration_weeks"].tolist()
    assert sizes == sorted(sizes, reverse=True)
    assert weeks == sorted(weeks, reverse=True)


def test_sensitivity_table_keeps_targets_above_100():
    """A 60% baseline lifted by 100% pools to 90% and is still sized."""
    df = sensitivity_table(60, 10000, mde_values=[10, 100])
    assert df["mde_pct"].tolist() == [10.0, 100.0]
    assert df["sample_size_per_variant"].tolist() == [
        calculate_sample_size(60, 10),
        calculate_sample_size(60, 100),
    ]


def test_sensitivity_table_skips_degenerate_mdes():
    """A 90% baseline lifted by 50% pools above 100%."""
    df = sensitivity_table(90, 10000, mde_values=[10, 50])
    assert df["mde_pct"].tolist() == [10.0]
