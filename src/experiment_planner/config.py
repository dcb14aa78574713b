"""
Defaults for the experiment sizing engine and the plan store.

Values here are the conventional settings shown in the planner form;
every function that uses them accepts an override keyword.
"""

# Statistical defaults (significance = confidence level, two-sided)
DEFAULT_SIGNIFICANCE = 0.95
DEFAULT_POWER = 0.80
DEFAULT_VARIANT_COUNT = 2

# Rounded critical values used for the conventional 95% / 80% pair
CONVENTIONAL_Z_ALPHA = {0.95: 1.96}
CONVENTIONAL_Z_BETA = {0.80: 0.84}

MIN_VARIANTS = 2
MAX_VARIANTS = 10

# MDE grid (% relative lift) for the sensitivity table
DEFAULT_MDE_GRID = (5.0, 10.0, 15.0, 20.0, 25.0, 30.0)

DEFAULT_PLANS_DIR = "data/plans"
DEFAULT_ARTIFACTS_DIR = "artifacts/plans"
