"""
Test plan export.

Markdown for pasting into docs/tickets, and an HTML summary rendered with
Jinja2 to artifacts/plans/<plan_id>/plan_summary.html.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment

from .config import DEFAULT_ARTIFACTS_DIR
from .schema import TestPlan

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"

MARKDOWN_TEMPLATE = """# Test Plan

## Context
{{ plan.context }}

## Hypothesis
{{ plan.hypothesis }}

## Expected Impact
{{ plan.expected_impact }}

## Experiment Setup
- Sample Size per Variant: {{ plan.experiment_setup.sample_size }}
- Expected Duration: {{ plan.experiment_setup.duration }}
- Statistical Significance: {{ plan.experiment_setup.significance }}
- Statistical Power: {{ plan.experiment_setup.power }}

## Success Metrics
- Primary Success Metric: {{ plan.metrics.primary }}
- Secondary Metrics: {{ plan.metrics.secondary_metrics | join(', ') }}

## Variants
### Control
{{ plan.variants.control }}

### Variant A
{{ plan.variants.variant_a }}
"""

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Test Plan: {{ plan_id }}</title>
<style>
  body { font-family: -apple-system, Helvetica, Arial, sans-serif; max-width: 860px; margin: 32px auto; color: #1c2833; }
  h1 { border-bottom: 3px solid #1a5276; padding-bottom: 8px; }
  h2 { color: #1a5276; margin-top: 28px; }
  table { border-collapse: collapse; width: 100%; }
  td, th { border: 1px solid #d5d8dc; padding: 8px; text-align: left; }
  th { background: #f8f9fa; }
  .missing { color: #909497; font-style: italic; }
  img { max-width: 380px; border: 1px solid #d5d8dc; margin-top: 8px; }
</style>
</head>
<body>
<h1>Test Plan</h1>
<p>Plan ID: <code>{{ plan_id }}</code></p>

{% macro text(value) -%}
{% if value %}<p>{{ value }}</p>{% else %}<p class="missing">{{ missing }}</p>{% endif %}
{%- endmacro %}

<h2>Context</h2>
{{ text(plan.context) }}

<h2>Hypothesis</h2>
{{ text(plan.hypothesis) }}

<h2>Expected Impact</h2>
{{ text(plan.expected_impact) }}

<h2>Experiment Setup and Parameters</h2>
<table>
  <tr><th>Parameter</th><th>Value</th></tr>
  <tr><td>Sample Size per Variant</td><td>{{ plan.experiment_setup.sample_size or missing }}</td></tr>
  <tr><td>Expected Duration</td><td>{{ plan.experiment_setup.duration or missing }}</td></tr>
  <tr><td>Statistical Significance</td><td>{{ plan.experiment_setup.significance or "95%" }}</td></tr>
  <tr><td>Statistical Power</td><td>{{ plan.experiment_setup.power or "80%" }}</td></tr>
</table>

<h2>Success Metrics</h2>
<p><strong>Primary Success Metric:</strong> {{ plan.metrics.primary or missing }}</p>
<p><strong>Second-order metrics:</strong></p>
{% set secondary = plan.metrics.secondary_metrics | select | list %}
{% if secondary %}
<ul>{% for metric in secondary %}<li>{{ metric }}</li>{% endfor %}</ul>
{% else %}
<p class="missing">{{ missing }}</p>
{% endif %}

<h2>Variants</h2>
<h3>Control</h3>
{{ text(plan.variants.control) }}
{% if plan.variants.control_image %}<img src="{{ plan.variants.control_image }}" alt="Control">{% endif %}

<h3>Variant A</h3>
{{ text(plan.variants.variant_a) }}
{% if plan.variants.variant_a_image %}<img src="{{ plan.variants.variant_a_image }}" alt="Variant A">{% endif %}
</body>
</html>
"""

_env = Environment(keep_trailing_newline=True)
_html_env = Environment(autoescape=True)


def plan_to_markdown(plan: TestPlan) -> str:
    """Render a plan as Markdown."""
    return _env.from_string(MARKDOWN_TEMPLATE).render(plan=plan)


def render_plan_summary(
    plan_dict: Dict[str, Any],
    plan_id: str,
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR,
) -> Path:
    """
    Render an HTML summary of a plan.

    Args:
        plan_dict: Plan as produced by TestPlan.to_dict()
        plan_id: Plan identifier (output subdirectory)
        artifacts_dir: Base artifacts directory

    Returns:
        Path of the written plan_summary.html
    """
    plan = TestPlan.from_dict(plan_dict)
    html = _html_env.from_string(HTML_TEMPLATE).render(
        plan=plan,
        plan_id=plan_id,
        missing=NOT_SPECIFIED,
    )

    out_dir = Path(artifacts_dir) / plan_id
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "plan_summary.html"
    out_path.write_text(html, encoding="utf-8")
    logger.info(f"Plan summary written to {out_path}")
    return out_path
