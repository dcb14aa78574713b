"""Planner form: steps and the fields each one collects."""

from typing import Dict, List

from .schema import FieldType, FormField, FormStep, StepId

FORM_STEPS: List[FormStep] = [
    FormStep(
        id=StepId.CONTEXT,
        title="Context",
        description="Provide background information about the test",
        fields=[
            FormField(
                id="context",
                label="What is the context of this test?",
                field_type=FieldType.TEXTAREA,
                placeholder="Describe the background and purpose of this test...",
            ),
        ],
    ),
    FormStep(
        id=StepId.HYPOTHESIS,
        title="Hypothesis",
        description="Define your hypothesis for this test",
        fields=[
            FormField(
                id="hypothesis",
                label="What is your hypothesis?",
                field_type=FieldType.TEXTAREA,
                placeholder="If we [action], then we will [expected outcome]...",
            ),
        ],
    ),
    FormStep(
        id=StepId.IMPACT,
        title="Expected Impact",
        description="Quantify the expected impact",
        fields=[
            FormField(
                id="expectedImpact",
                label="What is the expected impact?",
                field_type=FieldType.TEXT,
                placeholder="e.g., 5% relative increase",
            ),
        ],
    ),
    FormStep(
        id=StepId.SETUP,
        title="Experiment Setup",
        description="Define the parameters of your experiment",
        fields=[
            FormField(
                id="sampleSize",
                label="Sample Size per Variant",
                field_type=FieldType.TEXT,
                placeholder="e.g., 2,784",
            ),
            FormField(
                id="duration",
                label="Expected Duration",
                field_type=FieldType.TEXT,
                placeholder="e.g., 4 weeks",
            ),
            FormField(
                id="significance",
                label="Statistical Significance",
                field_type=FieldType.TEXT,
                placeholder="e.g., 95%",
                default_value="95%",
            ),
            FormField(
                id="power",
                label="Statistical Power",
                field_type=FieldType.TEXT,
                placeholder="e.g., 80%",
                default_value="80%",
            ),
        ],
    ),
    FormStep(
        id=StepId.METRICS,
        title="Success Metrics",
        description="Define the metrics you will track",
        fields=[
            FormField(
                id="primary",
                label="Primary Success Metric",
                field_type=FieldType.TEXT,
                placeholder="e.g., button clicks",
            ),
            FormField(
                id="secondaryMetrics",
                label="Second-order metrics (comma separated)",
                field_type=FieldType.TEXT,
                placeholder="e.g., activations, registrations",
            ),
        ],
    ),
    FormStep(
        id=StepId.VARIANTS,
        title="Variants",
        description="Describe your control and variant",
        fields=[
            FormField(
                id="control",
                label="Control Description",
                field_type=FieldType.TEXTAREA,
                placeholder="Describe the current version...",
            ),
            FormField(
                id="controlImage",
                label="Control Variant Image",
                field_type=FieldType.FILE,
                placeholder="Upload an image of your control variant",
            ),
            FormField(
                id="variantA",
                label="Variant A Description",
                field_type=FieldType.TEXTAREA,
                placeholder="Describe the test variant...",
            ),
            FormField(
                id="variantAImage",
                label="Test Variant Image",
                field_type=FieldType.FILE,
                placeholder="Upload an image of your test variant",
            ),
        ],
    ),
]


def get_step(step_id: StepId) -> FormStep:
    """Look up a form step by id."""
    for step in FORM_STEPS:
        if step.id == step_id:
            return step
    raise KeyError(step_id)


def setup_defaults() -> Dict[str, str]:
    """Default values declared on the experiment setup step."""
    return {
        f.id: f.default_value
        for f in get_step(StepId.SETUP).fields
        if f.default_value
    }
