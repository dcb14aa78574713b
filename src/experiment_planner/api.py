"""Flask JSON API over the experiment sizing engine - kept separate from the Streamlit app."""
import logging

from flask import Flask, request, jsonify

from .calculator import run_calculation
from .errors import DegenerateComputationError, InvalidInputError
from .schema import CalculatorInputs
from .stats import estimate_baseline_rate

logger = logging.getLogger(__name__)

app = Flask(__name__)

CALCULATOR_FIELDS = ("baseline_rate_pct", "mde_pct", "weekly_users", "variant_count", "significance", "power")


@app.errorhandler(InvalidInputError)
def invalid_input(e):
    return jsonify({"error": str(e), "field": e.field}), 400


@app.errorhandler(DegenerateComputationError)
def degenerate_computation(e):
    return jsonify({"error": str(e)}), 422


@app.route("/ping", methods=["GET"])
def ping():
    return "pong"


@app.route("/baseline", methods=["POST"])
def baseline():
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({"error": "Request body must be a non-empty JSON object"}), 400
    try:
        conversions = float(data.get("weekly_conversions"))
        users = float(data.get("weekly_users"))
    except (TypeError, ValueError):
        return jsonify({"error": "weekly_conversions and weekly_users must be numbers"}), 400
    return jsonify({"baseline_rate_pct": estimate_baseline_rate(conversions, users)})


@app.route("/calculate", methods=["POST"])
def calculate():
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({"error": "Request body must be a non-empty JSON object"}), 400
    missing = [k for k in ("baseline_rate_pct", "mde_pct", "weekly_users") if k not in data]
    if missing:
        return jsonify({"error": f"Missing fields: {', '.join(missing)}"}), 400
    inputs = CalculatorInputs(**{k: data[k] for k in CALCULATOR_FIELDS if k in data})
    result = run_calculation(inputs)
    return jsonify(result.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host="0.0.0.0", port=5000)
