"""Tests for the Flask sizing API."""
import pytest
from experiment_planner.api import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_ping(client):
    assert client.get("/ping").data == b"pong"


def test_baseline(client):
    resp = client.post("/baseline", json={"weekly_conversions": 500, "weekly_users": 10000})
    assert resp.status_code == 200
    assert resp.get_json() == {"baseline_rate_pct": 5.0}


def test_baseline_zero_users(client):
    resp = client.post("/baseline", json={"weekly_conversions": 5, "weekly_users": 0})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "weekly_users"


def test_calculate(client):
    resp = client.post("/calculate", json={"baseline_rate_pct": 5, "mde_pct": 10, "weekly_users": 10000})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["sample_size_per_variant"] == 31200
    assert body["formatted_duration"] == "7 weeks"


def test_calculate_invalid_variant_count(client):
    resp = client.post(
        "/calculate",
        json={"baseline_rate_pct": 5, "mde_pct": 10, "weekly_users": 10000, "variant_count": 11},
    )
    assert resp.status_code == 400
    assert resp.get_json() == {
        "error": "Number of variants must be between 2 and 10",
        "field": "variant_count",
    }


def test_calculate_degenerate(client):
    resp = client.post("/calculate", json={"baseline_rate_pct": 90, "mde_pct": 50, "weekly_users": 10000})
    assert resp.status_code == 422


@pytest.mark.parametrize("payload", [None, {"mde_pct": 10}])
def test_calculate_bad_request(client, payload):
    resp = client.post("/calculate", json=payload)
    assert resp.status_code == 400


@pytest.mark.parametrize("payload", [5, ["baseline_rate_pct", "mde_pct", "weekly_users"]])
def test_non_object_body_is_bad_request(client, payload):
    for path in ("/calculate", "/baseline"):
        resp = client.post(path, json=payload)
        assert resp.status_code == 400


def test_calculate_infinite_users(client):
    resp = client.post(
        "/calculate",
        data='{"baseline_rate_pct": 5, "mde_pct": 10, "weekly_users": Infinity}',
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "weekly_users"
