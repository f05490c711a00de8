import pytest
from fastapi.testclient import TestClient

from order_totals.api import main
from order_totals.api.state import calculator


@pytest.fixture
def client():
    calculator.clear()
    return TestClient(main.app)


LINES = [
    {"quantity": 1, "unitPrice": 100, "factor": 1, "discountPercent": 10, "taxPercent": 18, "code": "P-1"},
    {"quantity": 1, "unit_price": 100, "exciseAmount": 5, "otherFeeAmount": 3},
]


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "online"


def test_calculate(client):
    resp = client.post("/calculate", json={"lines": LINES})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["subtotal"] == 200
    assert payload["discountTotal"] == 10
    assert payload["taxTotal"] == 16.2
    assert payload["exciseTotal"] == 5
    assert payload["otherFeeTotal"] == 3
    assert payload["grandTotal"] == 214.2
    assert payload["lineCount"] == 2


def test_calculate_empty_and_missing_lines(client):
    for body in ({"lines": []}, {}, {"lines": None}):
        resp = client.post("/calculate", json=body)
        assert resp.status_code == 200
        assert resp.json()["grandTotal"] == 0


def test_calculate_raw_mode(client):
    resp = client.post("/calculate", json={"lines": LINES, "includeLineLevelCalculations": False})
    payload = resp.json()
    assert payload["taxTotal"] == 0
    assert payload["grandTotal"] == payload["subtotal"] == 200


def test_calculate_uses_cache(client):
    client.post("/calculate", json={"lines": LINES})
    client.post("/calculate", json={"lines": LINES})
    status = client.get("/system/status").json()
    assert status["cache"]["hits"] == 1
    assert status["cache"]["misses"] == 1


def test_breakdown(client):
    resp = client.post("/calculate/breakdown", json={"lines": LINES})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["totals"]["grandTotal"] == 214.2
    assert payload["lines"][0]["extra"] == {"code": "P-1"}
    assert payload["lines"][1]["line_total"] == 108
    assert payload["trace"]


def test_validate_reports_warnings(client):
    resp = client.post("/validate", json={"lines": [{"quantity": -1, "unitPrice": 10}]})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["valid"] is True
    assert len(payload["warnings"]) == 1


def test_validate_reports_non_numeric_values(client):
    resp = client.post("/validate", json={"lines": [{"quantity": "lots", "unitPrice": 10}]})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["valid"] is False
    assert "Line 1: quantity is not a number ('lots')" in payload["errors"]


def test_strict_allows_warnings(client):
    resp = client.post("/calculate", json={"lines": [{"quantity": -1, "unitPrice": 10}], "strict": True})
    assert resp.status_code == 200
    assert resp.json()["grandTotal"] == -10


def test_strict_rejects_non_finite(client):
    # 1e400 decodes to infinity
    body = '{"lines": [{"quantity": 1e400, "unitPrice": 1}], "strict": true}'
    resp = client.post("/calculate", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 422
    assert "not finite" in resp.json()["detail"]["errors"][0]


def test_malformed_line_is_rejected(client):
    resp = client.post("/calculate", json={"lines": [{"quantity": "lots"}]})
    assert resp.status_code == 422
