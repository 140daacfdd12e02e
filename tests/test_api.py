"""
Tests for the calculator API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.inputs.instruments import INSTRUMENTS


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealth:
    """Test health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestInstrumentsAPI:
    """Test calculator discovery endpoints."""

    def test_list_instruments(self, client):
        response = client.get("/api/calculate/instruments")
        assert response.status_code == 200
        keys = [inst["key"] for inst in response.json()["instruments"]]
        assert keys == list(INSTRUMENTS)

    def test_get_instrument(self, client):
        response = client.get("/api/calculate/instruments/sip")
        assert response.status_code == 200
        data = response.json()
        assert data["limits"]["amount"]["min"] == 1000
        assert data["defaults"]["years"] == 10

    def test_compound_interest_options(self, client):
        data = client.get("/api/calculate/instruments/compound-interest").json()
        assert data["options"]["frequency"]["choices"] == ["Yearly", "Half-Yearly", "Quarterly"]
        assert data["options"]["frequency"]["default"] == "Yearly"

    def test_unknown_instrument(self, client):
        response = client.get("/api/calculate/instruments/bitcoin")
        assert response.status_code == 404


class TestCalculateAPI:
    """Test calculation endpoint."""

    def test_sip_defaults(self, client):
        response = client.post("/api/calculate/sip", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "computed"
        assert data["result"]["total_invested"] == 3000000

    def test_sip_with_values(self, client):
        response = client.post(
            "/api/calculate/sip",
            json={"values": {"amount": "10000", "annual_return": 12, "years": 5}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["values"]["amount"] == 10000
        assert data["result"]["total_invested"] == 600000
        assert data["result"]["maturity"] > 600000

    def test_cleared_value_reports_error(self, client):
        response = client.post("/api/calculate/sip", json={"values": {"amount": ""}})
        assert response.status_code == 200
        data = response.json()
        assert data["values"]["amount"] == 0
        assert data["safe_values"]["amount"] == 1000
        assert data["has_errors"] is True
        assert data["errors"]["amount"] == {
            "error": True,
            "message": "Minimum value allowed is 1000",
        }

    def test_compound_interest_with_frequency(self, client):
        response = client.post(
            "/api/calculate/compound-interest",
            json={"values": {"principal": 100000}, "options": {"frequency": "Quarterly"}},
        )
        assert response.status_code == 200
        assert response.json()["result"]["n"] == 4

    def test_gratuity_cap(self, client):
        response = client.post(
            "/api/calculate/gratuity",
            json={"values": {"monthly_salary": 1000000, "years_of_service": 30}},
        )
        result = response.json()["result"]
        assert result["gratuity_capped"] == 1000000
        assert result["capped"] is True

    def test_unknown_calculator(self, client):
        response = client.post("/api/calculate/bitcoin", json={})
        assert response.status_code == 404

    def test_unknown_parameter(self, client):
        response = client.post("/api/calculate/sip", json={"values": {"principal": 1}})
        assert response.status_code == 400
        assert "principal" in response.json()["detail"]

    def test_nsc_tenure_rejected(self, client):
        response = client.post("/api/calculate/nsc", json={"values": {"years": 7}})
        assert response.status_code == 400

    def test_invalid_option(self, client):
        response = client.post(
            "/api/calculate/nsc", json={"options": {"frequency": "Quarterly"}}
        )
        assert response.status_code == 400


class TestCycleAPI:
    """Test option cycling endpoint."""

    def test_next_frequency(self, client):
        response = client.post(
            "/api/calculate/compound-interest/cycle",
            json={"option": "frequency", "current": "Quarterly"},
        )
        assert response.status_code == 200
        assert response.json() == {"option": "frequency", "value": "Yearly"}

    def test_fd_unit(self, client):
        response = client.post(
            "/api/calculate/fd/cycle", json={"option": "unit", "current": "Months"}
        )
        assert response.json()["value"] == "Days"

    def test_unknown_option(self, client):
        response = client.post(
            "/api/calculate/sip/cycle", json={"option": "frequency", "current": "Yearly"}
        )
        assert response.status_code == 400


class TestSWPScheduleAPI:
    """Test SWP schedule endpoint."""

    def test_schedule(self, client):
        response = client.post(
            "/api/calculate/swp/schedule",
            json={"values": {"investment": 500000, "withdrawal": 10000, "rate": 8, "years": 1}},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 12
        assert data["schedule"][0]["month"] == 1
        assert data["summary"]["total_withdrawal"] == 120000
        assert data["result"]["total_withdrawal"] == 120000
