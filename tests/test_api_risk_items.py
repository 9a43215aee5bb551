"""API tests for risk item endpoints."""

from __future__ import annotations

import pytest


def _item(report_id: int, **overrides) -> dict:
    data = {
        "reportId": report_id,
        "name": "Phishing",
        "description": "Credential harvesting via email",
        "category": "cybersecurity",
        "likelihood": 4,
        "impact": 4,
    }
    data.update(overrides)
    return data


# ─── Create ──────────────────────────────────────────────────────────────────

class TestCreateRiskItem:
    """Tests for POST /api/risk-items."""

    def test_create_derives_level(self, client, sample_report):
        resp = client.post("/api/risk-items", json=_item(sample_report.id))
        assert resp.status_code == 201
        data = resp.json()
        assert data["riskLevel"] == "high"
        assert data["reportId"] == sample_report.id
        assert data["status"] == "open"
        assert data["mitigation"] is None

    def test_matching_risk_level_accepted(self, client, sample_report):
        resp = client.post("/api/risk-items", json=_item(sample_report.id, riskLevel="high"))
        assert resp.status_code == 201

    def test_mismatched_risk_level_rejected(self, client, sample_report):
        """A client-supplied level that disagrees with the ratings is refused."""
        resp = client.post("/api/risk-items", json=_item(sample_report.id, riskLevel="low"))
        assert resp.status_code == 422
        assert "does not match" in resp.text

    def test_orphan_rejected_on_report_id(self, client):
        resp = client.post("/api/risk-items", json=_item(999))
        assert resp.status_code == 422
        (error,) = resp.json()["detail"]
        assert error["loc"] == ["body", "reportId"]
        assert error["type"] == "missing_reference"
        assert "999" in error["msg"]

    def test_orphan_not_stored(self, client, store):
        client.post("/api/risk-items", json=_item(999))
        assert store.risk_items == {}

    @pytest.mark.parametrize("field,value", [
        ("likelihood", 0),
        ("likelihood", 6),
        ("impact", 0),
        ("impact", 9),
        ("likelihood", "high"),
    ])
    def test_out_of_range_ratings_rejected(self, client, sample_report, field, value):
        resp = client.post("/api/risk-items", json=_item(sample_report.id, **{field: value}))
        assert resp.status_code == 422

    def test_blank_name_rejected(self, client, sample_report):
        resp = client.post("/api/risk-items", json=_item(sample_report.id, name="  "))
        assert resp.status_code == 422

    def test_unknown_category_rejected(self, client, sample_report):
        resp = client.post("/api/risk-items", json=_item(sample_report.id, category="weather"))
        assert resp.status_code == 422

    def test_missing_ratings_rejected(self, client, sample_report):
        body = _item(sample_report.id)
        del body["impact"]
        assert client.post("/api/risk-items", json=body).status_code == 422

    @pytest.mark.parametrize("value", [True, "4", 4.0])
    def test_non_integer_ratings_not_coerced(self, client, store, sample_report, value):
        resp = client.post("/api/risk-items", json=_item(sample_report.id, likelihood=value))
        assert resp.status_code == 422
        (error,) = resp.json()["detail"]
        assert error["loc"] == ["body", "likelihood"]
        assert store.list_risk_items(sample_report.id) == []


# ─── Read ────────────────────────────────────────────────────────────────────

class TestGetRiskItem:
    """Tests for GET /api/risk-items/{id}."""

    def test_get(self, client, sample_risk_items):
        item = sample_risk_items[2]
        resp = client.get(f"/api/risk-items/{item.id}")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Vendor insolvency"
        assert resp.json()["riskLevel"] == "medium"

    def test_get_unknown(self, client):
        resp = client.get("/api/risk-items/404")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Risk item 404 not found"


# ─── Update ──────────────────────────────────────────────────────────────────

class TestUpdateRiskItem:
    """Tests for PATCH /api/risk-items/{id}."""

    def test_rating_change_recomputes_level(self, client, sample_risk_items):
        item = sample_risk_items[1]  # Phishing, 4x4 high
        resp = client.patch(f"/api/risk-items/{item.id}", json={"likelihood": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert (data["likelihood"], data["impact"]) == (1, 4)
        assert data["riskLevel"] == "very-low"

    def test_status_and_mitigation(self, client, sample_risk_items):
        item = sample_risk_items[0]
        resp = client.patch(f"/api/risk-items/{item.id}", json={
            "status": "mitigated",
            "mitigation": "Offline backups",
        })
        data = resp.json()
        assert data["status"] == "mitigated"
        assert data["mitigation"] == "Offline backups"
        assert data["riskLevel"] == "critical"

    def test_risk_level_not_updatable(self, client, sample_risk_items):
        resp = client.patch(f"/api/risk-items/{sample_risk_items[0].id}", json={"riskLevel": "low"})
        assert resp.status_code == 422

    def test_report_id_not_updatable(self, client, sample_risk_items):
        resp = client.patch(f"/api/risk-items/{sample_risk_items[0].id}", json={"reportId": 2})
        assert resp.status_code == 422

    def test_null_likelihood_rejected(self, client, sample_risk_items):
        resp = client.patch(f"/api/risk-items/{sample_risk_items[0].id}", json={"likelihood": None})
        assert resp.status_code == 422

    def test_out_of_range_rejected(self, client, sample_risk_items):
        resp = client.patch(f"/api/risk-items/{sample_risk_items[0].id}", json={"impact": 6})
        assert resp.status_code == 422

    @pytest.mark.parametrize("value", [True, "5", 5.0])
    def test_non_integer_rating_not_coerced(self, client, sample_risk_items, value):
        item = sample_risk_items[0]
        resp = client.patch(f"/api/risk-items/{item.id}", json={"impact": value})
        assert resp.status_code == 422
        assert client.get(f"/api/risk-items/{item.id}").json()["impact"] == item.impact

    def test_update_unknown(self, client):
        resp = client.patch("/api/risk-items/77", json={"name": "Ghost"})
        assert resp.status_code == 404

    def test_update_reflected_in_summary(self, client, sample_report, sample_risk_items):
        ransomware = sample_risk_items[0]
        client.patch(f"/api/risk-items/{ransomware.id}", json={"impact": 1})
        counts = client.get(f"/api/reports/{sample_report.id}/summary").json()["summary"]["counts"]
        assert counts["critical"] == 1
        assert counts["low"] == 2


# ─── Delete ──────────────────────────────────────────────────────────────────

class TestDeleteRiskItem:
    """Tests for DELETE /api/risk-items/{id}."""

    def test_delete(self, client, sample_report, sample_risk_items):
        item = sample_risk_items[0]
        resp = client.delete(f"/api/risk-items/{item.id}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Risk item deleted"}
        names = [i["name"] for i in client.get(f"/api/reports/{sample_report.id}/risk-items").json()]
        assert "Ransomware outbreak" not in names
        assert len(names) == 6

    def test_delete_twice(self, client, sample_risk_items):
        item = sample_risk_items[0]
        client.delete(f"/api/risk-items/{item.id}")
        assert client.delete(f"/api/risk-items/{item.id}").status_code == 404
