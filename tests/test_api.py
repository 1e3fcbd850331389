"""End-to-end tests for the REST API."""

import pytest


def create_investment(client, payload: dict) -> dict:
    response = client.post("/api/investments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def add_operation(client, investment_id: int, **body) -> dict:
    response = client.post(f"/api/investments/{investment_id}/operations", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthCheck:

    def test_health(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service_name"]
        assert data["time"]


class TestInvestments:
    """Test investment CRUD."""

    def test_create_and_read(self, client, investment_payload) -> None:
        created = create_investment(client, investment_payload)
        assert created["name"] == "Family loan"
        assert created["base_rate"] == 12
        assert created["status"] == "active"
        assert created["created_at"]

        response = client.get(f"/api/investments/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

        listed = client.get("/api/investments").json()
        assert [item["id"] for item in listed] == [created["id"]]

    def test_create_rejects_invalid_payload(self, client) -> None:
        assert client.post("/api/investments", json={"base_rate": 5}).status_code == 422
        assert client.post("/api/investments", json={"name": "x", "base_rate": "abc"}).status_code == 422

    def test_missing_investment_returns_404(self, client) -> None:
        assert client.get("/api/investments/999").status_code == 404
        assert client.put("/api/investments/999", json={"name": "x"}).status_code == 404
        assert client.delete("/api/investments/999").status_code == 404
        assert client.get("/api/investments/999/operations").status_code == 404
        assert client.get("/api/investments/999/summary").status_code == 404
        assert client.get("/api/investments/999/ledger").status_code == 404

    def test_partial_update(self, client, investment_payload) -> None:
        created = create_investment(client, investment_payload)
        response = client.put(
            f"/api/investments/{created['id']}", json={"base_rate": 8, "status": "closed"}
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["base_rate"] == 8
        assert updated["status"] == "closed"
        assert updated["name"] == created["name"]
        assert updated["lender"] == created["lender"]
        assert updated["created_at"] == created["created_at"]

    def test_update_rejects_bad_rate(self, client, investment_payload) -> None:
        created = create_investment(client, investment_payload)
        response = client.put(f"/api/investments/{created['id']}", json={"base_rate": "abc"})
        assert response.status_code == 422

    def test_delete_cascades_to_operations(self, client, investment_payload) -> None:
        doomed = create_investment(client, investment_payload)
        kept = create_investment(client, {**investment_payload, "name": "Other"})
        first = add_operation(client, doomed["id"], date="2024-01-01", type="Deposit", amount=100)
        add_operation(client, doomed["id"], date="2024-02-01", type="Repayment", amount=50)
        survivor = add_operation(client, kept["id"], date="2024-01-01", type="Deposit", amount=10)

        assert client.delete(f"/api/investments/{doomed['id']}").status_code == 204

        assert client.get(f"/api/investments/{doomed['id']}").status_code == 404
        assert client.get(f"/api/operations/{first['id']}").status_code == 404
        assert client.get(f"/api/operations/{survivor['id']}").status_code == 200
        remaining = client.get(f"/api/investments/{kept['id']}/operations").json()
        assert [op["id"] for op in remaining] == [survivor["id"]]


class TestOperations:
    """Test operation CRUD."""

    def test_create_with_defaults(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        operation = add_operation(
            client, investment["id"], date="2024-01-01", type="Wplata", amount="1000"
        )
        assert operation["investment_id"] == investment["id"]
        assert operation["type"] == "Deposit"
        assert operation["amount"] == 1000
        assert operation["rate_mode"] == "Global"
        assert operation["custom_rate"] is None
        assert operation["note"] == ""
        assert operation["created_by"] == "system"

    @pytest.mark.parametrize("body", [
        {"type": "Deposit", "amount": 10},
        {"date": "2024-01-01", "type": "Loan", "amount": 10},
        {"date": "2024-01-01", "type": "Deposit", "amount": 0},
        {"date": "2024-01-01", "type": "Deposit", "amount": -3},
        {"date": "2024-01-01", "type": "Deposit", "amount": 10, "rate_mode": "Custom"},
    ])
    def test_create_rejects_invalid_payload(self, client, investment_payload, body) -> None:
        investment = create_investment(client, investment_payload)
        response = client.post(f"/api/investments/{investment['id']}/operations", json=body)
        assert response.status_code == 422

    def test_create_for_missing_investment(self, client) -> None:
        response = client.post(
            "/api/investments/999/operations",
            json={"date": "2024-01-01", "type": "Deposit", "amount": 10},
        )
        assert response.status_code == 404

    def test_list_is_chronological_with_insertion_tie_break(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        late = add_operation(client, investment["id"], date="2024-05-01", type="Repayment", amount=1)
        early = add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=5)
        late_second = add_operation(client, investment["id"], date="2024-05-01", type="Deposit", amount=2)

        listed = client.get(f"/api/investments/{investment['id']}/operations").json()
        assert [op["id"] for op in listed] == [early["id"], late["id"], late_second["id"]]

    def test_update_switching_rate_modes(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        operation = add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=10)
        url = f"/api/operations/{operation['id']}"

        response = client.put(url, json={"rate_mode": "custom"})
        assert response.status_code == 400
        assert "custom_rate" in response.json()["detail"]

        response = client.put(url, json={"rate_mode": "custom", "custom_rate": 4.5})
        assert response.status_code == 200
        assert response.json()["rate_mode"] == "Custom"
        assert response.json()["custom_rate"] == 4.5

        response = client.put(url, json={"note": "kept custom"})
        assert response.json()["custom_rate"] == 4.5
        assert response.json()["note"] == "kept custom"

        response = client.put(url, json={"rate_mode": "Global"})
        assert response.status_code == 200
        assert response.json()["rate_mode"] == "Global"
        assert response.json()["custom_rate"] is None

    def test_update_fields(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        operation = add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=10)
        response = client.put(
            f"/api/operations/{operation['id']}",
            json={"date": "2024-02-02", "type": "Splata", "amount": 7},
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["date"] == "2024-02-02"
        assert updated["type"] == "Repayment"
        assert updated["amount"] == 7
        assert updated["created_at"] == operation["created_at"]

    def test_update_rejects_invalid_amount(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        operation = add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=10)
        response = client.put(f"/api/operations/{operation['id']}", json={"amount": -1})
        assert response.status_code == 422

    def test_missing_operation_returns_404(self, client) -> None:
        assert client.put("/api/operations/999", json={"amount": 5}).status_code == 404
        assert client.delete("/api/operations/999").status_code == 404

    def test_delete_operation_keeps_investment(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        operation = add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=10)
        assert client.delete(f"/api/operations/{operation['id']}").status_code == 204
        assert client.get(f"/api/investments/{investment['id']}").status_code == 200
        assert client.get(f"/api/investments/{investment['id']}/operations").json() == []


class TestLedgerEndpoints:
    """Test summary and ledger computed through the API."""

    def test_empty_summary(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        data = client.get(f"/api/investments/{investment['id']}/summary").json()
        assert data["investment"]["id"] == investment["id"]
        assert data["summary"] == {
            "total_deposits": 0,
            "total_repayments": 0,
            "final_balance": 0,
            "total_interest": 0,
            "period": None,
            "operations_count": 0,
        }

    def test_summary_and_ledger_agree(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        add_operation(client, investment["id"], date="2024-07-01", type="Repayment", amount=200)
        add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=1000)
        add_operation(
            client, investment["id"], date="2024-12-31", type="Repayment", amount=5000,
            rate_mode="Custom", custom_rate=6,
        )

        summary = client.get(f"/api/investments/{investment['id']}/summary").json()["summary"]
        ledger = client.get(f"/api/investments/{investment['id']}/ledger").json()
        rows = ledger["rows"]

        assert ledger["summary"] == summary
        assert [row["date"] for row in rows] == ["2024-01-01", "2024-07-01", "2024-12-31"]
        assert rows[1]["elapsed_days"] == 182
        assert rows[1]["interest"] == pytest.approx(1000 * 0.12 * 182 / 365)
        assert rows[2]["balance_before"] == 800
        assert rows[2]["effective_rate"] == 6
        assert rows[2]["interest"] == pytest.approx(800 * 0.06 * 183 / 365)
        assert rows[2]["balance_after"] == 0

        assert summary["total_deposits"] == 1000
        assert summary["total_repayments"] == 5200
        assert summary["final_balance"] == 0
        assert summary["total_interest"] == pytest.approx(rows[1]["interest"] + rows[2]["interest"])
        assert summary["period"] == {"start": "2024-01-01", "end": "2024-12-31"}
        assert summary["operations_count"] == 3

    def test_summary_follows_base_rate_change(self, client, investment_payload) -> None:
        investment = create_investment(client, investment_payload)
        add_operation(client, investment["id"], date="2024-01-01", type="Deposit", amount=1000)
        add_operation(client, investment["id"], date="2025-01-01", type="Repayment", amount=1000)

        client.put(f"/api/investments/{investment['id']}", json={"base_rate": 0})
        summary = client.get(f"/api/investments/{investment['id']}/summary").json()["summary"]
        assert summary["total_interest"] == 0
