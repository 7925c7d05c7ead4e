"""Integration tests for investment simulations and the dashboard"""

import pytest
from datetime import date
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration

SIMULATION = {
    "name": "Retirement",
    "initial_amount": 1000,
    "monthly_contribution": 500,
    "interest_rate": 12,
    "interest_type": "COMPOUND",
    "period_months": 12,
}


def test_create_simulation_stores_projection(client: TestClient, auth_headers):
    """Compound growth of 1000 + 500/month at 12% for a year"""
    response = client.post("/v1/simulations", json=SIMULATION, headers=auth_headers)

    assert response.status_code == 201
    simulation = response.json()
    assert simulation["projected_amount"] == pytest.approx(7468.08, abs=0.01)
    assert simulation["interest_type"] == "COMPOUND"

    fetched = client.get(f"/v1/simulations/{simulation['id']}", headers=auth_headers).json()
    assert fetched["projected_amount"] == simulation["projected_amount"]


def test_simple_simulation(client: TestClient, auth_headers):
    body = {**SIMULATION, "monthly_contribution": 100, "interest_type": "SIMPLE"}

    response = client.post("/v1/simulations", json=body, headers=auth_headers)

    assert response.json()["projected_amount"] == pytest.approx(2326.5)


@pytest.mark.parametrize(
    "overrides",
    [
        {"interest_rate": 150},
        {"interest_rate": -1},
        {"period_months": 0},
        {"period_months": 601},
        {"initial_amount": -10},
        {"interest_type": "CONTINUOUS"},
    ],
)
def test_simulation_validation(client: TestClient, auth_headers, overrides):
    response = client.post("/v1/simulations", json={**SIMULATION, **overrides}, headers=auth_headers)
    assert response.status_code == 422


def test_list_and_delete_simulations(client: TestClient, auth_headers):
    created = client.post("/v1/simulations", json=SIMULATION, headers=auth_headers).json()
    client.post("/v1/simulations", json={**SIMULATION, "name": "House"}, headers=auth_headers)

    assert len(client.get("/v1/simulations", headers=auth_headers).json()) == 2

    assert client.delete(f"/v1/simulations/{created['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/v1/simulations/{created['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/v1/simulations/{created['id']}", headers=auth_headers).status_code == 404


def test_preview_series(client: TestClient, auth_headers):
    """Preview returns months 0..n and stores nothing"""
    body = {key: value for key, value in SIMULATION.items() if key != "name"}
    body["period_months"] = 3

    response = client.post("/v1/simulations/preview", json=body, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert [p["month"] for p in data["points"]] == [0, 1, 2, 3]
    assert data["points"][0]["total_with_interest"] == 1000
    assert data["points"][0]["interest"] == 0
    assert data["total_invested"] == 2500
    assert data["final_amount"] == data["points"][-1]["total_with_interest"]
    assert client.get("/v1/simulations", headers=auth_headers).json() == []


def test_dashboard_empty(client: TestClient, auth_headers):
    response = client.get("/v1/dashboard", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_income"] == 0
    assert data["total_expenses"] == 0
    assert data["balance"] == 0
    assert data["expenses_by_category"] == []
    assert len(data["monthly_data"]) == 6


def test_dashboard_month_overview(client: TestClient, auth_headers):
    today = date.today()
    categories = client.get("/v1/categories", headers=auth_headers).json()
    food_id = next(c["id"] for c in categories if c["name"] == "Food")

    client.post(
        "/v1/incomes",
        json={"name": "Salary", "amount": 3000, "date": today.isoformat(), "type": "SALARY"},
        headers=auth_headers,
    )
    client.post(
        "/v1/expenses",
        json={"name": "Market", "amount": 900, "date": today.isoformat(), "type": "VARIABLE", "category_id": food_id},
        headers=auth_headers,
    )
    client.post(
        "/v1/expenses",
        json={"name": "Bus pass", "amount": 300, "date": today.isoformat(), "type": "FIXED"},
        headers=auth_headers,
    )
    client.post(
        "/v1/fixed-expenses",
        json={"name": "Internet", "amount": 120, "due_day": today.day, "frequency": "MONTHLY"},
        headers=auth_headers,
    )
    card = client.post(
        "/v1/credit-cards",
        json={"name": "Visa", "brand": "VISA", "limit": 2000, "closing_day": 31, "due_day": 10},
        headers=auth_headers,
    ).json()
    client.post(
        f"/v1/credit-cards/{card['id']}/expenses",
        json={"name": "Flight", "total_amount": 1200, "installments": 4, "date": today.isoformat()},
        headers=auth_headers,
    )
    client.post(
        "/v1/goals",
        json={"name": "Trip", "target_amount": 5000, "current_amount": 1000, "deadline": "2099-01-01"},
        headers=auth_headers,
    )

    data = client.get("/v1/dashboard", headers=auth_headers).json()

    assert data["total_income"] == 3000
    assert data["total_expenses"] == 1200
    assert data["balance"] == 1800
    assert data["total_fixed_expenses"] == 120
    assert data["total_credit_card_bills"] == 300

    assert data["expenses_by_category"] == [
        {
            "category_id": food_id,
            "category_name": "Food",
            "category_color": "#ef4444",
            "total": 900,
            "percentage": 75,
        }
    ]

    current = data["monthly_data"][-1]
    assert (current["year"], current["month"]) == (today.year, today.month)
    assert current["income"] == 3000
    assert current["expenses"] == 1200

    assert data["upcoming_fixed_expenses"][0]["days_until_due"] == 0
    assert data["upcoming_fixed_expenses"][0]["urgency"] == "high"
    assert data["credit_cards"][0]["current_bill"] == 300
    assert data["credit_cards"][0]["usage_percent"] == 15
    assert data["investment_goals"][0]["progress"] == 20
    assert len(data["recent_expenses"]) == 2
    assert len(data["recent_incomes"]) == 1


def test_dashboard_caps_upcoming_fixed_expenses(client: TestClient, auth_headers):
    """Only the five most urgent active fixed expenses are listed"""
    today = date.today()
    for offset in range(7):
        due_day = (today.day - 1 + offset) % 28 + 1
        client.post(
            "/v1/fixed-expenses",
            json={"name": f"Bill {offset}", "amount": 10, "due_day": due_day, "frequency": "MONTHLY"},
            headers=auth_headers,
        )

    data = client.get("/v1/dashboard", headers=auth_headers).json()

    upcoming = data["upcoming_fixed_expenses"]
    assert len(upcoming) == 5
    assert [u["days_until_due"] for u in upcoming] == sorted(u["days_until_due"] for u in upcoming)
    assert data["total_fixed_expenses"] == 70
