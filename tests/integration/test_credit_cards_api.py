"""Integration tests for credit cards, installment purchases and statements"""

import pytest
from datetime import date
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration

CARD = {"name": "Nubank", "last_digits": "1234", "brand": "MASTERCARD", "limit": 1000, "closing_day": 10, "due_day": 17}


@pytest.fixture
def card(client: TestClient, auth_headers) -> dict:
    response = client.post("/v1/credit-cards", json=CARD, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


def _buy(client: TestClient, headers, card_id: str, **overrides) -> dict:
    body = {"name": "Headphones", "total_amount": 300, "installments": 3, "date": "2024-03-15", **overrides}
    response = client.post(f"/v1/credit-cards/{card_id}/expenses", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_card(card):
    assert card["current_bill"] == 0
    assert card["usage_percent"] == 0
    assert card["available_credit"] == 1000
    assert card["expenses"] == []


@pytest.mark.parametrize(
    "overrides",
    [{"closing_day": 0}, {"closing_day": 32}, {"limit": 0}, {"last_digits": "12a4"}, {"brand": "DINERS"}],
)
def test_card_validation(client: TestClient, auth_headers, overrides):
    response = client.post("/v1/credit-cards", json={**CARD, **overrides}, headers=auth_headers)
    assert response.status_code == 422


def test_purchase_reports_installment_amount(client: TestClient, auth_headers, card):
    expense = _buy(client, auth_headers, card["id"])

    assert expense["installments"] == 3
    assert expense["installment_amount"] == 100
    assert expense["credit_card_id"] == card["id"]


@pytest.mark.parametrize("installments", [0, 49])
def test_purchase_installment_range(client: TestClient, auth_headers, card, installments):
    body = {"name": "TV", "total_amount": 2000, "installments": installments, "date": "2024-03-15"}
    response = client.post(f"/v1/credit-cards/{card['id']}/expenses", json=body, headers=auth_headers)
    assert response.status_code == 422


def test_statement_allocates_installments(client: TestClient, auth_headers, card):
    """Bought after closing day: first installment lands on the next statement"""
    expense = _buy(client, auth_headers, card["id"])

    march = client.get(
        f"/v1/credit-cards/{card['id']}/statement", params={"year": 2024, "month": 3}, headers=auth_headers
    ).json()
    assert march["total"] == 0
    assert march["items"] == []

    april = client.get(
        f"/v1/credit-cards/{card['id']}/statement", params={"year": 2024, "month": 4}, headers=auth_headers
    ).json()
    assert april["total"] == 100
    assert april["usage_percent"] == 10
    assert april["available_credit"] == 900
    assert april["items"] == [
        {
            "expense_id": expense["id"],
            "name": "Headphones",
            "installment_number": 1,
            "installments": 3,
            "amount": 100,
        }
    ]

    june = client.get(
        f"/v1/credit-cards/{card['id']}/statement", params={"year": 2024, "month": 6}, headers=auth_headers
    ).json()
    assert june["items"][0]["installment_number"] == 3


def test_statement_combines_purchases(client: TestClient, auth_headers, card):
    _buy(client, auth_headers, card["id"], name="Shoes", total_amount=200, installments=2, date="2024-03-05")
    _buy(client, auth_headers, card["id"])

    april = client.get(
        f"/v1/credit-cards/{card['id']}/statement", params={"year": 2024, "month": 4}, headers=auth_headers
    ).json()

    assert april["total"] == 200
    assert {item["name"] for item in april["items"]} == {"Shoes", "Headphones"}


def test_statement_rejects_bad_month(client: TestClient, auth_headers, card):
    response = client.get(
        f"/v1/credit-cards/{card['id']}/statement", params={"year": 2024, "month": 13}, headers=auth_headers
    )
    assert response.status_code == 422


def test_current_bill_on_card(client: TestClient, auth_headers):
    """A card closing on the 31st bills today's purchase on this month's statement"""
    card = client.post("/v1/credit-cards", json={**CARD, "closing_day": 31}, headers=auth_headers).json()
    _buy(client, auth_headers, card["id"], total_amount=500, installments=2, date=date.today().isoformat())

    refreshed = client.get(f"/v1/credit-cards/{card['id']}", headers=auth_headers).json()

    assert refreshed["current_bill"] == 250
    assert refreshed["usage_percent"] == 25
    assert refreshed["available_credit"] == 750
    assert len(refreshed["expenses"]) == 1


def test_update_and_delete_purchase(client: TestClient, auth_headers, card):
    expense = _buy(client, auth_headers, card["id"])
    url = f"/v1/credit-cards/{card['id']}/expenses/{expense['id']}"

    response = client.put(
        url,
        json={"name": "Headphones", "total_amount": 300, "installments": 6, "date": "2024-03-15"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["installment_amount"] == 50

    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.get(f"/v1/credit-cards/{card['id']}/expenses", headers=auth_headers).json() == []


def test_purchase_on_other_card_not_found(client: TestClient, auth_headers, card):
    other_card = client.post("/v1/credit-cards", json={**CARD, "name": "Inter"}, headers=auth_headers).json()
    expense = _buy(client, auth_headers, card["id"])

    response = client.delete(f"/v1/credit-cards/{other_card['id']}/expenses/{expense['id']}", headers=auth_headers)

    assert response.status_code == 404


def test_delete_card_removes_purchases(client: TestClient, auth_headers, card):
    expense = _buy(client, auth_headers, card["id"])

    assert client.delete(f"/v1/credit-cards/{card['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/v1/credit-cards/{card['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/v1/credit-cards/{card['id']}/expenses", headers=auth_headers).status_code == 404

    response = client.delete(f"/v1/credit-cards/{card['id']}/expenses/{expense['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_card_isolated_between_users(client: TestClient, card, other_user):
    other_headers = {"X-User-ID": str(other_user.id)}

    assert client.get(f"/v1/credit-cards/{card['id']}", headers=other_headers).status_code == 404
    assert client.get("/v1/credit-cards", headers=other_headers).json() == []
