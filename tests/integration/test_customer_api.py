"""Integration tests for the customer endpoints."""

from __future__ import annotations

import pytest

from modules.customers.models import Customer

pytestmark = pytest.mark.integration

URL = "/api/v1/customers/"

PAYLOAD = {
    "first_name": "John",
    "last_name": "Doe",
    "email": "john@x.com",
    "phone_number": "+1 (234) 567-890",
}


class TestCreateCustomer:
    def test_create_returns_201(self, api_client):
        response = api_client.post(URL, PAYLOAD, format="json")
        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["phone_number"] == "+1234567890"
        assert data["email"] == "john@x.com"
        assert "created_at" in data

    def test_email_stored_as_given(self, api_client):
        response = api_client.post(URL, {**PAYLOAD, "email": "John@Shop.X.COM"}, format="json")
        assert response.json()["email"] == "John@Shop.X.COM"
        assert Customer.objects.get().email == "John@Shop.X.COM"

    def test_duplicate_email_any_case_conflicts(self, api_client):
        api_client.post(URL, PAYLOAD, format="json")
        response = api_client.post(URL, {**PAYLOAD, "email": "JOHN@X.COM"}, format="json")
        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "email_already_registered"
        assert Customer.objects.count() == 1

    def test_email_reusable_after_delete(self, api_client):
        first = api_client.post(URL, PAYLOAD, format="json").json()
        api_client.delete(f"{URL}{first['id']}/")
        response = api_client.post(URL, PAYLOAD, format="json")
        assert response.status_code == 201
        assert response.json()["id"] != first["id"]

    def test_invalid_phone(self, api_client):
        response = api_client.post(URL, {**PAYLOAD, "phone_number": "call me"}, format="json")
        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "validation_error"
        assert body["errors"][0]["attr"] == "phone_number"
        assert not Customer.objects.exists()

    def test_blank_fields_all_reported(self, api_client):
        response = api_client.post(
            URL,
            {"first_name": "", "last_name": " ", "email": "bad", "phone_number": ""},
            format="json",
        )
        assert response.status_code == 400
        attrs = sorted(e["attr"] for e in response.json()["errors"])
        assert attrs == ["email", "first_name", "last_name", "phone_number"]


class TestRetrieveCustomer:
    def test_retrieve(self, api_client, make_customer):
        customer = make_customer()
        response = api_client.get(f"{URL}{customer.id}/")
        assert response.status_code == 200
        assert response.json()["id"] == customer.id

    def test_missing_returns_404(self, api_client):
        response = api_client.get(f"{URL}999/")
        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == "Customer not found for id: 999"

    def test_deleted_returns_404(self, api_client, make_customer):
        customer = make_customer()
        customer.delete()
        assert api_client.get(f"{URL}{customer.id}/").status_code == 404

    @pytest.mark.parametrize("bad_id", ["abc", "0", "-5"])
    def test_bad_id_returns_400(self, api_client, bad_id):
        response = api_client.get(f"{URL}{bad_id}/")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "customer_id"


class TestDeleteCustomer:
    def test_delete_is_idempotent(self, api_client, make_customer):
        customer = make_customer()
        assert api_client.delete(f"{URL}{customer.id}/").status_code == 204
        assert api_client.delete(f"{URL}{customer.id}/").status_code == 204
        customer.refresh_from_db()
        assert customer.deleted is True

    def test_delete_missing_is_204(self, api_client):
        assert api_client.delete(f"{URL}31337/").status_code == 204
