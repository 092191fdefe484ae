from datetime import datetime
from unittest import mock

import pytest

from orders.models import Order
from orders.repository import StorageError
from orders.urls import order_service
from orders.views import order_collection

URL = "/api/orders"


def _post(client, payload):
    return client.post(URL, data=payload, content_type="application/json")


@pytest.mark.django_db
class TestCreateOrder:
    def test_valid_request_returns_created_order(self, client):
        resp = _post(client, {"customerName": "John", "amount": 123.45})

        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] is not None
        assert data["customerName"] == "John"
        assert data["amount"] == 123.45
        assert datetime.fromisoformat(data["createdAt"]).tzinfo is not None
        assert Order.objects.filter(pk=data["id"]).exists()

    def test_blank_name_returns_field_errors(self, client):
        resp = _post(client, {"customerName": "", "amount": 50})

        assert resp.status_code == 400
        assert resp.json() == {"customerName": "Customer name is required"}
        assert Order.objects.count() == 0

    def test_small_amount_returns_field_errors(self, client):
        resp = _post(client, {"customerName": "John", "amount": 0.09})
        assert resp.status_code == 400
        assert resp.json() == {"amount": "Amount must be at least 0.1"}

    def test_validation_failure_does_not_call_service(self, client):
        with mock.patch.object(order_service, "create_order") as create:
            resp = _post(client, {"customerName": "John"})
        assert resp.status_code == 400
        create.assert_not_called()

    @pytest.mark.parametrize("body", ["{broken", "[]", '"text"'])
    def test_invalid_json_is_rejected(self, client, body):
        resp = client.post(URL, data=body, content_type="application/json")
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid payload"}

    def test_publishes_created_event(self, client):
        with mock.patch("orders.views.publish_order_created") as publish:
            resp = _post(client, {"customerName": "Ana", "amount": 10})
        publish.assert_called_once_with(resp.json())

    def test_storage_failure_returns_500(self, client):
        with mock.patch.object(order_service.repository, "save", side_effect=StorageError("down")):
            resp = _post(client, {"customerName": "John", "amount": 10})
        assert resp.status_code == 500
        assert resp.json() == {"error": "storage unavailable"}

    def test_huge_integer_amount_returns_field_error(self, client):
        body = '{"customerName": "John", "amount": 1' + "0" * 400 + "}"
        resp = client.post(URL, data=body, content_type="application/json")
        assert resp.status_code == 400
        assert resp.json() == {"amount": "Amount must be a number"}
        assert Order.objects.count() == 0

    def test_lone_surrogate_in_name_returns_field_error(self, client):
        body = '{"customerName": "\\ud800", "amount": 5}'
        resp = client.post(URL, data=body, content_type="application/json")
        assert resp.status_code == 400
        assert resp.json() == {"customerName": "Customer name contains invalid characters"}
        assert Order.objects.count() == 0

    def test_client_supplied_id_and_created_at_are_ignored(self, client):
        resp = _post(client, {
            "customerName": "A",
            "amount": 5,
            "id": 999,
            "createdAt": "2000-01-01T00:00:00+00:00",
        })

        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] != 999
        assert datetime.fromisoformat(data["createdAt"]).year != 2000
        stored = Order.objects.get()
        assert stored.id == data["id"]
        assert stored.created_at.year != 2000

    def test_trailing_slash_is_accepted(self, client):
        resp = client.post(URL + "/", data={"customerName": "Wei", "amount": 3}, content_type="application/json")
        assert resp.status_code == 200


@pytest.mark.django_db
class TestListOrders:
    def test_empty_list(self, client):
        resp = client.get(URL)
        assert resp.status_code == 200
        assert resp.json() == []

    def test_lists_created_order(self, client):
        created = _post(client, {"customerName": "John", "amount": 123.45}).json()
        resp = client.get(URL)
        assert resp.status_code == 200
        assert resp.json() == [created]

    def test_lists_existing_orders(self, client, make_order):
        make_order("Ana", 1)
        make_order("Luis", 2)
        names = [o["customerName"] for o in client.get(URL).json()]
        assert names == ["Ana", "Luis"]

    def test_storage_failure_returns_500(self, client):
        with mock.patch.object(order_service.repository, "find_all", side_effect=StorageError("down")):
            resp = client.get(URL)
        assert resp.status_code == 500


def test_other_methods_are_not_allowed(client):
    assert client.delete(URL).status_code == 405
    assert client.put(URL, data="{}", content_type="application/json").status_code == 405


def test_view_uses_the_bound_service(rf):
    service = mock.Mock()
    service.get_all_orders.return_value = []

    resp = order_collection(rf.get(URL), service=service)

    assert resp.status_code == 200
    service.get_all_orders.assert_called_once_with()
