import asyncio
import pytest
from pypolar.models.common import ExportFormat
from pypolar.models.customers import (
    CustomerCreateRequest,
    CustomerExportRequest,
    CustomerUpdateRequest,
)
from pypolar.resources.customers import Customers


@pytest.fixture
def customer_json():
    def _make(customer_id="cus_1", **overrides):
        data = {
            "id": customer_id,
            "email": f"{customer_id}@example.com",
            "name": "Jane",
            "external_id": f"ext_{customer_id}",
            "metadata": {"plan": "pro"},
        }
        data.update(overrides)
        return data

    return _make


def test_list_with_builder_and_filters(dummy_client, page_json, customer_json):
    client = dummy_client(page_json([customer_json()], max_page=1))
    customers = Customers(client)
    builder = customers.query().with_query("jane").sorting("-created_at")

    result = asyncio.run(customers.list(builder, limit=25, email="jane@example.com"))

    assert result.value.items[0].email == "cus_1@example.com"
    assert client.calls == [
        (
            "GET",
            "/customers/",
            {
                "params": {
                    "query": "jane",
                    "sorting": ["-created_at"],
                    "email": "jane@example.com",
                    "page": "1",
                    "limit": "25",
                }
            },
        )
    ]


def test_list_all_yields_customers_in_order(dummy_client, page_json, customer_json, drain):
    client = dummy_client(
        page_json([customer_json("cus_1"), customer_json("cus_2")], max_page=2, total_count=3),
        page_json([customer_json("cus_3")], max_page=2, total_count=3),
    )

    results = drain(Customers(client).list_all(email="x@example.com"))

    assert [r.value.id for r in results] == ["cus_1", "cus_2", "cus_3"]
    assert all(call[2]["params"]["email"] == "x@example.com" for call in client.calls)


def test_get_and_get_by_external_id(dummy_client, customer_json):
    client = dummy_client(customer_json())
    customers = Customers(client)

    assert asyncio.run(customers.get("cus_1")).value.metadata == {"plan": "pro"}
    assert asyncio.run(customers.get_by_external_id("user 42")).is_success
    assert [call[1] for call in client.calls] == [
        "/customers/cus_1",
        "/customers/external/user%2042",
    ]


def test_create(dummy_client, customer_json):
    client = dummy_client(customer_json("cus_new"))
    request = CustomerCreateRequest(email="new@example.com", metadata={"source": "api"})

    result = asyncio.run(Customers(client).create(request))

    assert result.value.id == "cus_new"
    assert client.calls == [
        (
            "POST",
            "/customers/",
            {"json": {"email": "new@example.com", "metadata": {"source": "api"}}},
        )
    ]


def test_create_rejects_bad_email_before_sending(dummy_client):
    client = dummy_client()

    result = asyncio.run(Customers(client).create({"email": "nope"}))

    assert result.is_validation_error
    assert result.error.details[0].field == "email"
    assert client.calls == []


def test_update_and_update_by_external_id(dummy_client, customer_json):
    client = dummy_client(customer_json(name="Renamed"))
    customers = Customers(client)

    asyncio.run(customers.update("cus_1", CustomerUpdateRequest(name="Renamed")))
    asyncio.run(customers.update_by_external_id("ext_1", {"name": "Renamed"}))

    assert client.calls == [
        ("PATCH", "/customers/cus_1", {"json": {"name": "Renamed"}}),
        ("PATCH", "/customers/external/ext_1", {"json": {"name": "Renamed"}}),
    ]


def test_delete_then_get_is_not_found(dummy_client, fake_response):
    client = dummy_client(fake_response(204), fake_response(404, {"detail": "Not found"}))
    customers = Customers(client)

    assert asyncio.run(customers.delete("cus_1")).value is None
    assert asyncio.run(customers.get("cus_1")).is_not_found


def test_delete_by_external_id(dummy_client, fake_response):
    client = dummy_client(fake_response(204))

    result = asyncio.run(Customers(client).delete_by_external_id("ext_1"))

    assert result.is_success
    assert client.calls == [("DELETE", "/customers/external/ext_1", None)]


def test_permission_errors_are_reported(dummy_client, fake_response):
    client = dummy_client(fake_response(403, {"detail": "Not allowed", "type": "NotPermitted"}))

    result = asyncio.run(Customers(client).get("cus_1"))

    assert result.is_permission_error
    assert result.error.error_type == "NotPermitted"


def test_state_and_balance(dummy_client):
    client = dummy_client(
        {"customer_id": "cus_1", "has_active_subscriptions": True},
        {"customer_id": "cus_1", "balance": 1500, "currency": "usd"},
        {"customer_id": "cus_1", "active_benefits_count": 2},
    )
    customers = Customers(client)

    state = asyncio.run(customers.get_state("cus_1"))
    balance = asyncio.run(customers.get_balance("cus_1"))
    external_state = asyncio.run(customers.get_state_by_external_id("ext_1"))

    assert state.value.has_active_subscriptions is True
    assert balance.value.balance == 1500
    assert external_state.value.active_benefits_count == 2
    assert [call[1] for call in client.calls] == [
        "/customers/cus_1/state",
        "/customers/cus_1/balance",
        "/customers/external/ext_1/state",
    ]


def test_export_defaults_to_csv(dummy_client):
    client = dummy_client({"export_url": "https://files.example.com/c.csv", "record_count": 3})

    result = asyncio.run(Customers(client).export())

    assert result.value.record_count == 3
    assert client.calls == [("POST", "/customers/export/", {"json": {"format": "csv"}})]


def test_export_with_filters(dummy_client):
    client = dummy_client({"export_url": "https://files.example.com/c.xlsx"})
    request = CustomerExportRequest(format=ExportFormat.EXCEL, email="a@example.com")

    asyncio.run(Customers(client).export(request))

    assert client.calls[0][2] == {"json": {"format": "excel", "email": "a@example.com"}}
