import asyncio
from pypolar.resources.customer_meters import CustomerMeters


def customer_meter(customer_meter_id, **overrides):
    data = {
        "id": customer_meter_id,
        "meter_id": "m_1",
        "customer_id": "cus_1",
        "consumed_units": 12.0,
        "credited_units": 20.0,
        "balance": 8.0,
    }
    data.update(overrides)
    return data


def test_list(dummy_client, page_json):
    client = dummy_client(page_json([customer_meter("cm_1")]))
    customer_meters = CustomerMeters(client)
    builder = customer_meters.query().with_customer_id("cus_1").with_meter_id(["m_1", "m_2"])

    result = asyncio.run(customer_meters.list(builder))

    assert result.value.items[0].balance == 8.0
    assert client.calls[0][1] == "/customer_meters"
    assert client.calls[0][2]["params"]["meter_id"] == ["m_1", "m_2"]


def test_list_all_fifteen_items_over_three_pages(dummy_client, page_json, drain):
    pages = [
        page_json(
            [customer_meter(f"cm_{i}") for i in range(start, start + 5)],
            max_page=3,
            total_count=15,
        )
        for start in (0, 5, 10)
    ]
    client = dummy_client(*pages)

    results = drain(CustomerMeters(client).list_all(external_customer_id="ext_1"))

    assert len(results) == 15
    assert [r.value.id for r in results][-1] == "cm_14"
    assert len(client.calls) == 3


def test_get(dummy_client):
    client = dummy_client(
        customer_meter("cm_1", meter={"id": "m_1", "name": "Storage"})
    )

    result = asyncio.run(CustomerMeters(client).get("cm_1"))

    assert result.value.meter.name == "Storage"
    assert client.calls == [("GET", "/customer_meters/cm_1", None)]


def test_get_unknown(dummy_client, fake_response):
    client = dummy_client(fake_response(404, text=""))

    result = asyncio.run(CustomerMeters(client).get("cm_missing"))

    assert result.is_not_found
    assert result.error.message
