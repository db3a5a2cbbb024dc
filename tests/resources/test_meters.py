import asyncio
from datetime import datetime, timezone
import pytest
from pypolar.models.meters import MeterAggregationType, MeterCreateRequest, MeterUpdateRequest
from pypolar.resources.meters import Meters


@pytest.fixture
def meter_json():
    def _make(meter_id="m_1", **overrides):
        data = {
            "id": meter_id,
            "name": "API calls",
            "aggregation_type": "count",
            "is_active": True,
        }
        data.update(overrides)
        return data

    return _make


def test_list_uses_is_active_filter(dummy_client, page_json, meter_json):
    client = dummy_client(page_json([meter_json()]))
    meters = Meters(client)

    result = asyncio.run(meters.list(meters.query().with_active(True).with_query("api")))

    assert result.value.items[0].aggregation_type is MeterAggregationType.COUNT
    assert client.calls[0][1] == "/meters"
    assert client.calls[0][2]["params"]["is_active"] == "true"
    assert client.calls[0][2]["params"]["query"] == "api"


def test_list_all(dummy_client, page_json, meter_json, drain):
    client = dummy_client(
        page_json([meter_json("m_1")], max_page=2, total_count=2),
        page_json([meter_json("m_2")], max_page=2, total_count=2),
    )

    results = drain(Meters(client).list_all())

    assert [r.value.id for r in results] == ["m_1", "m_2"]


def test_crud(dummy_client, meter_json, fake_response):
    client = dummy_client(
        meter_json("m_new"),
        meter_json("m_new"),
        meter_json("m_new", name="Renamed"),
        fake_response(204),
        fake_response(404, {"detail": "Not found"}),
    )
    meters = Meters(client)

    created = asyncio.run(
        meters.create(MeterCreateRequest(name="API calls", aggregation_type="count"))
    )
    fetched = asyncio.run(meters.get("m_new"))
    updated = asyncio.run(meters.update("m_new", MeterUpdateRequest(name="Renamed")))
    deleted = asyncio.run(meters.delete("m_new"))
    gone = asyncio.run(meters.get("m_new"))

    assert created.value.id == fetched.value.id == "m_new"
    assert updated.value.name == "Renamed"
    assert deleted.value is None
    assert gone.is_not_found
    assert client.calls == [
        ("POST", "/meters", {"json": {"name": "API calls", "aggregation_type": "count"}}),
        ("GET", "/meters/m_new", None),
        ("PATCH", "/meters/m_new", {"json": {"name": "Renamed"}}),
        ("DELETE", "/meters/m_new", None),
        ("GET", "/meters/m_new", None),
    ]


def test_create_requires_aggregation(dummy_client):
    client = dummy_client()

    result = asyncio.run(Meters(client).create({"name": "API calls"}))

    assert result.is_validation_error
    assert result.error.details[0].field == "aggregation_type"
    assert client.calls == []


def test_get_quantities(dummy_client, page_json):
    client = dummy_client(
        page_json(
            [
                {"meter_id": "m_1", "quantity": 3, "timestamp": "2024-01-01T00:00:00Z"},
                {"meter_id": "m_1", "quantity": 4.5, "timestamp": "2024-01-02T00:00:00Z"},
            ]
        )
    )

    result = asyncio.run(
        Meters(client).get_quantities(
            "m_1",
            limit=50,
            start_timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            interval="day",
        )
    )

    assert [q.quantity for q in result.value.items] == [3, 4.5]
    assert client.calls == [
        (
            "GET",
            "/meters/m_1/quantities",
            {
                "params": {
                    "start_timestamp": "2024-01-01T00:00:00Z",
                    "interval": "day",
                    "page": "1",
                    "limit": "50",
                }
            },
        )
    ]


def test_get_quantities_blank_meter(dummy_client):
    client = dummy_client()

    result = asyncio.run(Meters(client).get_quantities(""))

    assert result.is_validation_error
    assert client.calls == []
