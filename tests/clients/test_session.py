import json
import asyncio
import httpx
import pytest
from pypolar.clients.session import PolarSession
from pypolar.services.errors import TransportError


@pytest.fixture
def make_session():
    """Factory fixture for a session backed by an httpx.MockTransport"""

    def _make(handler, base_url="https://example.com/v1/", token="polar_oat_token"):
        return PolarSession(
            base_url=base_url,
            token=token,
            timeout=5.0,
            user_agent="pypolar-tests",
            transport=httpx.MockTransport(handler),
        )

    return _make


def run(session, *args, **kwargs):
    async def _call():
        try:
            return await session.request(*args, **kwargs)
        finally:
            await session.close()

    return asyncio.run(_call())


def test_request_sends_auth_headers_and_joins_url(make_session):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"ok": True})

    response = run(make_session(handler), "get", "/benefits/", params={"page": "1"})

    assert response.json() == {"ok": True}
    assert seen["url"] == "https://example.com/v1/benefits/?page=1"
    assert seen["headers"]["Authorization"] == "Bearer polar_oat_token"
    assert seen["headers"]["Accept"] == "application/json"
    assert seen["headers"]["User-Agent"] == "pypolar-tests"


def test_request_sends_repeated_params_and_json(make_session):
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(201, json={})

    run(
        make_session(handler),
        "post",
        "refunds",
        params={"id": ["r1", "r2"]},
        json={"amount": 100},
    )

    request = seen["request"]
    assert request.method == "POST"
    assert request.url.params.get_list("id") == ["r1", "r2"]
    assert json.loads(request.content) == {"amount": 100}


def test_error_statuses_are_returned_not_raised(make_session):
    response = run(
        make_session(lambda request: httpx.Response(404, json={"detail": "Not found"})),
        "get",
        "/customers/x",
    )

    assert response.status_code == 404


def test_timeout_becomes_transport_error(make_session):
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(TransportError) as excinfo:
        run(make_session(handler), "get", "/meters")

    assert excinfo.value.cause == "timeout"
    assert "/meters" in excinfo.value.message


def test_connection_failure_becomes_transport_error(make_session):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        run(make_session(handler), "get", "/meters")

    assert excinfo.value.cause == "connection"
    assert excinfo.value.to_api_error().error_type == "connection"


def test_cancellation_propagates(make_session):
    async def scenario():
        started = asyncio.Event()

        async def handler(request):
            started.set()
            await asyncio.sleep(10)
            return httpx.Response(200)

        session = make_session(handler)
        task = asyncio.create_task(session.request("get", "/benefits/"))
        await started.wait()
        task.cancel()
        try:
            with pytest.raises(asyncio.CancelledError):
                await task
        finally:
            await session.close()

    asyncio.run(scenario())


def test_close(make_session):
    session = make_session(lambda request: httpx.Response(200))

    asyncio.run(session.close())

    assert session.is_closed


def test_url_for_keeps_absolute_urls(make_session):
    session = make_session(lambda request: httpx.Response(200))

    assert session.url_for("https://other.example.com/x") == "https://other.example.com/x"
    assert session.url_for("seats") == "https://example.com/v1/seats"
