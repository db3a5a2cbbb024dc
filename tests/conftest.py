"""
Runs during test collection. You can also supply fixtures here that should be loaded
before each test
"""

import asyncio
import os, sys, pytest

import httpx

# Ensure src/ is on sys.path before any imports of your app code
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

os.environ["BASE_URL"] = "https://example.com/v1"
os.environ["POLAR_ACCESS_TOKEN"] = "polar_oat_real_looking_token"


@pytest.fixture
def api_url():
    return os.getenv("BASE_URL")


@pytest.fixture
def fake_response():
    """Factory fixture for creating httpx responses without a network round trip"""

    def _make_response(status_code=200, json_data=None, text=None, headers=None):
        if json_data is not None:
            return httpx.Response(status_code, json=json_data, headers=headers)
        return httpx.Response(status_code, text=text or "", headers=headers)

    return _make_response


@pytest.fixture
def page_json():
    """Factory fixture for the list envelope the API returns"""

    def _make_page(items, max_page=1, total_count=None, page=None, limit=None):
        pagination = {
            "total_count": len(items) if total_count is None else total_count,
            "max_page": max_page,
        }
        if page is not None:
            pagination["page"] = page
        if limit is not None:
            pagination["limit"] = limit
        return {"items": items, "pagination": pagination}

    return _make_page


@pytest.fixture
def dummy_client(fake_response):
    """
    Factory fixture for a client whose session replays queued responses.
    Each entry is a dict (sent back as 200 JSON), an httpx.Response, or an
    exception to raise. The last entry is reused once the queue runs dry.
    """

    class DummySession:
        def __init__(self, responses):
            self._responses = list(responses)
            self.calls = []

        async def request(self, method, path, params=None, json=None):
            call_data = {}
            if params is not None:
                call_data["params"] = params
            if json is not None:
                call_data["json"] = json
            self.calls.append((method, path, call_data if call_data else None))

            response = (
                self._responses.pop(0)
                if len(self._responses) > 1
                else self._responses[0]
            )
            if isinstance(response, BaseException):
                raise response
            if isinstance(response, (dict, list)):
                return fake_response(200, response)
            return response

    class DummyClient:
        def __init__(self, responses, default_page_limit, list_all_page_size, page_retries):
            self.session = DummySession(responses)
            self.default_page_limit = default_page_limit
            self.list_all_page_size = list_all_page_size
            self.page_retries = page_retries

        @property
        def calls(self):
            return self.session.calls

    def _make_client(
        *responses, default_page_limit=10, list_all_page_size=100, page_retries=0
    ):
        return DummyClient(
            responses or [{}], default_page_limit, list_all_page_size, page_retries
        )

    return _make_client


@pytest.fixture
def drain():
    """Consume an async stream to a list"""

    def _drain(stream):
        async def collect():
            return [item async for item in stream]

        return asyncio.run(collect())

    return _drain


# --- Result Fixtures --- #


@pytest.fixture
def ok_result():
    """Factory fixture for creating successful Result objects"""
    from pypolar.services.service_result import Result

    def _make_result(value):
        return Result.ok(value)

    return _make_result


@pytest.fixture
def fail_result():
    """Factory fixture for creating failed Result objects"""
    from pypolar.services.errors import ApiError, ErrorKind
    from pypolar.services.service_result import Result

    def _make_result(message="boom", kind=ErrorKind.UNKNOWN, status_code=None):
        return Result.fail(ApiError(message=message, kind=kind, status_code=status_code))

    return _make_result
