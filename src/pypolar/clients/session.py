import logging
import httpx
from typing import Any, Optional
from pypolar.config.settings import get_settings
from pypolar.services.errors import TransportError

logger = logging.getLogger(__name__)


class PolarSession:
    """
    An async HTTP client using httpx.AsyncClient that:
      - Prefixes every path with get_settings().base_url
      - Adds Authorization header from get_settings().polar_access_token
      - Converts timeouts and connection failures into TransportError
      - Returns every HTTP response as-is, error statuses included
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = None
        if not (base_url and token and timeout and user_agent):
            settings = get_settings()
        self.base_url = str(base_url or settings.base_url).rstrip("/")
        self.token = token or settings.polar_access_token
        self.timeout = timeout or settings.http_timeout
        self.user_agent = user_agent or settings.user_agent
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/json",
                "User-Agent": self.user_agent,
            },
            timeout=self.timeout,
            transport=transport,
        )

    def url_for(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        params: Any = None,
        json: Any = None,
    ) -> httpx.Response:
        url = self.url_for(path)
        logger.debug("%s %s params=%s", method.upper(), url, params)
        try:
            return await self._client.request(
                method.upper(), url, params=params, json=json
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                "timeout", f"Request to {url} timed out: {e}"
            ) from e
        except httpx.TransportError as e:
            raise TransportError(
                "connection", f"Could not connect to {url}: {e}"
            ) from e

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def close(self):
        await self._client.aclose()
