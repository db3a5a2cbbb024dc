from __future__ import annotations

import logging
from typing import Optional

import httpx

from pypolar.config.settings import AppConfig, get_settings
from pypolar.resources.benefits import Benefits
from pypolar.resources.customer_meters import CustomerMeters
from pypolar.resources.customer_seats import CustomerSeats
from pypolar.resources.customers import Customers
from pypolar.resources.meters import Meters
from pypolar.resources.refunds import Refunds
from pypolar.resources.seats import Seats
from .session import PolarSession

logger = logging.getLogger(__name__)


class PolarClient:
    """
    Entry point for the Polar API. Owns one HTTP session shared by all
    resource clients and holds no per-call state, so calls may run
    concurrently.

    Usage:
        async with PolarClient() as polar:
            result = await polar.benefits.get("...")
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        settings: Optional[AppConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if settings is None and token:
            overrides = {"base_url": base_url} if base_url else {}
            settings = AppConfig(polar_access_token=token, **overrides)
        self.settings = settings or get_settings()
        logging.getLogger("pypolar").setLevel(
            (self.settings.log_level or "INFO").upper()
        )

        self.default_page_limit = self.settings.default_page_limit
        self.list_all_page_size = self.settings.list_all_page_size
        self.page_retries = self.settings.page_retries

        self.session = PolarSession(
            base_url=base_url or str(self.settings.base_url),
            token=token or self.settings.polar_access_token,
            timeout=self.settings.http_timeout,
            user_agent=self.settings.user_agent,
            transport=transport,
        )

        self.benefits = Benefits(self)
        self.customers = Customers(self)
        self.refunds = Refunds(self)
        self.seats = Seats(self)
        self.customer_seats = CustomerSeats(self)
        self.customer_meters = CustomerMeters(self)
        self.meters = Meters(self)
        logger.debug("PolarClient ready for %s", self.session.base_url)

    async def aclose(self):
        """Clean up resources."""
        await self.session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
