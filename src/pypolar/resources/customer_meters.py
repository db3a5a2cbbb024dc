from __future__ import annotations
from typing import Any, AsyncIterator, Optional

from pypolar.models.meters import CustomerMeter
from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import CustomerMetersQueryBuilder
from pypolar.services.base_resource import BaseResource
from pypolar.services.service_result import Result


class CustomerMeters(BaseResource):
    """Read-only view of meter consumption per customer."""

    def query(self) -> CustomerMetersQueryBuilder:
        return CustomerMetersQueryBuilder()

    async def list(
        self,
        builder: Optional[CustomerMetersQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[CustomerMeter]]:
        return await self._list(
            "/customer_meters", CustomerMeter, builder, page=page, limit=limit, **filters
        )

    def list_all(
        self, builder: Optional[CustomerMetersQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[CustomerMeter]]:
        return self._list_all("/customer_meters", CustomerMeter, builder, **filters)

    async def get(self, customer_meter_id: str) -> Result[CustomerMeter]:
        path = self._path("/customer_meters/{id}", id=customer_meter_id)
        if path.is_failure:
            return path
        return await self._get(path.value, CustomerMeter)
