from __future__ import annotations
from typing import Any, AsyncIterator, Dict, Optional, Union

from pypolar.models.meters import (
    Meter,
    MeterCreateRequest,
    MeterQuantity,
    MeterUpdateRequest,
)
from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import MetersQueryBuilder
from pypolar.services.base_resource import BaseResource
from pypolar.services.service_result import Result


class Meters(BaseResource):
    """
    Usage meters and their aggregated quantities.

    Filters for list() and list_all(): query, is_active, organization_id, sorting.
    """

    def query(self) -> MetersQueryBuilder:
        return MetersQueryBuilder()

    async def list(
        self,
        builder: Optional[MetersQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[Meter]]:
        return await self._list("/meters", Meter, builder, page=page, limit=limit, **filters)

    def list_all(
        self, builder: Optional[MetersQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[Meter]]:
        return self._list_all("/meters", Meter, builder, **filters)

    async def get(self, meter_id: str) -> Result[Meter]:
        path = self._path("/meters/{id}", id=meter_id)
        if path.is_failure:
            return path
        return await self._get(path.value, Meter)

    async def create(
        self, request: Union[MeterCreateRequest, Dict[str, Any]]
    ) -> Result[Meter]:
        return await self._send("post", "/meters", request, MeterCreateRequest, Meter)

    async def update(
        self, meter_id: str, request: Union[MeterUpdateRequest, Dict[str, Any]]
    ) -> Result[Meter]:
        path = self._path("/meters/{id}", id=meter_id)
        if path.is_failure:
            return path
        return await self._send(
            "patch", path.value, request, MeterUpdateRequest, Meter, partial=True
        )

    async def delete(self, meter_id: str) -> Result[Optional[Meter]]:
        path = self._path("/meters/{id}", id=meter_id)
        if path.is_failure:
            return path
        return await self._delete(path.value, Meter)

    async def get_quantities(
        self,
        meter_id: str,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[MeterQuantity]]:
        """
        One page of aggregated quantities. Typical filters: start_timestamp,
        end_timestamp, interval, customer_id.
        """
        path = self._path("/meters/{id}/quantities", id=meter_id)
        if path.is_failure:
            return path
        return await self._list(
            path.value, MeterQuantity, page=page, limit=limit, **filters
        )
