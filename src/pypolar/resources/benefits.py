from __future__ import annotations
from typing import Any, AsyncIterator, Dict, Optional, Union

from pypolar.models.benefits import (
    Benefit,
    BenefitCreateRequest,
    BenefitGrant,
    BenefitGrantRequest,
    BenefitUpdateRequest,
)
from pypolar.models.common import ExportFormat, ExportResponse
from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import BenefitGrantsQueryBuilder, BenefitsQueryBuilder
from pypolar.services.base_resource import BaseResource
from pypolar.services.service_result import Result


class Benefits(BaseResource):
    """
    Benefits and the grants that hand them out to customers.

    Filters for list() and list_all(): type, active, selectable,
    organization_id, query, created_after, created_before, sorting.
    Grant filters: customer_id, status, is_granted.
    """

    def query(self) -> BenefitsQueryBuilder:
        return BenefitsQueryBuilder()

    def grants_query(self) -> BenefitGrantsQueryBuilder:
        return BenefitGrantsQueryBuilder()

    async def list(
        self,
        builder: Optional[BenefitsQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[Benefit]]:
        return await self._list(
            "/benefits/", Benefit, builder, page=page, limit=limit, **filters
        )

    def list_all(
        self, builder: Optional[BenefitsQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[Benefit]]:
        return self._list_all("/benefits/", Benefit, builder, **filters)

    async def get(self, benefit_id: str) -> Result[Benefit]:
        path = self._path("/benefits/{id}/", id=benefit_id)
        if path.is_failure:
            return path
        return await self._get(path.value, Benefit)

    async def create(
        self, request: Union[BenefitCreateRequest, Dict[str, Any]]
    ) -> Result[Benefit]:
        return await self._send(
            "post", "/benefits/", request, BenefitCreateRequest, Benefit
        )

    async def update(
        self, benefit_id: str, request: Union[BenefitUpdateRequest, Dict[str, Any]]
    ) -> Result[Benefit]:
        path = self._path("/benefits/{id}/", id=benefit_id)
        if path.is_failure:
            return path
        return await self._send(
            "patch", path.value, request, BenefitUpdateRequest, Benefit, partial=True
        )

    async def delete(self, benefit_id: str) -> Result[Optional[Benefit]]:
        path = self._path("/benefits/{id}/", id=benefit_id)
        if path.is_failure:
            return path
        return await self._delete(path.value, Benefit)

    # --- grants --- #

    async def list_grants(
        self,
        benefit_id: str,
        builder: Optional[BenefitGrantsQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[BenefitGrant]]:
        path = self._path("/benefits/{id}/grants/", id=benefit_id)
        if path.is_failure:
            return path
        return await self._list(
            path.value, BenefitGrant, builder, page=page, limit=limit, **filters
        )

    def list_all_grants(
        self,
        benefit_id: str,
        builder: Optional[BenefitGrantsQueryBuilder] = None,
        **filters: Any,
    ) -> AsyncIterator[Result[BenefitGrant]]:
        path = self._path("/benefits/{id}/grants/", id=benefit_id)
        if path.is_failure:
            return self._failed_stream(path)
        return self._list_all(path.value, BenefitGrant, builder, **filters)

    async def grant(
        self, benefit_id: str, request: Union[BenefitGrantRequest, Dict[str, Any]]
    ) -> Result[BenefitGrant]:
        path = self._path("/benefits/{id}/grant/", id=benefit_id)
        if path.is_failure:
            return path
        return await self._send(
            "post", path.value, request, BenefitGrantRequest, BenefitGrant
        )

    async def revoke_grant(
        self, benefit_id: str, grant_id: str
    ) -> Result[Optional[BenefitGrant]]:
        path = self._path(
            "/benefits/{id}/grants/{grant_id}/", id=benefit_id, grant_id=grant_id
        )
        if path.is_failure:
            return path
        return await self._delete(path.value, BenefitGrant)

    # --- exports --- #

    async def export(
        self,
        format: ExportFormat = ExportFormat.CSV,
        builder: Optional[BenefitsQueryBuilder] = None,
        **filters: Any,
    ) -> Result[ExportResponse]:
        params = self._merge_params(builder, format=format, **filters)
        return await self._get("/benefits/export/", ExportResponse, params=params)

    async def export_grants(
        self,
        benefit_id: str,
        format: ExportFormat = ExportFormat.CSV,
        builder: Optional[BenefitGrantsQueryBuilder] = None,
        **filters: Any,
    ) -> Result[ExportResponse]:
        path = self._path("/benefits/{id}/grants/export/", id=benefit_id)
        if path.is_failure:
            return path
        params = self._merge_params(builder, format=format, **filters)
        return await self._get(path.value, ExportResponse, params=params)
