from __future__ import annotations
from typing import Any, AsyncIterator, Dict, Optional, Union

from pypolar.models.common import ExportResponse
from pypolar.models.customers import (
    Customer,
    CustomerBalance,
    CustomerCreateRequest,
    CustomerExportRequest,
    CustomerState,
    CustomerUpdateRequest,
)
from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import CustomersQueryBuilder
from pypolar.services.base_resource import BaseResource
from pypolar.services.service_result import Result


class Customers(BaseResource):
    """
    Customers, addressable either by Polar id or by your own external id.

    Filters for list() and list_all(): email, external_id, query,
    organization_id, created_after, created_before, sorting.
    """

    def query(self) -> CustomersQueryBuilder:
        return CustomersQueryBuilder()

    async def list(
        self,
        builder: Optional[CustomersQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[Customer]]:
        return await self._list(
            "/customers/", Customer, builder, page=page, limit=limit, **filters
        )

    def list_all(
        self, builder: Optional[CustomersQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[Customer]]:
        return self._list_all("/customers/", Customer, builder, **filters)

    async def get(self, customer_id: str) -> Result[Customer]:
        path = self._path("/customers/{id}", id=customer_id)
        if path.is_failure:
            return path
        return await self._get(path.value, Customer)

    async def get_by_external_id(self, external_id: str) -> Result[Customer]:
        path = self._path("/customers/external/{external_id}", external_id=external_id)
        if path.is_failure:
            return path
        return await self._get(path.value, Customer)

    async def create(
        self, request: Union[CustomerCreateRequest, Dict[str, Any]]
    ) -> Result[Customer]:
        return await self._send(
            "post", "/customers/", request, CustomerCreateRequest, Customer
        )

    async def update(
        self, customer_id: str, request: Union[CustomerUpdateRequest, Dict[str, Any]]
    ) -> Result[Customer]:
        path = self._path("/customers/{id}", id=customer_id)
        if path.is_failure:
            return path
        return await self._send(
            "patch", path.value, request, CustomerUpdateRequest, Customer, partial=True
        )

    async def update_by_external_id(
        self, external_id: str, request: Union[CustomerUpdateRequest, Dict[str, Any]]
    ) -> Result[Customer]:
        path = self._path("/customers/external/{external_id}", external_id=external_id)
        if path.is_failure:
            return path
        return await self._send(
            "patch", path.value, request, CustomerUpdateRequest, Customer, partial=True
        )

    async def delete(self, customer_id: str) -> Result[Optional[Customer]]:
        path = self._path("/customers/{id}", id=customer_id)
        if path.is_failure:
            return path
        return await self._delete(path.value, Customer)

    async def delete_by_external_id(self, external_id: str) -> Result[Optional[Customer]]:
        path = self._path("/customers/external/{external_id}", external_id=external_id)
        if path.is_failure:
            return path
        return await self._delete(path.value, Customer)

    async def get_state(self, customer_id: str) -> Result[CustomerState]:
        path = self._path("/customers/{id}/state", id=customer_id)
        if path.is_failure:
            return path
        return await self._get(path.value, CustomerState)

    async def get_state_by_external_id(self, external_id: str) -> Result[CustomerState]:
        path = self._path(
            "/customers/external/{external_id}/state", external_id=external_id
        )
        if path.is_failure:
            return path
        return await self._get(path.value, CustomerState)

    async def get_balance(self, customer_id: str) -> Result[CustomerBalance]:
        path = self._path("/customers/{id}/balance", id=customer_id)
        if path.is_failure:
            return path
        return await self._get(path.value, CustomerBalance)

    async def export(
        self, request: Union[CustomerExportRequest, Dict[str, Any], None] = None
    ) -> Result[ExportResponse]:
        return await self._send(
            "post",
            "/customers/export/",
            request if request is not None else CustomerExportRequest(),
            CustomerExportRequest,
            ExportResponse,
        )
