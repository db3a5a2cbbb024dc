from __future__ import annotations
from typing import Any, AsyncIterator, Dict, Optional, Union

from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import RefundsQueryBuilder
from pypolar.models.refunds import Refund, RefundCreateRequest
from pypolar.services.base_resource import BaseResource
from pypolar.services.service_result import Result


class Refunds(BaseResource):
    """
    Refunds of orders and payments. Refunds cannot be updated or deleted.

    Filters for list() and list_all(): status, order_id, subscription_id,
    customer_id, succeeded, id, created_after, created_before, sorting.
    """

    def query(self) -> RefundsQueryBuilder:
        return RefundsQueryBuilder()

    async def list(
        self,
        builder: Optional[RefundsQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[Refund]]:
        return await self._list(
            "/refunds", Refund, builder, page=page, limit=limit, **filters
        )

    def list_all(
        self, builder: Optional[RefundsQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[Refund]]:
        return self._list_all("/refunds", Refund, builder, **filters)

    async def get(self, refund_id: str) -> Result[Refund]:
        path = self._path("/refunds/{id}", id=refund_id)
        if path.is_failure:
            return path
        return await self._get(path.value, Refund)

    async def create(
        self, request: Union[RefundCreateRequest, Dict[str, Any]]
    ) -> Result[Refund]:
        return await self._send("post", "/refunds", request, RefundCreateRequest, Refund)
