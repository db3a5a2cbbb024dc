from __future__ import annotations
from typing import Any, AsyncIterator, Dict, Optional, Union

from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import CustomerSeatsQueryBuilder
from pypolar.models.seats import (
    CustomerSeat,
    CustomerSeatAssignRequest,
    SeatClaimInfo,
    SeatClaimRequest,
    SeatResendInvitationRequest,
    SeatRevokeRequest,
)
from pypolar.services.base_resource import BaseResource
from pypolar.services.service_result import Result


class CustomerSeats(BaseResource):
    """
    Seats from the customer side, including claiming an invitation.

    Filters for list() and list_all(): customer_id, seat_id,
    subscription_id, status.
    """

    def query(self) -> CustomerSeatsQueryBuilder:
        return CustomerSeatsQueryBuilder()

    async def list(
        self,
        builder: Optional[CustomerSeatsQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[CustomerSeat]]:
        return await self._list(
            "/customer_seats", CustomerSeat, builder, page=page, limit=limit, **filters
        )

    def list_all(
        self, builder: Optional[CustomerSeatsQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[CustomerSeat]]:
        return self._list_all("/customer_seats", CustomerSeat, builder, **filters)

    async def get(self, customer_seat_id: str) -> Result[CustomerSeat]:
        path = self._path("/customer_seats/{id}", id=customer_seat_id)
        if path.is_failure:
            return path
        return await self._get(path.value, CustomerSeat)

    async def assign(
        self, request: Union[CustomerSeatAssignRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send(
            "post", "/customer_seats/assign", request, CustomerSeatAssignRequest, None
        )

    async def revoke(
        self, request: Union[SeatRevokeRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send(
            "post", "/customer_seats/revoke", request, SeatRevokeRequest, None
        )

    async def resend_invitation(
        self, request: Union[SeatResendInvitationRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send(
            "post",
            "/customer_seats/resend_invitation",
            request,
            SeatResendInvitationRequest,
            None,
        )

    async def get_claim_info(
        self, invitation_token: Optional[str] = None
    ) -> Result[SeatClaimInfo]:
        params = self._merge_params(invitation_token=invitation_token)
        return await self._get("/customer_seats/claim_info", SeatClaimInfo, params=params)

    async def claim(
        self, request: Union[SeatClaimRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send(
            "post", "/customer_seats/claim", request, SeatClaimRequest, None
        )
