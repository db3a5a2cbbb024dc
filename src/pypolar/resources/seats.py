from __future__ import annotations
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import SeatsQueryBuilder
from pypolar.models.seats import (
    ClaimedSubscription,
    Seat,
    SeatResendInvitationRequest,
    SeatRevokeRequest,
    SubscriptionSeatAssignRequest,
)
from pypolar.services.base_resource import BaseResource
from pypolar.services.errors import ApiError
from pypolar.services.service_result import Result

logger = logging.getLogger(__name__)

_CLAIMED = TypeAdapter(List[ClaimedSubscription])


class Seats(BaseResource):
    """
    Seats on seat-based subscriptions, managed by the organization.
    assign, revoke and resend_invitation succeed with Result.ok(None).

    Filters for list() and list_all(): subscription_id, user_id, email, status.
    """

    def query(self) -> SeatsQueryBuilder:
        return SeatsQueryBuilder()

    async def list(
        self,
        builder: Optional[SeatsQueryBuilder] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[Seat]]:
        return await self._list("/seats", Seat, builder, page=page, limit=limit, **filters)

    def list_all(
        self, builder: Optional[SeatsQueryBuilder] = None, **filters: Any
    ) -> AsyncIterator[Result[Seat]]:
        return self._list_all("/seats", Seat, builder, **filters)

    async def assign(
        self, request: Union[SubscriptionSeatAssignRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send(
            "post", "/seats/assign", request, SubscriptionSeatAssignRequest, None
        )

    async def revoke(
        self, request: Union[SeatRevokeRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send("post", "/seats/revoke", request, SeatRevokeRequest, None)

    async def resend_invitation(
        self, request: Union[SeatResendInvitationRequest, Dict[str, Any]]
    ) -> Result[None]:
        return await self._send(
            "post",
            "/seats/resend_invitation",
            request,
            SeatResendInvitationRequest,
            None,
        )

    async def list_claimed_subscriptions(self) -> Result[List[ClaimedSubscription]]:
        """Subscriptions whose seats were claimed; the endpoint is not paginated."""
        result = await self._make_request("get", "/seats/claimed_subscriptions")
        if result.is_failure:
            return result
        data = result.value
        # tolerate an envelope around the list
        if isinstance(data, dict) and "items" in data:
            data = data["items"]
        try:
            return Result.ok(_CLAIMED.validate_python(data or []))
        except ValidationError as e:
            logger.warning("Could not decode claimed subscriptions: %s", e)
            return Result.fail(
                ApiError.decode(
                    f"Could not decode claimed subscriptions: {e}", response_body=str(data)
                )
            )
