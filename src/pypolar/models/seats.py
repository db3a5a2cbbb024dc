from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import EmailStr, Field

from pypolar.models.base import Base, RequestModel
from pypolar.models.common import Metadata
from pypolar.models.customers import Customer


class SeatStatus(str, Enum):
    ACTIVE = "active"
    INVITED = "invited"
    REVOKED = "revoked"


class Seat(Base):
    """A seat on a seat-based subscription, managed by the organization."""

    id: str
    subscription_id: Optional[str] = None
    customer_id: Optional[str] = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    status: SeatStatus
    invitation_token: Optional[str] = None
    invitation_expires_at: Optional[datetime] = None
    last_invited_at: Optional[datetime] = None
    customer: Optional[Customer] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class CustomerSeat(Seat):
    """A seat as seen from the customer portal."""


class SubscriptionSeatAssignRequest(RequestModel):
    subscription_id: str = Field(..., min_length=1)
    email: EmailStr
    metadata: Optional[Metadata] = None


class SeatRevokeRequest(RequestModel):
    subscription_id: str = Field(..., min_length=1)
    seat_id: str = Field(..., min_length=1)


class SeatResendInvitationRequest(RequestModel):
    subscription_id: str = Field(..., min_length=1)
    seat_id: str = Field(..., min_length=1)


class CustomerSeatAssignRequest(RequestModel):
    seat_id: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    email: EmailStr
    metadata: Optional[Metadata] = None


class SeatClaimRequest(RequestModel):
    invitation_token: str = Field(..., min_length=1)


class SeatClaimInfo(Base):
    seat_id: str
    customer_id: Optional[str] = None
    subscription_id: Optional[str] = None
    product_name: Optional[str] = None
    organization_name: Optional[str] = None
    invitation_token: Optional[str] = None
    invitation_expires_at: Optional[datetime] = None
    can_claim: Optional[bool] = None


class ClaimedSubscription(Base):
    subscription_id: str
    subscription_name: Optional[str] = None
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    available_seats: int = 0
    used_seats: int = 0
