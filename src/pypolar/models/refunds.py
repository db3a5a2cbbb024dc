from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field, model_validator

from pypolar.models.base import Base, RequestModel
from pypolar.models.common import Metadata


class RefundStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"


class RefundReason(str, Enum):
    DUPLICATE = "duplicate"
    FRAUDULENT = "fraudulent"
    CUSTOMER_REQUEST = "customer_request"
    SERVICE_DISRUPTION = "service_disruption"
    SATISFACTION_GUARANTEE = "satisfaction_guarantee"
    OTHER = "other"


class Refund(Base):
    id: str
    amount: int = Field(..., description="Amount in the smallest currency unit, e.g. cents")
    currency: str
    status: RefundStatus
    reason: Optional[str] = None
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    subscription_id: Optional[str] = None
    customer_id: Optional[str] = None
    receipt_url: Optional[str] = None
    metadata: Metadata = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    @property
    def succeeded(self) -> bool:
        return self.status is RefundStatus.SUCCEEDED


class RefundCreateRequest(RequestModel):
    """Either payment_id or order_id identifies what is refunded."""

    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    amount: int = Field(..., ge=1)
    reason: Optional[RefundReason] = None
    comment: Optional[str] = None
    revoke_benefits: Optional[bool] = None
    metadata: Optional[Metadata] = None

    @model_validator(mode="after")
    def check_target(self) -> RefundCreateRequest:
        if not self.payment_id and not self.order_id:
            raise ValueError("Either payment_id or order_id is required")
        return self
