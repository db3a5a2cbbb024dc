from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from pypolar.models.base import Base, RequestModel
from pypolar.models.common import Metadata


class BenefitType(str, Enum):
    DOWNLOADABLES = "downloadables"
    LICENSE_KEYS = "license_keys"
    CUSTOM = "custom"
    GITHUB_REPOSITORY = "github_repository"
    DISCORD = "discord"
    ADVERTISEMENT = "advertisement"
    TIME = "time"
    USAGE = "usage"
    METER_CREDIT = "meter_credit"


class BenefitGrantStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    REVOKED = "revoked"


class Benefit(Base):
    """A benefit granted to customers through products and subscriptions."""

    id: str
    type: BenefitType
    description: Optional[str] = None
    name: Optional[str] = None
    organization_id: Optional[str] = None
    active: bool = True
    selectable: bool = False
    deletable: Optional[bool] = None
    time_period: Optional[str] = None
    usage_limit: Optional[int] = None
    properties: Metadata = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class BenefitCreateRequest(RequestModel):
    type: BenefitType
    description: str = Field(..., min_length=3, max_length=42)
    name: Optional[str] = None
    organization_id: Optional[str] = None
    selectable: Optional[bool] = None
    time_period: Optional[str] = None
    usage_limit: Optional[int] = Field(None, ge=0)
    properties: Optional[Metadata] = None
    metadata: Optional[Metadata] = None


class BenefitUpdateRequest(RequestModel):
    """Partial update: only the fields you set are sent."""

    description: Optional[str] = Field(None, min_length=3, max_length=42)
    name: Optional[str] = None
    active: Optional[bool] = None
    selectable: Optional[bool] = None
    time_period: Optional[str] = None
    usage_limit: Optional[int] = Field(None, ge=0)
    properties: Optional[Metadata] = None
    metadata: Optional[Metadata] = None


class BenefitGrant(Base):
    id: str
    benefit_id: str
    customer_id: Optional[str] = None
    order_id: Optional[str] = None
    subscription_id: Optional[str] = None
    status: Optional[BenefitGrantStatus] = None
    is_granted: Optional[bool] = None
    is_revoked: Optional[bool] = None
    granted_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    usage_count: Optional[int] = None
    properties: Metadata = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class BenefitGrantRequest(RequestModel):
    customer_id: str = Field(..., min_length=1)
    order_id: Optional[str] = None
    subscription_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    metadata: Optional[Metadata] = None
