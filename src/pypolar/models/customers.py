from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from pypolar.models.base import Base, RequestModel
from pypolar.models.common import ExportFormat, Metadata


class Address(Base):
    line1: Optional[str] = None
    line2: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = Field(None, description="ISO 3166-1 alpha-2 country code")


class Customer(Base):
    id: str
    email: str
    name: Optional[str] = None
    external_id: Optional[str] = None
    email_verified: bool = False
    avatar_url: Optional[str] = None
    organization_id: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    metadata: Metadata = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class CustomerCreateRequest(RequestModel):
    email: EmailStr
    name: Optional[str] = None
    external_id: Optional[str] = None
    organization_id: Optional[str] = None
    avatar_url: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    metadata: Optional[Metadata] = None


class CustomerUpdateRequest(RequestModel):
    """Partial update: only the fields you set are sent."""

    email: Optional[EmailStr] = None
    name: Optional[str] = None
    external_id: Optional[str] = None
    avatar_url: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    metadata: Optional[Metadata] = None


class CustomerState(Base):
    """Aggregated view of what a customer currently has access to."""

    customer_id: Optional[str] = None
    id: Optional[str] = None
    has_active_subscriptions: Optional[bool] = None
    has_active_benefits: Optional[bool] = None
    active_subscriptions_count: Optional[int] = None
    active_benefits_count: Optional[int] = None
    total_orders_count: Optional[int] = None
    total_amount_spent: Optional[int] = None
    currency: Optional[str] = None
    last_order_at: Optional[datetime] = None
    last_subscription_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class CustomerBalance(Base):
    customer_id: Optional[str] = None
    balance: int = 0
    currency: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class CustomerExportRequest(RequestModel):
    format: ExportFormat = ExportFormat.CSV
    email: Optional[str] = None
    external_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
