from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from pypolar.models.base import Base, RequestModel
from pypolar.models.common import Metadata
from pypolar.models.customers import Customer


class MeterAggregationType(str, Enum):
    SUM = "sum"
    AVERAGE = "average"
    MAX = "max"
    MIN = "min"
    COUNT = "count"
    LATEST = "latest"


class Meter(Base):
    id: str
    name: str
    description: Optional[str] = None
    aggregation_type: Optional[MeterAggregationType] = None
    unit: Optional[str] = None
    is_active: bool = True
    organization_id: Optional[str] = None
    metadata: Metadata = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class MeterCreateRequest(RequestModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    aggregation_type: MeterAggregationType
    unit: Optional[str] = None
    organization_id: Optional[str] = None
    metadata: Optional[Metadata] = None


class MeterUpdateRequest(RequestModel):
    """Partial update: only the fields you set are sent."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    aggregation_type: Optional[MeterAggregationType] = None
    unit: Optional[str] = None
    is_active: Optional[bool] = None
    metadata: Optional[Metadata] = None


class MeterQuantity(Base):
    id: Optional[str] = None
    meter_id: Optional[str] = None
    customer_id: Optional[str] = None
    quantity: float = 0
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
    timestamp: Optional[datetime] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class CustomerMeter(Base):
    """Running consumption of one meter for one customer."""

    id: str
    meter_id: str
    customer_id: str
    current_quantity: Optional[float] = None
    consumed_units: Optional[float] = None
    credited_units: Optional[float] = None
    balance: Optional[float] = None
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
    meter: Optional[Meter] = None
    customer: Optional[Customer] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
