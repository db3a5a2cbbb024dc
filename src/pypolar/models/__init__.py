from .base import Base, RequestModel
from .common import ExportFormat, ExportResponse, Metadata, MetadataValue
from .pagination import PaginatedResponse, PaginationInfo
from .query_builder import (
    BenefitGrantsQueryBuilder,
    BenefitsQueryBuilder,
    CustomerMetersQueryBuilder,
    CustomerSeatsQueryBuilder,
    CustomersQueryBuilder,
    MetersQueryBuilder,
    QueryBuilder,
    RefundsQueryBuilder,
    SeatsQueryBuilder,
)
from .benefits import (
    Benefit,
    BenefitCreateRequest,
    BenefitGrant,
    BenefitGrantRequest,
    BenefitGrantStatus,
    BenefitType,
    BenefitUpdateRequest,
)
from .customers import (
    Address,
    Customer,
    CustomerBalance,
    CustomerCreateRequest,
    CustomerExportRequest,
    CustomerState,
    CustomerUpdateRequest,
)
from .refunds import Refund, RefundCreateRequest, RefundReason, RefundStatus
from .seats import (
    ClaimedSubscription,
    CustomerSeat,
    CustomerSeatAssignRequest,
    Seat,
    SeatClaimInfo,
    SeatClaimRequest,
    SeatResendInvitationRequest,
    SeatRevokeRequest,
    SeatStatus,
    SubscriptionSeatAssignRequest,
)
from .meters import (
    CustomerMeter,
    Meter,
    MeterAggregationType,
    MeterCreateRequest,
    MeterQuantity,
    MeterUpdateRequest,
)
