"""
Immutable builders that turn filter criteria into query parameters.

Every setter returns a new builder, so one base builder can be branched
freely. Setting the same filter twice keeps the last value but the position
of its first insertion. Values are serialized to their wire form only when
parameters are requested:

    booleans   -> "true" / "false"
    enums      -> lowercase value
    datetimes  -> "YYYY-MM-DDTHH:MM:SSZ" in UTC (naive values are taken as UTC)
    dates      -> "YYYY-MM-DD"
    lists      -> repeated parameters, order preserved

None, empty strings and empty lists are left out entirely.
"""

from __future__ import annotations
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypeVar, Union

from pypolar.models.benefits import BenefitGrantStatus, BenefitType
from pypolar.models.refunds import RefundStatus
from pypolar.models.seats import SeatStatus

QueryValue = Union[str, List[str]]
B = TypeVar("B", bound="QueryBuilder")


def serialize_value(value: Any) -> Optional[QueryValue]:
    """Wire form of a single filter value, None when it should be omitted."""
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [serialize_scalar(v) for v in value]
        items = [v for v in items if v is not None]
        return items or None
    return serialize_scalar(value)


def serialize_scalar(value: Any) -> Optional[str]:
    if value is None:
        return None
    # bool first, it is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value).lower()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    return text if text != "" else None


class QueryBuilder:
    """Generic builder; resource builders add named setters on top of with_param()."""

    def __init__(self, entries: Iterable[Tuple[str, Any]] = ()):
        self._entries: Tuple[Tuple[str, Any], ...] = tuple(entries)

    def with_param(self: B, name: str, value: Any) -> B:
        """Return a new builder with `name` set to `value`, replacing any earlier value."""
        entries = []
        replaced = False
        for key, current in self._entries:
            if key == name:
                if not replaced:
                    entries.append((name, value))
                    replaced = True
                continue
            entries.append((key, current))
        if not replaced:
            entries.append((name, value))
        return type(self)(entries)

    def without(self: B, name: str) -> B:
        return type(self)((k, v) for k, v in self._entries if k != name)

    def sorting(self: B, *fields: str) -> B:
        """Sort criteria such as "created_at" or "-created_at" (descending)."""
        return self.with_param("sorting", list(fields))

    def to_query_parameters(self) -> Dict[str, QueryValue]:
        params: Dict[str, QueryValue] = {}
        for name, value in self._entries:
            serialized = serialize_value(value)
            if serialized is not None:
                params[name] = serialized
        return params

    def to_params(self) -> List[Tuple[str, str]]:
        """Flat (name, value) pairs, lists expanded into repeated pairs."""
        pairs: List[Tuple[str, str]] = []
        for name, value in self.to_query_parameters().items():
            if isinstance(value, list):
                pairs.extend((name, v) for v in value)
            else:
                pairs.append((name, value))
        return pairs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryBuilder):
            return NotImplemented
        return self.to_query_parameters() == other.to_query_parameters()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_query_parameters()!r})"


class _OrganizationFilter:
    def with_organization_id(self, organization_id: Union[str, List[str]]):
        return self.with_param("organization_id", organization_id)


class _CreatedRangeFilter:
    def created_after(self, when: Union[datetime, date]):
        return self.with_param("created_after", when)

    def created_before(self, when: Union[datetime, date]):
        return self.with_param("created_before", when)


class BenefitsQueryBuilder(_OrganizationFilter, _CreatedRangeFilter, QueryBuilder):
    def with_type(self, benefit_type: Union[BenefitType, str]) -> BenefitsQueryBuilder:
        return self.with_param("type", benefit_type)

    def with_types(
        self, benefit_types: List[Union[BenefitType, str]]
    ) -> BenefitsQueryBuilder:
        return self.with_param("type", list(benefit_types))

    def with_active(self, active: bool) -> BenefitsQueryBuilder:
        return self.with_param("active", active)

    def with_selectable(self, selectable: bool) -> BenefitsQueryBuilder:
        return self.with_param("selectable", selectable)

    def with_query(self, query: str) -> BenefitsQueryBuilder:
        return self.with_param("query", query)


class BenefitGrantsQueryBuilder(QueryBuilder):
    def with_customer_id(self, customer_id: Union[str, List[str]]) -> BenefitGrantsQueryBuilder:
        return self.with_param("customer_id", customer_id)

    def with_status(
        self, status: Union[BenefitGrantStatus, str]
    ) -> BenefitGrantsQueryBuilder:
        return self.with_param("status", status)

    def with_is_granted(self, is_granted: bool) -> BenefitGrantsQueryBuilder:
        return self.with_param("is_granted", is_granted)


class CustomersQueryBuilder(_OrganizationFilter, _CreatedRangeFilter, QueryBuilder):
    def with_email(self, email: str) -> CustomersQueryBuilder:
        return self.with_param("email", email)

    def with_external_id(self, external_id: str) -> CustomersQueryBuilder:
        return self.with_param("external_id", external_id)

    def with_query(self, query: str) -> CustomersQueryBuilder:
        return self.with_param("query", query)


class RefundsQueryBuilder(_CreatedRangeFilter, QueryBuilder):
    def with_status(self, status: Union[RefundStatus, str]) -> RefundsQueryBuilder:
        return self.with_param("status", status)

    def with_order_id(self, order_id: Union[str, List[str]]) -> RefundsQueryBuilder:
        return self.with_param("order_id", order_id)

    def with_subscription_id(
        self, subscription_id: Union[str, List[str]]
    ) -> RefundsQueryBuilder:
        return self.with_param("subscription_id", subscription_id)

    def with_customer_id(self, customer_id: Union[str, List[str]]) -> RefundsQueryBuilder:
        return self.with_param("customer_id", customer_id)

    def with_succeeded(self, succeeded: bool) -> RefundsQueryBuilder:
        return self.with_param("succeeded", succeeded)

    def with_ids(self, ids: List[str]) -> RefundsQueryBuilder:
        return self.with_param("id", list(ids))


class SeatsQueryBuilder(QueryBuilder):
    def with_subscription_id(self, subscription_id: str) -> SeatsQueryBuilder:
        return self.with_param("subscription_id", subscription_id)

    def with_user_id(self, user_id: str) -> SeatsQueryBuilder:
        return self.with_param("user_id", user_id)

    def with_email(self, email: str) -> SeatsQueryBuilder:
        return self.with_param("email", email)

    def with_status(self, status: Union[SeatStatus, str]) -> SeatsQueryBuilder:
        return self.with_param("status", status)


class CustomerSeatsQueryBuilder(QueryBuilder):
    def with_customer_id(self, customer_id: str) -> CustomerSeatsQueryBuilder:
        return self.with_param("customer_id", customer_id)

    def with_seat_id(self, seat_id: str) -> CustomerSeatsQueryBuilder:
        return self.with_param("seat_id", seat_id)

    def with_subscription_id(self, subscription_id: str) -> CustomerSeatsQueryBuilder:
        return self.with_param("subscription_id", subscription_id)

    def with_status(self, status: Union[SeatStatus, str]) -> CustomerSeatsQueryBuilder:
        return self.with_param("status", status)


class MetersQueryBuilder(_OrganizationFilter, QueryBuilder):
    def with_query(self, query: str) -> MetersQueryBuilder:
        return self.with_param("query", query)

    def with_active(self, active: bool) -> MetersQueryBuilder:
        return self.with_param("is_active", active)


class CustomerMetersQueryBuilder(QueryBuilder):
    def with_customer_id(self, customer_id: Union[str, List[str]]) -> CustomerMetersQueryBuilder:
        return self.with_param("customer_id", customer_id)

    def with_external_customer_id(
        self, external_customer_id: Union[str, List[str]]
    ) -> CustomerMetersQueryBuilder:
        return self.with_param("external_customer_id", external_customer_id)

    def with_meter_id(self, meter_id: Union[str, List[str]]) -> CustomerMetersQueryBuilder:
        return self.with_param("meter_id", meter_id)
