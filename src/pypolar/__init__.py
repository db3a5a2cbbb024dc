"""Typed asyncio client for the Polar API."""

from pypolar.clients.base_client import PolarClient
from pypolar.config.settings import AppConfig, ConfigurationError, get_settings
from pypolar.models.common import ExportFormat
from pypolar.models.pagination import PaginatedResponse, PaginationInfo
from pypolar.models.query_builder import QueryBuilder
from pypolar.services.errors import (
    ApiError,
    ErrorKind,
    FieldError,
    PolarApiError,
    TransportError,
)
from pypolar.services.paginator import paginate
from pypolar.services.service_result import Result, ResultAccessError
