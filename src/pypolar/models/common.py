from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Union
from typing_extensions import TypeAliasType

from pypolar.models.base import Base

# Values allowed in metadata and benefit properties. Nested maps recurse,
# anything else (lists, arbitrary objects) is rejected during validation.
MetadataValue = TypeAliasType(
    "MetadataValue",
    Union[bool, int, float, str, None, Dict[str, "MetadataValue"]],
)
Metadata = Dict[str, MetadataValue]


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"


class ExportResponse(Base):
    """Location of a generated export file."""

    export_url: str
    size: Optional[int] = None
    record_count: Optional[int] = None
    format: Optional[ExportFormat] = None
    expires_at: Optional[datetime] = None
