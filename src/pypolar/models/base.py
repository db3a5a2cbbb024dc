from __future__ import annotations
from typing import Any, Dict, Iterable, List
from pydantic import BaseModel, ConfigDict
import pandas as pd


class Base(BaseModel):
    """
    Custom base model for every payload the API returns:
      - Ignores fields the client does not know about yet
      - Accepts both field names and aliases on input
      - Provides serialization to DataFrame
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def _get_serializable_fields(self) -> List[str]:
        """
        Return column names for serialization.
        Override this method in subclasses if you need custom field selection logic.
        """
        return [
            field_name
            for field_name in type(self).model_fields.keys()
            if not field_name.startswith("_")
        ]

    def to_row(self) -> Dict[str, Any]:
        """Flat mapping of the serializable fields, nested models dumped as dicts."""
        data = self.model_dump(mode="python")
        return {name: data.get(name) for name in self._get_serializable_fields()}

    def to_dataframe(self, **kwargs) -> pd.DataFrame:
        """
        Single-row DataFrame of this model, indexed by `id` when the model has one.
        """
        df = pd.DataFrame([self.to_row()], **kwargs)
        return _index_by_id(df, self.__class__.__name__.lower())

    @classmethod
    def collection_to_dataframe(cls, items: Iterable[Base], **kwargs) -> pd.DataFrame:
        rows = [item.to_row() for item in items]
        if not rows:
            columns = [
                name for name in cls.model_fields.keys() if not name.startswith("_")
            ]
            return pd.DataFrame(columns=columns, **kwargs)
        df = pd.DataFrame(rows, **kwargs)
        return _index_by_id(df, cls.__name__.lower())


class RequestModel(Base):
    """
    Base for request payloads. Unknown fields are rejected so typos surface
    as validation errors before anything is sent.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_payload(self, partial: bool = False) -> Dict[str, Any]:
        """
        JSON-ready body. A partial payload only carries the fields that were
        set explicitly, so None can still be sent to clear a value.
        """
        if partial:
            return self.model_dump(mode="json", exclude_unset=True)
        return self.model_dump(mode="json", exclude_none=True)


def _index_by_id(df: pd.DataFrame, name: str) -> pd.DataFrame:
    if "id" in df.columns:
        df = df.set_index("id")
    if df.index.name is None:
        df.index.name = name
    return df
