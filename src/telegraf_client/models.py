"""
Pydantic data model for a single time-series point.

Construction checks value types; structural rules are enforced by the encoder.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator

# bool first so True never degrades to 1
FieldValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_nanoseconds(dt: datetime) -> int:
    """Epoch nanoseconds for a datetime; naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(microseconds=1) * 1000


class Measurement(BaseModel):
    """One data point: series name, tags, fields and optional timestamp."""

    model_config = ConfigDict(frozen=True)

    name: str
    tags: Dict[str, str] = Field(default_factory=dict)
    fields: Dict[str, FieldValue] = Field(default_factory=dict)
    timestamp: Optional[StrictInt] = None

    @field_validator("tags", "fields", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return {} if v is None else v

    @field_validator("timestamp", mode="before")
    @classmethod
    def _datetime_to_ns(cls, v):
        if isinstance(v, datetime):
            return to_nanoseconds(v)
        return v
