"""
Base schema pieces shared by all request/response models.

- UTCDatetime serializes datetimes with a Z suffix indicating UTC.
- CamelModel exposes snake_case attributes under camelCase JSON keys, which is
  what the mobile client sends and expects (googleId, maskUrl, ...).
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Custom datetime type that serializes with Z suffix for UTC
# Usage: date: UTCDatetime instead of date: datetime
UTCDatetime = Annotated[
    datetime,
    PlainSerializer(
        lambda dt: dt.strftime("%Y-%m-%dT%H:%M:%SZ") if dt else None,
        return_type=str,
    ),
]


class CamelModel(BaseModel):
    """Pydantic model with camelCase aliases, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    """Envelope returned by write endpoints that have nothing else to report."""

    success: bool = True
