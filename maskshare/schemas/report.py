"""
Pydantic schemas for Report endpoints
"""

from pydantic import Field, field_validator

from maskshare.schemas.base import CamelModel


class ReportCreate(CamelModel):
    """Schema for filing a report against any item"""

    reported_item_type: str = Field(min_length=1, max_length=50, description="mask, comment, user...")
    reported_item_id: str = Field(min_length=1, max_length=128)
    reporter_google_id: str = Field(min_length=1, max_length=128)
    reason: str = Field(min_length=1, max_length=255)
    description: str | None = None

    @field_validator("reported_item_id", mode="before")
    @classmethod
    def coerce_item_id(cls, v: object) -> object:
        """Accept numeric ids (mask ids are integers) as well as strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("reported_item_type", "reported_item_id", "reporter_google_id", "reason")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v
