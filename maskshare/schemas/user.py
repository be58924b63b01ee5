"""
Pydantic schemas for User endpoints
"""

from pydantic import Field, field_validator

from maskshare.schemas.base import CamelModel, UTCDatetime


class UserCreate(CamelModel):
    """Schema for registering a user"""

    google_id: str = Field(min_length=1, max_length=128, description="External identity string")
    name: str = Field(min_length=1, max_length=255)
    photo_url: str | None = Field(default=None, max_length=2048)

    @field_validator("google_id", "name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class UserResponse(CamelModel):
    """Full user record"""

    google_id: str
    name: str
    photo_url: str | None = None
    can_comment: bool
    can_upload: bool
    creation_date: UTCDatetime
    last_access: UTCDatetime
