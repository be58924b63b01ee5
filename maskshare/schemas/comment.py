"""
Pydantic schemas for Comment endpoints
"""

from pydantic import AliasChoices, Field, field_validator

from maskshare.schemas.base import CamelModel, UTCDatetime


class CommentCreate(CamelModel):
    """Schema for creating a new comment"""

    mask_id: int = Field(ge=0)
    google_id: str = Field(min_length=1, max_length=128)
    comment: str = Field(min_length=1)

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v: str) -> str:
        """Trim whitespace; a comment of only whitespace is empty."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class CommentResponse(CamelModel):
    """Schema for comment response - what API returns."""

    comment_id: int = Field(
        serialization_alias="id", validation_alias=AliasChoices("comment_id", "id")
    )
    mask_id: int
    google_id: str
    comment: str
    posted_on: UTCDatetime
