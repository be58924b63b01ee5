"""
Pydantic schemas for Mask endpoints
"""

from pydantic import AliasChoices, Field, field_validator

from maskshare.models.mask import TAG_MAX_LENGTH
from maskshare.schemas.base import CamelModel, UTCDatetime


class MaskCreate(CamelModel):
    """Schema for creating a mask"""

    mask_url: str = Field(min_length=1, max_length=2048)
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    images: list[str] = Field(min_length=1, description="Preview image URLs")
    tags: list[str] = Field(default_factory=list)
    uploader_google_id: str = Field(min_length=1, max_length=128)

    @field_validator("mask_url", "name", "uploader_google_id")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """
        Trim tags and drop blanks and duplicates while keeping order.

        Duplicates are matched ignoring case and the first spelling is kept.
        Tags longer than TAG_MAX_LENGTH after trimming are rejected.
        """
        seen: dict[str, str] = {}
        for tag in v:
            tag = tag.strip()
            if not tag:
                continue
            if len(tag) > TAG_MAX_LENGTH:
                raise ValueError(f"tags must be at most {TAG_MAX_LENGTH} characters")
            seen.setdefault(tag.casefold(), tag)
        return list(seen.values())


class MaskCreateResponse(CamelModel):
    """Response for a created mask"""

    success: bool = True
    mask_id: int


class MaskResponse(CamelModel):
    """Full mask record"""

    mask_id: int = Field(
        serialization_alias="id", validation_alias=AliasChoices("mask_id", "id")
    )
    mask_url: str
    name: str
    description: str | None = None
    images: list[str]
    tags: list[str]
    uploader_google_id: str
    average_rating: float
    ratings_count: int
    uploaded_on: UTCDatetime
    last_accessed_on: UTCDatetime
    is_removed: bool


class MaskListResponse(CamelModel):
    """One page of masks plus the cursor for the next page"""

    masks: list[MaskResponse]
    last_mask_id: int | None = Field(
        default=None, description="Pass as startAfter to fetch the next page"
    )
