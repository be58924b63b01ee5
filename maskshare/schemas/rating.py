"""
Pydantic schemas for Rating endpoints
"""

from pydantic import Field, field_validator

from maskshare.config import settings
from maskshare.schemas.base import CamelModel, UTCDatetime


class RatingCreate(CamelModel):
    """Schema for posting (or replacing) a rating"""

    mask_id: int = Field(ge=0)
    google_id: str = Field(min_length=1, max_length=128)
    rating: float

    @field_validator("rating")
    @classmethod
    def check_range(cls, v: float) -> float:
        """Ratings must fall inside the configured scale."""
        if not settings.RATING_MIN <= v <= settings.RATING_MAX:
            raise ValueError(f"must be between {settings.RATING_MIN} and {settings.RATING_MAX}")
        return v


class RatingResponse(CamelModel):
    """A single user's rating of a mask"""

    mask_id: int
    google_id: str
    rating: float
    posted_on: UTCDatetime
