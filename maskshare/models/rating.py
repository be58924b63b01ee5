"""
SQLModel-based Rating models

RatingBase (shared public fields)
    ├─> Ratings (database table)
    └─> RatingCreate/RatingResponse (API schemas, defined in maskshare/schemas)

Note: Ratings has a composite primary key (mask_id, google_id), so a user
holds at most one rating per mask. Posting again updates the existing row.
"""

from datetime import UTC, datetime

from sqlalchemy import Double, ForeignKeyConstraint, Index
from sqlmodel import Field, SQLModel


class RatingBase(SQLModel):
    """Base model with shared public fields for Ratings."""

    mask_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    google_id: str = Field(primary_key=True, max_length=128)
    rating: float = Field(default=0.0, sa_type=Double)


class Ratings(RatingBase, table=True):
    """Database table for mask ratings."""

    __tablename__ = "ratings"

    __table_args__ = (
        ForeignKeyConstraint(
            ["mask_id"],
            ["masks.mask_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_ratings_mask_id",
        ),
        ForeignKeyConstraint(
            ["google_id"],
            ["users.google_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_ratings_google_id",
        ),
        Index("fk_ratings_google_id", "google_id"),
    )

    posted_on: datetime = Field(default_factory=lambda: datetime.now(UTC))
