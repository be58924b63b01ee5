"""
SQLModel-based Mask models with inheritance for security

This module defines the Masks database model using SQLModel. The inheritance
structure is:

MaskBase (shared public fields)
    ├─> Masks (database table, adds id, list columns, rating aggregates, timestamps)
    └─> MaskCreate/MaskResponse (API schemas, defined in maskshare/schemas)

Note: mask_id is NOT autoincremented. New masks take the smallest free
non-negative integer (see maskshare.services.masks.next_free_mask_id).
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, Double, ForeignKeyConstraint, Index, Text
from sqlmodel import Field, SQLModel

TAG_MAX_LENGTH = 100


class MaskBase(SQLModel):
    """Base model with shared public fields for Masks."""

    mask_url: str = Field(max_length=2048)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, sa_type=Text)
    uploader_google_id: str = Field(max_length=128)


class Masks(MaskBase, table=True):
    """
    Database table for masks.

    Extends MaskBase with:
    - Gap-filled integer primary key
    - images / tags stored as JSON arrays (tags are also indexed in mask_tags)
    - Rating aggregates maintained by maskshare.services.rating
    - Timestamps and the removal flag
    """

    __tablename__ = "masks"

    __table_args__ = (
        ForeignKeyConstraint(
            ["uploader_google_id"],
            ["users.google_id"],
            onupdate="CASCADE",
            name="fk_masks_uploader_google_id",
        ),
        Index("idx_masks_ratings_count", "ratings_count"),
        Index("idx_masks_average_rating", "average_rating"),
        Index("idx_masks_uploaded_on", "uploaded_on"),
    )

    mask_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})

    images: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Rating aggregates
    average_rating: float = Field(default=0.0, sa_type=Double)
    ratings_count: int = Field(default=0)

    uploaded_on: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_accessed_on: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Reserved for moderation; no handler reads or writes it yet
    is_removed: bool = Field(default=False)


class MaskTags(SQLModel, table=True):
    """
    One row per (mask, tag) pair.

    Backs the "masks whose tags contain any of ..." filter, which a JSON
    column cannot answer portably.
    """

    __tablename__ = "mask_tags"

    __table_args__ = (
        ForeignKeyConstraint(
            ["mask_id"],
            ["masks.mask_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_mask_tags_mask_id",
        ),
        Index("idx_mask_tags_tag", "tag"),
    )

    mask_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    tag: str = Field(primary_key=True, max_length=TAG_MAX_LENGTH)
