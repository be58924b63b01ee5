"""
SQLModel-based Comment models

CommentBase (shared public fields)
    ├─> Comments (database table, adds surrogate key and timestamp)
    └─> CommentCreate/CommentResponse (API schemas, defined in maskshare/schemas)

Comments use a single autoincrement surrogate key. Unlike masks, their ids are
never gap-filled.
"""

from datetime import UTC, datetime

from sqlalchemy import ForeignKeyConstraint, Index, Text
from sqlmodel import Field, SQLModel


class CommentBase(SQLModel):
    """Base model with shared public fields for Comments."""

    mask_id: int
    google_id: str = Field(max_length=128)
    comment: str = Field(sa_type=Text)


class Comments(CommentBase, table=True):
    """Database table for comments on masks."""

    __tablename__ = "comments"

    __table_args__ = (
        ForeignKeyConstraint(
            ["mask_id"],
            ["masks.mask_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_comments_mask_id",
        ),
        ForeignKeyConstraint(
            ["google_id"],
            ["users.google_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_comments_google_id",
        ),
        Index("idx_comments_mask_posted_on", "mask_id", "posted_on"),
        Index("fk_comments_google_id", "google_id"),
    )

    comment_id: int | None = Field(default=None, primary_key=True)

    posted_on: datetime = Field(default_factory=lambda: datetime.now(UTC))
