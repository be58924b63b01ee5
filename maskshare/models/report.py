"""
SQLModel-based Report models

Reports are append-only. The reported item is referenced by type and id only;
there is no foreign key because any kind of item (mask, comment, user) can be
reported, and reports about items that no longer exist are still kept.
"""

from datetime import UTC, datetime

from sqlalchemy import Index, Text
from sqlmodel import Field, SQLModel


class ReportBase(SQLModel):
    """Base model with shared public fields for Reports."""

    reported_item_type: str = Field(max_length=50)
    reported_item_id: str = Field(max_length=128)
    reporter_google_id: str = Field(max_length=128)
    reason: str = Field(max_length=255)
    description: str | None = Field(default=None, sa_type=Text)


class Reports(ReportBase, table=True):
    """Database table for reports."""

    __tablename__ = "reports"

    __table_args__ = (Index("idx_reports_item", "reported_item_type", "reported_item_id"),)

    report_id: int | None = Field(default=None, primary_key=True)

    reported_on: datetime = Field(default_factory=lambda: datetime.now(UTC))
