"""
SQLModel-based User models with inheritance for security

This module defines the Users database model using SQLModel, which combines
SQLAlchemy and Pydantic functionality. The inheritance structure is:

UserBase (shared public fields)
    ├─> Users (database table, adds keys, permissions and timestamps)
    └─> UserCreate/UserResponse (API schemas, defined in maskshare/schemas)

Users are keyed by the external identity string supplied by the client
(``google_id``). The identity is trusted as-is; nothing here verifies it.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class UserBase(SQLModel):
    """Base model with shared public fields for Users."""

    name: str = Field(max_length=255)
    photo_url: str | None = Field(default=None, max_length=2048)


class Users(UserBase, table=True):
    """
    Database table for users.

    Extends UserBase with:
    - Primary key (external identity string)
    - Permission flags checked before uploads, ratings and comments
    - Creation and last-access timestamps (last_access is bumped on every read)
    """

    __tablename__ = "users"

    google_id: str = Field(primary_key=True, max_length=128)

    # Permission flags
    can_comment: bool = Field(default=True)
    can_upload: bool = Field(default=True)

    creation_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_access: datetime = Field(default_factory=lambda: datetime.now(UTC))
