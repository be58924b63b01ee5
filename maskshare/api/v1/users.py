"""
Users API endpoints
"""

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.core.database import get_db
from maskshare.core.errors import BoundaryRoute
from maskshare.core.logging import bind_google_id, get_logger
from maskshare.models import Users
from maskshare.schemas.user import UserCreate, UserResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"], route_class=BoundaryRoute)


@router.post("", response_class=PlainTextResponse)
async def create_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)) -> str:
    """
    Register a user under their external identity.

    New users may comment and upload. Registering an identity that already
    exists fails with 400 and leaves the stored record untouched.
    """
    bind_google_id(user_data.google_id)

    existing = await db.get(Users, user_data.google_id)
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    now = datetime.now(UTC)
    user = Users(
        google_id=user_data.google_id,
        name=user_data.name,
        photo_url=user_data.photo_url,
        can_comment=True,
        can_upload=True,
        creation_date=now,
        last_access=now,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same identity
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists"
        ) from e

    logger.info("user_created")
    return "User created"


@router.get("")
async def get_user(
    google_id: Annotated[str, Query(alias="googleId", min_length=1)],
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """
    Get a user by identity.

    Returns an empty object (not 404) for unknown users. Reading a user
    records the access time.
    """
    user = await db.get(Users, google_id)
    if not user:
        return {}

    user.last_access = datetime.now(UTC)
    await db.commit()

    return UserResponse.model_validate(user).model_dump(mode="json", by_alias=True)
