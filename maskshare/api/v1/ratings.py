"""
Ratings API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.core.database import get_db
from maskshare.core.errors import BoundaryRoute
from maskshare.core.logging import bind_google_id
from maskshare.models import Masks, Ratings, Users
from maskshare.schemas.base import SuccessResponse
from maskshare.schemas.rating import RatingCreate, RatingResponse
from maskshare.services.rating import upsert_rating

router = APIRouter(prefix="/ratings", tags=["ratings"], route_class=BoundaryRoute)


@router.post("", response_model=SuccessResponse)
async def post_rating(
    rating_data: RatingCreate, db: AsyncSession = Depends(get_db)
) -> SuccessResponse:
    """
    Rate a mask.

    A user holds one rating per mask; rating again replaces the earlier value.
    The mask's averageRating and ratingsCount are refreshed in the same
    transaction.
    """
    bind_google_id(rating_data.google_id)

    mask = await db.get(Masks, rating_data.mask_id)
    if not mask:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mask not found")

    user = await db.get(Users, rating_data.google_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not user.can_comment:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User is not allowed to rate masks"
        )

    await upsert_rating(db, rating_data.mask_id, rating_data.google_id, rating_data.rating)
    return SuccessResponse()


@router.get("", response_model=RatingResponse)
async def get_rating(
    mask_id: Annotated[int, Query(alias="maskId", ge=0)],
    google_id: Annotated[str, Query(alias="googleId", min_length=1)],
    db: AsyncSession = Depends(get_db),
) -> RatingResponse:
    """Get one user's rating of a mask."""
    if not await db.get(Masks, mask_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mask not found")
    if not await db.get(Users, google_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    rating = await db.get(Ratings, (mask_id, google_id))
    if not rating:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rating not found")

    return RatingResponse.model_validate(rating)
