"""
Comments API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.core.database import get_db
from maskshare.core.errors import BoundaryRoute
from maskshare.core.logging import bind_google_id, get_logger
from maskshare.models import Comments, Masks, Users
from maskshare.schemas.base import SuccessResponse
from maskshare.schemas.comment import CommentCreate, CommentResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"], route_class=BoundaryRoute)


@router.post("", response_model=SuccessResponse)
async def post_comment(
    comment_data: CommentCreate, db: AsyncSession = Depends(get_db)
) -> SuccessResponse:
    """Comment on a mask. The commenter needs comment permission."""
    bind_google_id(comment_data.google_id)

    if not await db.get(Masks, comment_data.mask_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mask not found")

    user = await db.get(Users, comment_data.google_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not user.can_comment:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User is not allowed to comment"
        )

    comment = Comments(
        mask_id=comment_data.mask_id,
        google_id=comment_data.google_id,
        comment=comment_data.comment,
    )
    db.add(comment)
    await db.commit()
    await db.refresh(comment)

    logger.info("comment_posted", comment_id=comment.comment_id, mask_id=comment.mask_id)
    return SuccessResponse()


@router.get("", response_model=list[CommentResponse])
async def get_comments(
    mask_id: Annotated[int, Query(alias="maskId", ge=0)],
    db: AsyncSession = Depends(get_db),
) -> list[CommentResponse]:
    """Get every comment on a mask, newest first."""
    if not await db.get(Masks, mask_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mask not found")

    result = await db.execute(
        select(Comments)
        .where(Comments.mask_id == mask_id)  # type: ignore[arg-type]
        .order_by(desc(Comments.posted_on), desc(Comments.comment_id))  # type: ignore[arg-type]
    )
    return [CommentResponse.model_validate(comment) for comment in result.scalars().all()]
