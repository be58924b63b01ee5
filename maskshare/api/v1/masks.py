"""
Masks API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.api.dependencies import MaskListParams, get_mask_list_params
from maskshare.config import settings
from maskshare.core.database import get_db
from maskshare.core.errors import BoundaryRoute
from maskshare.core.logging import bind_google_id, get_logger
from maskshare.models import Masks, Users
from maskshare.schemas.mask import MaskCreate, MaskCreateResponse, MaskListResponse, MaskResponse
from maskshare.services.masks import create_mask, list_masks

logger = get_logger(__name__)

router = APIRouter(prefix="/masks", tags=["masks"], route_class=BoundaryRoute)


@router.post("", response_model=MaskCreateResponse)
async def create_mask_endpoint(
    mask_data: MaskCreate, db: AsyncSession = Depends(get_db)
) -> MaskCreateResponse:
    """
    Create a mask.

    The uploader must exist and be allowed to upload. The mask gets the
    smallest unused non-negative id; rating aggregates start at zero.
    """
    bind_google_id(mask_data.uploader_google_id)

    uploader = await db.get(Users, mask_data.uploader_google_id)
    if not uploader:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Uploader not found")
    if not uploader.can_upload:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User is not allowed to upload masks"
        )

    mask = await create_mask(db, mask_data)

    logger.info("mask_created", mask_id=mask.mask_id, tags=mask.tags)
    return MaskCreateResponse(mask_id=mask.mask_id)


@router.get("/detail", response_model=MaskResponse)
async def get_mask(
    mask_id: Annotated[int, Query(alias="maskId", ge=0)],
    db: AsyncSession = Depends(get_db),
) -> MaskResponse:
    """Get a single mask. Reading does not touch lastAccessedOn."""
    mask = await db.get(Masks, mask_id)
    if not mask:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mask not found")

    return MaskResponse.model_validate(mask)


@router.get("", response_model=MaskListResponse)
async def get_masks(
    params: Annotated[MaskListParams, Depends(get_mask_list_params)],
    db: AsyncSession = Depends(get_db),
) -> MaskListResponse:
    """
    List masks, one page at a time.

    **Supports:**
    - Sorting by ratingsCount (default), uploadedOn, averageRating or maskName
    - asc / desc (default desc); unknown values fall back to the defaults
    - Tag filtering: `?filterTags=cat&filterTags=dog` matches masks tagged with either
    - Cursor pagination: pass the returned `lastMaskId` as `startAfter`

    `lastMaskId` is null when the page is empty.
    """
    if len(params.filter_tags) > settings.MAX_FILTER_TAGS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.MAX_FILTER_TAGS} filterTags are allowed",
        )

    masks = await list_masks(
        db,
        limit=params.limit,
        sort_by=params.sort_by,
        sort_direction=params.sort_direction,
        start_after=params.start_after,
        filter_tags=params.filter_tags,
    )

    return MaskListResponse(
        masks=[MaskResponse.model_validate(mask) for mask in masks],
        last_mask_id=masks[-1].mask_id if masks else None,
    )
