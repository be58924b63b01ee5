"""
Common query parameter models for API endpoints.

These Pydantic models are built by FastAPI dependencies, keeping the query
parsing out of the route bodies.
"""

from typing import Annotated

from fastapi import Query
from pydantic import BaseModel, Field

from maskshare.config import settings
from maskshare.services.masks import resolve_sort


class MaskListParams(BaseModel):
    """Normalized parameters for listing masks."""

    limit: int = Field(ge=1, le=settings.MAX_PAGE_SIZE)
    sort_by: str
    sort_direction: str
    start_after: int | None = None
    filter_tags: list[str] = Field(default_factory=list)


def get_mask_list_params(
    limit: Annotated[
        int, Query(ge=1, le=settings.MAX_PAGE_SIZE, description="Masks per page")
    ] = settings.DEFAULT_PAGE_SIZE,
    sort_by: Annotated[
        str | None,
        Query(
            alias="sortBy",
            description="ratingsCount, uploadedOn, averageRating or maskName (default ratingsCount)",
        ),
    ] = None,
    sort_direction: Annotated[
        str | None, Query(alias="sortDirection", description="asc or desc (default desc)")
    ] = None,
    start_after: Annotated[
        int | None,
        Query(alias="startAfter", ge=0, description="lastMaskId from the previous page"),
    ] = None,
    filter_tags: Annotated[
        list[str] | None,
        Query(alias="filterTags", description="Only masks with any of these tags"),
    ] = None,
) -> MaskListParams:
    """
    Collect getMasks query parameters.

    Unknown sortBy / sortDirection values fall back to the defaults instead of
    failing the request.
    """
    resolved_sort_by, resolved_direction = resolve_sort(sort_by, sort_direction)
    tags = [tag.strip() for tag in filter_tags or [] if tag.strip()]
    return MaskListParams(
        limit=limit,
        sort_by=resolved_sort_by,
        sort_direction=resolved_direction,
        start_after=start_after,
        filter_tags=list(dict.fromkeys(tags)),
    )
