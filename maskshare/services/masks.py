"""
Mask creation and listing helpers.

Mask ids are dense: a new mask takes the smallest non-negative integer that no
existing mask uses, so ids freed by manual cleanup are reused. Two creators can
pick the same id concurrently; the loser hits the primary key, rolls back and
scans again.
"""

from fastapi import HTTPException, status
from sqlalchemy import and_, asc, desc, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from maskshare.config import MaskSortField, SortDirection, settings
from maskshare.core.logging import get_logger
from maskshare.models import Masks, MaskTags
from maskshare.schemas.mask import MaskCreate

logger = get_logger(__name__)

SORT_COLUMNS = {
    MaskSortField.RATINGS_COUNT: Masks.ratings_count,
    MaskSortField.UPLOADED_ON: Masks.uploaded_on,
    MaskSortField.AVERAGE_RATING: Masks.average_rating,
    MaskSortField.MASK_NAME: Masks.name,
}


class MaskIdUnavailableError(RuntimeError):
    """Every attempt to claim a free mask id collided with another creator."""


def first_gap(sorted_ids: list[int]) -> int:
    """Return the smallest non-negative integer missing from ``sorted_ids``."""
    expected = 0
    for mask_id in sorted_ids:
        if mask_id != expected:
            break
        expected += 1
    return expected


async def next_free_mask_id(db: AsyncSession) -> int:
    """Scan existing mask ids in ascending order and return the first gap."""
    result = await db.execute(select(Masks.mask_id).order_by(asc(Masks.mask_id)))  # type: ignore[arg-type]
    return first_gap(list(result.scalars().all()))


async def create_mask(db: AsyncSession, data: MaskCreate) -> Masks:
    """
    Insert a mask under the next free id and index its tags.

    Commits on success. Retries with a fresh scan when the chosen id was taken
    between the scan and the insert.

    Raises:
        MaskIdUnavailableError: if every attempt collided
    """
    for attempt in range(1, settings.MASK_ID_MAX_ATTEMPTS + 1):
        mask_id = await next_free_mask_id(db)
        mask = Masks(
            mask_id=mask_id,
            mask_url=data.mask_url,
            name=data.name,
            description=data.description,
            images=list(data.images),
            tags=list(data.tags),
            uploader_google_id=data.uploader_google_id,
            average_rating=0.0,
            ratings_count=0,
        )
        db.add(mask)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.warning("mask_id_collision", mask_id=mask_id, attempt=attempt)
            continue

        # The id is claimed, so a failure indexing tags is not a collision
        db.add_all(MaskTags(mask_id=mask_id, tag=tag) for tag in data.tags)
        await db.commit()
        await db.refresh(mask)
        return mask

    raise MaskIdUnavailableError(
        f"Could not claim a mask id after {settings.MASK_ID_MAX_ATTEMPTS} attempts"
    )


def resolve_sort(sort_by: str | None, sort_direction: str | None) -> tuple[str, str]:
    """Map requested sort options onto supported ones, falling back to the defaults."""
    if sort_by not in MaskSortField.ALL:
        sort_by = MaskSortField.DEFAULT
    direction = (sort_direction or "").lower()
    if direction not in SortDirection.ALL:
        direction = SortDirection.DEFAULT
    return sort_by, direction  # type: ignore[return-value]


async def list_masks(
    db: AsyncSession,
    limit: int,
    sort_by: str,
    sort_direction: str,
    start_after: int | None = None,
    filter_tags: list[str] | None = None,
) -> list[Masks]:
    """
    Fetch one page of masks.

    Ordering is (sort field, mask_id), both in the requested direction, so the
    cursor is unambiguous when several masks share a sort value. ``start_after``
    is the mask_id of the last mask on the previous page. ``filter_tags``
    matches masks carrying any of the given tags.
    """
    column = SORT_COLUMNS[sort_by]
    order = desc if sort_direction == SortDirection.DESC else asc

    query = select(Masks)

    if filter_tags:
        tagged = select(MaskTags.mask_id).where(MaskTags.tag.in_(filter_tags))  # type: ignore[attr-defined]
        query = query.where(Masks.mask_id.in_(tagged))  # type: ignore[attr-defined]

    if start_after is not None:
        cursor_exists = await db.scalar(
            select(Masks.mask_id).where(Masks.mask_id == start_after)
        )
        if cursor_exists is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown startAfter mask: {start_after}",
            )
        cursor_row = aliased(Masks)
        # Read the cursor's sort value in SQL so floats are compared at column precision
        cursor_value = (
            select(getattr(cursor_row, column.key))
            .where(cursor_row.mask_id == start_after)
            .scalar_subquery()
        )
        if sort_direction == SortDirection.DESC:
            query = query.where(
                or_(
                    column < cursor_value,
                    and_(column == cursor_value, Masks.mask_id < start_after),
                )
            )
        else:
            query = query.where(
                or_(
                    column > cursor_value,
                    and_(column == cursor_value, Masks.mask_id > start_after),
                )
            )

    query = query.order_by(order(column), order(Masks.mask_id)).limit(limit)  # type: ignore[arg-type]
    result = await db.execute(query)
    return list(result.scalars().all())
