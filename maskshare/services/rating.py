"""
Rating service.

Posting a rating and refreshing the mask's aggregates happen in one
transaction. The mask row is locked first (SELECT ... FOR UPDATE), so two
users rating the same mask at once are serialized and the stored average and
count always match the ratings table.
"""

from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.core.logging import get_logger
from maskshare.models import Masks, Ratings

logger = get_logger(__name__)


async def recalculate_mask_rating(db: AsyncSession, mask: Masks) -> None:
    """
    Recompute average_rating and ratings_count for ``mask`` from its ratings.

    Does not commit. Pending rating changes must be flushed first.
    """
    stats_result = await db.execute(
        select(
            func.count(Ratings.rating),  # type: ignore[arg-type]
            func.avg(Ratings.rating),
        ).where(Ratings.mask_id == mask.mask_id)  # type: ignore[arg-type]
    )
    count, avg_rating = stats_result.one()

    mask.ratings_count = int(count or 0)
    mask.average_rating = float(avg_rating or 0.0)


async def upsert_rating(db: AsyncSession, mask_id: int, google_id: str, rating: float) -> bool:
    """
    Create or replace a user's rating of a mask and refresh the aggregates.

    Commits the transaction.

    Args:
        db: Database session
        mask_id: Mask being rated (must exist)
        google_id: Rating user (must exist)
        rating: New rating value

    Returns:
        True if a new rating row was created, False if an existing one was updated
    """
    mask_result = await db.execute(
        select(Masks)
        .where(Masks.mask_id == mask_id)  # type: ignore[arg-type]
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    mask = mask_result.scalar_one()

    existing = await db.get(Ratings, (mask_id, google_id))
    if existing:
        existing.rating = rating
        existing.posted_on = datetime.now(UTC)
        created = False
    else:
        db.add(Ratings(mask_id=mask_id, google_id=google_id, rating=rating))
        created = True

    await db.flush()
    await recalculate_mask_rating(db, mask)
    await db.commit()

    logger.info(
        "rating_posted",
        mask_id=mask_id,
        rating=rating,
        created=created,
        average_rating=mask.average_rating,
        ratings_count=mask.ratings_count,
    )
    return created
