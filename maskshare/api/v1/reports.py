"""
Reports API endpoints

Reports are write-only: they are stored for moderators and never read back
through the API.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.core.database import get_db
from maskshare.core.errors import BoundaryRoute
from maskshare.core.logging import bind_google_id, get_logger
from maskshare.models import Reports
from maskshare.schemas.base import SuccessResponse
from maskshare.schemas.report import ReportCreate

logger = get_logger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"], route_class=BoundaryRoute)


@router.post("", response_model=SuccessResponse)
async def post_report(
    report_data: ReportCreate, db: AsyncSession = Depends(get_db)
) -> SuccessResponse:
    """
    Report a mask, comment or user.

    The reported item is not looked up, so reports about items that were never
    stored (or are gone) are accepted too.
    """
    bind_google_id(report_data.reporter_google_id)

    report = Reports(
        reported_item_type=report_data.reported_item_type,
        reported_item_id=report_data.reported_item_id,
        reporter_google_id=report_data.reporter_google_id,
        reason=report_data.reason,
        description=report_data.description,
    )
    db.add(report)
    await db.commit()
    await db.refresh(report)

    logger.info(
        "item_reported",
        report_id=report.report_id,
        reported_item_type=report.reported_item_type,
        reported_item_id=report.reported_item_id,
        reason=report.reason,
    )
    return SuccessResponse()
