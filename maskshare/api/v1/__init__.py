"""
API v1 Router
"""

from fastapi import APIRouter

from maskshare.api.v1 import comments, masks, ratings, reports, uploads, users

router = APIRouter()

# Include all endpoint routers
router.include_router(users.router)
router.include_router(uploads.router)
router.include_router(masks.router)
router.include_router(ratings.router)
router.include_router(comments.router)
router.include_router(reports.router)

__all__ = ["router"]
