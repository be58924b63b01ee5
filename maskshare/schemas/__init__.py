"""
Pydantic schemas for API responses and requests
"""

from maskshare.schemas.base import CamelModel, SuccessResponse, UTCDatetime
from maskshare.schemas.comment import CommentCreate, CommentResponse
from maskshare.schemas.mask import MaskCreate, MaskCreateResponse, MaskListResponse, MaskResponse
from maskshare.schemas.rating import RatingCreate, RatingResponse
from maskshare.schemas.report import ReportCreate
from maskshare.schemas.upload import UploadedFile, UploadResponse
from maskshare.schemas.user import UserCreate, UserResponse

__all__ = [
    "CamelModel",
    "SuccessResponse",
    "UTCDatetime",
    "UserCreate",
    "UserResponse",
    "MaskCreate",
    "MaskCreateResponse",
    "MaskResponse",
    "MaskListResponse",
    "RatingCreate",
    "RatingResponse",
    "CommentCreate",
    "CommentResponse",
    "ReportCreate",
    "UploadedFile",
    "UploadResponse",
]
