"""
SQLModel tables for the document store.

Each module defines one collection. Importing this package registers every
table on SQLModel.metadata, which both Alembic and the test fixtures rely on.

For modifications:
1. Edit the appropriate model file in maskshare/models/
2. Create an Alembic migration to reflect the changes
"""

from maskshare.models.comment import Comments
from maskshare.models.mask import Masks, MaskTags
from maskshare.models.rating import Ratings
from maskshare.models.report import Reports
from maskshare.models.user import Users

__all__ = [
    "Users",
    "Masks",
    "MaskTags",
    "Ratings",
    "Comments",
    "Reports",
]
