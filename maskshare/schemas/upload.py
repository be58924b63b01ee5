"""
Pydantic schemas for the file upload endpoint
"""

from maskshare.schemas.base import CamelModel


class UploadedFile(CamelModel):
    """Where one uploaded file ended up"""

    fieldname: str
    original_name: str
    url: str


class UploadResponse(CamelModel):
    """Non-file form fields echoed back with the uploaded files"""

    fields: dict[str, str]
    files: list[UploadedFile]
