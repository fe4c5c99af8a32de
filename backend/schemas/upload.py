from typing import List, Optional
from datetime import datetime

from schemas.base import ORMBase


class UploadedFile(ORMBase):
    url: str
    filename: str
    original_name: str
    size: int


class SingleUploadResponse(UploadedFile):
    success: bool = True


class MultipleUploadResponse(ORMBase):
    success: bool = True
    files: List[UploadedFile]


class MediaFileResponse(ORMBase):
    id: int
    filename: str
    original_name: str
    mimetype: str
    size: int
    url: str
    uploaded_by: Optional[int] = None
    created_at: Optional[datetime] = None


class MediaListResponse(ORMBase):
    success: bool = True
    files: List[MediaFileResponse]
