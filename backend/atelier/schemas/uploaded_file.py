"""
Uploaded file schemas.
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from atelier.models.uploaded_file import UploadStatus


class UploadedFileResponse(BaseModel):
    id: str
    file_name: str
    statement_id: Optional[str]
    status: UploadStatus
    transaction_count: int
    replaced_file_name: Optional[str]
    error_message: Optional[str]
    uploaded_by: Optional[str]
    uploaded_at: datetime

    class Config:
        from_attributes = True
