"""
Uploaded file history model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Enum, Text
import enum
from atelier.database import Base


class UploadStatus(str, enum.Enum):
    """Upload status enumeration."""
    completed = "completed"
    failed = "failed"


class UploadedFile(Base):
    """Record of a statement upload attempt."""

    __tablename__ = "uploaded_files"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    file_name = Column(String(255), nullable=False)
    statement_id = Column(String(32), nullable=True)
    status = Column(Enum(UploadStatus), nullable=False)
    transaction_count = Column(Integer, default=0, nullable=False)
    replaced_file_name = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)
    uploaded_by = Column(String(255), nullable=True)
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)
