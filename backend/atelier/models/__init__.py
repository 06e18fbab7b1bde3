"""
Database models package.
"""

from atelier.models.client import Client
from atelier.models.project import Project, ProjectStatus
from atelier.models.statement import BankStatement, Transaction
from atelier.models.allocation import Allocation, AllocationType, ProratedSplit
from atelier.models.uploaded_file import UploadedFile, UploadStatus

__all__ = [
    "Client",
    "Project",
    "ProjectStatus",
    "BankStatement",
    "Transaction",
    "Allocation",
    "AllocationType",
    "ProratedSplit",
    "UploadedFile",
    "UploadStatus",
]
