"""
Pydantic schemas package.
"""

from atelier.schemas.allocation import (
    Allocation,
    SingleAllocation,
    ProratedAllocation,
    ProratedSplitData,
    AllocationResponse,
    AllocationList,
    SplitPreviewRequest,
    SplitEditorState,
)
from atelier.schemas.client import (
    ClientBase,
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientList,
)
from atelier.schemas.project import (
    ProjectBase,
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectList,
)
from atelier.schemas.statement import (
    TransactionData,
    StatementPeriod,
    BankStatementData,
    StatementSummary,
    StatementTransactionResponse,
    StatementDetailResponse,
    StatementList,
    StatementUploadResponse,
)
from atelier.schemas.uploaded_file import UploadedFileResponse

__all__ = [
    "Allocation",
    "SingleAllocation",
    "ProratedAllocation",
    "ProratedSplitData",
    "AllocationResponse",
    "AllocationList",
    "SplitPreviewRequest",
    "SplitEditorState",
    "ClientBase",
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientList",
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectList",
    "TransactionData",
    "StatementPeriod",
    "BankStatementData",
    "StatementSummary",
    "StatementTransactionResponse",
    "StatementDetailResponse",
    "StatementList",
    "StatementUploadResponse",
    "UploadedFileResponse",
]
