"""
Bank statement schemas.

`TransactionData` and `BankStatementData` are what the parser produces; they
are frozen so a parsed statement cannot be edited after the fact.
"""

from pydantic import BaseModel, Field
from typing import Optional, Tuple, List
from datetime import datetime

from atelier.schemas.allocation import Allocation


class TransactionData(BaseModel):
    id: str
    date: str
    description: str
    amount: float
    balance: float

    class Config:
        frozen = True
        from_attributes = True


class StatementPeriod(BaseModel):
    from_: str = Field(..., alias="from")
    to: str

    class Config:
        frozen = True
        populate_by_name = True


class BankStatementData(BaseModel):
    id: str
    file_name: str
    company_name: str
    account_number: str
    currency: str
    period: StatementPeriod
    transactions: Tuple[TransactionData, ...] = ()

    class Config:
        frozen = True


class StatementSummary(BaseModel):
    id: str
    file_name: str
    company_name: str
    account_number: str
    currency: str
    period: StatementPeriod
    transaction_count: int
    created_at: Optional[datetime] = None


class StatementTransactionResponse(BaseModel):
    id: str
    date: str
    description: str
    amount: float
    balance: float
    amount_display: str
    balance_display: str
    allocation: Optional[Allocation] = None
    allocation_label: str


class StatementDetailResponse(StatementSummary):
    transactions: List[StatementTransactionResponse]


class StatementList(BaseModel):
    items: List[StatementSummary]
    total: int


class StatementUploadResponse(BaseModel):
    statement: StatementSummary
    upload_id: str
    replaced_file_name: Optional[str] = None
