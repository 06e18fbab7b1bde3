"""
Statement service for cartola uploads and lookups.
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from atelier.config import settings
from atelier.errors import (
    ConflictError,
    NotFoundError,
    StatementParseError,
    ValidationError,
    statement_key_taken,
    statement_not_found,
)
from atelier.models.statement import BankStatement, Transaction
from atelier.models.uploaded_file import UploadedFile, UploadStatus
from atelier.parsers.base import BaseParser
from atelier.parsers.xml_parser import CartolaXMLParser
from atelier.schemas.allocation import Allocation
from atelier.schemas.statement import (
    StatementDetailResponse,
    StatementPeriod,
    StatementSummary,
    StatementTransactionResponse,
    StatementUploadResponse,
    TransactionData,
)
from atelier.services.allocation_service import display_allocation
from atelier.utils.formatting import format_clp

logger = logging.getLogger(__name__)

PERIOD_DATE_FORMAT = "%d-%m-%Y"


def get_parser(file_name: str) -> Optional[BaseParser]:
    """Get appropriate parser for file type"""
    parsers = [CartolaXMLParser()]
    for parser in parsers:
        if parser.can_parse(file_name):
            return parser
    return None


def archive_upload(
    content: Union[str, bytes],
    file_name: str,
    upload_id: str,
    failed: bool = False
) -> Optional[Path]:
    """Keep a copy of the raw upload under the processed or failed directory"""
    if not settings.archive_uploads:
        return None

    target_dir = Path(settings.upload_failed_path if failed else settings.upload_processed_path)
    target_dir.mkdir(parents=True, exist_ok=True)

    file_path = target_dir / f"{upload_id}_{Path(file_name).name}"
    data = content.encode("utf-8") if isinstance(content, str) else content
    with open(file_path, 'wb') as f:
        f.write(data)
    return file_path


def _record_failure(
    db: Session,
    upload_id: str,
    file_name: str,
    content: Union[str, bytes],
    message: str,
    uploaded_by: Optional[str] = None,
    statement_id: Optional[str] = None,
) -> None:
    db.rollback()
    db.add(UploadedFile(
        id=upload_id,
        file_name=file_name,
        statement_id=statement_id,
        status=UploadStatus.failed,
        error_message=message,
        uploaded_by=uploaded_by,
    ))
    db.commit()
    archive_upload(content, file_name, upload_id, failed=True)


def import_statement(
    db: Session,
    content: Union[str, bytes],
    file_name: str,
    uploaded_by: Optional[str] = None,
    overwrite: Optional[bool] = None,
) -> StatementUploadResponse:
    """
    Parse an uploaded cartola and store it under its period start date.

    A statement already stored under the same start date is replaced when
    overwriting is allowed (the default, see settings.allow_statement_overwrite)
    and the replaced file name is reported back. Otherwise a ConflictError is
    raised and nothing changes. Allocations are keyed by transaction id and are
    left untouched either way.
    """
    parser = get_parser(file_name)
    if parser is None:
        raise ValidationError(f"No parser available for file: {file_name}")

    upload_id = str(uuid.uuid4())

    try:
        statement = parser.parse(content, file_name)
    except StatementParseError as e:
        logger.error(f"Statement upload failed: {e}")
        _record_failure(db, upload_id, file_name, content, str(e), uploaded_by)
        raise

    allow_overwrite = settings.allow_statement_overwrite if overwrite is None else overwrite
    replaced_file_name = None

    existing = db.query(BankStatement).filter(BankStatement.id == statement.id).first()
    if existing is not None:
        if not allow_overwrite:
            message = statement_key_taken(statement.id, existing.file_name)
            logger.warning(message)
            _record_failure(db, upload_id, file_name, content, message, uploaded_by, statement.id)
            raise ConflictError(message)

        replaced_file_name = existing.file_name
        logger.warning(
            "Statement %s from '%s' replaced by '%s'",
            statement.id, existing.file_name, file_name
        )
        db.delete(existing)
        db.flush()

    # Same file name under a different start date: the ids move to this statement
    transaction_ids = [txn.id for txn in statement.transactions]
    if transaction_ids:
        taken = db.query(Transaction).filter(Transaction.id.in_(transaction_ids)).all()
        for row in taken:
            logger.warning(
                "Transaction %s moved from statement %s to %s",
                row.id, row.statement_id, statement.id
            )
            db.delete(row)
        db.flush()

    statement_row = BankStatement(
        id=statement.id,
        file_name=statement.file_name,
        company_name=statement.company_name,
        account_number=statement.account_number,
        currency=statement.currency,
        period_from=statement.period.from_,
        period_to=statement.period.to,
        transactions=[
            Transaction(
                id=txn.id,
                position=position,
                date=txn.date,
                description=txn.description,
                amount=txn.amount,
                balance=txn.balance,
            )
            for position, txn in enumerate(statement.transactions)
        ],
    )
    db.add(statement_row)

    db.add(UploadedFile(
        id=upload_id,
        file_name=file_name,
        statement_id=statement.id,
        status=UploadStatus.completed,
        transaction_count=len(statement.transactions),
        replaced_file_name=replaced_file_name,
        uploaded_by=uploaded_by,
    ))
    db.commit()
    db.refresh(statement_row)

    archive_upload(content, file_name, upload_id)
    logger.info(
        "Imported statement %s from '%s' with %d transactions",
        statement.id, file_name, len(statement.transactions)
    )

    return StatementUploadResponse(
        statement=statement_summary(statement_row),
        upload_id=upload_id,
        replaced_file_name=replaced_file_name,
    )


def period_sort_key(period_from: str):
    """Order DD-MM-YYYY dates chronologically; unparseable ones sort last."""
    try:
        return (0, datetime.strptime(period_from, PERIOD_DATE_FORMAT), period_from)
    except ValueError:
        return (1, datetime.max, period_from)


def list_statements(db: Session) -> List[BankStatement]:
    """All statements, oldest period first"""
    statements = db.query(BankStatement).all()
    return sorted(statements, key=lambda s: period_sort_key(s.period_from))


def get_statement(db: Session, statement_id: str) -> BankStatement:
    statement = db.query(BankStatement).filter(BankStatement.id == statement_id).first()
    if statement is None:
        raise NotFoundError(statement_not_found(statement_id))
    return statement


def get_transaction(db: Session, transaction_id: str) -> Optional[TransactionData]:
    row = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    return TransactionData.model_validate(row) if row else None


class SqlTransactionLookup:
    """Transaction lookup for the allocation service."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, transaction_id: str) -> Optional[TransactionData]:
        return get_transaction(self.db, transaction_id)


def list_uploads(db: Session, limit: int = 20) -> List[UploadedFile]:
    return db.query(UploadedFile).order_by(UploadedFile.uploaded_at.desc()).limit(limit).all()


def statement_summary(statement: BankStatement) -> StatementSummary:
    return StatementSummary(
        id=statement.id,
        file_name=statement.file_name,
        company_name=statement.company_name,
        account_number=statement.account_number,
        currency=statement.currency,
        period=StatementPeriod(from_=statement.period_from, to=statement.period_to),
        transaction_count=len(statement.transactions),
        created_at=statement.created_at,
    )


def statement_detail(
    statement: BankStatement,
    allocations: Dict[str, Allocation],
    projects: Iterable,
) -> StatementDetailResponse:
    """Statement with each transaction's allocation and display strings"""
    projects = list(projects)
    summary = statement_summary(statement)
    transactions = []
    for txn in statement.transactions:
        allocation = allocations.get(txn.id)
        transactions.append(StatementTransactionResponse(
            id=txn.id,
            date=txn.date,
            description=txn.description,
            amount=txn.amount,
            balance=txn.balance,
            amount_display=format_clp(txn.amount),
            balance_display=format_clp(txn.balance),
            allocation=allocation,
            allocation_label=display_allocation(allocation, projects),
        ))
    return StatementDetailResponse(**summary.model_dump(by_alias=True), transactions=transactions)
