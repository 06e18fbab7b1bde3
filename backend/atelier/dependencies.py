"""
FastAPI dependencies.
"""

from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session
from atelier.database import SessionLocal
from atelier.services.allocation_service import AllocationService, SqlAllocationRepository
from atelier.services.statement_service import SqlTransactionLookup


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_allocation_service(db: Session = Depends(get_db)) -> AllocationService:
    """Allocation service bound to the request session."""
    return AllocationService(
        repository=SqlAllocationRepository(db),
        transactions=SqlTransactionLookup(db),
    )
