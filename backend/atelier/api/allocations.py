"""
Allocation API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from atelier.dependencies import get_db, get_allocation_service
from atelier.errors import AllocationImbalanceError, NotFoundError, transaction_not_found
from atelier.models import Project
from atelier.schemas.allocation import (
    Allocation,
    AllocationList,
    AllocationResponse,
    ProratedAllocation,
    SingleAllocation,
    SplitEditorState,
    SplitPreviewRequest,
)
from atelier.schemas.statement import TransactionData
from atelier.services.allocation_service import AllocationService, display_allocation
from atelier.services.split_editor import SplitEditor
from atelier.utils.formatting import format_clp

router = APIRouter(prefix="/allocations", tags=["allocations"])


class AllocationRequest(BaseModel):
    allocation: Allocation


def _require_transaction(service: AllocationService, transaction_id: str) -> TransactionData:
    transaction = service.transactions.get(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail=transaction_not_found(transaction_id))
    return transaction


def _editor_state(editor: SplitEditor) -> SplitEditorState:
    return SplitEditorState(
        transaction_id=editor.transaction.id,
        transaction_amount=editor.transaction.amount,
        splits=editor.splits,
        total=editor.total,
        remaining=editor.remaining,
        remaining_display=format_clp(editor.remaining),
        can_save=editor.can_save,
    )


@router.get("", response_model=AllocationList)
def list_allocations(
    service: AllocationService = Depends(get_allocation_service)
):
    """All allocations keyed by transaction id"""
    items = service.all()
    return AllocationList(items=items, total=len(items))


@router.get("/{transaction_id}", response_model=AllocationResponse)
def get_allocation(
    transaction_id: str,
    db: Session = Depends(get_db),
    service: AllocationService = Depends(get_allocation_service)
):
    """Allocation for one transaction; null when unassigned"""
    allocation = service.get(transaction_id)
    return AllocationResponse(
        transaction_id=transaction_id,
        allocation=allocation,
        label=display_allocation(allocation, db.query(Project).all()),
    )


@router.put("/{transaction_id}", response_model=AllocationResponse)
def set_allocation(
    transaction_id: str,
    request: AllocationRequest,
    db: Session = Depends(get_db),
    service: AllocationService = Depends(get_allocation_service)
):
    """Replace the allocation of a transaction"""
    allocation = request.allocation
    try:
        if isinstance(allocation, SingleAllocation):
            _require_transaction(service, transaction_id)
            stored = service.set_single(transaction_id, allocation.project_id)
        elif isinstance(allocation, ProratedAllocation):
            stored = service.set_prorated(transaction_id, allocation.splits)
        else:
            raise TypeError(f"Unknown allocation variant: {type(allocation).__name__}")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AllocationImbalanceError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "remaining": e.remaining}
        )

    return AllocationResponse(
        transaction_id=transaction_id,
        allocation=stored,
        label=display_allocation(stored, db.query(Project).all()),
    )


@router.get("/{transaction_id}/editor", response_model=SplitEditorState)
def open_split_editor(
    transaction_id: str,
    service: AllocationService = Depends(get_allocation_service)
):
    """Seeded rows for prorating a transaction"""
    transaction = _require_transaction(service, transaction_id)
    editor = SplitEditor.open(transaction, service.get(transaction_id))
    return _editor_state(editor)


@router.post("/{transaction_id}/preview", response_model=SplitEditorState)
def preview_splits(
    transaction_id: str,
    request: SplitPreviewRequest,
    service: AllocationService = Depends(get_allocation_service)
):
    """Totals for a candidate split list, without saving"""
    transaction = _require_transaction(service, transaction_id)
    return _editor_state(SplitEditor(transaction, request.splits))
