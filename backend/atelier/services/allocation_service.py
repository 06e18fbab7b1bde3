"""
Allocation model: which project(s) each transaction is charged to.

The store maps transaction id -> Allocation. A missing key means the
transaction is unassigned. Prorated allocations are only accepted when the
splits add up to the transaction amount within BALANCE_TOLERANCE.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Protocol

from sqlalchemy.orm import Session

from atelier.errors import AllocationImbalanceError, NotFoundError, transaction_not_found
from atelier.models.allocation import (
    Allocation as AllocationRow,
    AllocationType,
    ProratedSplit as ProratedSplitRow,
)
from atelier.schemas.allocation import (
    Allocation,
    ProratedAllocation,
    ProratedSplitData,
    SingleAllocation,
)
from atelier.schemas.statement import TransactionData

logger = logging.getLogger(__name__)

# Currency math in floating point; sums within a cent are considered equal.
BALANCE_TOLERANCE = 0.01

UNASSIGNED_LABEL = "Sin Asignar"
PRORATED_LABEL = "Prorrateado"
PROJECT_NOT_FOUND_LABEL = "Proyecto no encontrado"


def splits_total(splits: Iterable[ProratedSplitData]) -> float:
    return sum(split.amount for split in splits)


def remaining_amount(transaction_amount: float, splits: Iterable[ProratedSplitData]) -> float:
    """Amount of the transaction not yet covered by the splits."""
    return transaction_amount - splits_total(splits)


def is_balanced(transaction_amount: float, splits: Iterable[ProratedSplitData]) -> bool:
    return abs(remaining_amount(transaction_amount, splits)) < BALANCE_TOLERANCE


class TransactionSource(Protocol):
    def get(self, transaction_id: str) -> Optional[TransactionData]:
        ...


class AllocationRepository(ABC):
    """Keyed store of allocations. Writes replace the previous value."""

    @abstractmethod
    def get(self, transaction_id: str) -> Optional[Allocation]:
        pass

    @abstractmethod
    def save(self, transaction_id: str, allocation: Allocation) -> None:
        pass

    @abstractmethod
    def all(self) -> Dict[str, Allocation]:
        pass


class InMemoryAllocationRepository(AllocationRepository):
    """Dict-backed repository, used by tests and scripts."""

    def __init__(self, initial: Optional[Dict[str, Allocation]] = None):
        self._items: Dict[str, Allocation] = dict(initial or {})

    def get(self, transaction_id: str) -> Optional[Allocation]:
        return self._items.get(transaction_id)

    def save(self, transaction_id: str, allocation: Allocation) -> None:
        self._items[transaction_id] = allocation

    def all(self) -> Dict[str, Allocation]:
        return dict(self._items)


def _to_schema(row: AllocationRow) -> Allocation:
    if row.allocation_type == AllocationType.single:
        return SingleAllocation(project_id=row.project_id)
    if row.allocation_type == AllocationType.prorated:
        return ProratedAllocation(splits=[
            ProratedSplitData(
                id=split.split_id,
                description=split.description,
                project_id=split.project_id,
                amount=split.amount,
            )
            for split in row.splits
        ])
    raise TypeError(f"Unknown allocation type: {row.allocation_type!r}")


class SqlAllocationRepository(AllocationRepository):
    """Repository backed by the allocations / prorated_splits tables."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, transaction_id: str) -> Optional[Allocation]:
        row = self.db.query(AllocationRow).filter(
            AllocationRow.transaction_id == transaction_id
        ).first()
        return _to_schema(row) if row else None

    def save(self, transaction_id: str, allocation: Allocation) -> None:
        row = self.db.query(AllocationRow).filter(
            AllocationRow.transaction_id == transaction_id
        ).first()
        if row is None:
            row = AllocationRow(transaction_id=transaction_id)
            self.db.add(row)

        # Replace the previous allocation entirely, single or prorated
        row.splits = []
        if isinstance(allocation, SingleAllocation):
            row.allocation_type = AllocationType.single
            row.project_id = allocation.project_id
        elif isinstance(allocation, ProratedAllocation):
            row.allocation_type = AllocationType.prorated
            row.project_id = None
            row.splits = [
                ProratedSplitRow(
                    split_id=split.id,
                    position=position,
                    description=split.description,
                    project_id=split.project_id,
                    amount=split.amount,
                )
                for position, split in enumerate(allocation.splits)
            ]
        else:
            raise TypeError(f"Unknown allocation variant: {type(allocation).__name__}")

        self.db.commit()

    def all(self) -> Dict[str, Allocation]:
        rows = self.db.query(AllocationRow).all()
        return {row.transaction_id: _to_schema(row) for row in rows}


class AllocationService:
    """Service for reading and writing transaction allocations."""

    def __init__(self, repository: AllocationRepository, transactions: TransactionSource):
        """Initialize allocation service.

        Args:
            repository: Where allocations are stored
            transactions: Lookup used to check prorated totals
        """
        self.repository = repository
        self.transactions = transactions

    def get(self, transaction_id: str) -> Optional[Allocation]:
        return self.repository.get(transaction_id)

    def all(self) -> Dict[str, Allocation]:
        return self.repository.all()

    def set_single(self, transaction_id: str, project_id: Optional[str]) -> SingleAllocation:
        """Assign the whole transaction to one project, or unassign it with None.

        Any previous allocation, including a prorated one, is overwritten.
        """
        allocation = SingleAllocation(project_id=project_id or None)
        self.repository.save(transaction_id, allocation)
        logger.info("Transaction %s assigned to project %s", transaction_id, allocation.project_id)
        return allocation

    def set_prorated(
        self,
        transaction_id: str,
        splits: List[ProratedSplitData]
    ) -> ProratedAllocation:
        """Split a transaction across projects.

        Args:
            transaction_id: Transaction to allocate
            splits: Full split list; replaces any previous allocation

        Returns:
            The stored allocation

        Raises:
            NotFoundError: If the transaction is unknown
            AllocationImbalanceError: If the splits do not add up to the
                transaction amount. Nothing is written in that case.
        """
        transaction = self.transactions.get(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if not is_balanced(transaction.amount, splits):
            remaining = remaining_amount(transaction.amount, splits)
            logger.warning(
                "Rejected prorate for %s: remaining %.4f", transaction_id, remaining
            )
            raise AllocationImbalanceError(transaction_id, remaining)

        allocation = ProratedAllocation(splits=list(splits))
        self.repository.save(transaction_id, allocation)
        logger.info("Transaction %s prorated across %d splits", transaction_id, len(splits))
        return allocation

    def display(self, allocation: Optional[Allocation], projects: Iterable) -> str:
        return display_allocation(allocation, projects)


def display_allocation(allocation: Optional[Allocation], projects: Iterable) -> str:
    """
    Short label for the allocation column.

    "[ABC]" for a single allocation to a known project, "Sin Asignar" when
    there is no allocation or no target, "Proyecto no encontrado" when the
    target project no longer exists, and "Prorrateado" for splits.
    `projects` is any iterable of objects with `id` and `display_id`.
    """
    if allocation is None:
        return UNASSIGNED_LABEL
    if isinstance(allocation, SingleAllocation):
        if allocation.project_id is None:
            return UNASSIGNED_LABEL
        for project in projects:
            if project.id == allocation.project_id:
                return f"[{project.display_id}]"
        return PROJECT_NOT_FOUND_LABEL
    if isinstance(allocation, ProratedAllocation):
        return PRORATED_LABEL
    raise TypeError(f"Unknown allocation variant: {type(allocation).__name__}")
