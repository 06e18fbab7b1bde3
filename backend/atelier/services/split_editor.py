"""
Editing state for prorating one transaction.

Every edit produces a new split list; totals are derived from the current
list so they are always in step with it.
"""

import math
from typing import Any, List, Optional

from atelier.errors import AllocationImbalanceError
from atelier.schemas.allocation import (
    Allocation,
    ProratedAllocation,
    ProratedSplitData,
)
from atelier.schemas.statement import TransactionData
from atelier.services.allocation_service import (
    AllocationService,
    BALANCE_TOLERANCE,
    remaining_amount,
    splits_total,
)

_UNSET: Any = object()


def coerce_amount(value: Any) -> float:
    """Amount typed into the editor; anything unparseable counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def seed_splits(transaction: TransactionData, allocation: Optional[Allocation]) -> List[ProratedSplitData]:
    """Initial rows: the stored splits, or one row covering the whole amount."""
    if isinstance(allocation, ProratedAllocation) and allocation.splits:
        return list(allocation.splits)
    return [ProratedSplitData(
        description=transaction.description,
        project_id=None,
        amount=transaction.amount,
    )]


class SplitEditor:
    """In-progress prorating of a single transaction."""

    def __init__(self, transaction: TransactionData, splits: List[ProratedSplitData]):
        self.transaction = transaction
        self.splits: List[ProratedSplitData] = list(splits)

    @classmethod
    def open(cls, transaction: TransactionData, allocation: Optional[Allocation]) -> "SplitEditor":
        return cls(transaction, seed_splits(transaction, allocation))

    @property
    def total(self) -> float:
        return splits_total(self.splits)

    @property
    def remaining(self) -> float:
        return remaining_amount(self.transaction.amount, self.splits)

    @property
    def can_save(self) -> bool:
        return abs(self.remaining) < BALANCE_TOLERANCE

    def add_split(self) -> List[ProratedSplitData]:
        self.splits = self.splits + [ProratedSplitData(description="", project_id=None, amount=0.0)]
        return self.splits

    def remove_split(self, index: int) -> List[ProratedSplitData]:
        if not 0 <= index < len(self.splits):
            raise IndexError(f"No split at position {index}")
        self.splits = self.splits[:index] + self.splits[index + 1:]
        return self.splits

    def update_split(
        self,
        index: int,
        description: Any = _UNSET,
        project_id: Any = _UNSET,
        amount: Any = _UNSET,
    ) -> List[ProratedSplitData]:
        """Change one or more fields of the split at `index`.

        An empty project id means unassigned. Amounts go through
        coerce_amount, so bad input becomes 0 instead of an error.
        """
        if not 0 <= index < len(self.splits):
            raise IndexError(f"No split at position {index}")

        changes = {}
        if description is not _UNSET:
            changes["description"] = description or ""
        if project_id is not _UNSET:
            changes["project_id"] = project_id or None
        if amount is not _UNSET:
            changes["amount"] = coerce_amount(amount)

        updated = self.splits[index].model_copy(update=changes)
        self.splits = self.splits[:index] + [updated] + self.splits[index + 1:]
        return self.splits

    def save(self, service: AllocationService) -> ProratedAllocation:
        """Commit the split list as the transaction's allocation."""
        if not self.can_save:
            raise AllocationImbalanceError(self.transaction.id, self.remaining)
        return service.set_prorated(self.transaction.id, self.splits)
