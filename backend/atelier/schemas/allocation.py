"""
Allocation schemas.

An allocation is either a whole assignment to one project (or to none) or a
prorated split across several. The two variants are discriminated by `type`.
"""

import uuid
from pydantic import BaseModel, Field
from typing import Annotated, Optional, List, Dict, Union, Literal


def new_split_id() -> str:
    return uuid.uuid4().hex


class ProratedSplitData(BaseModel):
    id: str = Field(default_factory=new_split_id)
    description: str = ""
    project_id: Optional[str] = None
    amount: float = Field(0.0, allow_inf_nan=False)

    class Config:
        frozen = True


class SingleAllocation(BaseModel):
    type: Literal["single"] = "single"
    project_id: Optional[str] = None

    class Config:
        frozen = True


class ProratedAllocation(BaseModel):
    type: Literal["prorated"] = "prorated"
    splits: List[ProratedSplitData]

    class Config:
        frozen = True


Allocation = Annotated[
    Union[SingleAllocation, ProratedAllocation],
    Field(discriminator="type"),
]


class AllocationResponse(BaseModel):
    transaction_id: str
    allocation: Optional[Allocation] = None
    label: str


class AllocationList(BaseModel):
    items: Dict[str, Allocation]
    total: int


class SplitPreviewRequest(BaseModel):
    splits: List[ProratedSplitData]


class SplitEditorState(BaseModel):
    transaction_id: str
    transaction_amount: float
    splits: List[ProratedSplitData]
    total: float
    remaining: float
    remaining_display: str
    can_save: bool
