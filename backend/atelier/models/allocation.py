"""
Allocation database models.

Allocations reference transactions and projects by id only. Deleting either
side leaves the allocation in place.
"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, DateTime, Enum, Text, ForeignKey
from sqlalchemy.orm import relationship
import enum
from atelier.database import Base


class AllocationType(str, enum.Enum):
    """Allocation kind."""
    single = "single"
    prorated = "prorated"


class Allocation(Base):
    """Allocation of one transaction, either whole or prorated."""

    __tablename__ = "allocations"

    transaction_id = Column(String(300), primary_key=True)
    allocation_type = Column(Enum(AllocationType), nullable=False)
    project_id = Column(String(36), nullable=True)  # Only used by single allocations
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    splits = relationship(
        "ProratedSplit",
        back_populates="allocation",
        order_by="ProratedSplit.position",
        cascade="all, delete-orphan",
    )


class ProratedSplit(Base):
    """One row of a prorated allocation."""

    __tablename__ = "prorated_splits"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    allocation_id = Column(String(300), ForeignKey("allocations.transaction_id"), nullable=False, index=True)
    split_id = Column(String(64), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(Text, nullable=False, default="")
    project_id = Column(String(36), nullable=True)
    amount = Column(Float, nullable=False, default=0.0)

    # Relationships
    allocation = relationship("Allocation", back_populates="splits")
