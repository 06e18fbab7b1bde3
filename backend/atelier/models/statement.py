"""
Bank statement and transaction database models.
"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from atelier.database import Base


class BankStatement(Base):
    """One uploaded cartola, keyed by its period start (fecha_desde)."""

    __tablename__ = "bank_statements"

    id = Column(String(32), primary_key=True)
    file_name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False, default="")
    account_number = Column(String(64), nullable=False, default="")
    currency = Column(String(16), nullable=False, default="")
    period_from = Column(String(32), nullable=False)
    period_to = Column(String(32), nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="statement",
        order_by="Transaction.position",
        cascade="all, delete-orphan",
    )


class Transaction(Base):
    """A movimiento from a statement. Id is "<file_name>-<position>"."""

    __tablename__ = "transactions"

    id = Column(String(300), primary_key=True)
    statement_id = Column(String(32), ForeignKey("bank_statements.id"), nullable=False)
    position = Column(Integer, nullable=False)
    date = Column(String(32), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    amount = Column(Float, nullable=False, default=0.0)  # Negative = giro, positive = abono
    balance = Column(Float, nullable=False, default=0.0)

    # Relationships
    statement = relationship("BankStatement", back_populates="transactions")

    __table_args__ = (
        Index("idx_transaction_statement_position", "statement_id", "position"),
    )
