"""Domain error types shared by parsers, services and the API layer."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a statement key that is already taken."""


class StatementParseError(DomainError):
    """The uploaded statement is malformed or lacks a required node."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name


class AllocationImbalanceError(ValidationError):
    """Prorated splits do not add up to the transaction amount."""

    def __init__(self, transaction_id: str, remaining: float):
        self.transaction_id = transaction_id
        self.remaining = remaining
        super().__init__(prorate_imbalance(transaction_id, remaining))


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def statement_not_found(statement_id: str) -> str:
    """Return message for missing statement."""
    return f"Statement {statement_id} not found"


def project_not_found(project_id: str) -> str:
    """Return message for missing project."""
    return f"Project {project_id} not found"


def client_not_found(client_id: str) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def statement_key_taken(statement_id: str, existing_file_name: str) -> str:
    """Return message when a statement with the same start date exists."""
    return (
        f"A statement starting {statement_id} already exists "
        f"(uploaded from '{existing_file_name}')"
    )


def prorate_imbalance(transaction_id: str, remaining: float) -> str:
    """Return message for a prorated allocation that does not balance."""
    return (
        f"Prorated splits for transaction {transaction_id} do not match the "
        f"transaction amount: remaining {remaining:.2f}"
    )
