"""Shared domain error messages and error types."""


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
    """Domain conflict, such as uniqueness violations."""


class InvalidStateError(DomainError):
    """Cash register session lifecycle violated."""


class DataIntegrityError(DomainError):
    """Source records reference an inconsistent session or entity."""


class UnknownCurrencyError(DomainError):
    """Conversion requested for a currency code that is not registered."""


def session_not_found(session_id: int) -> str:
    """Return message for missing cash register session."""
    return f"Cash register session {session_id} not found"


def session_not_open(session_number: str, status: str) -> str:
    """Return message when closing a session that is not open."""
    return f"Session {session_number} is not open (status: {status})"


def session_already_open(session_number: str) -> str:
    """Return message when opening a second session."""
    return f"There is already an open session ({session_number})"


def record_session_mismatch(record_id: str, session_id: int, found: int | None) -> str:
    """Return message for a record that belongs to another session."""
    return (
        f"Record {record_id} belongs to session {found}, "
        f"not to session {session_id}"
    )


def record_entity_mismatch(record_id: str, entity: str, expected: int, found: int | None) -> str:
    """Return message for an invoice or payment attached to another entity."""
    return f"Record {record_id} references {entity} {found}, expected {entity} {expected}"


def entity_not_found(entity: str, entity_id: int) -> str:
    """Return message for a missing customer or supplier."""
    return f"{entity.capitalize()} {entity_id} not found"


def balance_mismatch(entity: str, entity_id: int, stored: int, computed: int) -> str:
    """Return message when the stored balance disagrees with the ledger."""
    return (
        f"{entity.capitalize()} {entity_id} has stored balance {stored} "
        f"but its ledger sums to {computed}"
    )


def unknown_currency(code: str) -> str:
    """Return message for an unregistered currency code."""
    return f"Currency '{code}' is not registered"
