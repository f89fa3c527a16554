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
    """Domain conflict, such as an already initialized ledger."""


class StorageError(DomainError):
    """Ledger file is missing, unreadable or unwritable."""


class LedgerNotFoundError(StorageError):
    """No ledger file exists at the configured location."""


class SchemaError(DomainError):
    """Persisted ledger content does not match the expected structure."""


class TimeParseError(DomainError):
    """A supplied timestamp does not match the required format."""


class LifecycleError(DomainError):
    """Operation is invalid in the current session state."""


class AlreadyRunningError(LifecycleError):
    """A work session is already open."""


class NoRunningSessionError(LifecycleError):
    """There is no open work session."""


def ledger_not_found(path: str) -> str:
    """Return message for a missing ledger file."""
    return f"No time sheet found at '{path}'. Run 'timetracker init' first."


def ledger_already_exists(path: str) -> str:
    """Return message when init would overwrite an existing ledger."""
    return f"A time sheet already exists at '{path}'. Use --force to overwrite it."


def session_already_running(start: str) -> str:
    """Return message when a session is still open."""
    return f"Last work session (started {start}) not finished!"


def no_running_session() -> str:
    """Return message when there is nothing to stop."""
    return "No unfinished work session found to stop!"


def session_not_found(session_id: int) -> str:
    """Return message for missing work session by display ID."""
    return f"Work session {session_id} not found"


def subproject_not_found(subproject_id: int) -> str:
    """Return message for missing subproject."""
    return f"Subproject {subproject_id} not found"


def project_not_found(name: str, current: str) -> str:
    """Return message when a requested project is not the tracked one."""
    return f"Project '{name}' not found (this time sheet tracks '{current}')"


def invalid_timestamp(value: str, fmt: str) -> str:
    """Return message for a timestamp not matching the expected format."""
    return f"Could not parse '{value}': must comply with \"{fmt}\" format"
