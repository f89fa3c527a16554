"""Abstract ledger storage interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from timetracker.domain.entities import TimeSheet


class LedgerStore(ABC):
    """Abstract storage for a single time sheet.

    A store always reads and writes the complete ledger; there are no
    partial updates.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human readable location of the ledger (used in messages)."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a ledger has been initialized."""
        pass

    @abstractmethod
    def load(self) -> TimeSheet:
        """Load the complete ledger.

        Raises:
            LedgerNotFoundError: If no ledger exists
            StorageError: If the ledger cannot be read
            SchemaError: If the content does not decode to a ledger
        """
        pass

    @abstractmethod
    def save(self, time_sheet: TimeSheet) -> None:
        """Replace the stored ledger with ``time_sheet``.

        Raises:
            StorageError: If the ledger cannot be written
        """
        pass
