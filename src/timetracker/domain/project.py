"""Project domain service."""

import logging
from typing import Optional

from timetracker.domain.entities import TimeSheet
from timetracker.domain.errors import ConflictError, ValidationError, ledger_already_exists
from timetracker.storage.base import LedgerStore

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for creating and configuring the project ledger."""

    def __init__(self, store: LedgerStore):
        """Initialize project service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def init_project(
        self, name: str, hourly_rate: Optional[float] = None, force: bool = False
    ) -> TimeSheet:
        """Create a new, empty time sheet.

        Args:
            name: Project name
            hourly_rate: Optional hourly rate; None tracks time without cost
            force: Overwrite an existing time sheet

        Returns:
            The new time sheet

        Raises:
            ValidationError: If name is empty or rate is negative
            ConflictError: If a time sheet already exists and force is False
        """
        if not name or not name.strip():
            raise ValidationError("Project name must not be empty")
        if hourly_rate is not None and hourly_rate < 0:
            raise ValidationError(f"Hourly rate must not be negative, got {hourly_rate}")
        if not force and self.store.exists():
            raise ConflictError(ledger_already_exists(self.store.location))

        time_sheet = TimeSheet(project_name=name, hourly_rate=hourly_rate)
        self.store.save(time_sheet)
        logger.info("Initialized project %r at %s", name, self.store.location)
        return time_sheet

    def get_time_sheet(self) -> TimeSheet:
        """Load the current time sheet."""
        return self.store.load()

    def set_hourly_rate(self, hourly_rate: Optional[float]) -> TimeSheet:
        """Change or clear the hourly rate.

        Args:
            hourly_rate: New rate, or None to stop tracking cost

        Raises:
            ValidationError: If rate is negative
        """
        if hourly_rate is not None and hourly_rate < 0:
            raise ValidationError(f"Hourly rate must not be negative, got {hourly_rate}")

        time_sheet = self.store.load()
        time_sheet.hourly_rate = hourly_rate
        self.store.save(time_sheet)
        logger.info("Set hourly rate of %r to %s", time_sheet.project_name, hourly_rate)
        return time_sheet
