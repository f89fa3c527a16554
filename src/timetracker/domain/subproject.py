"""Subproject domain service."""

import logging
from typing import Optional

from timetracker.domain.entities import Subproject
from timetracker.domain.errors import NotFoundError, ValidationError, subproject_not_found
from timetracker.storage.base import LedgerStore

logger = logging.getLogger(__name__)


class SubprojectService:
    """Service for managing subprojects within a time sheet."""

    def __init__(self, store: LedgerStore):
        """Initialize subproject service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def add_subproject(self, name: str, description: str) -> Subproject:
        """Add a new subproject.

        IDs are assigned sequentially and are never reassigned.

        Args:
            name: Name identifier for the subproject
            description: Description of the subproject

        Returns:
            The new subproject

        Raises:
            ValidationError: If name is empty
        """
        if not name or not name.strip():
            raise ValidationError("Subproject name must not be empty")

        time_sheet = self.store.load()
        subproject = Subproject(
            id=len(time_sheet.subprojects), name=name, description=description
        )
        time_sheet.subprojects.append(subproject)
        self.store.save(time_sheet)
        logger.info("Added subproject %d (%r)", subproject.id, name)
        return subproject

    def list_subprojects(self) -> list[Subproject]:
        """List all subprojects ordered by ID."""
        return sorted(self.store.load().subprojects, key=lambda s: s.id)

    def get_subproject(self, subproject_id: int) -> Optional[Subproject]:
        """Get subproject by ID.

        Returns:
            Subproject or None if not found
        """
        for subproject in self.store.load().subprojects:
            if subproject.id == subproject_id:
                return subproject
        return None

    def require_subproject(self, subproject_id: int) -> Subproject:
        """Get subproject by ID or raise NotFoundError."""
        subproject = self.get_subproject(subproject_id)
        if subproject is None:
            raise NotFoundError(subproject_not_found(subproject_id))
        return subproject
