"""Work session lifecycle domain service.

A time sheet is either idle (no running session) or running (exactly one
session without a stop time). Every operation loads the whole time sheet,
validates the transition, mutates it in memory and saves it back. Validation
happens before anything is written, so a failed operation leaves the stored
ledger untouched.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from timetracker.domain.entities import TimeSheet, WorkSession
from timetracker.domain.errors import (
    AlreadyRunningError,
    NoRunningSessionError,
    NotFoundError,
    no_running_session,
    session_already_running,
    session_not_found,
)
from timetracker.storage.base import LedgerStore
from timetracker.utils.time_parser import format_timestamp, local_now, parse_timestamp

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _coerce_timestamp(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return parse_timestamp(value)


class SessionService:
    """Service for starting, stopping and recording work sessions."""

    def __init__(self, store: LedgerStore, clock: Clock = local_now):
        """Initialize session service.

        Args:
            store: Ledger store instance
            clock: Callable returning the current aware datetime
        """
        self.store = store
        self.clock = clock

    def start(self, description: Optional[str] = None, homeoffice: bool = False) -> WorkSession:
        """Start a new work session now.

        Args:
            description: Optional description of the work
            homeoffice: Whether the work happens in homeoffice

        Returns:
            The new running session

        Raises:
            AlreadyRunningError: If a session is still running
        """
        time_sheet = self.store.load()
        session = self._open(time_sheet, self.clock(), description, homeoffice)
        self.store.save(time_sheet)
        logger.info("Started work session at %s", format_timestamp(session.start))
        return session

    def stop(self, description: Optional[str] = None, homeoffice: bool = False) -> WorkSession:
        """Stop the running work session now.

        Args:
            description: Replaces the session description if given
            homeoffice: If True, marks the session as homeoffice. False never
                clears an existing mark.

        Returns:
            The closed session

        Raises:
            NoRunningSessionError: If no session is running
        """
        time_sheet = self.store.load()
        session = self._close(time_sheet, self.clock(), description, homeoffice)
        self.store.save(time_sheet)
        logger.info("Stopped work session at %s", format_timestamp(session.stop))
        return session

    def switch(
        self, description: Optional[str] = None, homeoffice: bool = False
    ) -> tuple[WorkSession, WorkSession]:
        """Stop the running session and immediately start the next one.

        The stopped session receives ``description`` and ``homeoffice`` as in
        :meth:`stop`; the new session starts at the same instant without a
        description and with the same homeoffice flag.

        Returns:
            Tuple of (stopped session, started session)

        Raises:
            NoRunningSessionError: If no session is running. Nothing is
                started in that case.
        """
        time_sheet = self.store.load()
        now = self.clock()
        stopped = self._close(time_sheet, now, description, homeoffice)
        started = self._open(time_sheet, now, None, homeoffice)
        self.store.save(time_sheet)
        logger.info("Switched work session at %s", format_timestamp(now))
        return stopped, started

    def insert_historical(
        self,
        start: str | datetime,
        stop: Optional[str | datetime] = None,
        description: Optional[str] = None,
        homeoffice: bool = False,
    ) -> WorkSession:
        """Record a session that was not tracked live.

        Args:
            start: Start time ("YYYY-MM-DD HH:MM" or aware datetime)
            stop: Optional stop time in the same format; None records a
                running session
            description: Optional description
            homeoffice: Whether the work happened in homeoffice

        Returns:
            The inserted session

        Raises:
            TimeParseError: If a timestamp is malformed
            AlreadyRunningError: If the inserted session has no stop time
                while another session is running
        """
        session = WorkSession(
            start=_coerce_timestamp(start),
            stop=_coerce_timestamp(stop) if stop is not None else None,
            description=description or "",
            homeoffice=homeoffice,
        )

        time_sheet = self.store.load()
        if session.is_open:
            self._ensure_idle(time_sheet)
        time_sheet.work_sessions.append(session)
        time_sheet.sort_sessions()
        self.store.save(time_sheet)
        logger.info("Added work session starting %s", format_timestamp(session.start))
        return session

    def edit(
        self,
        session_id: int,
        start: Optional[str | datetime] = None,
        stop: Optional[str | datetime] = None,
        description: Optional[str] = None,
        homeoffice: Optional[bool] = None,
    ) -> WorkSession:
        """Edit a recorded session.

        Args:
            session_id: Display ID of the session (its position in the report)
            start: New start time, if given
            stop: New stop time, if given
            description: New description, if given
            homeoffice: New homeoffice flag, if given

        Returns:
            The edited session

        Raises:
            NotFoundError: If no session has that ID
            TimeParseError: If a timestamp is malformed
        """
        changes: dict = {}
        if start is not None:
            changes["start"] = _coerce_timestamp(start)
        if stop is not None:
            changes["stop"] = _coerce_timestamp(stop)
        if description is not None:
            changes["description"] = description
        if homeoffice is not None:
            changes["homeoffice"] = homeoffice

        time_sheet = self.store.load()
        if not 0 <= session_id < len(time_sheet.work_sessions):
            raise NotFoundError(session_not_found(session_id))

        session = replace(time_sheet.work_sessions[session_id], **changes)
        time_sheet.work_sessions[session_id] = session
        time_sheet.sort_sessions()
        self.store.save(time_sheet)
        logger.info("Edited work session %d", session_id)
        return session

    def current(self) -> Optional[WorkSession]:
        """Return the running session, if any."""
        time_sheet = self.store.load()
        index = time_sheet.open_session_index()
        return time_sheet.work_sessions[index] if index is not None else None

    def _ensure_idle(self, time_sheet: TimeSheet) -> None:
        index = time_sheet.open_session_index()
        if index is not None:
            running = time_sheet.work_sessions[index]
            raise AlreadyRunningError(session_already_running(format_timestamp(running.start)))

    def _open(
        self,
        time_sheet: TimeSheet,
        now: datetime,
        description: Optional[str],
        homeoffice: bool,
    ) -> WorkSession:
        self._ensure_idle(time_sheet)
        session = WorkSession(start=now, description=description or "", homeoffice=homeoffice)
        time_sheet.work_sessions.append(session)
        return session

    def _close(
        self,
        time_sheet: TimeSheet,
        now: datetime,
        description: Optional[str],
        homeoffice: bool,
    ) -> WorkSession:
        index = time_sheet.open_session_index()
        if index is None:
            raise NoRunningSessionError(no_running_session())

        running = time_sheet.work_sessions[index]
        session = replace(
            running,
            stop=now,
            description=description if description is not None else running.description,
            homeoffice=running.homeoffice or homeoffice,
        )
        time_sheet.work_sessions[index] = session
        return session
