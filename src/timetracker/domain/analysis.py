"""Time sheet analysis domain service.

Reports are never stored. They are re-derived from the recorded sessions
each time, evaluated at a given point in time so running sessions are
valued up to that moment.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional

from timetracker.domain.entities import (
    AnalysisReport,
    HomeofficeYear,
    SessionRow,
    TimeSheet,
    WorkSession,
)
from timetracker.domain.errors import NotFoundError, project_not_found
from timetracker.storage.base import LedgerStore
from timetracker.utils.text_wrap import DESCRIPTION_WIDTH, wrap_text
from timetracker.utils.time_parser import local_now, to_local

BILLED_TITLES = ("ID", "Start", "Stop", "Time [h]", "Cost [€]", "HO", "Description")
UNBILLED_TITLES = ("ID", "Start", "Stop", "Time [h]", "HO", "Description")


def effective_stop(session: WorkSession, now: datetime) -> datetime:
    """Stop time of a session, or ``now`` while it is still running."""
    return session.stop if session.stop is not None else now


def duration_hours(session: WorkSession, now: datetime) -> float:
    """Duration in hours, truncated to whole minutes."""
    minutes = int((effective_stop(session, now) - session.start) / timedelta(minutes=1))
    return minutes / 60


def session_cost(hours: float, hourly_rate: Optional[float]) -> Optional[float]:
    """Cost of the given hours, or None when no rate is configured."""
    if hourly_rate is None:
        return None
    return hours * hourly_rate


def homeoffice_dates(sessions: Iterable[WorkSession]) -> list[date]:
    """Distinct local calendar dates with at least one homeoffice session, sorted."""
    return sorted({to_local(s.start).date() for s in sessions if s.homeoffice})


def homeoffice_days_by_year(sessions: Iterable[WorkSession]) -> list[HomeofficeYear]:
    """Count distinct homeoffice days per year, years ascending."""
    counts: dict[int, int] = defaultdict(int)
    for day in homeoffice_dates(sessions):
        counts[day.year] += 1
    return [HomeofficeYear(year=year, days=counts[year]) for year in sorted(counts)]


def build_session_rows(
    time_sheet: TimeSheet, now: datetime, description_width: int = DESCRIPTION_WIDTH
) -> list[SessionRow]:
    """Build one display row per session, in stored order."""
    rows = []
    for index, session in enumerate(time_sheet.work_sessions):
        hours = duration_hours(session, now)
        rows.append(
            SessionRow(
                id=index,
                start=session.start,
                stop=effective_stop(session, now),
                is_open=session.is_open,
                duration_hours=hours,
                cost=session_cost(hours, time_sheet.hourly_rate),
                description_lines=tuple(wrap_text(session.description, description_width)),
                homeoffice=session.homeoffice,
            )
        )
    return rows


def analyze_time_sheet(
    time_sheet: TimeSheet, now: datetime, description_width: int = DESCRIPTION_WIDTH
) -> AnalysisReport:
    """Build the full report for a time sheet evaluated at ``now``."""
    rows = build_session_rows(time_sheet, now, description_width)

    total_hours = sum(row.duration_hours for row in rows)
    total_cost = None
    if time_sheet.is_billed:
        total_cost = sum(row.cost for row in rows)

    return AnalysisReport(
        project_name=time_sheet.project_name,
        hourly_rate=time_sheet.hourly_rate,
        evaluated_at=now,
        titles=BILLED_TITLES if time_sheet.is_billed else UNBILLED_TITLES,
        rows=tuple(rows),
        total_hours=total_hours,
        total_cost=total_cost,
        homeoffice_days=tuple(homeoffice_days_by_year(time_sheet.work_sessions)),
        homeoffice_dates=tuple(homeoffice_dates(time_sheet.work_sessions)),
    )


class AnalysisService:
    """Service for building time sheet reports."""

    def __init__(self, store: LedgerStore, clock: Callable[[], datetime] = local_now):
        """Initialize analysis service.

        Args:
            store: Ledger store instance
            clock: Callable returning the current aware datetime
        """
        self.store = store
        self.clock = clock

    def analyze(
        self, project: Optional[str] = None, description_width: int = DESCRIPTION_WIDTH
    ) -> AnalysisReport:
        """Analyze all tracked time.

        Args:
            project: Optional project name; must match the tracked project
            description_width: Characters per description line

        Raises:
            NotFoundError: If project is given and is not the tracked project
        """
        time_sheet = self.store.load()
        if project is not None and project != time_sheet.project_name:
            raise NotFoundError(project_not_found(project, time_sheet.project_name))
        return analyze_time_sheet(time_sheet, self.clock(), description_width)
