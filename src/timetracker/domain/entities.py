"""Domain model entities for timetracker.

These are plain data classes representing the persisted facts of a time
sheet, independent of the file format they are stored in. Everything shown
in reports is derived from them on demand.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional

DEFAULT_SESSION_TYPE = "default"


@dataclass(frozen=True)
class WorkSession:
    """One interval of work. A session without ``stop`` is still running."""

    start: datetime
    stop: Optional[datetime] = None
    description: str = ""
    homeoffice: bool = False

    @property
    def is_open(self) -> bool:
        return self.stop is None


@dataclass(frozen=True)
class Subproject:
    """Named sub-context within a project."""

    id: int
    name: str
    description: str = ""


@dataclass
class TimeSheet:
    """The full ledger of a project.

    Unlike the value types above this aggregate is mutable: services load it,
    change it in memory and write it back as a whole.
    """

    project_name: str
    hourly_rate: Optional[float] = None
    session_types: list[str] = field(default_factory=lambda: [DEFAULT_SESSION_TYPE])
    session_type_default: str = DEFAULT_SESSION_TYPE
    subprojects: list[Subproject] = field(default_factory=list)
    work_sessions: list[WorkSession] = field(default_factory=list)

    @property
    def is_billed(self) -> bool:
        return self.hourly_rate is not None

    def open_session_index(self) -> Optional[int]:
        """Return the position of the running session, if any.

        The running session is identified by its missing stop time rather
        than by being the last element, so re-sorting the sequence never
        loses track of it.
        """
        for index, session in enumerate(self.work_sessions):
            if session.is_open:
                return index
        return None

    def sort_sessions(self) -> None:
        """Order sessions chronologically by start time."""
        self.work_sessions.sort(key=lambda s: s.start)


@dataclass(frozen=True)
class SessionRow:
    """Display-ready row for a single work session."""

    id: int
    start: datetime
    stop: datetime
    is_open: bool
    duration_hours: float
    cost: Optional[float]
    description_lines: tuple[str, ...]
    homeoffice: bool


@dataclass(frozen=True)
class HomeofficeYear:
    """Number of distinct homeoffice days within a calendar year."""

    year: int
    days: int


@dataclass(frozen=True)
class AnalysisReport:
    """Aggregated view of a time sheet evaluated at a point in time."""

    project_name: str
    hourly_rate: Optional[float]
    evaluated_at: datetime
    titles: tuple[str, ...]
    rows: tuple[SessionRow, ...]
    total_hours: float
    total_cost: Optional[float]
    homeoffice_days: tuple[HomeofficeYear, ...]
    homeoffice_dates: tuple[date, ...] = ()
