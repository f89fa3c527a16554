"""Shared pytest fixtures for timetracker tests."""

from datetime import datetime, timedelta
import pytest
from dateutil import tz

from timetracker.storage.factories import create_json_store
from timetracker.domain.analysis import AnalysisService
from timetracker.domain.project import ProjectService
from timetracker.domain.session import SessionService
from timetracker.domain.subproject import SubprojectService


def local(year, month, day, hour=0, minute=0):
    """Build an aware datetime in the local zone."""
    return datetime(year, month, day, hour, minute, tzinfo=tz.tzlocal())


class FakeClock:
    """Controllable clock for lifecycle tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def ledger_path(tmp_path):
    """Path to a not yet existing time sheet file."""
    return tmp_path / "time_sheet.json"


@pytest.fixture
def store(ledger_path):
    """Create a JSON ledger store in a temporary directory."""
    return create_json_store(ledger_path=str(ledger_path))


@pytest.fixture
def clock():
    """Clock fixed at 2024-01-01 09:00 local time."""
    return FakeClock(local(2024, 1, 1, 9, 0))


@pytest.fixture
def project_service(store):
    """Create a ProjectService with a temporary store."""
    return ProjectService(store)


@pytest.fixture
def billed_project(project_service):
    """Initialize a project with an hourly rate of 50."""
    return project_service.init_project("Acme", hourly_rate=50.0)


@pytest.fixture
def unbilled_project(project_service):
    """Initialize a project without hourly rate."""
    return project_service.init_project("Hobby")


@pytest.fixture
def session_service(store, clock):
    """Create a SessionService using the fake clock."""
    return SessionService(store, clock=clock)


@pytest.fixture
def subproject_service(store):
    """Create a SubprojectService with a temporary store."""
    return SubprojectService(store)


@pytest.fixture
def analysis_service(store, clock):
    """Create an AnalysisService using the fake clock."""
    return AnalysisService(store, clock=clock)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
