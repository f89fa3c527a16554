"""Tests for the JSON ledger store and codec."""

import json
import os
import stat
from datetime import datetime

import pytest
from dateutil import tz

from timetracker.domain.entities import Subproject, TimeSheet, WorkSession
from timetracker.domain.errors import LedgerNotFoundError, SchemaError, StorageError
from timetracker.storage import codec, json_store
from timetracker.storage.json_store import JsonLedgerStore
from timetracker.storage.factories import LEDGER_PATH_ENVVAR, create_json_store


def local(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=tz.tzlocal())


@pytest.fixture
def full_sheet():
    return TimeSheet(
        project_name="Acme",
        hourly_rate=72.5,
        session_types=["default", "meeting"],
        session_type_default="default",
        subprojects=[
            Subproject(id=0, name="backend", description="API"),
            Subproject(id=1, name="frontend", description="UI"),
        ],
        work_sessions=[
            WorkSession(local(2024, 1, 1, 9, 0), local(2024, 1, 1, 12, 0), "design", True),
            WorkSession(local(2024, 1, 2, 9, 0), None, "Überarbeitung ✓", False),
        ],
    )


class TestRoundTrip:
    """Tests for saving and loading complete ledgers."""

    def test_round_trip(self, store, full_sheet):
        store.save(full_sheet)
        assert store.load() == full_sheet

    def test_round_trip_unbilled(self, store):
        sheet = TimeSheet(project_name="Hobby")
        store.save(sheet)
        loaded = store.load()
        assert loaded == sheet
        assert loaded.hourly_rate is None

    def test_resave_without_mutation_is_noop(self, store, ledger_path, full_sheet):
        store.save(full_sheet)
        before = ledger_path.read_bytes()
        store.save(store.load())
        assert ledger_path.read_bytes() == before

    def test_save_leaves_no_temp_files(self, store, ledger_path, full_sheet):
        store.save(full_sheet)
        store.save(full_sheet)
        assert os.listdir(ledger_path.parent) == [ledger_path.name]

    def test_persisted_layout(self, store, ledger_path, full_sheet):
        store.save(full_sheet)
        data = json.loads(ledger_path.read_text(encoding="utf-8"))

        assert set(data) == {
            "project_name",
            "hourly_rate",
            "session_types",
            "session_type_default",
            "subprojects",
            "work_sessions",
        }
        assert data["subprojects"][0] == {"id": 0, "name": "backend", "description": "API"}
        assert data["work_sessions"][1]["stop"] is None
        assert data["work_sessions"][0]["homeoffice"] is True


class TestLoadErrors:
    """Tests for load failures."""

    def test_missing_file(self, store):
        with pytest.raises(LedgerNotFoundError):
            store.load()

    def test_missing_file_is_storage_error(self, store):
        with pytest.raises(StorageError):
            store.load()

    def test_invalid_json(self, store, ledger_path):
        ledger_path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaError):
            store.load()

    def test_wrong_structure(self, store, ledger_path):
        ledger_path.write_text("[]", encoding="utf-8")
        with pytest.raises(SchemaError):
            store.load()

    def test_missing_project_name(self, store, ledger_path):
        ledger_path.write_text('{"work_sessions": []}', encoding="utf-8")
        with pytest.raises(SchemaError):
            store.load()

    def test_bad_timestamp(self, store, ledger_path):
        ledger_path.write_text(
            '{"project_name": "Acme", "work_sessions": [{"start": "yesterday"}]}',
            encoding="utf-8",
        )
        with pytest.raises(SchemaError):
            store.load()

    def test_bad_homeoffice_type(self, store, ledger_path):
        ledger_path.write_text(
            '{"project_name": "Acme", "work_sessions": '
            '[{"start": "2024-01-01T09:00:00+00:00", "homeoffice": "yes"}]}',
            encoding="utf-8",
        )
        with pytest.raises(SchemaError):
            store.load()

    def test_bool_rate_rejected(self, store, ledger_path):
        ledger_path.write_text('{"project_name": "Acme", "hourly_rate": true}', encoding="utf-8")
        with pytest.raises(SchemaError):
            store.load()


class TestSchemaTolerance:
    """Tests for loading ledgers written by older versions."""

    def test_missing_homeoffice_and_subprojects(self, store, ledger_path):
        ledger_path.write_text(
            json.dumps(
                {
                    "project_name": "Acme",
                    "hourly_rate": 50.0,
                    "work_sessions": [
                        {
                            "start": "2024-01-01T09:00:00+01:00",
                            "stop": "2024-01-01T11:00:00+01:00",
                            "description": "design",
                        }
                    ],
                }
            ),
            encoding="utf-8",
        )
        sheet = store.load()

        assert sheet.subprojects == []
        assert sheet.work_sessions[0].homeoffice is False
        assert sheet.session_types == ["default"]
        assert sheet.session_type_default == "default"

    def test_nanosecond_timestamps(self):
        sheet = codec.loads(
            '{"project_name": "Acme", "hourly_rate": null, "work_sessions": ['
            '{"start": "2024-01-01T09:00:00.123456789+01:00", "stop": null, "description": ""}]}'
        )
        start = sheet.work_sessions[0].start
        assert start.microsecond == 123456
        assert start.utcoffset().total_seconds() == 3600

    def test_unknown_fields_ignored(self):
        sheet = codec.loads('{"project_name": "Acme", "future_field": 1}')
        assert sheet.project_name == "Acme"

    def test_defaults_are_not_shared(self):
        first = codec.loads('{"project_name": "A"}')
        second = codec.loads('{"project_name": "B"}')
        first.session_types.append("meeting")
        assert second.session_types == ["default"]


class TestSave:
    """Tests for writing ledgers, including failed writes."""

    def test_undecodable_argument_text_round_trips(self, store, ledger_path):
        # Non UTF-8 command line bytes arrive as lone surrogates
        sheet = TimeSheet(
            project_name="Acme",
            work_sessions=[WorkSession(local(2024, 1, 1, 9, 0), description="caf\udce9")],
        )
        store.save(sheet)

        assert store.load() == sheet
        assert os.listdir(ledger_path.parent) == [ledger_path.name]
        ledger_path.read_bytes().decode("utf-8")

    def test_non_ascii_text_round_trips(self, store, full_sheet):
        store.save(full_sheet)
        assert store.load().work_sessions[1].description == "Überarbeitung ✓"

    def test_parent_is_a_file(self, tmp_path, full_sheet):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = JsonLedgerStore(blocker / "time_sheet.json")

        with pytest.raises(StorageError):
            store.save(full_sheet)
        assert os.listdir(tmp_path) == ["blocker"]

    def test_failed_replace_keeps_previous_ledger(self, store, ledger_path, full_sheet, monkeypatch):
        store.save(TimeSheet(project_name="Acme"))
        before = ledger_path.read_bytes()

        def failing_replace(src, dst):
            raise OSError("No space left on device")

        monkeypatch.setattr(json_store.os, "replace", failing_replace)
        with pytest.raises(StorageError):
            store.save(full_sheet)
        monkeypatch.undo()

        assert os.listdir(ledger_path.parent) == [ledger_path.name]
        assert ledger_path.read_bytes() == before
        assert store.load() == TimeSheet(project_name="Acme")

    def test_save_keeps_file_mode(self, store, ledger_path, full_sheet):
        store.save(full_sheet)
        os.chmod(ledger_path, 0o640)
        store.save(full_sheet)
        assert stat.S_IMODE(ledger_path.stat().st_mode) == 0o640

    def test_new_file_follows_umask(self, store, ledger_path, full_sheet):
        previous = os.umask(0o022)
        try:
            store.save(full_sheet)
        finally:
            os.umask(previous)
        assert stat.S_IMODE(ledger_path.stat().st_mode) == 0o644


class TestFactory:
    """Tests for store path resolution."""

    def test_explicit_path(self, tmp_path):
        store = create_json_store(str(tmp_path / "sheet.json"))
        assert store.location == str(tmp_path / "sheet.json")

    def test_environment_variable(self, tmp_path, monkeypatch):
        monkeypatch.setenv(LEDGER_PATH_ENVVAR, str(tmp_path / "env.json"))
        assert create_json_store().location == str(tmp_path / "env.json")

    def test_default_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LEDGER_PATH_ENVVAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert create_json_store().location == str(tmp_path / "time_sheet.json")
