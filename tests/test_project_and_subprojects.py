"""Tests for project setup and the subproject registry."""

import pytest

from timetracker.domain.errors import ConflictError, NotFoundError, ValidationError


class TestProjectService:
    """Tests for ProjectService."""

    def test_init_creates_empty_sheet(self, project_service, store):
        project_service.init_project("Acme", hourly_rate=50.0)
        sheet = store.load()

        assert sheet.project_name == "Acme"
        assert sheet.hourly_rate == 50.0
        assert sheet.work_sessions == []
        assert sheet.subprojects == []

    def test_init_without_rate(self, project_service, store):
        project_service.init_project("Hobby")
        assert store.load().is_billed is False

    def test_init_refuses_to_overwrite(self, project_service, session_service, store):
        project_service.init_project("Acme")
        session_service.start()
        with pytest.raises(ConflictError):
            project_service.init_project("Other")
        assert store.load().project_name == "Acme"
        assert len(store.load().work_sessions) == 1

    def test_init_force_overwrites(self, project_service, store):
        project_service.init_project("Acme")
        project_service.init_project("Other", force=True)
        assert store.load().project_name == "Other"

    def test_init_empty_name(self, project_service):
        with pytest.raises(ValidationError):
            project_service.init_project("  ")

    def test_init_negative_rate(self, project_service):
        with pytest.raises(ValidationError):
            project_service.init_project("Acme", hourly_rate=-1.0)

    def test_set_and_clear_rate(self, billed_project, project_service, store):
        project_service.set_hourly_rate(65.0)
        assert store.load().hourly_rate == 65.0
        project_service.set_hourly_rate(None)
        assert store.load().hourly_rate is None


class TestSubprojectService:
    """Tests for SubprojectService."""

    def test_ids_are_sequential(self, billed_project, subproject_service):
        first = subproject_service.add_subproject("backend", "API work")
        second = subproject_service.add_subproject("frontend", "UI work")
        assert (first.id, second.id) == (0, 1)

    def test_add_persists(self, billed_project, subproject_service, store):
        subproject_service.add_subproject("backend", "API work")
        subprojects = store.load().subprojects
        assert len(subprojects) == 1
        assert subprojects[0].name == "backend"
        assert subprojects[0].description == "API work"

    def test_add_keeps_existing_ids(self, billed_project, subproject_service):
        subproject_service.add_subproject("a", "")
        subproject_service.add_subproject("b", "")
        subproject_service.add_subproject("c", "")
        assert [(s.id, s.name) for s in subproject_service.list_subprojects()] == [
            (0, "a"),
            (1, "b"),
            (2, "c"),
        ]

    def test_add_does_not_touch_sessions(self, billed_project, session_service, subproject_service, store):
        session_service.start("design")
        subproject_service.add_subproject("backend", "API work")
        assert store.load().work_sessions[0].is_open

    def test_add_empty_name(self, billed_project, subproject_service):
        with pytest.raises(ValidationError):
            subproject_service.add_subproject("", "nothing")

    def test_get_subproject(self, billed_project, subproject_service):
        subproject_service.add_subproject("backend", "API work")
        assert subproject_service.get_subproject(0).name == "backend"
        assert subproject_service.get_subproject(5) is None

    def test_require_missing_subproject(self, billed_project, subproject_service):
        with pytest.raises(NotFoundError):
            subproject_service.require_subproject(0)
