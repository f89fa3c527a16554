"""Conversion between domain entities and the persisted JSON structure.

Decoding is driven by explicit field tables. Every optional field has a
documented default that is substituted when the field is absent, so ledgers
written by an older version of the schema load cleanly under the current one.
Adding a field to the schema means adding one entry to a table below.
"""

import copy
import json
from typing import Any

from timetracker.domain.entities import (
    DEFAULT_SESSION_TYPE,
    Subproject,
    TimeSheet,
    WorkSession,
)
from timetracker.domain.errors import SchemaError
from timetracker.utils.time_parser import deserialize_timestamp, serialize_timestamp

REQUIRED = object()

TIME_SHEET_FIELDS: dict[str, Any] = {
    "project_name": REQUIRED,
    "hourly_rate": None,
    "session_types": [DEFAULT_SESSION_TYPE],
    "session_type_default": DEFAULT_SESSION_TYPE,
    "subprojects": [],
    "work_sessions": [],
}

WORK_SESSION_FIELDS: dict[str, Any] = {
    "start": REQUIRED,
    "stop": None,
    "description": "",
    "homeoffice": False,
}

SUBPROJECT_FIELDS: dict[str, Any] = {
    "id": REQUIRED,
    "name": REQUIRED,
    "description": "",
}


def apply_defaults(data: Any, fields: dict[str, Any], kind: str) -> dict[str, Any]:
    """Return the known fields of ``data`` with defaults filled in.

    Unknown fields are ignored. A field explicitly stored as null is treated
    as absent unless its default is itself null.

    Raises:
        SchemaError: If ``data`` is not an object or a required field is missing
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Expected {kind} object, got {type(data).__name__}")

    values: dict[str, Any] = {}
    for name, default in fields.items():
        value = data.get(name)
        if value is None:
            if default is REQUIRED:
                raise SchemaError(f"Missing required field '{name}' in {kind}")
            value = copy.deepcopy(default)
        values[name] = value
    return values


def _expect(value: Any, expected: type | tuple[type, ...], field: str, kind: str) -> Any:
    # bool is a subclass of int and must not pass as a number
    if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
        raise SchemaError(f"Field '{field}' in {kind} has invalid type {type(value).__name__}")
    return value


def _timestamp(value: Any, field: str, kind: str):
    try:
        return deserialize_timestamp(value)
    except (ValueError, OverflowError) as e:
        raise SchemaError(f"Field '{field}' in {kind} is not a valid timestamp: {e}")


def work_session_from_dict(data: Any) -> WorkSession:
    """Decode a stored work session."""
    values = apply_defaults(data, WORK_SESSION_FIELDS, "work session")
    stop = values["stop"]
    return WorkSession(
        start=_timestamp(values["start"], "start", "work session"),
        stop=_timestamp(stop, "stop", "work session") if stop is not None else None,
        description=_expect(values["description"], str, "description", "work session"),
        homeoffice=_expect(values["homeoffice"], bool, "homeoffice", "work session"),
    )


def subproject_from_dict(data: Any) -> Subproject:
    """Decode a stored subproject."""
    values = apply_defaults(data, SUBPROJECT_FIELDS, "subproject")
    subproject_id = _expect(values["id"], int, "id", "subproject")
    if subproject_id < 0:
        raise SchemaError(f"Field 'id' in subproject must not be negative, got {subproject_id}")
    return Subproject(
        id=subproject_id,
        name=_expect(values["name"], str, "name", "subproject"),
        description=_expect(values["description"], str, "description", "subproject"),
    )


def time_sheet_from_dict(data: Any) -> TimeSheet:
    """Decode a stored time sheet."""
    values = apply_defaults(data, TIME_SHEET_FIELDS, "time sheet")

    hourly_rate = values["hourly_rate"]
    if hourly_rate is not None:
        hourly_rate = float(_expect(hourly_rate, (int, float), "hourly_rate", "time sheet"))

    session_types = _expect(values["session_types"], list, "session_types", "time sheet")
    for session_type in session_types:
        _expect(session_type, str, "session_types", "time sheet")

    subprojects = _expect(values["subprojects"], list, "subprojects", "time sheet")
    work_sessions = _expect(values["work_sessions"], list, "work_sessions", "time sheet")

    return TimeSheet(
        project_name=_expect(values["project_name"], str, "project_name", "time sheet"),
        hourly_rate=hourly_rate,
        session_types=list(session_types),
        session_type_default=_expect(
            values["session_type_default"], str, "session_type_default", "time sheet"
        ),
        subprojects=[subproject_from_dict(item) for item in subprojects],
        work_sessions=[work_session_from_dict(item) for item in work_sessions],
    )


def work_session_to_dict(session: WorkSession) -> dict[str, Any]:
    """Encode a work session for storage."""
    return {
        "start": serialize_timestamp(session.start),
        "stop": serialize_timestamp(session.stop) if session.stop is not None else None,
        "description": session.description,
        "homeoffice": session.homeoffice,
    }


def subproject_to_dict(subproject: Subproject) -> dict[str, Any]:
    """Encode a subproject for storage."""
    return {
        "id": subproject.id,
        "name": subproject.name,
        "description": subproject.description,
    }


def time_sheet_to_dict(time_sheet: TimeSheet) -> dict[str, Any]:
    """Encode a time sheet for storage."""
    return {
        "project_name": time_sheet.project_name,
        "hourly_rate": time_sheet.hourly_rate,
        "session_types": list(time_sheet.session_types),
        "session_type_default": time_sheet.session_type_default,
        "subprojects": [subproject_to_dict(s) for s in time_sheet.subprojects],
        "work_sessions": [work_session_to_dict(s) for s in time_sheet.work_sessions],
    }


def dumps(time_sheet: TimeSheet) -> str:
    """Serialize a time sheet to JSON text."""
    return json.dumps(time_sheet_to_dict(time_sheet), indent=2) + "\n"


def loads(text: str) -> TimeSheet:
    """Deserialize a time sheet from JSON text.

    Raises:
        SchemaError: If the text is not JSON or does not match the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Time sheet is not valid JSON: {e}")
    return time_sheet_from_dict(data)
