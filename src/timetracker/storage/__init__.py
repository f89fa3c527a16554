"""Storage layer for timetracker ledgers."""

from timetracker.storage.base import LedgerStore
from timetracker.storage.json_store import JsonLedgerStore
from timetracker.storage.factories import create_json_store

__all__ = ["LedgerStore", "JsonLedgerStore", "create_json_store"]
