"""Store factory functions for creating ledger store instances."""

import os
from typing import Optional

from timetracker.storage.json_store import JsonLedgerStore

DEFAULT_LEDGER_FILENAME = "time_sheet.json"
LEDGER_PATH_ENVVAR = "TIMETRACKER_LEDGER_PATH"


def create_json_store(ledger_path: Optional[str] = None) -> JsonLedgerStore:
    """Create a JSON ledger store.

    Args:
        ledger_path: Path to the ledger file. If None, checks the
            TIMETRACKER_LEDGER_PATH environment variable, then defaults to
            time_sheet.json in the current working directory

    Returns:
        JsonLedgerStore for the resolved path
    """
    if ledger_path is None:
        ledger_path = os.environ.get(LEDGER_PATH_ENVVAR)

    if ledger_path is None:
        ledger_path = os.path.join(os.getcwd(), DEFAULT_LEDGER_FILENAME)

    return JsonLedgerStore(ledger_path)
