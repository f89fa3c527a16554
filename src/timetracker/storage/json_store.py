"""JSON file implementation of the ledger store."""

import logging
import os
import stat
import tempfile
from pathlib import Path

from timetracker.domain.entities import TimeSheet
from timetracker.domain.errors import LedgerNotFoundError, StorageError, ledger_not_found
from timetracker.storage import codec
from timetracker.storage.base import LedgerStore

logger = logging.getLogger(__name__)


class JsonLedgerStore(LedgerStore):
    """Ledger stored as a single UTF-8 JSON document.

    Writes go to a temporary file in the same directory which then replaces
    the ledger, so a concurrent reader sees either the old or the new
    content. There is no locking: two processes saving at the same time
    race and the last writer wins.
    """

    def __init__(self, path: str | os.PathLike):
        """Initialize JSON ledger store.

        Args:
            path: Path to the ledger file
        """
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> TimeSheet:
        """Load the complete ledger from disk."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise LedgerNotFoundError(ledger_not_found(self.location))
        except UnicodeDecodeError as e:
            raise StorageError(f"Time sheet '{self.location}' is not UTF-8 text: {e}")
        except OSError as e:
            raise StorageError(f"Could not read time sheet '{self.location}': {e}")

        time_sheet = codec.loads(text)
        logger.debug(
            "Loaded time sheet %s with %d sessions", self.location, len(time_sheet.work_sessions)
        )
        return time_sheet

    def save(self, time_sheet: TimeSheet) -> None:
        """Atomically replace the ledger file."""
        # Encoded up front so nothing touches the disk if serialization fails
        content = codec.dumps(time_sheet).encode("utf-8")
        directory = self.path.parent
        tmp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            mode = self._file_mode()
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            # Temporary files are created 0600; keep the ledger's own mode
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Could not write time sheet '{self.location}': {e}")

        logger.debug(
            "Saved time sheet %s with %d sessions", self.location, len(time_sheet.work_sessions)
        )

    def _file_mode(self) -> int:
        """Permission bits for the saved ledger.

        An existing ledger keeps its mode; a new one gets the default mode
        for regular files under the current umask.
        """
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask
