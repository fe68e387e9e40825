"""
Snapshot Storage Module

Persists ledger snapshots as flat text files named ``DDMMYYYY_N.DAT``, one
line ``"<account_id> <balance>"`` per account. Files are write-once: each
snapshot gets the next free sequence number for the current day.
"""

from decimal import Decimal
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union
import os
import re
import threading

from .accounts import SnapshotRecord, format_decimal
from .errors import StorageFailureError
from .logging_config import get_logger, log_action


logger = get_logger(__name__)


def utc_today() -> date:
    """Current calendar date in UTC"""
    return datetime.now(timezone.utc).date()


class SnapshotWriter:
    """Writes balance snapshots to a directory of dated, sequential files"""

    def __init__(
        self,
        directory: Union[str, Path] = "./db/",
        extension: str = "DAT",
        date_format: str = "%d%m%Y",
        clock: Callable[[], date] = utc_today
    ):
        self.directory = Path(directory)
        self.extension = extension.lstrip(".")
        self.date_format = date_format
        self._clock = clock
        # Serializes sequence-count-then-create across concurrent snapshots
        self._write_lock = threading.Lock()

    def date_stamp(self, day: Optional[date] = None) -> str:
        """Date prefix used in snapshot file names"""
        return (day or self._clock()).strftime(self.date_format)

    def file_name(self, sequence: int, day: Optional[date] = None) -> str:
        """Name of the file written for a given zero-based sequence"""
        return f"{self.date_stamp(day)}_{sequence + 1}.{self.extension}"

    def ensure_store_ready(self) -> None:
        """Create the snapshot directory if it does not exist"""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log_action(
                logger, "error", "Could not create snapshot directory",
                action="ensure_store_ready", resource=str(self.directory), exc_info=True
            )
            raise StorageFailureError(self.directory, str(e)) from e

    def next_sequence_for_today(self, day: Optional[date] = None) -> int:
        """
        Count today's (or ``day``'s) snapshot files.

        Recomputed from the directory on every call. Only stable while the
        caller holds the write lock (see ``write_next``).
        """
        self.ensure_store_ready()
        stamp = self.date_stamp(day)
        suffix = f".{self.extension}"

        try:
            return sum(
                1 for entry in os.scandir(self.directory)
                if entry.name.startswith(stamp) and entry.name.endswith(suffix)
            )
        except OSError as e:
            raise StorageFailureError(self.directory, str(e)) from e

    def write(self, records: Iterable[SnapshotRecord], sequence: int,
              day: Optional[date] = None) -> Path:
        """
        Write ``records`` to a new snapshot file for the given sequence and day.

        Data goes to a hidden temporary file first and is renamed into place
        only once fully written and synced, so a failed write never leaves a
        file that would be counted as a completed snapshot.

        Returns:
            Path of the created file

        Raises:
            StorageFailureError: the directory or file could not be written,
                or a file for this sequence already exists
        """
        self.ensure_store_ready()
        target = self.directory / self.file_name(sequence, day)
        if target.exists():
            raise StorageFailureError(target, "snapshot file already exists")

        temp_path = self.directory / f".{target.name}.{os.getpid()}.tmp"
        lines = [f"{record.account_id} {format_decimal(record.balance)}\n" for record in records]

        try:
            with open(temp_path, "x", encoding="utf-8", newline="\n") as f:
                f.writelines(lines)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, target)
        except OSError as e:
            self._discard(temp_path)
            log_action(
                logger, "error", "Snapshot write failed",
                action="write_snapshot", resource=str(target), exc_info=True
            )
            raise StorageFailureError(target, str(e)) from e

        log_action(
            logger, "info", "Snapshot written",
            action="write_snapshot", resource=str(target), extra={"records": len(lines)}
        )
        return target

    def write_next(self, records: Iterable[SnapshotRecord]) -> Path:
        """
        Write ``records`` under the next free sequence number for today.

        The clock is read once so the count and the file name agree on the
        day. If the counted slot is taken (a gap left by a removed file),
        the sequence advances to the first free slot.
        """
        day = self._clock()
        with self._write_lock:
            sequence = self.next_sequence_for_today(day)
            while (self.directory / self.file_name(sequence, day)).exists():
                sequence += 1
            return self.write(records, sequence, day)

    def list_snapshots(self, day: Optional[date] = None) -> List[Path]:
        """Snapshot files in the store, optionally for one day, ordered by date and sequence"""
        if not self.directory.is_dir():
            return []

        pattern = re.compile(
            rf"^(?P<stamp>.+)_(?P<sequence>\d+)\.{re.escape(self.extension)}$"
        )
        stamp = self.date_stamp(day) if day else None

        found = []
        for path in self.directory.iterdir():
            match = pattern.match(path.name)
            if not match or (stamp and match.group("stamp") != stamp):
                continue
            try:
                taken_on = datetime.strptime(match.group("stamp"), self.date_format).date()
            except ValueError:
                continue
            found.append((taken_on, int(match.group("sequence")), path))

        return [path for _, _, path in sorted(found)]

    def read_snapshot(self, path: Union[str, Path]) -> List[SnapshotRecord]:
        """Parse a snapshot file back into records"""
        records = []
        with open(path, encoding="utf-8") as f:
            for line in f:
                account_id, balance = line.rstrip("\n").split(" ", 1)
                records.append(SnapshotRecord(account_id, Decimal(balance)))
        return records

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove temporary snapshot file %s", path)
