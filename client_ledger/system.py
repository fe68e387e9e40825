"""
Ledger System Module

Process-wide context object that owns the ledger and the snapshot writer and
composes them into the snapshot-and-persist transaction.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .accounts import SnapshotRecord
from .config import LedgerConfig, get_config
from .errors import StorageFailureError
from .ledger import Ledger
from .logging_config import get_logger, log_action
from .storage import SnapshotWriter


logger = get_logger(__name__)


@dataclass
class SnapshotResult:
    """Outcome of a successful store_balances call"""
    path: Path
    records: List[SnapshotRecord]


class LedgerSystem:
    """Ledger plus snapshot storage, created once at process start"""

    def __init__(
        self,
        config: Optional[LedgerConfig] = None,
        ledger: Optional[Ledger] = None,
        snapshot_writer: Optional[SnapshotWriter] = None
    ):
        self.config = config or get_config()
        self.ledger = ledger or Ledger()
        self.snapshot_writer = snapshot_writer or SnapshotWriter(
            directory=self.config.snapshot_dir,
            extension=self.config.snapshot_extension,
            date_format=self.config.snapshot_date_format
        )

    def store_balances(self) -> SnapshotResult:
        """
        Persist all balances to today's next snapshot file, then zero them.

        The file is written while the ledger lock is held and balances are
        reset only after the write succeeded. On StorageFailureError every
        balance is left as it was.
        """
        written: List[Path] = []

        def persist(records: List[SnapshotRecord]) -> None:
            written.append(self.snapshot_writer.write_next(records))

        try:
            records = self.ledger.snapshot_and_reset(persist=persist)
        except StorageFailureError as e:
            log_action(
                logger, "error", f"Snapshot aborted, balances kept: {e}",
                action="store_balances", resource=str(e.path)
            )
            raise

        log_action(
            logger, "info", "Balances stored",
            action="store_balances", resource=written[0].name,
            extra={"accounts": len(records)}
        )
        return SnapshotResult(path=written[0], records=records)
