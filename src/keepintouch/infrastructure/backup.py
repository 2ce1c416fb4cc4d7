"""Timestamped backup files built from a full export."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from keepintouch.infrastructure.export import JsonExporter

logger = logging.getLogger(__name__)

WriteBackup = Callable[[str, str], None]


def backup_filename(moment: datetime) -> str:
    """backup-YYYY-MM-DD-HHMMSS.json for the given moment."""
    return moment.strftime("backup-%Y-%m-%d-%H%M%S.json")


def write_backup_file(directory: Path | str) -> WriteBackup:
    """Return a writer that stores each backup as a file in directory."""
    target = Path(directory)

    def _write(filename: str, content: str) -> None:
        target.mkdir(parents=True, exist_ok=True)
        (target / filename).write_text(content, encoding="utf-8")

    return _write


class BackupService:
    """Exports the dataset and hands filename + JSON to a write function."""

    def __init__(
        self,
        exporter: JsonExporter,
        write: WriteBackup,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._exporter = exporter
        self._write = write
        self._clock = clock

    def create_backup(self) -> str:
        """Write one backup and return its filename."""
        content = self._exporter.export_as_string()
        filename = backup_filename(self._clock())
        self._write(filename, content)
        logger.info("Backup written: %s", filename)
        return filename
