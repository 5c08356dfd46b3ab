from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable
import logging
import shutil

import yaml

from .booking import Reservation

logger = logging.getLogger(__name__)


class PersistenceFailure(RuntimeError):
    pass


class ReservationSnapshotFile:
    """Best-effort mirror of the reservation list in a YAML file.

    ``load`` and ``save`` never raise: failures are logged and the in-memory
    store stays the source of truth. JSON arrays are valid YAML, so a JSON
    snapshot loads as well.
    """

    def __init__(self, path: str | Path = "data/reservas.yaml") -> None:
        self.path = Path(path)

    def load(self) -> list[Reservation]:
        if not self.path.exists():
            logger.info("No reservation snapshot at %s, starting empty", self.path)
            return []

        try:
            payload = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as error:
            self._backup_corrupted_file(error)
            return []

        if payload is None:
            return []
        if not isinstance(payload, list):
            self._backup_corrupted_file(ValueError("top-level YAML is not a list"))
            return []

        records: list[Reservation] = []
        for index, row in enumerate(payload):
            if not isinstance(row, dict):
                logger.warning("Skipping snapshot row %d in %s: row is not a mapping", index, self.path.name)
                continue
            try:
                records.append(Reservation.from_dict(row))
            except (KeyError, TypeError, ValueError) as error:
                logger.warning("Skipping snapshot row %d in %s: %s", index, self.path.name, error)

        logger.info("Loaded %d reservations from %s", len(records), self.path)
        return records

    def save(self, records: Iterable[Reservation]) -> bool:
        rows = [record.to_dict() for record in records]
        try:
            self._write_yaml_list(rows)
        except PersistenceFailure as error:
            logger.warning("%s (%s)", error, error.__cause__)
            return False
        logger.info("Saved %d reservations to %s", len(rows), self.path)
        return True

    def _write_yaml_list(self, rows: list[dict[str, Any]]) -> None:
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(yaml.safe_dump(rows, allow_unicode=True, sort_keys=False), encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as error:
            raise PersistenceFailure(f"Failed to write reservation snapshot: {self.path}") from error
        finally:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove temporary snapshot %s", temp_path)

    def _backup_corrupted_file(self, error: Exception) -> None:
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        backup_path = self.path.with_name(f"{self.path.stem}.corrupt.{timestamp}{self.path.suffix}")
        try:
            shutil.copy2(self.path, backup_path)
        except OSError as copy_error:
            logger.warning("Could not back up unreadable snapshot %s: %s", self.path, copy_error)
        else:
            logger.warning("Unreadable snapshot %s (%s), copied to %s", self.path, error, backup_path.name)
