from __future__ import annotations

import logging
from typing import Any, Iterable

from .booking import Reservation, ReservationDraft

logger = logging.getLogger(__name__)


class ReservationNotFoundError(LookupError):
    pass


class ReservationStore:
    """In-memory reservation collection with a never-reused id counter.

    Callers only ever get copies of the list; records themselves are frozen.
    """

    def __init__(self, records: Iterable[Reservation] = ()) -> None:
        self._records: list[Reservation] = []
        seen: set[int] = set()
        for record in records:
            if record.id in seen:
                logger.warning("Skipping preloaded reservation with duplicate id %s", record.id)
                continue
            seen.add(record.id)
            self._records.append(record)
        self._next_id = max(seen, default=0) + 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def get_reservations(self) -> list[Reservation]:
        return list(self._records)

    def get_reservation(self, reservation_id: int) -> Reservation | None:
        index = self._find_index(reservation_id)
        return None if index < 0 else self._records[index]

    def add_reservation(self, draft: ReservationDraft) -> Reservation:
        record = Reservation.from_draft(self._next_id, draft)
        self._next_id += 1
        self._records.append(record)
        return record

    def replace_reservation(self, reservation_id: int, draft: ReservationDraft) -> Reservation:
        index = self._find_index(reservation_id)
        if index < 0:
            raise ReservationNotFoundError(f"reservation {reservation_id} not found")
        updated = Reservation.from_draft(reservation_id, draft)
        self._records[index] = updated
        return updated

    def remove_reservation(self, reservation_id: int) -> bool:
        index = self._find_index(reservation_id)
        if index < 0:
            return False
        del self._records[index]
        return True

    def dump(self) -> dict[str, Any]:
        return {
            "reservations": [record.to_dict() for record in self._records],
            "nextId": self._next_id,
        }

    def _find_index(self, reservation_id: int) -> int:
        for index, record in enumerate(self._records):
            if record.id == reservation_id:
                return index
        return -1
