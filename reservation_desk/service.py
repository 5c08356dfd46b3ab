from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping
import logging

from .booking import (
    InvalidTimestamp,
    Reservation,
    ReservationDraft,
    combine_instant,
    is_future,
    parse_guests,
)
from .store import ReservationStore
from .yaml_store import ReservationSnapshotFile

logger = logging.getLogger(__name__)


class FailureCode(str, Enum):
    EMPTY_NAME = "EMPTY_NAME"
    EMPTY_PHONE = "EMPTY_PHONE"
    NOT_FUTURE = "NOT_FUTURE"
    NOT_FOUND = "NOT_FOUND"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"


CREATE_MESSAGES = {
    FailureCode.EMPTY_NAME: "¡Error! El nombre del cliente no puede ser vacío.",
    FailureCode.EMPTY_PHONE: "¡Error! El teléfono celular no puede estar vacío.",
    FailureCode.NOT_FUTURE: "¡Error! La reserva debe ser en una fecha y hora futura.",
    FailureCode.INVALID_TIMESTAMP: "¡Error! La fecha u hora de la reserva no es válida.",
}

EDIT_MESSAGES = {
    FailureCode.NOT_FOUND: "Reserva no encontrada al intentar editar.",
    FailureCode.EMPTY_NAME: "¡Error al editar! El nombre del cliente no puede ser vacío.",
    FailureCode.EMPTY_PHONE: "¡Error al editar! El teléfono celular no puede estar vacío.",
    FailureCode.NOT_FUTURE: "¡Error al editar! La nueva fecha y hora debe ser futura.",
    FailureCode.INVALID_TIMESTAMP: "¡Error al editar! La fecha u hora de la reserva no es válida.",
}


@dataclass(frozen=True)
class ReservationInput:
    client_name: str | None = None
    date: Any = None
    time: Any = None
    guests: Any = None
    notes: str | None = None
    phone: str | None = None

    @staticmethod
    def from_form(form: Mapping[str, Any]) -> "ReservationInput":
        """Read the submitted fields; ``celular`` is the form name for ``phone``."""
        phone = form.get("phone")
        if phone is None:
            phone = form.get("celular")
        return ReservationInput(
            client_name=form.get("clientName"),
            date=form.get("date"),
            time=form.get("time"),
            guests=form.get("guests"),
            notes=form.get("notes"),
            phone=phone,
        )


@dataclass(frozen=True)
class ReservationOutcome:
    ok: bool
    reservation: Reservation | None = None
    error: FailureCode | None = None
    message: str | None = None

    @staticmethod
    def success(reservation: Reservation | None) -> "ReservationOutcome":
        return ReservationOutcome(ok=True, reservation=reservation)

    @staticmethod
    def failure(error: FailureCode, message: str) -> "ReservationOutcome":
        return ReservationOutcome(ok=False, error=error, message=message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "error": self.error.value if self.error is not None else None,
            "message": self.message,
            "reservation": self.reservation.to_dict() if self.reservation is not None else None,
        }


@dataclass(frozen=True)
class ReservationListing:
    reservations: list[Reservation] = field(default_factory=list)
    min_date: date | None = None


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


class ReservationService:
    """Validates reservation requests and applies them to the store.

    Saving through ``snapshot`` happens only after a successful mutation and
    only when ``autosave`` is on or the call passes ``persist=True``.
    """

    def __init__(
        self,
        store: ReservationStore | None = None,
        snapshot: ReservationSnapshotFile | None = None,
        autosave: bool = False,
    ) -> None:
        self.store = store if store is not None else ReservationStore()
        self.snapshot = snapshot
        self.autosave = autosave

    @classmethod
    def from_snapshot(cls, snapshot: ReservationSnapshotFile, autosave: bool = False) -> "ReservationService":
        store = ReservationStore(snapshot.load())
        logger.info("Reservation store ready with %d records (nextId=%d)", len(store.get_reservations()), store.next_id)
        return cls(store=store, snapshot=snapshot, autosave=autosave)

    def list_reservations(self) -> list[Reservation]:
        # sorted() is stable, so equal instants keep insertion order
        return sorted(self.store.get_reservations(), key=lambda record: record.instant)

    def listing(self, now: datetime | None = None) -> ReservationListing:
        effective_now = now or datetime.now()
        return ReservationListing(reservations=self.list_reservations(), min_date=effective_now.date())

    def get(self, reservation_id: int) -> ReservationOutcome:
        record = self.store.get_reservation(reservation_id)
        if record is None:
            return ReservationOutcome.failure(FailureCode.NOT_FOUND, f"Reserva no encontrada con id {reservation_id}")
        return ReservationOutcome.success(record)

    def create(
        self,
        data: ReservationInput | Mapping[str, Any],
        now: datetime | None = None,
        persist: bool | None = None,
    ) -> ReservationOutcome:
        effective_now = now or datetime.now()
        data = _as_input(data)

        error = _check_required_fields(data)
        if error is None:
            try:
                instant = combine_instant(data.date, data.time)
            except InvalidTimestamp:
                error = FailureCode.INVALID_TIMESTAMP
            else:
                if not is_future(instant.date(), instant.time(), effective_now):
                    error = FailureCode.NOT_FUTURE

        if error is not None:
            logger.info("Rejected reservation for %r: %s", data.client_name, error.value)
            return ReservationOutcome.failure(error, CREATE_MESSAGES[error])

        created = self.store.add_reservation(_build_draft(data, instant))
        logger.info("Created reservation %d for %s at %s", created.id, created.client_name, created.instant.isoformat(timespec="minutes"))
        self._maybe_persist(persist)
        return ReservationOutcome.success(created)

    def edit(
        self,
        reservation_id: int,
        data: ReservationInput | Mapping[str, Any],
        now: datetime | None = None,
        persist: bool | None = None,
    ) -> ReservationOutcome:
        effective_now = now or datetime.now()
        data = _as_input(data)

        existing = self.store.get_reservation(reservation_id)
        if existing is None:
            error: FailureCode | None = FailureCode.NOT_FOUND
        else:
            error = _check_required_fields(data)

        if error is None:
            try:
                instant = combine_instant(data.date, data.time)
            except InvalidTimestamp:
                error = FailureCode.INVALID_TIMESTAMP
            else:
                # an unchanged date/time is kept even if it is already past
                if instant != existing.instant and not is_future(instant.date(), instant.time(), effective_now):
                    error = FailureCode.NOT_FUTURE

        if error is not None:
            logger.info("Rejected edit of reservation %s: %s", reservation_id, error.value)
            return ReservationOutcome.failure(error, EDIT_MESSAGES[error])

        updated = self.store.replace_reservation(reservation_id, _build_draft(data, instant))
        logger.info("Updated reservation %d", updated.id)
        self._maybe_persist(persist)
        return ReservationOutcome.success(updated)

    def cancel(self, reservation_id: int, persist: bool | None = None) -> ReservationOutcome:
        record = self.store.get_reservation(reservation_id)
        if self.store.remove_reservation(reservation_id):
            logger.info("Cancelled reservation %d", reservation_id)
            self._maybe_persist(persist)
        else:
            logger.info("Cancel of unknown reservation %s ignored", reservation_id)
        return ReservationOutcome.success(record)

    def debug_dump(self) -> dict[str, Any]:
        return self.store.dump()

    def save(self) -> bool:
        if self.snapshot is None:
            return False
        return self.snapshot.save(self.store.get_reservations())

    def _maybe_persist(self, persist: bool | None) -> None:
        should_persist = self.autosave if persist is None else persist
        if should_persist:
            self.save()


def _as_input(data: ReservationInput | Mapping[str, Any]) -> ReservationInput:
    if isinstance(data, ReservationInput):
        return data
    return ReservationInput.from_form(data)


def _check_required_fields(data: ReservationInput) -> FailureCode | None:
    if _is_blank(data.client_name):
        return FailureCode.EMPTY_NAME
    if _is_blank(data.phone):
        return FailureCode.EMPTY_PHONE
    return None


def _build_draft(data: ReservationInput, instant: datetime) -> ReservationDraft:
    return ReservationDraft(
        client_name=str(data.client_name),
        date=instant.date(),
        time=instant.time(),
        guests=parse_guests(data.guests),
        notes=str(data.notes or ""),
        phone=str(data.phone or ""),
    )
