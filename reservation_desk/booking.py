from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

DEFAULT_GUESTS = 1


class InvalidTimestamp(ValueError):
    pass


@dataclass(frozen=True)
class ReservationDraft:
    client_name: str
    date: date
    time: time
    guests: int = DEFAULT_GUESTS
    notes: str = ""
    phone: str = ""

    @property
    def instant(self) -> datetime:
        return datetime.combine(self.date, self.time)


@dataclass(frozen=True)
class Reservation:
    id: int
    client_name: str
    date: date
    time: time
    guests: int = DEFAULT_GUESTS
    notes: str = ""
    phone: str = ""

    @property
    def instant(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @staticmethod
    def from_draft(reservation_id: int, draft: ReservationDraft) -> "Reservation":
        return Reservation(
            id=reservation_id,
            client_name=draft.client_name,
            date=draft.date,
            time=draft.time,
            guests=draft.guests,
            notes=draft.notes,
            phone=draft.phone,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "clientName": self.client_name,
            "date": self.date.isoformat(),
            "time": self.time.isoformat(timespec="minutes"),
            "guests": self.guests,
            "notes": self.notes,
            "phone": self.phone,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Reservation":
        """Build a record from a stored mapping.

        ``id``, ``clientName``, ``date`` and ``time`` are required. The other
        fields fall back to their defaults, and ``celular`` is read when
        ``phone`` is missing.
        """
        reservation_id = int(data["id"])
        if reservation_id < 1:
            raise ValueError(f"Reservation id must be positive: {reservation_id}")
        client_name = data["clientName"]
        if client_name is None or str(client_name).strip() == "":
            raise ValueError(f"Reservation {reservation_id} has no clientName")
        phone = data.get("phone")
        if phone is None:
            phone = data.get("celular")
        return Reservation(
            id=reservation_id,
            client_name=str(client_name),
            date=parse_date(data["date"]),
            time=parse_time(data["time"]),
            guests=parse_guests(data.get("guests")),
            notes=str(data.get("notes") or ""),
            phone=str(phone or ""),
        )


def parse_date(value: date | str | None) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except (TypeError, ValueError) as error:
        raise InvalidTimestamp(f"Invalid reservation date: {value!r}") from error


def parse_time(value: time | str | None) -> time:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if value is None:
        raise InvalidTimestamp("Invalid reservation time: None")
    try:
        parsed = time.fromisoformat(str(value).strip())
    except ValueError as error:
        raise InvalidTimestamp(f"Invalid reservation time: {value!r}") from error
    if parsed.tzinfo is not None:
        raise InvalidTimestamp(f"Reservation time must be local wall-clock time: {value!r}")
    return parsed.replace(second=0, microsecond=0)


def combine_instant(date_value: date | str | None, time_value: time | str | None) -> datetime:
    """Pair a calendar date and a clock time into one local wall-clock instant.

    Raises InvalidTimestamp when either part is missing or malformed.
    """
    return datetime.combine(parse_date(date_value), parse_time(time_value))


def is_future(date_value: date | str | None, time_value: time | str | None, now: datetime) -> bool:
    """Return True when the combined instant is strictly later than ``now``.

    An instant equal to ``now`` is not in the future.
    """
    return combine_instant(date_value, time_value) > now


def parse_guests(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_GUESTS
    if isinstance(value, int):
        guests = value
    elif isinstance(value, float):
        if not value.is_integer():
            return DEFAULT_GUESTS
        guests = int(value)
    else:
        try:
            guests = int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_GUESTS
    return guests if guests >= 1 else DEFAULT_GUESTS
