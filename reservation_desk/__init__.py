from .booking import (
	InvalidTimestamp,
	Reservation,
	ReservationDraft,
	combine_instant,
	is_future,
	parse_guests,
)
from .service import (
	FailureCode,
	ReservationInput,
	ReservationListing,
	ReservationOutcome,
	ReservationService,
)
from .store import ReservationNotFoundError, ReservationStore
from .yaml_store import PersistenceFailure, ReservationSnapshotFile

__all__ = [
	"InvalidTimestamp",
	"Reservation",
	"ReservationDraft",
	"combine_instant",
	"is_future",
	"parse_guests",
	"FailureCode",
	"ReservationInput",
	"ReservationListing",
	"ReservationOutcome",
	"ReservationService",
	"ReservationNotFoundError",
	"ReservationStore",
	"PersistenceFailure",
	"ReservationSnapshotFile",
]
