from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from reservation_desk import ReservationService, ReservationSnapshotFile
from reservation_desk.config import Settings, configure_logging

mcp = FastMCP(
    "Reservation Desk MCP Server",
    instructions="Create, list, edit and cancel reservations held by the reservation_desk service.",
    json_response=True,
)

SETTINGS = Settings.from_env()
SERVICE = ReservationService.from_snapshot(ReservationSnapshotFile(SETTINGS.data_file), autosave=SETTINGS.autosave)


@mcp.resource("reservation://reservations")
async def reservations_resource() -> list[dict[str, Any]]:
    """All reservations ordered by date and time."""
    return [record.to_dict() for record in SERVICE.list_reservations()]


@mcp.tool()
def list_reservations() -> list[dict[str, Any]]:
    """Return all reservations ordered by date and time."""
    return [record.to_dict() for record in SERVICE.list_reservations()]


@mcp.tool()
def create_reservation(
    client_name: str,
    phone: str,
    date: str,
    time: str,
    guests: int = 1,
    notes: str = "",
) -> dict[str, Any]:
    """Book a reservation. ``date`` is YYYY-MM-DD and ``time`` is HH:MM local time."""
    payload = {"clientName": client_name, "phone": phone, "date": date, "time": time, "guests": guests, "notes": notes}
    return SERVICE.create(payload).to_dict()


@mcp.tool()
def edit_reservation(
    reservation_id: int,
    client_name: str,
    phone: str,
    date: str,
    time: str,
    guests: int = 1,
    notes: str = "",
) -> dict[str, Any]:
    """Replace every field of an existing reservation except its id."""
    payload = {"clientName": client_name, "phone": phone, "date": date, "time": time, "guests": guests, "notes": notes}
    return SERVICE.edit(reservation_id, payload).to_dict()


@mcp.tool()
def cancel_reservation(reservation_id: int) -> dict[str, Any]:
    """Cancel a reservation. Unknown ids are ignored."""
    return SERVICE.cancel(reservation_id).to_dict()


def main() -> None:
    configure_logging(SETTINGS.log_level)
    mcp.run()


if __name__ == "__main__":
    main()
