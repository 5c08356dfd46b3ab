from __future__ import annotations

from datetime import datetime
from typing import Any, Callable
import logging

from flask import Flask, jsonify, redirect, render_template, request, url_for

from .config import Settings, configure_logging
from .service import FailureCode, ReservationService
from .yaml_store import ReservationSnapshotFile

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    service: ReservationService | None = None,
    now_provider: Callable[[], datetime] | None = None,
) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings()
    if service is None:
        service = ReservationService.from_snapshot(
            ReservationSnapshotFile(settings.data_file),
            autosave=settings.autosave,
        )
    clock: Callable[[], datetime] = now_provider or datetime.now
    app.extensions["reservation_service"] = service

    @app.before_request
    def log_request() -> None:
        logger.info("%s %s", request.method, request.full_path.rstrip("?"))

    @app.get("/")
    def index() -> str:
        listing = service.listing(clock())
        return render_template(
            "index.html",
            reservations=listing.reservations,
            error=request.args.get("error"),
            min_date=listing.min_date.isoformat(),
        )

    @app.post("/reservas")
    def create_reservation() -> Any:
        outcome = service.create(request.form, now=clock())
        if not outcome.ok:
            return redirect(url_for("index", error=outcome.message))
        return redirect(url_for("index"))

    @app.get("/reservas/editar/<reservation_id>")
    def edit_form(reservation_id: str) -> Any:
        parsed_id = _parse_id(reservation_id)
        outcome = service.get(parsed_id) if parsed_id is not None else None
        if outcome is None or not outcome.ok:
            return redirect(url_for("index", error=f"Reserva no encontrada con id {reservation_id}"))

        return render_template(
            "edit.html",
            reservation=outcome.reservation,
            error=request.args.get("error"),
            min_date=clock().date().isoformat(),
        )

    @app.post("/reservas/editar/<reservation_id>")
    def edit_reservation(reservation_id: str) -> Any:
        parsed_id = _parse_id(reservation_id)
        if parsed_id is None:
            return redirect(url_for("index", error="Reserva no encontrada al intentar editar."))

        outcome = service.edit(parsed_id, request.form, now=clock())
        if outcome.ok:
            return redirect(url_for("index"))
        if outcome.error == FailureCode.NOT_FOUND:
            return redirect(url_for("index", error=outcome.message))
        return redirect(url_for("edit_form", reservation_id=parsed_id, error=outcome.message))

    @app.post("/reservas/cancelar/<reservation_id>")
    def cancel_reservation(reservation_id: str) -> Any:
        parsed_id = _parse_id(reservation_id)
        if parsed_id is not None:
            service.cancel(parsed_id)
        return redirect(url_for("index"))

    @app.get("/__debug/reservations")
    def debug_reservations() -> Any:
        return jsonify(service.debug_dump())

    return app


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Reservation desk listening on http://%s:%d", settings.host, settings.port)
    # ReservationStore is not locked; serve one request at a time
    app.run(host=settings.host, port=settings.port, debug=False, threaded=False)


if __name__ == "__main__":
    main()
