import logging
import os
from dataclasses import dataclass
from pathlib import Path

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    data_file: Path = Path("data") / "reservas.yaml"
    autosave: bool = False
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_file=Path(os.environ.get("RESERVATION_DATA_FILE", str(Path("data") / "reservas.yaml"))),
            autosave=os.environ.get("RESERVATION_AUTOSAVE", "").strip().lower() in _TRUE_VALUES,
            host=os.environ.get("RESERVATION_HOST", "127.0.0.1"),
            port=int(os.environ.get("RESERVATION_PORT", "3000")),
            log_level=os.environ.get("RESERVATION_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the command-line entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
