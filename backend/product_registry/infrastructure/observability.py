"""Registry Logging — one JSON object per line, carrying the registry's extras.

Invariants:
    - Every line has timestamp, level, logger and message
    - Registry extras (REGISTRY_EXTRAS) appear only when set and not None
    - setup_logging() installs exactly one registry handler on the root
      logger, however many times the lifespan runs

Design Decisions:
    - Formatter on stdlib logging: call sites stay logger.info(..., extra={...})
    - log_format "json" in deployments, anything else is human-readable
    - SQLAlchemy engine logging pinned to WARNING so SQL echo never floods
      the registry log
"""

import json
import logging
from datetime import datetime, timezone

REGISTRY_EXTRAS: tuple[str, ...] = (
    "operation", "caller", "product_id", "error_code",
    "ledger_height", "path",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record and its registry extras as a JSON line."""

    def __init__(self, extras: tuple[str, ...] = REGISTRY_EXTRAS):
        super().__init__()
        self._extras = extras

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update({
            key: record.__dict__[key]
            for key in self._extras
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class _RegistryHandler(logging.StreamHandler):
    """Marker type so setup_logging can find its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the registry handler on the root logger."""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _RegistryHandler)]:
        root.removeHandler(handler)

    handler = _RegistryHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
