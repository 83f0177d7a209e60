"""Structured Logging — JSON lines with shop/customization context and token redaction.

Invariants:
    - Admin API access tokens (shpat_/shpca_/shppa_/shpss_) never reach a log line
    - Context extras (shop, customization_id, operation, error_code, ...) are emitted
      only when set on the record
    - httpx request logging capped at WARNING: request lines carry the shop URL on
      every retry

Design Decisions:
    - Redaction as a handler Filter, so both JSON and text formats are covered
    - setup_logging called once on startup via lifespan; it replaces root handlers
"""

import json
import logging
import re
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "shop", "customization_id", "operation", "error_code", "status_code",
    "attempt", "path", "operations", "user_errors",
)

_TOKEN_PATTERN = re.compile(r"shp(?:at|ca|pa|ss)_[A-Za-z0-9]+")
_REDACTED = "shp***"
_NOISY_LOGGERS = ("httpx", "httpcore")


def redact(text: str) -> str:
    return _TOKEN_PATTERN.sub(_REDACTED, text)


class TokenRedactionFilter(logging.Filter):
    """Rewrite the rendered message with access tokens masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg, record.args = masked, None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: record.__dict__[key]
            for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = logging.StreamHandler()
    handler.addFilter(TokenRedactionFilter())
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
