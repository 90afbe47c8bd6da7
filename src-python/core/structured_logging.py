"""Logging setup — human-readable text or JSON lines.

With TERMSWAP_LOG_FORMAT=json every record is one JSON object per line.
Replacement statistics passed through ``extra={...}`` (term and match
counts, timing, document names) are emitted as structured fields so runs
can be aggregated without parsing the message text.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Grouped under "replacement" in the JSON payload
_REPLACEMENT_KEYS = ("term_count", "match_count", "duration_ms")
# Copied to the top level
_DOCUMENT_KEYS = ("document", "output_name")


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line.

    Fields: `timestamp` (RFC-3339), `severity`, `logger`, `message`, plus
    `document`/`output_name` and a `replacement` object when the record
    carries them.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _DOCUMENT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value

        stats = {
            key: getattr(record, key)
            for key in _REPLACEMENT_KEYS
            if getattr(record, key, None) is not None
        }
        if stats:
            payload["replacement"] = stats

        if record.exc_info and record.exc_info[2]:
            exc_type, exc, tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else "Exception",
                "message": str(exc) if exc else "",
                "stacktrace": "".join(traceback.format_exception(exc_type, exc, tb)),
            }

        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_logging(log_format: str = "text", level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Args:
        log_format: "json" for JSON lines, anything else for plain text.
        level: Log level name; unknown names fall back to INFO.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        ))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
