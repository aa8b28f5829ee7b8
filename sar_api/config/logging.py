# sar_api/config/logging.py

import json
import logging
from datetime import datetime, timezone

from sar_api.core.context import correlation_id_ctx

# Structured fields passed through logger.info(..., extra={...}) that end up in the JSON line.
EXTRA_FIELDS = ("sar_id", "status", "operation", "error", "filing_reference", "total_count", "returned")


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "correlation_id": correlation_id_ctx.get(),
        }
        for name in EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_record[name] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def configure_logging(log_level: str):
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if not any(isinstance(h.formatter, JsonFormatter) for h in root_logger.handlers):
        root_logger.addHandler(handler)
