"""
Log Formatters for Console and JSON Output.

    ConsoleFormatter: one human-readable line per record
        14:30:05 [ INFO  ] (0f3c9a2b-41d) converting voice=Joanna language=en-US

    JsonFormatter: one JSON object per line, for CloudWatch Logs Insights
        {"ts":"2026-01-15T14:30:05+00:00","level":2,"tag":"INFO","message":"converting",...}

Lambda already prefixes every stdout line with its own timestamp, so the
JSON format is the better fit there; the console format is the local
default.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict


class JsonFormatter(logging.Formatter):
    """
    Format log records as single-line JSON objects.

    Output Format:
        {
            "ts": "...",             # ISO timestamp with timezone
            "level": 2,              # Numeric level (1-4)
            "tag": "INFO",
            "message": "converting",
            "request_id": "...",
            "seconds": 0.42,         # Optional timing
            "extra": {...}           # Optional structured fields
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).astimezone().isoformat()

        payload: Dict[str, Any] = {
            "ts": ts,
            "level": getattr(record, "numeric_level", 2),
            "tag": getattr(record, "tag", record.levelname),
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            payload["seconds"] = seconds

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload["extra"] = extra_data

        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Format log records as plain console lines.

    Output Format:
        HH:MM:SS [ TAG   ] (rid) message key=value 0.123s
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        tag = getattr(record, "tag", record.levelname)
        rid = getattr(record, "request_id", "-")

        parts = [ts, f"[{tag:^7}]"]
        if rid != "-":
            parts.append(f"({rid})")
        parts.append(record.getMessage())

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            parts.extend(f"{k}={v}" for k, v in extra_data.items())

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            parts.append(f"{seconds:.3f}s")

        return " ".join(parts)
