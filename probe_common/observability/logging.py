"""
Structured JSON logging with OpenTelemetry trace context injection.

Provides a single `setup_logging()` call that configures the root logger
with JSON output and automatic trace/span ID injection into every log line.

When a ``log_file`` is given, the same JSON lines are also appended to that
file so the service can expose its recent log tail over HTTP
(see ``read_recent_logs``).

Usage::

    from probe_common.observability.logging import setup_logging, get_logger

    setup_logging()                       # call once at process startup
    logger = get_logger("my-service")     # get a named logger
    logger.info("hello")                  # {"timestamp": ..., "level": "INFO", ...}
"""

import json
import logging
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

from opentelemetry.instrumentation.logging import LoggingInstrumentor
from pythonjsonlogger.json import JsonFormatter


_FORMAT_STRING = "%(timestamp)s %(level)s %(name)s %(message)s"
_setup_done = False


class JsonTraceFormatter(JsonFormatter):
    """JSON formatter that adds standard fields to every log record."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """
    Configure the root logger with structured JSON output and trace context.

    Safe to call multiple times; subsequent calls are no-ops.

    Args:
        level: The root log level (default ``logging.INFO``).
        log_file: Optional path; when set, JSON lines are also appended there.
    """
    global _setup_done
    if _setup_done:
        return
    _setup_done = True

    # Instrument stdlib logging so OTel injects trace/span IDs
    LoggingInstrumentor().instrument(set_logging_format=False)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonTraceFormatter(_FORMAT_STRING))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JsonTraceFormatter(_FORMAT_STRING))
        root.addHandler(file_handler)
        logging.getLogger("observability").info("Logging to file %s", log_file)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger (thin wrapper for discoverability)."""
    return logging.getLogger(name)


def read_recent_logs(log_file: str | None, limit: int = 100) -> list[dict]:
    """
    Return the last ``limit`` log entries from ``log_file``, newest first.

    Lines that are not valid JSON are wrapped as ``{"message", "timestamp"}``.
    A missing (or unconfigured) file yields a single placeholder entry.
    """
    now = datetime.now(timezone.utc).isoformat()
    if not log_file or not Path(log_file).exists():
        return [{"message": "No logs found yet.", "timestamp": now}]

    with open(log_file, encoding="utf-8") as fh:
        lines = deque((line for line in fh if line.strip()), maxlen=limit)

    entries = []
    for line in reversed(lines):
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            entries.append({"message": line.rstrip("\n"), "timestamp": now})
    return entries
