"""Structured logging bootstrap.

Configures the root logger so every ``logging.getLogger(__name__)`` call
emits either:

* **JSON lines** (``json_output=True``): machine-parseable, one object
  per record.
* **Human-readable** (``json_output=False``, default): timestamp-prefixed
  lines for local use and the CLI.

When OpenTelemetry tracing is active in the host process the current
``trace_id`` and ``span_id`` are injected into every log record, so an
identifier logged while minting can be tied back to its request.

Applications embedding puid usually configure logging themselves; this
is called by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from opentelemetry import trace

from puid.configs.system import LoggingConfig


class _TraceContextFilter(logging.Filter):
    """Injects OTEL trace/span IDs into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        span = trace.get_current_span()
        ctx = span.get_span_context()
        if ctx and ctx.is_valid:
            record.trace_id = format(ctx.trace_id, "032x")  # type: ignore[attr-defined]
            record.span_id = format(ctx.span_id, "016x")  # type: ignore[attr-defined]
        else:
            record.trace_id = ""  # type: ignore[attr-defined]
            record.span_id = ""  # type: ignore[attr-defined]
        return True


_DEV_FORMAT = "%(levelname)-8s %(asctime)s %(name)s  %(message)s"
_DEV_DATEFMT = "%H:%M:%S"


def setup_logging(
    config: LoggingConfig | None = None, stream: TextIO | None = None
) -> None:
    """Configure the root logger (call once at startup).

    Records go to ``stream``, stdout by default.
    """
    if config is None:
        config = LoggingConfig()

    root = logging.getLogger()
    root.setLevel(config.level.upper())

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.addFilter(_TraceContextFilter())

    if config.json_output:
        from pythonjsonlogger.json import JsonFormatter

        formatter: logging.Formatter = JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s "
            "%(trace_id)s %(span_id)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
            defaults={"trace_id": "", "span_id": ""},
        )
    else:
        formatter = logging.Formatter(fmt=_DEV_FORMAT, datefmt=_DEV_DATEFMT)

    handler.setFormatter(formatter)

    root.handlers = [handler]

    logging.getLogger("opentelemetry").setLevel(logging.WARNING)
