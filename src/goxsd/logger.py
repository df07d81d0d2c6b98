"""Structured logging for the goxsd generator.

Every component owns a :class:`GoxsdLogger` writing one JSON object per
line to stderr; stdout is reserved for generated code. Besides the plain
level methods the logger has helpers for the events the pipeline reports
repeatedly: loaded documents, type resolution, overridden declarations,
skipped schema constructs, expansion cycles and stage timings.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, TextIO
from uuid import uuid4


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


# logging has no "WARN" level name registered under our spelling
_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "component": getattr(record, "component", "goxsd"),
            "message": record.getMessage(),
        }
        if hasattr(record, "operationId"):
            log_entry["operationId"] = record.operationId

        # call-site fields never replace the fixed keys
        for name, value in (getattr(record, "fields", None) or {}).items():
            log_entry.setdefault(name, value)

        return json.dumps(log_entry, default=str)


class GoxsdLogger:
    """Per-component logger with structured fields."""

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        component: str = "goxsd",
        stream: TextIO = None,
    ):
        self.component = component
        self.operation_id = str(uuid4())

        self.logger = logging.getLogger(f"goxsd.{component}")
        self.logger.setLevel(_LEVELS[LogLevel(level)])

        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(StructuredFormatter())
        self.logger.addHandler(handler)

        self.logger.propagate = False

    def _log(self, level: int, message: str, **fields) -> None:
        self.logger.log(
            level,
            message,
            extra={"component": self.component, "operationId": self.operation_id, "fields": fields},
        )

    def debug(self, message: str, **fields) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields) -> None:
        self._log(logging.INFO, message, **fields)

    def warn(self, message: str, **fields) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields) -> None:
        self._log(logging.ERROR, message, **fields)

    def schema_event(self, event: str, schema_uri: str, **fields) -> None:
        """A schema document was loaded, skipped or rejected."""
        self.info(f"Schema {event}", schema=schema_uri, **fields)

    def resolution_decision(self, type_name: str, resolved_as: str, **fields) -> None:
        """How a type reference was resolved (``PrimitiveName``, ``RawName``...)."""
        self.debug(
            f"Resolved type {type_name}",
            typeReference=type_name,
            resolvedAs=resolved_as,
            **fields
        )

    def declaration_override(self, kind: str, name: str, schema: str = None) -> None:
        """A later document redeclared a name; the later declaration is kept."""
        self.debug(f"{kind} {name} overridden", declaration=kind, typeName=name, schema=schema)

    def skipped_construct(self, construct: str, reason: str, **fields) -> None:
        """A schema construct that contributes nothing to the element tree."""
        self.debug(f"Skipping {construct}: {reason}", construct=construct, **fields)

    def type_cycle(self, path: List[str]) -> None:
        self.error("Recursive type expansion", path=path, depth=len(path) - 1)

    def stage_timing(self, stage: str, seconds: float, **fields) -> None:
        """Wall-clock duration of one pipeline stage."""
        self.info(f"Timing: {stage}", stage=stage, seconds=round(seconds, 6), **fields)


def create_logger(
    level: LogLevel = LogLevel.INFO,
    component: str = "goxsd",
    stream: TextIO = None,
) -> GoxsdLogger:
    """Create a configured logger instance."""
    return GoxsdLogger(level=level, component=component, stream=stream)
