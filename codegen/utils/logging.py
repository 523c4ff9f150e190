"""Logging setup.

Structured JSON on stdout for Cloud Logging, or plain text for local runs.
Records may carry ``workspace_id`` and ``model`` context (see get_logger) and
an ``extra_data`` dict.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

CONTEXT_FIELDS = ("workspace_id", "model")


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None)
    }


class CloudLoggingFormatter(logging.Formatter):
    """One JSON object per record, keyed the way Cloud Logging expects."""

    def __init__(self, service_name: str = "playground-codegen"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "serviceContext": {"service": self.service_name},
            "logging.googleapis.com/labels": {"logger": record.name},
            **_context(record),
        }

        data = getattr(record, "extra_data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class LocalFormatter(logging.Formatter):
    """Plain text with workspace/model context appended."""

    def __init__(self):
        super().__init__(
            fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = _context(record)
        if "workspace_id" in context:
            context["workspace_id"] = context["workspace_id"][:8]
        if context:
            pairs = ", ".join(f"{k.split('_')[0]}={v}" for k, v in context.items())
            # Context goes on the first line, ahead of any traceback
            first, sep, rest = message.partition("\n")
            message = f"{first} ({pairs}){sep}{rest}"
        return message


class WorkspaceLoggerAdapter(logging.LoggerAdapter):
    """Merges the adapter's workspace context into every record."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: str = "playground-codegen",
) -> None:
    """Configure the root logger.

    Args:
        log_level: Minimum log level to capture
        json_logs: Emit Cloud Logging JSON instead of plain text
        service_name: Service name reported in JSON entries
    """
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(CloudLoggingFormatter(service_name=service_name))
    else:
        handler.setFormatter(LocalFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(
    name: str,
    workspace_id: str | None = None,
    model: str | None = None,
) -> logging.Logger | WorkspaceLoggerAdapter:
    """Return a logger, wrapped with workspace/model context when given."""
    logger = logging.getLogger(name)

    extra = {}
    if workspace_id:
        extra["workspace_id"] = workspace_id
    if model:
        extra["model"] = model

    if extra:
        return WorkspaceLoggerAdapter(logger, extra)
    return logger
