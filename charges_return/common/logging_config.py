import logging
import json
import os
import uuid
import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Optional
from contextvars import ContextVar

# Per-request context; copied into worker threads and tasks started from the request
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_report_id: ContextVar[Optional[str]] = ContextVar("report_id", default=None)

MAX_LOG_FILE_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 5


class ContextFilter(logging.Filter):
    """Stamps the current request/report ids on records that do not carry them yet."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()
        if not hasattr(record, "report_id"):
            record.report_id = _report_id.get()
        return True


class JSONFormatter(logging.Formatter):
    """
    Emits one JSON object per record. Request and report ids are read from
    the record, where they were stamped when the record was created.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "request_id": getattr(record, "request_id", None) or "GLOBAL",
        }

        report_id = getattr(record, "report_id", None)
        if report_id:
            log_data["report_id"] = report_id

        if hasattr(record, "extra_fields") and isinstance(record.extra_fields, dict):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = "logs/app.log"):
    """
    Configure the root logger with a JSON console handler and, when
    log_file is set, a rotating JSON file handler.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if root_logger.handlers:
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JSONFormatter())
    console_handler.addFilter(ContextFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_FILE_SIZE, backupCount=BACKUP_COUNT, encoding='utf-8'
        )
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(ContextFilter())
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).info(
        "Logging initialized.", extra={"extra_fields": {"log_file": log_file or "disabled"}}
    )


def set_request_id(request_id: Optional[str]):
    """Set the current request ID in context."""
    _request_id.set(request_id)


def get_request_id() -> str:
    """Get the current request ID, generating one when none is set."""
    return _request_id.get() or str(uuid.uuid4())


def set_report_id(report_id: Optional[str]):
    """Tag subsequent records in this context with a report ID (None clears it)."""
    _report_id.set(report_id)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Lets callers pass structured fields as plain keyword arguments:

        logger.info("Report saved", report_id=iso, rows=12)
    """
    _STANDARD_ARGS = {'exc_info', 'stack_info', 'stacklevel', 'extra'}

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        fields = dict(extra.get("extra_fields") or {})

        new_kwargs = {}
        for key, value in kwargs.items():
            if key in self._STANDARD_ARGS:
                new_kwargs[key] = value
            else:
                fields[key] = value

        extra["extra_fields"] = fields
        extra.setdefault("request_id", _request_id.get())
        extra.setdefault("report_id", _report_id.get())
        new_kwargs["extra"] = extra
        return msg, new_kwargs


def get_logger(name: str) -> StructuredLoggerAdapter:
    """
    Return a structured logger for the given name.
    """
    return StructuredLoggerAdapter(logging.getLogger(name), {})
