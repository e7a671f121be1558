"""
Structured logging for the OpenRouter client.

Components log with keyword context instead of formatted strings:

    logger = create_logger("retry")
    logger.warning("Request failed, retrying", attempt=2, max_attempts=4, error=str(e))

By default records propagate to the standard logging tree so the host
application decides where they go. Console and append-only JSONL output can
be switched on per logger; handlers are created lazily on the first record.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Context fields copied from the record into JSON output when present
CONTEXT_FIELDS = (
    'component',
    'method',
    'url',
    'model',
    'attempt',
    'max_attempts',
    'status_code',
    'delay_seconds',
    'body_bytes',
    'error',
    'error_type',
)


class FlushingFileHandler(logging.FileHandler):
    """FileHandler that flushes after every emit for real-time log visibility."""
    def emit(self, record):
        super().emit(record)
        self.flush()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now().astimezone().isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        return json.dumps(log_data, default=str)


class ClientLogger:
    """Keyword-context logger for one client component.

    File handlers are created lazily on first log message to avoid
    creating empty log files when nothing is logged.
    """
    def __init__(
        self,
        component: str,
        log_dir: Optional[Path] = None,
        console_output: bool = False,
        level: str = "DEBUG",
        filename: Optional[str] = None
    ):
        self.component = component
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.console_output = console_output
        self.level = level
        self.filename = filename or f"{component}.jsonl"

        self._logger = None
        self._initialized = False
        self.log_file = None

    def _ensure_initialized(self):
        if self._initialized:
            return

        owns_handlers = self.console_output or self.log_dir is not None
        logger_name = f"openrouter_client.{self.component}"
        if owns_handlers:
            # Unique name so repeated loggers don't accumulate handlers
            logger_name = f"{logger_name}.{id(self)}"
            self._logger = logging.getLogger(logger_name)
            self._logger.setLevel(getattr(logging, self.level.upper()))
        else:
            self._logger = logging.getLogger(logger_name)

        if self.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            self._logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            json_file = self.log_dir / self.filename
            json_handler = FlushingFileHandler(json_file, mode='a')
            json_handler.setFormatter(JSONFormatter())
            self._logger.addHandler(json_handler)
            self.log_file = json_file

        self._logger.propagate = not owns_handlers
        self._initialized = True

    @property
    def logger(self) -> logging.Logger:
        self._ensure_initialized()
        return self._logger

    def _log(self, level: str, message: str, **kwargs):
        reserved_params = {}
        for param in ['exc_info', 'stack_info', 'stacklevel', 'extra']:
            if param in kwargs:
                reserved_params[param] = kwargs.pop(param)

        extra = {
            'component': self.component,
            **kwargs
        }
        if 'extra' in reserved_params:
            extra.update(reserved_params.pop('extra'))

        self.logger.log(
            getattr(logging, level.upper()),
            message,
            extra=extra,
            **reserved_params
        )

    def debug(self, message: str, **kwargs):
        self._log('DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log('INFO', message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log('WARNING', message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log('ERROR', message, **kwargs)

    def close(self):
        if self._initialized and self._logger:
            for handler in self._logger.handlers[:]:
                handler.close()
                self._logger.removeHandler(handler)
            self._initialized = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def create_logger(component: str, **kwargs) -> ClientLogger:
    return ClientLogger(component, **kwargs)
