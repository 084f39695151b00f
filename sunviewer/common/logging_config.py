"""
Logging Configuration for SunViewer

Console (and optional file) logging for the viewer's logger hierarchy,
rooted at 'sunviewer'. Lines are plain text by default; JSON lines can be
enabled for log collectors. Components log through ServiceLogger so every
record carries the service and component it came from.
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from pathlib import Path

from .config import LoggingConfig

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
TEXT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Context attributes copied into JSON output when a record carries them
CONTEXT_FIELDS = ('service', 'component', 'image_path')


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry)


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = True
) -> logging.Logger:
    """
    Configure the logger hierarchy for the viewer

    Calling again replaces the handlers installed by a previous call.

    Args:
        service_name: Root of the logger hierarchy (e.g., 'sunviewer')
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive)
        log_file: Also append to this file, creating parent directories
        json_format: JSON lines (True) or plain text (False)

    Returns:
        The configured root logger of the hierarchy
    """
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger(service_name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JSONFormatter() if json_format else logging.Formatter(
        TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def setup_logging_from_config(service_name: str, config: LoggingConfig) -> logging.Logger:
    """Configure logging from the 'logging' section of the viewer config."""
    return setup_logging(
        service_name,
        log_level=config.level,
        log_file=config.log_file,
        json_format=config.json_format
    )


class ServiceLogger:
    """
    Logger for one viewer component

    Adds 'service' and 'component' to every record; callers may pass
    further context (e.g. image_path) through ``extra``.
    """

    def __init__(self, service_name: str, component: str = None):
        name = f"{service_name}.{component}" if component else service_name
        self.logger = logging.getLogger(name)
        self.service_name = service_name
        self.component = component

    def _context(self, extra: Dict[str, Any] = None) -> Dict[str, Any]:
        context = {'service': self.service_name}
        if self.component:
            context['component'] = self.component
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Dict[str, Any] = None):
        self.logger.debug(message, extra=self._context(extra))

    def info(self, message: str, extra: Dict[str, Any] = None):
        self.logger.info(message, extra=self._context(extra))

    def warning(self, message: str, extra: Dict[str, Any] = None):
        self.logger.warning(message, extra=self._context(extra))

    def error(self, message: str, extra: Dict[str, Any] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._context(extra), exc_info=exc_info)
