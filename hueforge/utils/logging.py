"""
HueForge Structured Logging
Centralized logging configuration using loguru.

Every record is written as ``time | level | message | extra``. API handlers
open a request context so that log lines emitted deeper in the color engine
carry the same ``request_id`` as the handler's own lines.
"""
import sys
from typing import Any, ContextManager, Dict, Optional

from loguru import logger

from hueforge.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


class StructuredLogger:
    """Structured logger for the HueForge palette service."""

    def __init__(self, level: Optional[str] = None):
        self.level = level or config.LOG_LEVEL
        self._configure_logger()

    def _configure_logger(self):
        logger.remove()
        logger.add(sys.stdout, format=LOG_FORMAT, level=self.level, serialize=False)

    def request_context(self, request_id: str, **fields: Any) -> ContextManager:
        """
        Attach ``request_id`` (and any extra fields) to every record logged
        inside the ``with`` block, including records from the color engine.
        """
        return logger.contextualize(request_id=request_id, **fields)

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = logger.bind(**extra) if extra else logger
        # depth=2 reports the caller of info()/warning()/... rather than this helper
        target.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)


_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the process-wide logger."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
