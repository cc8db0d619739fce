"""Logging setup for the exporter.

``logger.with_context(...)`` returns a child logger whose lines carry the
given key/value pairs, e.g. ``scope=user``.
"""

import logging
import sys
from typing import Any, Optional

from dovecot_exporter.core.config import settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that appends its context dimensions to each message."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        if not self.extra:
            return msg, kwargs
        context = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} [{context}]", kwargs

    def with_context(self, **context: Any) -> "ContextualLogger":
        """Return a new logger carrying this logger's context plus ``context``."""
        merged = {**(self.extra or {}), **context}
        return ContextualLogger(self.logger, merged)


class LoggerConfigurator:
    """Configures the process-wide handler and hands out contextual loggers."""

    _configured = False

    @classmethod
    def configure_root(cls, level: Optional[str] = None) -> None:
        """Install a single stderr handler on the root logger.

        Calling it again only updates the level.
        """
        root = logging.getLogger()
        root.setLevel(level or settings.LOG_LEVEL)
        if cls._configured:
            return
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
        cls._configured = True

    @staticmethod
    def configure_logger(
        name: str, dimensions: Optional[dict[str, Any]] = None
    ) -> ContextualLogger:
        """Return a ``ContextualLogger`` for ``name`` with optional base dimensions."""
        return ContextualLogger(logging.getLogger(name), dict(dimensions or {}))


logger = LoggerConfigurator.configure_logger("dovecot_exporter")
