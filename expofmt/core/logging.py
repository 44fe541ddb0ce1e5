"""Package logger with structured context dimensions.

Usage:
    from expofmt.core.logging import logger

    log = logger.with_context(context_base="metrics_server", port=9090)
    log.info("Listening")   # -> "Listening [context_base=metrics_server port=9090]"
"""

import logging
import sys
from typing import Any

from expofmt.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that appends its context dimensions to every message."""

    def __init__(self, logger: logging.Logger, dimensions: dict[str, Any] | None = None):
        super().__init__(logger, dimensions or {})

    @property
    def dimensions(self) -> dict[str, Any]:
        return dict(self.extra)

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger carrying these dimensions on top of ours."""
        return ContextualLogger(self.logger, {**self.extra, **dimensions})

    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {}).update(dimensions=dict(self.extra))
        if not self.extra:
            return msg, kwargs
        ctx = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} [{ctx}]", kwargs


def _build_logger(name: str) -> ContextualLogger:
    base = logging.getLogger(name)
    base.setLevel(settings.LOG_LEVEL)
    if not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        base.addHandler(handler)
    return ContextualLogger(base)


logger = _build_logger("expofmt")
