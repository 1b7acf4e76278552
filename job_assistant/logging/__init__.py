"""Structured logging helpers shared by every job assistant component."""

import logging
from typing import Optional, Union

from .config import configure_logging, JSONFormatter, KeyValueFormatter, ContextualFilter
from .context import clear_log_context, get_log_context, log_context


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags records with a component name.

    Fields passed in a call's ``extra`` win over the adapter defaults.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return a logger, wrapped so every record carries ``component``.

    Example:
        >>> logger = get_logger(__name__, component="eligibility")
        >>> logger.info("Posting excluded", extra={"event": "eligibility.excluded"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = [
    "ComponentLoggerAdapter",
    "ContextualFilter",
    "JSONFormatter",
    "KeyValueFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "get_logger",
    "log_context",
]
