"""Scoped logging context built on contextvars.

Fields pushed here (``search_id``, ``source``, ``query``...) are copied onto
every record emitted inside the scope by ``ContextualFilter``. Worker threads
do not inherit the context automatically; the orchestrator re-enters it in
each task.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("job_assistant_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields active in the current scope."""
    return dict(_CONTEXT.get())


def clear_log_context() -> None:
    """Drop every context field. Mostly useful in tests."""
    _CONTEXT.set({})


class log_context:
    """Context manager that adds fields to the logging context.

    Example:
        >>> with log_context(search_id="3f2a", source="LinkedIn"):
        ...     logger.info("Fetching")  # carries search_id and source
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[Token] = None

    def __enter__(self) -> "log_context":
        self._token = _CONTEXT.set({**_CONTEXT.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self._token is not None:
            _CONTEXT.reset(self._token)
            self._token = None
        return False
