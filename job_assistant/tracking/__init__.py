"""Application tracking on top of the persistence layer."""

from .service import ApplicationTracker

__all__ = ["ApplicationTracker"]
