"""CLI commands for liftlog."""

from .exercises import exercises
from .history import history
from .init import init
from .log import log_set
from .routines import routines
from .serve import serve
from .stats import stats

__all__ = [
    "exercises",
    "history",
    "init",
    "log_set",
    "routines",
    "serve",
    "stats",
]
