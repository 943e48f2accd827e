"""Workout logging and analytics services."""

from .catalog import CatalogService
from .history import HistoryService, group_sessions
from .set_logger import SetLogger
from .stats import StatsService, compute_fitness_stats

__all__ = [
    "CatalogService",
    "compute_fitness_stats",
    "group_sessions",
    "HistoryService",
    "SetLogger",
    "StatsService",
]
