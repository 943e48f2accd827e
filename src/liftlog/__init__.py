"""liftlog: workout logging and fitness analytics."""

__version__ = "0.1.0"
