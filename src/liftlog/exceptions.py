"""liftlog exceptions."""


class LiftLogError(Exception):
    """Base exception for liftlog errors."""
    pass


class StoreError(LiftLogError):
    """Raised when the log store cannot complete an operation."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class StoreReadError(StoreError):
    """Raised when an exercise or log lookup fails."""
    pass


class StoreWriteError(StoreError):
    """Raised when an insert, update or delete fails."""
    pass
