"""Exceptions raised by the ranking engine."""


class RankingError(Exception):
    """Base class for engine errors."""


class InvalidLimitError(RankingError, ValueError):
    """Raised when a caller passes a negative result limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"limit must be >= 0, got {limit}")
