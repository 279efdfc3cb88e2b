class SambatError(Exception):
    """Base error."""

class NotInitializedError(SambatError):
    """Raised when the convenience API is used before a calendar is installed."""

class UnknownYearError(SambatError, KeyError):
    """Raised when a BS year is absent from the active data source."""

    def __init__(self, year: int):
        super().__init__(year)
        self.year = year

    def __str__(self) -> str:
        return f"No calendar data for BS year {self.year}"

class InvalidDateError(SambatError, ValueError):
    """Raised for an impossible BS date, or an AD date before the epoch."""

class MalformedInputError(SambatError, ValueError):
    """Raised when date text cannot be parsed as YYYY-MM-DD."""

class DataSourceError(SambatError):
    """Raised when a reference table is malformed or cannot be loaded."""
