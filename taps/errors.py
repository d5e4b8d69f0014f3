from __future__ import annotations


class TapsError(Exception):
    """Base class for dashboard errors surfaced to callers."""


class FetchError(TapsError):
    """The remote workbook could not be downloaded."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class WorkbookError(TapsError):
    """The downloaded payload is not a readable workbook."""


class SheetNotFoundError(TapsError):
    def __init__(self, sheet_name: str, available: list[str]):
        listed = ", ".join(available) if available else "none"
        super().__init__(f"Sheet {sheet_name!r} not found (available: {listed})")
        self.sheet_name = sheet_name
        self.available = available


class EmptySeriesError(TapsError):
    """Axis bounds were requested for a series with no points."""


class InvalidTransitionError(TapsError):
    pass
