"""Errors raised while loading the day dataset."""


class DayStatsError(Exception):
    """Base class for dataset load failures."""


class NetworkError(DayStatsError):
    """Transport failure or non-success response while fetching the dataset."""

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        self.status_code = status_code
        if message is None:
            message = f"Failed to load stats ({status_code})"
        super().__init__(message)


class FormatError(DayStatsError):
    """Payload is missing the day list or is structurally wrong."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
