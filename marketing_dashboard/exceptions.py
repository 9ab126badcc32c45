"""Custom exceptions for the dashboard data pipeline."""


class DashboardError(Exception):
    """Base exception for dashboard errors."""

    pass


class ConfigLoadError(DashboardError):
    """Failed to load dashboard configuration."""

    pass


class DataLoadError(DashboardError):
    """Marketing dataset could not be fetched, parsed, or validated.

    Terminal for the current load cycle: no partial data is returned.
    """

    def __init__(self, message: str, source: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"Failed to load marketing data from {source}: {message}")
