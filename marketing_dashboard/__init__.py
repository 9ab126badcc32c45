"""Marketing performance dashboard: aggregation, filtering and sorting of campaign data."""

__version__ = "0.1.0"
