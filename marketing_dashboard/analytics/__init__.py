"""Aggregation, metric derivation and weighted estimation for campaign data."""

from .calculator import (
    BY_DEVICE,
    BY_MEDIUM,
    BY_REGION,
    BY_WEEK,
    AggregationEngine,
    KeySelector,
    aggregate,
    by_age_group,
    chart_label,
    distinct_values,
)
from .models import (
    AgeGroupEstimate,
    AgeGroupStats,
    CampaignTotals,
    DeviceStats,
    GenderEstimate,
    MediumStats,
    RegionStats,
    WeeklyStats,
)

__all__ = [
    "AgeGroupEstimate",
    "AgeGroupStats",
    "AggregationEngine",
    "BY_DEVICE",
    "BY_MEDIUM",
    "BY_REGION",
    "BY_WEEK",
    "CampaignTotals",
    "DeviceStats",
    "GenderEstimate",
    "KeySelector",
    "MediumStats",
    "RegionStats",
    "WeeklyStats",
    "aggregate",
    "by_age_group",
    "chart_label",
    "distinct_values",
]
