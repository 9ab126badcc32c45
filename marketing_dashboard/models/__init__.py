from .campaign import (
    Campaign,
    CompanyInfo,
    DemographicBreakdown,
    DemographicPerformance,
    DevicePerformance,
    MarketingData,
    MarketInsights,
    MarketingStats,
    RegionalPerformance,
    WeeklyPerformance,
)

__all__ = [
    "Campaign",
    "CompanyInfo",
    "DemographicBreakdown",
    "DemographicPerformance",
    "DevicePerformance",
    "MarketingData",
    "MarketInsights",
    "MarketingStats",
    "RegionalPerformance",
    "WeeklyPerformance",
]
