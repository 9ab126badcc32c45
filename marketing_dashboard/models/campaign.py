"""Pydantic models for the marketing dataset.

All models are frozen: the dataset is an immutable snapshot once loaded.
Rates embedded in device/region/campaign records (ctr, roas, ...) are kept for
single-campaign display only. Cross-campaign aggregates recompute them from
summed counters.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class DemographicPerformance(_Record):
    impressions: NonNegativeInt = 0
    clicks: NonNegativeInt = 0
    conversions: NonNegativeInt = 0
    ctr: float = 0.0
    conversion_rate: float = 0.0


class DemographicBreakdown(_Record):
    """Audience segment of one campaign.

    percentage_of_audience is relative to the parent campaign's audience;
    segments of one campaign need not sum to 100.
    """

    age_group: str
    gender: str
    percentage_of_audience: NonNegativeFloat = 0.0
    performance: DemographicPerformance = DemographicPerformance()


class DevicePerformance(_Record):
    device: str
    impressions: NonNegativeInt = 0
    clicks: NonNegativeInt = 0
    conversions: NonNegativeInt = 0
    spend: NonNegativeFloat = 0.0
    revenue: NonNegativeFloat = 0.0
    ctr: float = 0.0
    conversion_rate: float = 0.0
    percentage_of_traffic: float = 0.0


class WeeklyPerformance(_Record):
    week_start: date
    week_end: date | None = None
    impressions: NonNegativeInt = 0
    clicks: NonNegativeInt = 0
    conversions: NonNegativeInt = 0
    spend: NonNegativeFloat = 0.0
    revenue: NonNegativeFloat = 0.0


class RegionalPerformance(_Record):
    region: str
    country: str = ""
    impressions: NonNegativeInt = 0
    clicks: NonNegativeInt = 0
    conversions: NonNegativeInt = 0
    spend: NonNegativeFloat = 0.0
    revenue: NonNegativeFloat = 0.0
    ctr: float = 0.0
    conversion_rate: float = 0.0
    cpc: float = 0.0
    cpa: float = 0.0
    roas: float = 0.0


class Campaign(_Record):
    """Root campaign record with nested breakdowns.

    Missing breakdown collections validate to empty tuples.
    """

    id: int
    name: str
    status: str = ""
    objective: str = ""
    medium: str = ""
    format: str = ""
    product_category: str = ""

    # Funnel counters
    impressions: NonNegativeInt = 0
    clicks: NonNegativeInt = 0
    conversions: NonNegativeInt = 0

    # Money
    budget: NonNegativeFloat = 0.0
    spend: NonNegativeFloat = 0.0
    revenue: NonNegativeFloat = 0.0

    # Display-only, as delivered by the source
    budget_utilization: float = 0.0
    average_order_value: float = 0.0
    ctr: float = 0.0
    conversion_rate: float = 0.0
    cpc: float = 0.0
    cpa: float = 0.0
    roas: float = 0.0

    demographic_breakdown: tuple[DemographicBreakdown, ...] = ()
    device_performance: tuple[DevicePerformance, ...] = ()
    weekly_performance: tuple[WeeklyPerformance, ...] = ()
    regional_performance: tuple[RegionalPerformance, ...] = ()


class CompanyInfo(_Record):
    name: str = ""
    founded: str = ""
    headquarters: str = ""
    industry: str = ""
    description: str = ""


class MarketInsights(_Record):
    """Source-provided highlights shown on the overview (display only)."""

    last_updated: str = ""
    peak_performance_day: str = ""
    peak_performance_time: str = ""
    top_converting_product: str = ""
    fastest_growing_region: str = ""


class MarketingStats(_Record):
    """Source-provided headline numbers (display only)."""

    total_campaigns: int = 0
    active_campaigns: int = 0
    total_spend: float = 0.0
    total_revenue: float = 0.0
    total_conversions: int = 0
    average_roas: float = 0.0
    top_performing_medium: str = ""
    top_performing_region: str = ""
    total_impressions: int = 0
    total_clicks: int = 0
    average_ctr: float = 0.0
    average_conversion_rate: float = 0.0


class MarketingData(_Record):
    """Full dataset envelope returned by the marketing data endpoint."""

    message: str = ""
    company_info: CompanyInfo = CompanyInfo()
    marketing_stats: MarketingStats = MarketingStats()
    campaigns: tuple[Campaign, ...] = ()
    market_insights: MarketInsights = MarketInsights()
    filters: dict[str, Any] = Field(default_factory=dict)
