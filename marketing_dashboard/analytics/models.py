"""Output models for aggregated views."""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True)
class _Row:
    def to_row(self) -> dict[str, Any]:
        """Plain dict for table sorting and serialization."""
        return asdict(self)


@dataclass(frozen=True)
class DeviceStats(_Row):
    """Totals for one device label across all campaigns."""

    device: str
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float  # clicks / impressions * 100
    conversion_rate: float  # conversions / clicks * 100
    cpc: float
    cpa: float
    roas: float


@dataclass(frozen=True)
class RegionStats(_Row):
    """Totals for one region label, with map coordinates."""

    region: str
    country: str
    lat: float
    lng: float
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    cpc: float
    cpa: float
    roas: float


@dataclass(frozen=True)
class AgeGroupStats(_Row):
    """Demographic performance for one age group within one gender."""

    gender: str
    age_group: str
    impressions: int
    clicks: int
    conversions: int
    ctr: float
    conversion_rate: float
    ctr_label: str  # "5.00%"
    conversion_rate_label: str


@dataclass(frozen=True)
class WeeklyStats(_Row):
    """Summed counters for one week start across campaigns."""

    week_start: date
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float


@dataclass(frozen=True)
class MediumStats(_Row):
    """Campaign-level totals per medium."""

    medium: str
    campaign_count: int
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    cpc: float
    cpa: float
    roas: float


@dataclass(frozen=True)
class GenderEstimate(_Row):
    """Measured clicks and allocated spend/revenue for one gender."""

    gender: str
    clicks: int
    estimated_spend: float
    estimated_revenue: float


@dataclass(frozen=True)
class AgeGroupEstimate(_Row):
    """Allocated spend/revenue for one age group."""

    age_group: str
    estimated_spend: float
    estimated_revenue: float


@dataclass(frozen=True)
class CampaignTotals(_Row):
    """Headline totals over a set of campaigns."""

    campaign_count: int
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    roas: float
