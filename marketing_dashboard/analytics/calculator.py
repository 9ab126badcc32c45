"""Aggregation engine - folds campaigns into per-view aggregate rows."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

import polars as pl

from ..core.logging import get_logger
from ..ingestion.frames import (
    campaigns_frame,
    demographic_frame,
    device_frame,
    region_frame,
    weekly_frame,
)
from ..models import Campaign
from ..settings import Coordinates
from .estimation import estimate_by_age_group, estimate_by_gender
from .metrics import derive_rates, format_rate_pct, rate_exprs, sum_exprs
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

logger = get_logger("analytics.calculator")

DEFAULT_COORDINATES = Coordinates(lat=0.0, lng=0.0)


# =============================================================================
# KEY SELECTORS
# =============================================================================


@dataclass(frozen=True, eq=False)
class KeySelector:
    """Which breakdown to flatten, which column to group by, and an optional row filter."""

    frame: Callable[[Iterable[Campaign]], pl.DataFrame]
    key: str
    where: pl.Expr | None = None
    extra: tuple[pl.Expr, ...] = ()


BY_MEDIUM = KeySelector(
    campaigns_frame, "medium", extra=(pl.len().alias("campaign_count"),)
)
BY_DEVICE = KeySelector(device_frame, "device")
BY_REGION = KeySelector(
    region_frame, "region", extra=(pl.col("country").first().alias("country"),)
)
BY_WEEK = KeySelector(weekly_frame, "week_start")


def by_age_group(gender: str) -> KeySelector:
    """Age groups restricted to one gender (case-insensitive)."""
    return KeySelector(
        demographic_frame,
        "age_group",
        where=pl.col("gender").str.to_lowercase() == gender.lower(),
    )


def aggregate(campaigns: Iterable[Campaign], group_by: KeySelector) -> pl.DataFrame:
    """One row per distinct key: summed additive fields, then derived rates.

    Groups with no matching sub-records never appear. Rows come out in
    first-seen key order.

    Returns the frame itself; `.to_dicts()` gives the plain row list. The
    engine methods wrap each row in its typed stats model.
    """
    df = group_by.frame(campaigns)
    if group_by.where is not None:
        df = df.filter(group_by.where)

    grouped = df.group_by(group_by.key, maintain_order=True).agg(
        sum_exprs(df.columns) + list(group_by.extra)
    )
    return grouped.with_columns(rate_exprs(grouped.columns))


def distinct_values(campaigns: Iterable[Campaign], field_name: str) -> list[str]:
    """Unique values of a campaign field in first-seen order (filter options)."""
    seen: dict[str, None] = {}
    for c in campaigns:
        seen.setdefault(getattr(c, field_name), None)
    return list(seen)


# =============================================================================
# ENGINE
# =============================================================================


@dataclass(frozen=True)
class AggregationEngine:
    """Per-view aggregations over an immutable campaign snapshot.

    All methods are pure: each call re-derives its output from `campaigns`.

    Attributes:
        campaigns: Campaign records (typically already filtered)
        region_coordinates: Region name -> map position; unknown regions map to (0, 0)
        genders: Gender partitions for the demographic view
    """

    campaigns: tuple[Campaign, ...]
    region_coordinates: Mapping[str, Coordinates] = field(default_factory=dict)
    genders: tuple[str, ...] = ("Male", "Female")

    def __post_init__(self) -> None:
        # Accept any sequence; keep a tuple so the snapshot cannot change
        object.__setattr__(self, "campaigns", tuple(self.campaigns))

    # =========================================================================
    # DEVICE / REGION / MEDIUM
    # =========================================================================

    def get_device_stats(self) -> list[DeviceStats]:
        """Device totals with rates recomputed from the summed counters."""
        df = aggregate(self.campaigns, BY_DEVICE)
        return [DeviceStats(**row) for row in df.to_dicts()]

    def get_region_stats(self) -> list[RegionStats]:
        """Region totals with country and map coordinates attached."""
        df = aggregate(self.campaigns, BY_REGION)

        stats: list[RegionStats] = []
        for row in df.to_dicts():
            coords = self.region_coordinates.get(row["region"])
            if coords is None:
                logger.debug(f"No coordinates for region {row['region']!r}")
                coords = DEFAULT_COORDINATES
            stats.append(RegionStats(lat=coords.lat, lng=coords.lng, **row))
        return stats

    def get_medium_stats(self) -> list[MediumStats]:
        """Campaign-level totals per medium."""
        df = aggregate(self.campaigns, BY_MEDIUM)
        return [MediumStats(**row) for row in df.to_dicts()]

    # =========================================================================
    # DEMOGRAPHICS
    # =========================================================================

    def get_age_group_stats(self, gender: str) -> list[AgeGroupStats]:
        """Age-group performance for one gender, sorted by age group.

        Args:
            gender: Gender label, matched case-insensitively

        Returns:
            Rows with numeric rates and their two-decimal percentage labels.
        """
        df = aggregate(self.campaigns, by_age_group(gender)).sort("age_group")
        return [
            AgeGroupStats(
                gender=gender,
                age_group=row["age_group"],
                impressions=row["impressions"],
                clicks=row["clicks"],
                conversions=row["conversions"],
                ctr=row["ctr"],
                conversion_rate=row["conversion_rate"],
                ctr_label=format_rate_pct(row["ctr"]),
                conversion_rate_label=format_rate_pct(row["conversion_rate"]),
            )
            for row in df.to_dicts()
        ]

    def get_age_group_stats_by_gender(self) -> dict[str, list[AgeGroupStats]]:
        """Independent age-group aggregations, one per configured gender."""
        return {g: self.get_age_group_stats(g) for g in self.genders}

    def get_gender_estimates(self) -> list[GenderEstimate]:
        """Clicks and estimated spend/revenue per configured gender."""
        return estimate_by_gender(demographic_frame(self.campaigns), self.genders)

    def get_age_group_estimates(self) -> list[AgeGroupEstimate]:
        """Estimated spend/revenue per age group across genders."""
        return estimate_by_age_group(demographic_frame(self.campaigns))

    # =========================================================================
    # WEEKLY
    # =========================================================================

    def get_weekly_stats(self) -> list[WeeklyStats]:
        """Summed counters per week start, ascending by date."""
        df = aggregate(self.campaigns, BY_WEEK).sort("week_start")
        return [
            WeeklyStats(
                week_start=row["week_start"],
                impressions=row["impressions"],
                clicks=row["clicks"],
                conversions=row["conversions"],
                spend=row["spend"],
                revenue=row["revenue"],
            )
            for row in df.to_dicts()
        ]

    # =========================================================================
    # CAMPAIGN TOTALS
    # =========================================================================

    def get_campaign_totals(self) -> CampaignTotals:
        """Headline totals across all campaigns in the snapshot."""
        impressions = sum(c.impressions for c in self.campaigns)
        clicks = sum(c.clicks for c in self.campaigns)
        conversions = sum(c.conversions for c in self.campaigns)
        spend = sum(c.spend for c in self.campaigns)
        revenue = sum(c.revenue for c in self.campaigns)
        rates = derive_rates(impressions, clicks, conversions, spend, revenue)

        return CampaignTotals(
            campaign_count=len(self.campaigns),
            impressions=impressions,
            clicks=clicks,
            conversions=conversions,
            spend=spend,
            revenue=revenue,
            ctr=rates["ctr"],
            conversion_rate=rates["conversion_rate"],
            roas=rates["roas"],
        )

    def get_top_campaigns(self, n: int = 6) -> list[Campaign]:
        """First `n` campaigns by revenue, highest first."""
        return sorted(self.campaigns, key=lambda c: c.revenue, reverse=True)[:n]


def chart_label(campaign_name: str) -> str:
    """Short chart label: the campaign name up to the first ' - '."""
    return campaign_name.split(" - ")[0]
