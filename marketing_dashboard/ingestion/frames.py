"""Flatten nested campaign records into Polars DataFrames.

One frame per breakdown, one row per sub-record, with the parent campaign's
id (and, for demographics, its spend/revenue) carried along. Explicit schemas
keep empty breakdowns usable as empty frames.
"""

from collections.abc import Iterable

import polars as pl

from ..models import Campaign

CAMPAIGN_SCHEMA: dict[str, pl.DataType] = {
    "campaign_id": pl.Int64,
    "name": pl.String,
    "status": pl.String,
    "objective": pl.String,
    "medium": pl.String,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
    "budget": pl.Float64,
    "spend": pl.Float64,
    "revenue": pl.Float64,
}

DEVICE_SCHEMA: dict[str, pl.DataType] = {
    "campaign_id": pl.Int64,
    "device": pl.String,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
    "spend": pl.Float64,
    "revenue": pl.Float64,
}

REGION_SCHEMA: dict[str, pl.DataType] = {
    "campaign_id": pl.Int64,
    "region": pl.String,
    "country": pl.String,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
    "spend": pl.Float64,
    "revenue": pl.Float64,
}

WEEKLY_SCHEMA: dict[str, pl.DataType] = {
    "campaign_id": pl.Int64,
    "week_start": pl.Date,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
    "spend": pl.Float64,
    "revenue": pl.Float64,
}

DEMOGRAPHIC_SCHEMA: dict[str, pl.DataType] = {
    "campaign_id": pl.Int64,
    "age_group": pl.String,
    "gender": pl.String,
    "percentage_of_audience": pl.Float64,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
    "campaign_spend": pl.Float64,
    "campaign_revenue": pl.Float64,
}


def campaigns_frame(campaigns: Iterable[Campaign]) -> pl.DataFrame:
    """Campaign-level counters, one row per campaign."""
    rows = [
        {
            "campaign_id": c.id,
            "name": c.name,
            "status": c.status,
            "objective": c.objective,
            "medium": c.medium,
            "impressions": c.impressions,
            "clicks": c.clicks,
            "conversions": c.conversions,
            "budget": c.budget,
            "spend": c.spend,
            "revenue": c.revenue,
        }
        for c in campaigns
    ]
    return pl.DataFrame(rows, schema=CAMPAIGN_SCHEMA)


def device_frame(campaigns: Iterable[Campaign]) -> pl.DataFrame:
    rows = [
        {
            "campaign_id": c.id,
            "device": d.device,
            "impressions": d.impressions,
            "clicks": d.clicks,
            "conversions": d.conversions,
            "spend": d.spend,
            "revenue": d.revenue,
        }
        for c in campaigns
        for d in c.device_performance
    ]
    return pl.DataFrame(rows, schema=DEVICE_SCHEMA)


def region_frame(campaigns: Iterable[Campaign]) -> pl.DataFrame:
    rows = [
        {
            "campaign_id": c.id,
            "region": r.region,
            "country": r.country,
            "impressions": r.impressions,
            "clicks": r.clicks,
            "conversions": r.conversions,
            "spend": r.spend,
            "revenue": r.revenue,
        }
        for c in campaigns
        for r in c.regional_performance
    ]
    return pl.DataFrame(rows, schema=REGION_SCHEMA)


def weekly_frame(campaigns: Iterable[Campaign]) -> pl.DataFrame:
    rows = [
        {
            "campaign_id": c.id,
            "week_start": w.week_start,
            "impressions": w.impressions,
            "clicks": w.clicks,
            "conversions": w.conversions,
            "spend": w.spend,
            "revenue": w.revenue,
        }
        for c in campaigns
        for w in c.weekly_performance
    ]
    return pl.DataFrame(rows, schema=WEEKLY_SCHEMA)


def demographic_frame(campaigns: Iterable[Campaign]) -> pl.DataFrame:
    """Demographic segments joined with their campaign's spend and revenue.

    Segment-level spend/revenue is not recorded in the source; the campaign
    totals are carried so estimates can be allocated downstream.
    """
    rows = [
        {
            "campaign_id": c.id,
            "age_group": d.age_group,
            "gender": d.gender,
            "percentage_of_audience": d.percentage_of_audience,
            "impressions": d.performance.impressions,
            "clicks": d.performance.clicks,
            "conversions": d.performance.conversions,
            "campaign_spend": c.spend,
            "campaign_revenue": c.revenue,
        }
        for c in campaigns
        for d in c.demographic_breakdown
    ]
    return pl.DataFrame(rows, schema=DEMOGRAPHIC_SCHEMA)
