"""Weighted estimation of segment-level spend and revenue.

Demographic segments record performance counters but not money. Spend and
revenue are allocated from the parent campaign by audience share:

    estimated_spend = campaign.spend * (percentage_of_audience / 100)

These are allocations, not measurements, and are always named
`estimated_*` in outputs.
"""

from collections.abc import Sequence

import polars as pl

from .models import AgeGroupEstimate, GenderEstimate


def estimated_share_expr(total_col: str) -> pl.Expr:
    """Campaign total scaled by the segment's audience percentage."""
    return pl.col(total_col) * (pl.col("percentage_of_audience") / 100)


def _with_estimates(demographics: pl.DataFrame) -> pl.DataFrame:
    return demographics.with_columns(
        estimated_share_expr("campaign_spend").alias("estimated_spend"),
        estimated_share_expr("campaign_revenue").alias("estimated_revenue"),
    )


def estimate_by_gender(
    demographics: pl.DataFrame, genders: Sequence[str]
) -> list[GenderEstimate]:
    """Clicks plus estimated spend/revenue per gender.

    Gender matching is case-insensitive. One entry per requested gender, in
    the order given; genders with no segments report zeros.
    """
    wanted = [g.lower() for g in genders]
    totals = (
        _with_estimates(demographics)
        .with_columns(pl.col("gender").str.to_lowercase().alias("gender_key"))
        .filter(pl.col("gender_key").is_in(wanted))
        .group_by("gender_key")
        .agg(
            pl.col("clicks").sum(),
            pl.col("estimated_spend").sum(),
            pl.col("estimated_revenue").sum(),
        )
    )
    by_key = {row["gender_key"]: row for row in totals.to_dicts()}

    estimates: list[GenderEstimate] = []
    for gender in genders:
        row = by_key.get(gender.lower(), {})
        estimates.append(
            GenderEstimate(
                gender=gender,
                clicks=row.get("clicks", 0),
                estimated_spend=row.get("estimated_spend", 0.0),
                estimated_revenue=row.get("estimated_revenue", 0.0),
            )
        )
    return estimates


def estimate_by_age_group(demographics: pl.DataFrame) -> list[AgeGroupEstimate]:
    """Estimated spend/revenue per age group across all genders, sorted by age group."""
    totals = (
        _with_estimates(demographics)
        .group_by("age_group")
        .agg(pl.col("estimated_spend").sum(), pl.col("estimated_revenue").sum())
        .sort("age_group")
    )
    return [
        AgeGroupEstimate(
            age_group=row["age_group"],
            estimated_spend=row["estimated_spend"],
            estimated_revenue=row["estimated_revenue"],
        )
        for row in totals.to_dicts()
    ]
