"""Derived marketing metrics.

Every rate is recomputed from summed counters. A zero denominator yields 0,
never NaN or an exception. Scalar functions and Polars expressions share the
same definitions.
"""

from collections.abc import Collection

import polars as pl


# =============================================================================
# SCALAR METRICS
# =============================================================================


def safe_ratio(num: float, den: float, scale: float = 1.0) -> float:
    if den <= 0:
        return 0.0
    return num / den * scale


def ctr(clicks: float, impressions: float) -> float:
    """Click-through rate in percent."""
    return safe_ratio(clicks, impressions, 100)


def conversion_rate(conversions: float, clicks: float) -> float:
    """Conversions per click in percent."""
    return safe_ratio(conversions, clicks, 100)


def cpc(spend: float, clicks: float) -> float:
    return safe_ratio(spend, clicks)


def cpa(spend: float, conversions: float) -> float:
    return safe_ratio(spend, conversions)


def roas(revenue: float, spend: float) -> float:
    return safe_ratio(revenue, spend)


def derive_rates(
    impressions: float,
    clicks: float,
    conversions: float,
    spend: float = 0.0,
    revenue: float = 0.0,
) -> dict[str, float]:
    """All five rates from one set of totals."""
    return {
        "ctr": ctr(clicks, impressions),
        "conversion_rate": conversion_rate(conversions, clicks),
        "cpc": cpc(spend, clicks),
        "cpa": cpa(spend, conversions),
        "roas": roas(revenue, spend),
    }


def format_rate_pct(value: float) -> str:
    """Two-decimal percentage string: 5.5 -> '5.50%'."""
    return f"{value:.2f}%"


# =============================================================================
# POLARS EXPRESSIONS
# =============================================================================

ADDITIVE_FIELDS = ("impressions", "clicks", "conversions", "spend", "revenue")


def safe_ratio_expr(num: str, den: str, scale: float = 1.0) -> pl.Expr:
    """num / den * scale, or 0.0 where den is not positive."""
    return (
        pl.when(pl.col(den) > 0)
        .then(pl.col(num) / pl.col(den) * scale)
        .otherwise(pl.lit(0.0))
    )


def sum_exprs(columns: Collection[str]) -> list[pl.Expr]:
    """Sum every additive field present in the frame."""
    return [pl.col(f).sum().alias(f) for f in ADDITIVE_FIELDS if f in columns]


def rate_exprs(columns: Collection[str]) -> list[pl.Expr]:
    """Rate columns computable from the summed fields present.

    Applied after the group-by, so rates come from totals rather than from
    averaging per-record rates.
    """
    exprs: list[pl.Expr] = []
    if {"impressions", "clicks"} <= set(columns):
        exprs.append(safe_ratio_expr("clicks", "impressions", 100).alias("ctr"))
    if {"clicks", "conversions"} <= set(columns):
        exprs.append(
            safe_ratio_expr("conversions", "clicks", 100).alias("conversion_rate")
        )
    if {"spend", "clicks"} <= set(columns):
        exprs.append(safe_ratio_expr("spend", "clicks").alias("cpc"))
    if {"spend", "conversions"} <= set(columns):
        exprs.append(safe_ratio_expr("spend", "conversions").alias("cpa"))
    if {"revenue", "spend"} <= set(columns):
        exprs.append(safe_ratio_expr("revenue", "spend").alias("roas"))
    return exprs
