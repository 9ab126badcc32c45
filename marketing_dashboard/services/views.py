"""Column definitions and default sorts for each dashboard table."""

from ..table.columns import (
    Column,
    ColumnType,
    format_money,
    format_multiplier,
    format_percent,
)
from ..table.sorting import SortDirection, SortState

NUMBER = ColumnType.NUMBER


def _num(key: str, label: str, formatter=None) -> Column:
    return Column(key, label, NUMBER, align="right", formatter=formatter)


CAMPAIGN_COLUMNS = [
    Column("name", "Campaign Name"),
    Column("objective", "Type", align="center"),
    Column("status", "Status", align="center"),
    Column("medium", "Medium", align="center"),
    _num("budget", "Budget", format_money),
    _num("spend", "Spend", format_money),
    _num("revenue", "Revenue", format_money),
    _num("conversions", "Conversions"),
    _num("roas", "ROAS", format_multiplier),
]

DEVICE_COLUMNS = [
    Column("device", "Device"),
    _num("impressions", "Impressions"),
    _num("clicks", "Clicks"),
    _num("conversions", "Conversions"),
    _num("ctr", "CTR", format_percent),
    _num("conversion_rate", "Conv. Rate", format_percent),
    _num("spend", "Spend", format_money),
    _num("revenue", "Revenue", format_money),
]

REGION_COLUMNS = [
    Column("region", "Region"),
    Column("country", "Country"),
    _num("revenue", "Revenue", format_money),
    _num("spend", "Spend", format_money),
    _num("roas", "ROAS", format_multiplier),
    _num("conversions", "Conversions"),
    _num("clicks", "Clicks"),
    _num("ctr", "CTR", format_percent),
    _num("cpc", "CPC", format_money),
    _num("cpa", "CPA", format_money),
]

AGE_GROUP_COLUMNS = [
    Column("age_group", "Age Group"),
    _num("impressions", "Impressions"),
    _num("clicks", "Clicks"),
    _num("conversions", "Conversions"),
    _num("ctr", "CTR", format_percent),
    _num("conversion_rate", "Conversion Rate", format_percent),
]

WEEKLY_COLUMNS = [
    Column("week_start", "Week", ColumnType.DATE),
    _num("impressions", "Impressions"),
    _num("clicks", "Clicks"),
    _num("conversions", "Conversions"),
    _num("spend", "Spend", format_money),
    _num("revenue", "Revenue", format_money),
]

BY_REVENUE_DESC = SortState("revenue", SortDirection.DESC)

DEFAULT_SORTS: dict[str, SortState | None] = {
    "campaigns": None,
    "devices": BY_REVENUE_DESC,
    "regions": BY_REVENUE_DESC,
    "age_groups": SortState("age_group", SortDirection.ASC),
    "weekly": SortState("week_start", SortDirection.ASC),
}

VIEW_COLUMNS: dict[str, list[Column]] = {
    "campaigns": CAMPAIGN_COLUMNS,
    "devices": DEVICE_COLUMNS,
    "regions": REGION_COLUMNS,
    "age_groups": AGE_GROUP_COLUMNS,
    "weekly": WEEKLY_COLUMNS,
}
