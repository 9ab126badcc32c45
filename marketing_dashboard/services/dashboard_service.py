"""Dashboard service - orchestrates data loading, filtering and aggregation."""

from collections.abc import Collection
from dataclasses import dataclass, field
from typing import Any

from ..analytics import (
    AgeGroupEstimate,
    AgeGroupStats,
    AggregationEngine,
    CampaignTotals,
    DeviceStats,
    GenderEstimate,
    MediumStats,
    RegionStats,
    WeeklyStats,
    chart_label,
    distinct_values,
)
from ..core.logging import get_logger
from ..ingestion import MarketingDataLoader
from ..models import Campaign, MarketingData
from ..settings import DashboardSettings, load_settings
from ..table import MembershipPredicate, TextPredicate, apply_sort, filter_records
from .views import DEFAULT_SORTS, VIEW_COLUMNS

logger = get_logger("services.dashboard")


@dataclass
class CampaignView:
    """Filtered campaign list with the aggregates shown alongside it."""

    campaigns: list[Campaign]
    total_campaigns: int
    totals: CampaignTotals
    medium_stats: list[MediumStats]
    top_campaigns: list[Campaign]
    objective_options: list[str]


@dataclass
class DashboardOutput:
    """Every view derived from one dataset snapshot."""

    data: MarketingData
    campaign_view: CampaignView
    device_stats: list[DeviceStats]
    region_stats: list[RegionStats]
    age_group_stats: dict[str, list[AgeGroupStats]]
    gender_estimates: list[GenderEstimate]
    age_group_estimates: list[AgeGroupEstimate]
    weekly_stats: list[WeeklyStats]
    warnings: list[str] = field(default_factory=list)


class DashboardService:
    """Builds dashboard views from the marketing dataset.

    Orchestrates:
    1. Loading the dataset once (HTTP or local JSON)
    2. Filtering campaigns by name query and objective
    3. Running every per-view aggregation
    4. Applying each view's default sort

    Usage:
        service = DashboardService()
        data = service.load()
        output = service.generate_dashboard(data, name_query="summer")
    """

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        loader: MarketingDataLoader | None = None,
    ):
        """Initialize service.

        Args:
            settings: Dashboard settings. Defaults to the bundled YAML config.
            loader: Dataset loader. Defaults to one built from settings.data_source.
        """
        self.settings = settings or load_settings()
        self._loader = loader

    @property
    def loader(self) -> MarketingDataLoader:
        if self._loader is None:
            self._loader = MarketingDataLoader(self.settings.data_source)
        return self._loader

    def load(self) -> MarketingData:
        """Fetch the dataset. Raises DataLoadError on any failure."""
        return self.loader.load()

    def engine_for(self, campaigns: Collection[Campaign]) -> AggregationEngine:
        return AggregationEngine(
            campaigns=tuple(campaigns),
            region_coordinates=self.settings.region_coordinates,
            genders=self.settings.genders,
        )

    def filter_campaigns(
        self,
        campaigns: Collection[Campaign],
        name_query: str = "",
        objectives: Collection[str] = (),
    ) -> list[Campaign]:
        """Campaigns matching the name query and any of the selected objectives."""
        predicates = [
            TextPredicate(name_query, field_name="name"),
            MembershipPredicate(objectives, field_name="objective"),
        ]
        return filter_records(campaigns, predicates)

    def campaign_view(
        self,
        data: MarketingData,
        name_query: str = "",
        objectives: Collection[str] = (),
        top_n: int = 6,
    ) -> CampaignView:
        """Campaign page: filtered list, totals, per-medium stats, top campaigns."""
        filtered = self.filter_campaigns(data.campaigns, name_query, objectives)
        engine = self.engine_for(filtered)
        return CampaignView(
            campaigns=filtered,
            total_campaigns=len(data.campaigns),
            totals=engine.get_campaign_totals(),
            medium_stats=engine.get_medium_stats(),
            top_campaigns=engine.get_top_campaigns(top_n),
            objective_options=distinct_values(data.campaigns, "objective"),
        )

    def generate_dashboard(
        self,
        data: MarketingData | None = None,
        name_query: str = "",
        objectives: Collection[str] = (),
    ) -> DashboardOutput:
        """Derive every view from one snapshot.

        Device, region, demographic and weekly views cover all campaigns; only
        the campaign view applies the filters.

        Args:
            data: Loaded dataset. Fetched via the loader when omitted.
            name_query: Case-insensitive substring for campaign names
            objectives: Allowed campaign objectives; empty means all

        Returns:
            DashboardOutput with every view in its default sort order
        """
        if data is None:
            data = self.load()

        engine = self.engine_for(data.campaigns)

        region_stats = self._sorted("regions", engine.get_region_stats())
        warnings = [
            f"No coordinates configured for region '{r.region}'; plotted at (0, 0)"
            for r in region_stats
            if r.region not in self.settings.region_coordinates
        ]

        output = DashboardOutput(
            data=data,
            campaign_view=self.campaign_view(data, name_query, objectives),
            device_stats=self._sorted("devices", engine.get_device_stats()),
            region_stats=region_stats,
            age_group_stats={
                gender: self._sorted("age_groups", rows)
                for gender, rows in engine.get_age_group_stats_by_gender().items()
            },
            gender_estimates=engine.get_gender_estimates(),
            age_group_estimates=engine.get_age_group_estimates(),
            weekly_stats=self._sorted("weekly", engine.get_weekly_stats()),
            warnings=warnings,
        )

        for view, count in (
            ("campaigns", len(output.campaign_view.campaigns)),
            ("devices", len(output.device_stats)),
            ("regions", len(output.region_stats)),
            ("weekly", len(output.weekly_stats)),
        ):
            logger.info(f"Built {view} view", extra={"view": view, "row_count": count})
        return output

    def _sorted(self, view: str, rows: list[Any]) -> list[Any]:
        return apply_sort(rows, DEFAULT_SORTS[view], VIEW_COLUMNS[view])

    def generate_summary_dict(self, output: DashboardOutput) -> dict[str, Any]:
        """Convert DashboardOutput to a JSON-serializable dictionary.

        Args:
            output: DashboardOutput from generate_dashboard()

        Returns:
            Dictionary with rounded money/rate values and ISO dates
        """
        view = output.campaign_view
        totals = view.totals
        return {
            "company": output.data.company_info.name,
            "market_insights": output.data.market_insights.model_dump(),
            "campaigns": {
                "showing": len(view.campaigns),
                "total": view.total_campaigns,
                "objective_options": view.objective_options,
                "totals": {
                    "spend": round(totals.spend, 2),
                    "revenue": round(totals.revenue, 2),
                    "conversions": totals.conversions,
                    "ctr_pct": round(totals.ctr, 2),
                    "conversion_rate_pct": round(totals.conversion_rate, 2),
                    "roas": round(totals.roas, 2),
                },
                "top_by_revenue": [
                    {"label": chart_label(c.name), "revenue": c.revenue, "roas": c.roas}
                    for c in view.top_campaigns
                ],
                "by_medium": [
                    {
                        "medium": m.medium,
                        "revenue": round(m.revenue, 2),
                        "conversions": m.conversions,
                    }
                    for m in view.medium_stats
                ],
            },
            "devices": [_rounded(d.to_row()) for d in output.device_stats],
            "regions": [_rounded(r.to_row()) for r in output.region_stats],
            "demographics": {
                "by_gender": [_rounded(g.to_row()) for g in output.gender_estimates],
                "by_age_group": [
                    _rounded(a.to_row()) for a in output.age_group_estimates
                ],
                "age_groups": {
                    gender: [_rounded(a.to_row()) for a in rows]
                    for gender, rows in output.age_group_stats.items()
                },
            },
            "weekly": [
                {**_rounded(w.to_row()), "week_start": w.week_start.isoformat()}
                for w in output.weekly_stats
            ],
            "warnings": output.warnings,
        }


def _rounded(row: dict[str, Any], digits: int = 2) -> dict[str, Any]:
    return {k: round(v, digits) if isinstance(v, float) else v for k, v in row.items()}
