"""Tests for the aggregation engine."""

import logging
from collections.abc import Callable
from datetime import date

import pytest

from marketing_dashboard.analytics import (
    BY_DEVICE,
    AggregationEngine,
    DeviceStats,
    aggregate,
    chart_label,
    distinct_values,
)
from marketing_dashboard.models import Campaign
from marketing_dashboard.settings import Coordinates


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def campaigns(make_campaign: Callable[..., Campaign]) -> list[Campaign]:
    """Two campaigns sharing device, region and week labels."""
    return [
        make_campaign(
            id=1,
            name="Summer Sale - Instagram",
            medium="Instagram",
            impressions=1000,
            clicks=65,
            conversions=6,
            spend=300.0,
            revenue=1200.0,
            device_performance=[
                {"device": "A", "impressions": 100, "clicks": 10, "conversions": 1,
                 "spend": 20.0, "revenue": 100.0, "ctr": 99.0},
                {"device": "C", "impressions": 50, "clicks": 0, "conversions": 0},
            ],
            regional_performance=[
                {"region": "Dubai", "country": "UAE", "impressions": 500,
                 "clicks": 20, "conversions": 2, "spend": 100.0, "revenue": 500.0},
                {"region": "Atlantis", "country": "Nowhere", "impressions": 10,
                 "clicks": 1, "conversions": 0, "spend": 5.0, "revenue": 0.0},
            ],
            weekly_performance=[
                {"week_start": "2024-01-08", "impressions": 300, "clicks": 15,
                 "conversions": 1, "spend": 50.0, "revenue": 200.0},
                {"week_start": "2024-01-01", "impressions": 700, "clicks": 50,
                 "conversions": 5, "spend": 250.0, "revenue": 1000.0},
            ],
            demographic_breakdown=[
                {"age_group": "25-34", "gender": "Male", "percentage_of_audience": 40,
                 "performance": {"impressions": 400, "clicks": 20, "conversions": 2}},
                {"age_group": "18-24", "gender": "Male", "percentage_of_audience": 30,
                 "performance": {"impressions": 300, "clicks": 30, "conversions": 3}},
            ],
        ),
        make_campaign(
            id=2,
            name="Brand Push - Facebook",
            objective="Awareness",
            medium="Facebook",
            impressions=2000,
            clicks=45,
            conversions=3,
            spend=200.0,
            revenue=300.0,
            device_performance=[
                {"device": "B", "impressions": 900, "clicks": 45, "conversions": 3,
                 "spend": 80.0, "revenue": 200.0, "ctr": 1.0},
            ],
            regional_performance=[
                {"region": "Dubai", "country": "United Arab Emirates",
                 "impressions": 1500, "clicks": 40, "conversions": 3,
                 "spend": 150.0, "revenue": 250.0},
            ],
            weekly_performance=[
                {"week_start": "2024-01-08", "impressions": 2000, "clicks": 45,
                 "conversions": 3, "spend": 200.0, "revenue": 300.0},
            ],
            demographic_breakdown=[
                {"age_group": "25-34", "gender": "male", "percentage_of_audience": 50,
                 "performance": {"impressions": 600, "clicks": 30, "conversions": 1}},
                {"age_group": "25-34", "gender": "Female", "percentage_of_audience": 50,
                 "performance": {"impressions": 500, "clicks": 15, "conversions": 0}},
            ],
        ),
    ]


@pytest.fixture
def engine(campaigns: list[Campaign]) -> AggregationEngine:
    return AggregationEngine(
        campaigns=campaigns,
        region_coordinates={"Dubai": Coordinates(lat=25.2048, lng=55.2708)},
    )


# =============================================================================
# GENERIC AGGREGATION
# =============================================================================


class TestAggregate:
    """Tests for aggregate()."""

    def test_one_row_per_key(self, campaigns: list[Campaign]) -> None:
        """Should emit one row per distinct device, in first-seen order."""
        df = aggregate(campaigns, BY_DEVICE)
        assert df["device"].to_list() == ["A", "C", "B"]

    def test_idempotent(self, campaigns: list[Campaign]) -> None:
        """Same input twice gives the same frame."""
        assert aggregate(campaigns, BY_DEVICE).equals(aggregate(campaigns, BY_DEVICE))

    def test_sum_conservation(self, campaigns: list[Campaign]) -> None:
        """Group totals add up to the sum over all device sub-records."""
        df = aggregate(campaigns, BY_DEVICE)
        expected = sum(d.impressions for c in campaigns for d in c.device_performance)
        assert df["impressions"].sum() == expected
        assert df["spend"].sum() == pytest.approx(100.0)

    def test_empty_input(self) -> None:
        """No campaigns means no rows."""
        df = aggregate([], BY_DEVICE)
        assert df.is_empty()

    def test_rows_as_dicts(self, campaigns: list[Campaign]) -> None:
        """The frame converts to one plain dict per group."""
        rows = aggregate(campaigns, BY_DEVICE).to_dicts()
        a = next(r for r in rows if r["device"] == "A")
        assert a["impressions"] == 100
        assert a["ctr"] == pytest.approx(10.0)

    def test_does_not_mutate_input(self, campaigns: list[Campaign]) -> None:
        before = [c.model_dump() for c in campaigns]
        aggregate(campaigns, BY_DEVICE)
        assert [c.model_dump() for c in campaigns] == before


# =============================================================================
# DEVICE / REGION / MEDIUM
# =============================================================================


class TestDeviceStats:
    """Tests for get_device_stats()."""

    def test_returns_device_stats(self, engine: AggregationEngine) -> None:
        result = engine.get_device_stats()
        assert all(isinstance(d, DeviceStats) for d in result)
        assert len(result) == 3

    def test_rate_from_totals(self, make_campaign: Callable[..., Campaign]) -> None:
        """A(100 imp, 10 clicks) + B(900 imp, 45 clicks) on one label gives ctr 5.5."""
        campaigns = [
            make_campaign(id=1, device_performance=[
                {"device": "Mobile", "impressions": 100, "clicks": 10, "ctr": 10.0},
            ]),
            make_campaign(id=2, device_performance=[
                {"device": "Mobile", "impressions": 900, "clicks": 45, "ctr": 5.0},
            ]),
        ]
        (mobile,) = AggregationEngine(campaigns).get_device_stats()
        assert mobile.impressions == 1000
        assert mobile.clicks == 55
        # Averaging the embedded rates would give 7.5
        assert mobile.ctr == pytest.approx(5.5)

    def test_zero_counters_give_zero_rates(self, engine: AggregationEngine) -> None:
        """Device C has no clicks, so its rates are 0."""
        c = next(d for d in engine.get_device_stats() if d.device == "C")
        assert c.ctr == 0
        assert c.conversion_rate == 0
        assert c.cpc == 0
        assert c.roas == 0

    def test_missing_collection_is_empty(self, make_campaign: Callable[..., Campaign]) -> None:
        """A campaign without device_performance contributes nothing."""
        engine = AggregationEngine([make_campaign(id=1)])
        assert engine.get_device_stats() == []


class TestRegionStats:
    """Tests for get_region_stats()."""

    def test_sums_across_campaigns(self, engine: AggregationEngine) -> None:
        dubai = next(r for r in engine.get_region_stats() if r.region == "Dubai")
        assert dubai.impressions == 2000
        assert dubai.revenue == pytest.approx(750.0)
        assert dubai.roas == pytest.approx(3.0)

    def test_first_seen_country(self, engine: AggregationEngine) -> None:
        dubai = next(r for r in engine.get_region_stats() if r.region == "Dubai")
        assert dubai.country == "UAE"

    def test_configured_coordinates(self, engine: AggregationEngine) -> None:
        dubai = next(r for r in engine.get_region_stats() if r.region == "Dubai")
        assert (dubai.lat, dubai.lng) == (25.2048, 55.2708)

    def test_unknown_region_defaults_to_origin(
        self, engine: AggregationEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should place regions without coordinates at (0, 0) and log it."""
        with caplog.at_level(logging.DEBUG, logger="marketing_dashboard"):
            stats = engine.get_region_stats()
        atlantis = next(r for r in stats if r.region == "Atlantis")
        assert atlantis.lat == 0
        assert atlantis.lng == 0
        assert "Atlantis" in caplog.text


class TestMediumStats:
    """Tests for get_medium_stats()."""

    def test_campaign_level_totals(self, engine: AggregationEngine) -> None:
        result = {m.medium: m for m in engine.get_medium_stats()}
        assert set(result) == {"Instagram", "Facebook"}
        assert result["Instagram"].campaign_count == 1
        assert result["Instagram"].revenue == pytest.approx(1200.0)
        assert result["Instagram"].roas == pytest.approx(4.0)


# =============================================================================
# DEMOGRAPHICS
# =============================================================================


class TestAgeGroupStats:
    """Tests for get_age_group_stats()."""

    def test_gender_is_case_insensitive(self, engine: AggregationEngine) -> None:
        """'male' and 'Male' segments land in the same partition."""
        rows = {r.age_group: r for r in engine.get_age_group_stats("Male")}
        assert rows["25-34"].impressions == 1000
        assert rows["25-34"].clicks == 50

    def test_sorted_by_age_group(self, engine: AggregationEngine) -> None:
        rows = engine.get_age_group_stats("Male")
        assert [r.age_group for r in rows] == ["18-24", "25-34"]

    def test_rates_and_labels(self, engine: AggregationEngine) -> None:
        """Should carry numeric rates and two-decimal percentage labels."""
        row = next(r for r in engine.get_age_group_stats("Male") if r.age_group == "18-24")
        assert row.ctr == pytest.approx(10.0)
        assert row.ctr_label == "10.00%"
        assert row.conversion_rate_label == "10.00%"

    def test_no_zero_groups(self, engine: AggregationEngine) -> None:
        """Female has only 25-34; 18-24 must not appear with zeros."""
        rows = engine.get_age_group_stats("Female")
        assert [r.age_group for r in rows] == ["25-34"]

    def test_by_gender_covers_configured_genders(self, engine: AggregationEngine) -> None:
        result = engine.get_age_group_stats_by_gender()
        assert list(result) == ["Male", "Female"]


# =============================================================================
# WEEKLY
# =============================================================================


class TestWeeklyStats:
    """Tests for get_weekly_stats()."""

    def test_ascending_by_week(self, engine: AggregationEngine) -> None:
        weeks = [w.week_start for w in engine.get_weekly_stats()]
        assert weeks == [date(2024, 1, 1), date(2024, 1, 8)]

    def test_weekly_sums(self, engine: AggregationEngine) -> None:
        # Week 2: 300 + 2000 impressions, 50 + 200 spend
        week2 = next(w for w in engine.get_weekly_stats() if w.week_start == date(2024, 1, 8))
        assert week2.impressions == 2300
        assert week2.spend == pytest.approx(250.0)


# =============================================================================
# CAMPAIGN TOTALS
# =============================================================================


class TestCampaignTotals:
    """Tests for get_campaign_totals() and get_top_campaigns()."""

    def test_totals(self, engine: AggregationEngine) -> None:
        totals = engine.get_campaign_totals()
        assert totals.campaign_count == 2
        assert totals.impressions == 3000
        assert totals.revenue == pytest.approx(1500.0)
        assert totals.ctr == pytest.approx(110 / 3000 * 100)
        assert totals.roas == pytest.approx(3.0)

    def test_empty_totals(self) -> None:
        totals = AggregationEngine([]).get_campaign_totals()
        assert totals.campaign_count == 0
        assert totals.ctr == 0
        assert totals.roas == 0

    def test_top_campaigns_by_revenue(self, engine: AggregationEngine) -> None:
        top = engine.get_top_campaigns(n=1)
        assert [c.id for c in top] == [1]

    def test_top_campaigns_reorders_input(
        self, make_campaign: Callable[..., Campaign]
    ) -> None:
        """Highest revenue first, regardless of input position."""
        campaigns = [
            make_campaign(id=1, revenue=100.0),
            make_campaign(id=2, revenue=900.0),
            make_campaign(id=3, revenue=500.0),
            make_campaign(id=4, revenue=700.0),
        ]
        engine = AggregationEngine(campaigns)
        assert [c.id for c in engine.get_top_campaigns()] == [2, 4, 3, 1]
        assert [c.id for c in engine.get_top_campaigns(n=2)] == [2, 4]

    def test_chart_label(self) -> None:
        assert chart_label("Summer Sale - Instagram Stories") == "Summer Sale"
        assert chart_label("Standalone") == "Standalone"

    def test_distinct_values_first_seen(
        self, campaigns: list[Campaign], make_campaign: Callable[..., Campaign]
    ) -> None:
        extra = make_campaign(id=3, objective="Conversions")
        assert distinct_values([*campaigns, extra], "objective") == [
            "Conversions",
            "Awareness",
        ]
