"""Streamlit UI for the Marketing Performance Dashboard."""

from pathlib import Path

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from marketing_dashboard.analytics import chart_label, distinct_values
from marketing_dashboard.core.logging import configure_logging
from marketing_dashboard.exceptions import DashboardError
from marketing_dashboard.ingestion import MarketingDataLoader
from marketing_dashboard.models import MarketingData
from marketing_dashboard.services import DashboardOutput, DashboardService
from marketing_dashboard.services.views import DEFAULT_SORTS, VIEW_COLUMNS
from marketing_dashboard.settings import load_settings
from marketing_dashboard.table import apply_sort, format_cell, next_sort_state

SAMPLE_DATA = Path(__file__).parent / "data" / "sample_marketing_data.json"

MEDIUM_COLORS = {
    "Instagram": "#E1306C",
    "Facebook": "#1877F2",
    "Google Ads": "#4285F4",
}

# Page config
st.set_page_config(
    page_title="Marketing Performance",
    page_icon="📊",
    layout="wide",
)


def format_money(n: float) -> str:
    """Whole-dollar amount with commas."""
    return f"${n:,.0f}"


@st.cache_data(show_spinner="Loading marketing data...")
def load_data(source: str, is_path: bool) -> MarketingData:
    """Fetch the dataset once per source; reruns reuse the snapshot."""
    settings = load_settings()
    data_source = settings.data_source.model_copy(
        update={"path": Path(source), "url": None}
        if is_path
        else {"url": source, "path": None}
    )
    return MarketingDataLoader(data_source).load()


def render_table(view: str, title: str, rows: list, state_key: str | None = None) -> None:
    """Table with tri-state column sorting (asc -> desc -> original order)."""
    columns = VIEW_COLUMNS[view]
    st.subheader(title)
    if not rows:
        st.info("No data available")
        return

    state_key = f"sort_{state_key or view}"
    if state_key not in st.session_state:
        st.session_state[state_key] = DEFAULT_SORTS[view]

    sortable = [c for c in columns if c.sortable]
    col1, col2 = st.columns([3, 1])
    with col1:
        clicked = st.selectbox(
            "Sort column",
            options=sortable,
            format_func=lambda c: c.label,
            key=f"{state_key}_column",
        )
    with col2:
        if st.button("Toggle sort", key=f"{state_key}_button"):
            st.session_state[state_key] = next_sort_state(
                st.session_state[state_key], clicked
            )

    state = st.session_state[state_key]
    if state is not None:
        st.caption(f"Sorted by {state.key} ({state.direction.value})")

    ordered = apply_sort(rows, state, columns)
    st.dataframe(
        [
            {c.label: format_cell(getattr(r, c.key), c) for c in columns}
            for r in ordered
        ],
        use_container_width=True,
        hide_index=True,
    )


def bar_chart(title: str, labels: list, values: list, color: str) -> go.Figure:
    fig = go.Figure(data=[go.Bar(x=labels, y=values, marker_color=color)])
    fig.update_layout(title=title, height=350, plot_bgcolor="white")
    return fig


def region_map(regions: list, attr: str, title: str, color: str) -> go.Figure:
    """Bubble map with marker size proportional to `attr`."""
    fig = px.scatter_geo(
        lat=[r.lat for r in regions],
        lon=[r.lng for r in regions],
        size=[getattr(r, attr) for r in regions],
        hover_name=[r.region for r in regions],
        title=title,
        color_discrete_sequence=[color],
    )
    fig.update_geos(fitbounds="locations")
    return fig


# =============================================================================
# PAGES
# =============================================================================


def render_overview(data: MarketingData) -> None:
    info = data.company_info
    stats = data.marketing_stats
    st.header(info.name or "Overview")
    if info.industry:
        st.caption(f"{info.industry} • Founded {info.founded}")
    if info.description:
        st.write(info.description)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Campaigns", stats.total_campaigns)
    col2.metric("Total Revenue", format_money(stats.total_revenue))
    col3.metric("Average ROAS", f"{stats.average_roas}x")
    col4.metric("Total Conversions", f"{stats.total_conversions:,}")

    col1, col2 = st.columns(2)
    col1.metric("Top Performing Medium", stats.top_performing_medium or "N/A")
    col2.metric("Top Performing Region", stats.top_performing_region or "N/A")

    insights = data.market_insights
    st.subheader("Market Insights")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Peak Performance Day", insights.peak_performance_day or "N/A")
    col2.metric("Peak Performance Time", insights.peak_performance_time or "N/A")
    col3.metric("Top Converting Product", insights.top_converting_product or "N/A")
    col4.metric("Fastest Growing Region", insights.fastest_growing_region or "N/A")
    if insights.last_updated:
        st.caption(f"Last updated {insights.last_updated}")


def render_campaigns(service: DashboardService, data: MarketingData) -> None:
    st.header("Campaign Performance")

    col1, col2 = st.columns(2)
    with col1:
        name_query = st.text_input("Campaign Name", placeholder="Search campaigns...")
    with col2:
        objectives = st.multiselect(
            "Campaign Type",
            options=distinct_values(data.campaigns, "objective"),
            placeholder="Select campaign types...",
        )

    view = service.campaign_view(data, name_query, objectives)
    st.caption(f"Showing {len(view.campaigns)} of {view.total_campaigns} campaigns")

    totals = view.totals
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Filtered Campaigns", totals.campaign_count)
    col2.metric("Total Spend", format_money(totals.spend))
    col3.metric("Total Revenue", format_money(totals.revenue))
    col4.metric("Total Conversions", f"{totals.conversions:,}")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            bar_chart(
                "Top Campaigns by Revenue (Filtered)",
                [chart_label(c.name) for c in view.top_campaigns],
                [c.revenue for c in view.top_campaigns],
                "#10B981",
            ),
            use_container_width=True,
        )
    with col2:
        fig = go.Figure(
            data=[
                go.Bar(
                    x=[m.medium for m in view.medium_stats],
                    y=[m.revenue for m in view.medium_stats],
                    marker_color=[
                        MEDIUM_COLORS.get(m.medium, "#8B5CF6")
                        for m in view.medium_stats
                    ],
                )
            ]
        )
        fig.update_layout(title="Revenue by Medium (Filtered)", height=350)
        st.plotly_chart(fig, use_container_width=True)

    labels = [chart_label(c.name) for c in view.top_campaigns]
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            bar_chart(
                "Campaign ROAS Comparison (Filtered)",
                labels,
                [c.roas for c in view.top_campaigns],
                "#F59E0B",
            ),
            use_container_width=True,
        )
    with col2:
        st.plotly_chart(
            bar_chart(
                "Campaign Conversion Rates (Filtered)",
                labels,
                [c.conversion_rate for c in view.top_campaigns],
                "#8B5CF6",
            ),
            use_container_width=True,
        )

    render_table(
        "campaigns",
        f"Campaign Details ({len(view.campaigns)} campaigns)",
        view.campaigns,
    )


def render_demographics(output: DashboardOutput) -> None:
    st.header("Demographic Performance")

    cols = st.columns(len(output.gender_estimates) or 1)
    for col, g in zip(cols, output.gender_estimates):
        with col:
            st.metric(f"Total Clicks ({g.gender})", f"{g.clicks:,}")
            st.metric(f"Est. Spend ({g.gender})", format_money(g.estimated_spend))
            st.metric(f"Est. Revenue ({g.gender})", format_money(g.estimated_revenue))

    ages = output.age_group_estimates
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            bar_chart(
                "Estimated Spend by Age Group",
                [a.age_group for a in ages],
                [a.estimated_spend for a in ages],
                "#3B82F6",
            ),
            use_container_width=True,
        )
    with col2:
        st.plotly_chart(
            bar_chart(
                "Estimated Revenue by Age Group",
                [a.age_group for a in ages],
                [a.estimated_revenue for a in ages],
                "#10B981",
            ),
            use_container_width=True,
        )

    for gender, rows in output.age_group_stats.items():
        render_table(
            "age_groups",
            f"Performance by {gender} Age Groups",
            rows,
            state_key=f"age_groups_{gender.lower()}",
        )


def render_devices(output: DashboardOutput) -> None:
    st.header("Device Performance")
    devices = output.device_stats

    cols = st.columns(max(len(devices), 1))
    for col, d in zip(cols, devices):
        col.metric(f"{d.device} Revenue", format_money(d.revenue))

    col1, col2, col3 = st.columns(3)
    for col, (title, attr, color) in zip(
        (col1, col2, col3),
        (
            ("Revenue by Device", "revenue", "#10B981"),
            ("Spend by Device", "spend", "#3B82F6"),
            ("Conversions by Device", "conversions", "#8B5CF6"),
        ),
    ):
        with col:
            st.plotly_chart(
                bar_chart(
                    title,
                    [d.device for d in devices],
                    [getattr(d, attr) for d in devices],
                    color,
                ),
                use_container_width=True,
            )

    render_table("devices", "Device Breakdown", devices)


def render_regions(output: DashboardOutput, data: MarketingData) -> None:
    st.header("Regional Performance")
    regions = output.region_stats

    col1, col2, col3 = st.columns(3)
    col1.metric("Top Region by Revenue", regions[0].region if regions else "N/A")
    col2.metric("Total Revenue", format_money(data.marketing_stats.total_revenue))
    col3.metric("Total Spend", format_money(data.marketing_stats.total_spend))

    for warning in output.warnings:
        st.warning(warning)

    if regions:
        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(
                region_map(regions, "revenue", "Revenue by Region", "#10B981"),
                use_container_width=True,
            )
        with col2:
            st.plotly_chart(
                region_map(regions, "spend", "Spend by Region", "#3B82F6"),
                use_container_width=True,
            )

    render_table("regions", "Regional Breakdown", regions)


def render_weekly(output: DashboardOutput) -> None:
    st.header("Weekly Performance")
    weeks = output.weekly_stats
    st.metric("Total Weeks Tracked", len(weeks))

    if weeks:
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[w.week_start for w in weeks],
            y=[w.revenue for w in weeks],
            name="Revenue",
            mode="lines+markers",
            line=dict(color="#10B981", width=3),
        ))
        fig.add_trace(go.Scatter(
            x=[w.week_start for w in weeks],
            y=[w.spend for w in weeks],
            name="Spend",
            mode="lines+markers",
            line=dict(color="#8B5CF6", width=3),
        ))
        fig.update_layout(
            title="Weekly Revenue & Spend",
            legend=dict(x=0, y=1.15, orientation="h"),
            height=400,
            plot_bgcolor="white",
        )
        st.plotly_chart(fig, use_container_width=True)

    render_table("weekly", "Weekly Performance Breakdown", weeks)


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    service = DashboardService(settings)

    st.title("📊 Marketing Performance Dashboard")

    with st.sidebar:
        st.header("📁 Data Source")
        use_sample = st.toggle("Use bundled sample data", value=settings.data_source.url is None)
        source = (
            str(SAMPLE_DATA)
            if use_sample
            else st.text_input("Dataset URL", value=settings.data_source.url or "")
        )
        st.divider()
        page = st.radio(
            "View",
            ["Overview", "Campaigns", "Demographics", "Devices", "Regions", "Weekly"],
        )

    if not source:
        st.info("👈 Enter a dataset URL to get started")
        return

    try:
        data = load_data(source, use_sample)
    except DashboardError as e:
        st.error(f"Error loading data: {e}")
        return

    output = service.generate_dashboard(data)

    if page == "Overview":
        render_overview(data)
    elif page == "Campaigns":
        render_campaigns(service, data)
    elif page == "Demographics":
        render_demographics(output)
    elif page == "Devices":
        render_devices(output)
    elif page == "Regions":
        render_regions(output, data)
    else:
        render_weekly(output)


if __name__ == "__main__":
    main()
