"""Chart builders (Altair) for readiness summaries."""

from __future__ import annotations

import altair as alt
import pandas as pd

from jira_readiness.report.rows import severity_counts

SEVERITY_COLORS = {
    "NONE": "#9e9e9e",
    "GREEN": "#2e7d32",
    "YELLOW": "#f9a825",
    "RED": "#c62828",
}


def severity_chart(df: pd.DataFrame):
    """Bar chart of report rows per severity; None when there is nothing to plot."""
    counts = severity_counts(df)
    if counts["count"].sum() == 0:
        return None
    return (
        alt.Chart(counts)
        .mark_bar()
        .encode(
            x=alt.X("severity:N", title="Severity", sort=list(SEVERITY_COLORS)),
            y=alt.Y("count:Q", title="Issues"),
            color=alt.Color(
                "severity:N",
                scale=alt.Scale(domain=list(SEVERITY_COLORS), range=list(SEVERITY_COLORS.values())),
                legend=None,
            ),
            tooltip=["severity", "count"],
        )
        .properties(height=220)
    )


def readiness_by_component(df: pd.DataFrame):
    """Stacked bars of ready vs not-ready issues per component."""
    if df.empty or "component" not in df.columns:
        return None
    tmp = df.copy()
    tmp["readiness"] = tmp["ready"].map({True: "Ready", False: "Not ready"})
    agg = tmp.groupby(["component", "readiness"]).size().reset_index(name="count")
    return (
        alt.Chart(agg)
        .mark_bar()
        .encode(
            x=alt.X("count:Q", title="Issues"),
            y=alt.Y("component:N", title="Component", sort="-x"),
            color=alt.Color(
                "readiness:N",
                scale=alt.Scale(domain=["Ready", "Not ready"], range=["#2e7d32", "#c62828"]),
            ),
            tooltip=["component", "readiness", "count"],
        )
    )
