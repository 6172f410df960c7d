"""Epic readiness page.

Runs a search profile against Jira, evaluates every epic per component, and
shows the verdicts with a severity summary and a TSV export.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from jira_readiness.app import register_page
from jira_readiness.core.config import SETTINGS
from jira_readiness.core.profiles import ProfileConfigError, SearchProfile, load_profiles
from jira_readiness.core.service import ReadinessService
from jira_readiness.report.rows import to_tsv
from jira_readiness.visual.charts import readiness_by_component, severity_chart
from jira_readiness.visual.progress import ProgressReporter
from jira_readiness.visual.tables import prepare_report_table


def _select_profile() -> SearchProfile | None:
    try:
        config = load_profiles()
    except ProfileConfigError as exc:
        st.error(f"Invalid profiles file: {exc}")
        return None
    if config.profiles:
        labels = {p.label: p for p in config.profiles}
        choice = st.selectbox("Search profile", list(labels))
        return labels[choice]
    st.caption("No profiles.yaml found; enter a JQL query.")
    jql = st.text_input("JQL", value=st.session_state.get("readiness_jql", ""))
    include = st.text_input("Components (comma separated, optional)")
    if not jql:
        return None
    st.session_state["readiness_jql"] = jql
    return SearchProfile(
        id="adhoc",
        jql=jql,
        include=[c.strip() for c in include.split(",") if c.strip()],
    )


@register_page("Epic Readiness")
def readiness_page():
    st.title("Epic Readiness")
    st.caption("Check epics against planning requirements and summarize their status.")
    service: ReadinessService | None = st.session_state.get("readiness_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    profile = _select_profile()
    if st.button("Evaluate", type="primary", disabled=profile is None) and profile is not None:
        reporter = ProgressReporter(f"Evaluating {profile.label}")
        try:
            report = service.evaluate_profile(profile, progress=reporter.callback)
            st.session_state["readiness_df"] = report
            reporter.complete(f"Evaluated {len(report)} row(s).")
        except Exception as exc:  # pragma: no cover
            reporter.error(f"Failed to evaluate readiness: {exc}")
            raise

    report = st.session_state.get("readiness_df", pd.DataFrame())
    if report.empty:
        st.info("No readiness report computed yet.")
        return

    ready = int(report["ready"].sum())
    c1, c2, c3 = st.columns(3)
    c1.metric("Rows", len(report))
    c2.metric("Ready", ready)
    c3.metric("Red", int((report["severity"] == "RED").sum()))

    left, right = st.columns(2)
    chart = severity_chart(report)
    if chart is not None:
        left.altair_chart(chart, use_container_width=True)
    by_component = readiness_by_component(report)
    if by_component is not None:
        right.altair_chart(by_component, use_container_width=True)

    server = st.session_state.get("jira_server", "")
    prepared, display_cols, cfg = prepare_report_table(report, server)
    st.markdown("---")
    st.dataframe(
        prepared[display_cols].head(SETTINGS.max_table_rows),
        hide_index=True,
        column_config=cfg,
    )
    st.download_button(
        "Download TSV",
        data=to_tsv(report),
        file_name="epic_readiness.tsv",
        mime="text/tab-separated-values",
    )
