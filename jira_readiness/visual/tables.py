"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from jira_readiness.core.config import REPORT_COLUMNS


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    """Add a browse URL column, preferring links already present on the rows."""
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")

    def _link(row):
        existing = row.get("link")
        if isinstance(existing, str) and existing:
            return existing
        key = str(row.get(key_col) or "")
        return f"{base}/browse/{key}" if key and key != "nan" and base else ""

    out[label] = out.apply(_link, axis=1)
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        ),
        "ready": st.column_config.CheckboxColumn("ready", help="Baseline process requirements met"),
    }
    return out, cfg


def prepare_report_table(df: pd.DataFrame, server: str) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    if df.empty:
        return df, [], {}
    table, cfg = add_ticket_link(df, server)
    display_cols = ["Ticket"] + [c for c in REPORT_COLUMNS if c in table.columns and c not in ("key", "link")]
    return table, display_cols, cfg
