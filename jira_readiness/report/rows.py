"""Tabular readiness report built from analyses and verdicts."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from jira_readiness.analysis.result import ReadinessVerdict
from jira_readiness.core.config import REPORT_COLUMNS, SETTINGS, UNASSIGNED_COMPONENT
from jira_readiness.core.models import IssueAnalysis


def _format_points(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def issues_progress(analysis: IssueAnalysis) -> str:
    c = analysis.issues_completion
    return f"{c.status}/{c.total}"


def points_progress(analysis: IssueAnalysis) -> str:
    """Closed/total story points; a trailing "?" flags missing estimates."""
    p = analysis.points_completion
    text = f"{_format_points(p.status)}/{_format_points(p.total)}"
    return text + "?" if p.unknown > 0 else text


def report_row(
    analysis: IssueAnalysis,
    verdict: ReadinessVerdict,
    component: str | None = None,
) -> dict[str, object]:
    issue = analysis.issue
    return {
        "component": component or analysis.component or UNASSIGNED_COMPONENT,
        "key": issue.key,
        "link": issue.link or "",
        "summary": issue.summary or "",
        "type": issue.issuetype or "",
        "priority": issue.priority or "",
        "status": issue.status or "",
        "owner": issue.owner,
        "qa_contact": issue.qa_contact,
        "issues_progress": issues_progress(analysis),
        "points_progress": points_progress(analysis),
        "status_comment_date": analysis.comment_date,
        "ready": verdict.ready,
        "severity": str(verdict.severity),
        "messages": verdict.sorted_messages(","),
    }


def build_report(
    results: Iterable[tuple[str | None, IssueAnalysis, ReadinessVerdict]],
) -> pd.DataFrame:
    """Assemble (component, analysis, verdict) triples into a report frame."""
    rows = [report_row(analysis, verdict, component) for component, analysis, verdict in results]
    df = pd.DataFrame(rows, columns=list(REPORT_COLUMNS))
    if not df.empty:
        df["status_comment_date"] = pd.to_datetime(df["status_comment_date"], errors="coerce", utc=True)
    return df


def to_tsv(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False, sep=SETTINGS.report_separator).encode(SETTINGS.download_encoding)


def severity_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Count report rows per severity, in lattice order."""
    order = ["NONE", "GREEN", "YELLOW", "RED"]
    if df.empty or "severity" not in df.columns:
        return pd.DataFrame({"severity": order, "count": [0] * len(order)})
    counts = df["severity"].value_counts().reindex(order, fill_value=0)
    return pd.DataFrame({"severity": list(counts.index), "count": [int(c) for c in counts]})
