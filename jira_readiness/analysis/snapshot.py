"""Build the pre-aggregated analysis snapshot of an issue and its children."""

from __future__ import annotations

import re

import pandas as pd
import pytz

from jira_readiness.core.config import STATUS_COMMENT_PATTERN, STATUS_OBSOLETE, TIMEZONE
from jira_readiness.core.models import (
    CommentModel,
    Completion,
    IssueAnalysis,
    IssueModel,
    PointsCompletion,
)
from jira_readiness.core.status import is_closed_status

from .severity import Severity

_STATUS_COMMENT_RE = re.compile(STATUS_COMMENT_PATTERN, flags=re.IGNORECASE | re.MULTILINE)


def parse_status_comment(body: str | None) -> Severity:
    """Return the severity declared by a status comment, NONE if it is not one.

    >>> parse_status_comment("Status: yellow - design review pending")
    <Severity.YELLOW: 2>
    >>> parse_status_comment("just a comment")
    <Severity.NONE: 0>
    """
    if not body:
        return Severity.NONE
    match = _STATUS_COMMENT_RE.search(body)
    if match is None:
        return Severity.NONE
    return Severity.parse(match.group(1))


def _comment_ts(comment: CommentModel, tz) -> pd.Timestamp | None:
    if comment.created is None:
        return None
    ts = pd.to_datetime(comment.created, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.tz_convert(tz)


def latest_status_comment(comments: list[CommentModel], tz=None):
    """Find the newest status comment.

    A dated status comment always wins over an undated one; on equal
    timestamps the later comment in the list wins.

    Returns
    -------
    tuple[Severity, datetime | None]
        Severity and localized date of the newest status comment, or
        ``(Severity.NONE, None)`` when there is none.
    """
    tz = tz or pytz.timezone(TIMEZONE)
    best: tuple[Severity, pd.Timestamp | None] = (Severity.NONE, None)
    for comment in comments:
        severity = parse_status_comment(comment.body)
        if severity == Severity.NONE:
            continue
        ts = _comment_ts(comment, tz)
        _, best_ts = best
        if best[0] == Severity.NONE or best_ts is None or (ts is not None and ts >= best_ts):
            best = (severity, ts)
    severity, ts = best
    return severity, ts.to_pydatetime() if ts is not None else None


def issues_completion(linked: list[IssueModel]) -> Completion:
    return Completion(
        status=sum(1 for i in linked if is_closed_status(i.status)),
        total=len(linked),
    )


def points_completion(linked: list[IssueModel]) -> PointsCompletion:
    """Sum story points over linked issues; obsolete issues carry no points."""
    out = PointsCompletion()
    for issue in linked:
        if issue.in_status(STATUS_OBSOLETE):
            continue
        if issue.story_points is None:
            out.unknown += 1
            continue
        out.total += issue.story_points
        if is_closed_status(issue.status):
            out.status += issue.story_points
    return out


def build_issue_analysis(issue: IssueModel, component: str | None = None, tz=None) -> IssueAnalysis:
    linked = issue.linked_issues
    comment_status, comment_date = latest_status_comment(issue.comments, tz=tz)
    return IssueAnalysis(
        issue=issue,
        component=component,
        num_activities=len(linked),
        issues_completion=issues_completion(linked),
        points_completion=points_completion(linked),
        issue_no_component=any(not i.components for i in linked),
        comment_status=comment_status,
        comment_date=comment_date,
    )
