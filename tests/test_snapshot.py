from datetime import UTC, datetime

import pytz
from samples import ready_epic, story

from jira_readiness.analysis.snapshot import (
    build_issue_analysis,
    latest_status_comment,
    parse_status_comment,
)
from jira_readiness.analysis.severity import Severity
from jira_readiness.core.models import CommentModel


def test_parse_status_comment():
    assert parse_status_comment("Status: GREEN") == Severity.GREEN
    assert parse_status_comment("status:red\nblocked on infra") == Severity.RED
    assert parse_status_comment("Update\nStatus : Yellow - waiting") == Severity.YELLOW
    assert parse_status_comment("the status is green") == Severity.NONE
    assert parse_status_comment(None) == Severity.NONE


def test_latest_status_comment_uses_newest():
    comments = [
        CommentModel("a", datetime(2024, 5, 3, tzinfo=UTC), "Status: RED"),
        CommentModel("b", datetime(2024, 5, 1, tzinfo=UTC), "Status: GREEN"),
        CommentModel("c", datetime(2024, 5, 4, tzinfo=UTC), "no marker here"),
    ]
    severity, date = latest_status_comment(comments, tz=pytz.UTC)
    assert severity == Severity.RED
    assert date == datetime(2024, 5, 3, tzinfo=UTC)


def test_latest_status_comment_none():
    assert latest_status_comment([], tz=pytz.UTC) == (Severity.NONE, None)


def test_latest_status_comment_localizes():
    tz = pytz.timezone("America/Santiago")
    comments = [CommentModel("a", datetime(2024, 5, 3, 12, tzinfo=UTC), "Status: yellow")]
    _, date = latest_status_comment(comments, tz=tz)
    assert date.utcoffset() is not None
    assert date.astimezone(pytz.UTC) == datetime(2024, 5, 3, 12, tzinfo=UTC)


def test_build_issue_analysis_counts():
    linked = [
        story("S-1", status="Done", points=5),
        story("S-2", status="In Progress", points=3),
        story("S-3", status="Backlog", points=None),
        story("S-4", status="Obsolete", points=None, components=()),
    ]
    issue = ready_epic(
        linked_issues=linked,
        comments=[CommentModel("a", datetime(2024, 5, 3, tzinfo=UTC), "Status: GREEN")],
    )
    analysis = build_issue_analysis(issue, component="Core", tz=pytz.UTC)
    assert analysis.component == "Core"
    assert analysis.num_activities == 4
    assert (analysis.issues_completion.status, analysis.issues_completion.total) == (2, 4)
    points = analysis.points_completion
    assert (points.status, points.total, points.unknown) == (5, 8, 1)
    assert analysis.issue_no_component is True
    assert analysis.comment_status == Severity.GREEN
    assert analysis.issue is issue


def test_build_issue_analysis_without_children():
    analysis = build_issue_analysis(ready_epic(linked_issues=[]), tz=pytz.UTC)
    assert analysis.num_activities == 0
    assert analysis.issues_completion.total == 0
    assert analysis.issue_no_component is False
    assert analysis.comment_status == Severity.NONE
    assert analysis.comment_date is None
