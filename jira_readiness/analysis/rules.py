"""Readiness checks applied to an issue analysis snapshot.

Each check inspects the snapshot and conditionally updates the shared
:class:`CheckResult` through its monotonic mutators. Checks never read each
other's output and never mutate the snapshot. ``RULES`` fixes the order in
which the engine runs them, which determines the order of the messages.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from jira_readiness.core.config import (
    ALONGSIDE_VERSION_PREFIX,
    ISSUE_TYPE_EPIC,
    ISSUE_TYPE_STORY,
    STATUS_DONE,
)
from jira_readiness.core.models import IssueAnalysis

from .result import CheckResult
from .severity import Severity

Check = Callable[[IssueAnalysis, CheckResult], CheckResult]


class Rule(NamedTuple):
    name: str
    check: Check


def check_alongside(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if any(v.startswith(ALONGSIDE_VERSION_PREFIX) for v in a.issue.fix_versions):
        r.add_message("ALONGSIDE")
    return r


def check_version(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """At least one fix version must be set."""
    if not a.issue.fix_versions:
        r.mark_not_ready().add_message("NOVERSION")
    return r


def check_multi_version(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if len(a.issue.fix_versions) > 1:
        r.add_message("MULTIVERSION")
    return r


def check_activities(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """An epic needs at least one story attached."""
    if a.issue.is_type(ISSUE_TYPE_EPIC) and a.num_activities == 0:
        r.mark_not_ready().add_message("NOSTORIES")
    return r


def check_description(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.description:
        r.mark_not_ready().add_message("NODESCRIPTION")
    return r


def check_approvals(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if a.issue.is_type(ISSUE_TYPE_EPIC) and not a.issue.approved():
        r.mark_not_ready().add_message("NOACKS")
    return r


def check_delivery_owner(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.owner:
        r.mark_not_ready().raise_severity(Severity.RED).add_message("NODELIVERYOWNER")
    return r


def check_planning_flags(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    planning = a.issue.planning
    if planning.no_qe:
        r.add_message("NOQE")
    if planning.no_feature:
        r.add_message("NOFEATURE")
    if planning.no_doc:
        r.add_message("NODOC")
    return r


def check_qa_contact_mismatch(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """A QA contact is set although planning says no QE is involved."""
    if a.issue.planning.no_qe and a.issue.qa_contact:
        r.mark_not_ready().add_message("NOQEMISMATCH")
    return r


def check_qa_contact(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.planning.no_qe and not a.issue.qa_contact:
        r.mark_not_ready().raise_severity(Severity.RED).add_message("NOQACONTACT")
    return r


def check_acceptance_criteria(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.acceptance:
        r.mark_not_ready().raise_severity(Severity.RED).add_message("NOCRITERIA")
    return r


def check_priority(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.is_prioritized():
        r.mark_not_ready().raise_severity(Severity.RED).add_message("NOPRIORITY")
    return r


def check_started(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.is_active() and not a.issue.in_status(STATUS_DONE):
        r.raise_severity(Severity.YELLOW).add_message("NOTSTARTED")
    return r


def check_story_points(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """Every linked story should carry an estimate."""
    if a.points_completion.unknown > 0:
        r.add_message("NOSTORYPOINTS")
    return r


def check_impediment(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if a.issue.impediment or a.issue.any_linked_impediment():
        r.raise_severity(Severity.RED).add_message("IMPEDIMENT")
    return r


def check_initiative(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if a.issue.is_type(ISSUE_TYPE_EPIC) and not a.issue.parent_link:
        r.mark_not_ready().add_message("NOINITIATIVE")
    return r


def check_issue_component(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if a.issue_no_component:
        r.mark_not_ready().add_message("ISSUENOCOMPONENT")
    return r


def check_component(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """The component the report is built for must be set on the issue."""
    if a.component is None:
        return r
    if not a.issue.has_component(a.component):
        r.mark_not_ready().raise_severity(Severity.YELLOW).add_message("NOCOMPONENT")
    return r


def check_done(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """A done issue must have all of its linked issues and points closed."""
    if not a.issue.in_status(STATUS_DONE):
        return r
    issues, points = a.issues_completion, a.points_completion
    if issues.status != issues.total or points.status != points.total:
        r.raise_severity(Severity.RED).add_message("NOTDONE")
    else:
        r.raise_severity(Severity.GREEN)
    return r


def check_status_comment(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if a.comment_status == Severity.NONE:
        r.add_message("NOSTATUSCOMMENT")
    else:
        r.raise_severity(a.comment_status)
    return r


def check_linked_epic(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.is_type(ISSUE_TYPE_STORY):
        return r
    if not a.issue.epic_key:
        r.mark_not_ready().add_message("NOEPIC")
    return r


def check_active_stories(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    """An active epic needs at least one started or finished story."""
    if not a.issue.is_type(ISSUE_TYPE_EPIC) or not a.issue.is_active():
        return r
    linked = a.issue.linked_issues
    if a.component is not None:
        linked = [i for i in linked if i.has_component(a.component)]
    if not any(i.is_active() or i.in_status(STATUS_DONE) for i in linked):
        r.raise_severity(Severity.RED).add_message("NOACTIVESTORIES")
    return r


def check_design(a: IssueAnalysis, r: CheckResult) -> CheckResult:
    if not a.issue.planning.no_feature and not a.issue.design:
        r.mark_not_ready().add_message("NODESIGN")
    return r


RULES: tuple[Rule, ...] = (
    Rule("alongside", check_alongside),
    Rule("version", check_version),
    Rule("multi_version", check_multi_version),
    Rule("activities", check_activities),
    Rule("description", check_description),
    Rule("approvals", check_approvals),
    Rule("delivery_owner", check_delivery_owner),
    Rule("planning_flags", check_planning_flags),
    Rule("qa_contact_mismatch", check_qa_contact_mismatch),
    Rule("qa_contact", check_qa_contact),
    Rule("acceptance_criteria", check_acceptance_criteria),
    Rule("priority", check_priority),
    Rule("started", check_started),
    Rule("story_points", check_story_points),
    Rule("impediment", check_impediment),
    Rule("initiative", check_initiative),
    Rule("issue_component", check_issue_component),
    Rule("component", check_component),
    Rule("done", check_done),
    Rule("status_comment", check_status_comment),
    Rule("linked_epic", check_linked_epic),
    Rule("active_stories", check_active_stories),
    Rule("design", check_design),
)

# Short-circuit code emitted by the engine instead of running RULES
OBSOLETE = "OBSOLETE"

RULE_CODES: frozenset[str] = frozenset(
    {
        "ALONGSIDE",
        "NOVERSION",
        "MULTIVERSION",
        "NOSTORIES",
        "NODESCRIPTION",
        "NOACKS",
        "NODELIVERYOWNER",
        "NOQE",
        "NOFEATURE",
        "NODOC",
        "NOQEMISMATCH",
        "NOQACONTACT",
        "NOCRITERIA",
        "NOPRIORITY",
        "NOTSTARTED",
        "NOSTORYPOINTS",
        "IMPEDIMENT",
        "NOINITIATIVE",
        "ISSUENOCOMPONENT",
        "NOCOMPONENT",
        "NOTDONE",
        "NOSTATUSCOMMENT",
        "NOEPIC",
        "NOACTIVESTORIES",
        "NODESIGN",
    }
)

MESSAGE_CODES: frozenset[str] = RULE_CODES | {OBSOLETE}
