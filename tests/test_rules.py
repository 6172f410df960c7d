"""One check at a time against a fresh result."""

import pytest
from samples import ready_analysis, ready_epic, story

from jira_readiness.analysis import rules
from jira_readiness.analysis.result import CheckResult
from jira_readiness.analysis.severity import Severity
from jira_readiness.core.models import Completion, PlanningFlags, PointsCompletion

N, G, Y, R = Severity.NONE, Severity.GREEN, Severity.YELLOW, Severity.RED


def _run(check, analysis):
    result = check(analysis, CheckResult())
    return result.ready, result.severity, result.messages


CASES = [
    # alongside
    (rules.check_alongside, ready_analysis(ready_epic(fix_versions=["Alongside 4.16"])), True, N, ["ALONGSIDE"]),
    (
        rules.check_alongside,
        ready_analysis(ready_epic(fix_versions=["Alongside 4.16", "Alongside 4.17"])),
        True,
        N,
        ["ALONGSIDE"],
    ),
    (rules.check_alongside, ready_analysis(), True, N, []),
    # versions
    (rules.check_version, ready_analysis(ready_epic(fix_versions=[])), False, N, ["NOVERSION"]),
    (rules.check_version, ready_analysis(), True, N, []),
    (rules.check_multi_version, ready_analysis(ready_epic(fix_versions=["4.16", "4.17"])), True, N, ["MULTIVERSION"]),
    (rules.check_multi_version, ready_analysis(ready_epic(fix_versions=[])), True, N, []),
    # activities
    (rules.check_activities, ready_analysis(num_activities=0), False, N, ["NOSTORIES"]),
    (rules.check_activities, ready_analysis(ready_epic(issuetype="Story"), num_activities=0), True, N, []),
    # description / approvals
    (rules.check_description, ready_analysis(ready_epic(description="")), False, N, ["NODESCRIPTION"]),
    (rules.check_approvals, ready_analysis(ready_epic(approvals=["Product"])), False, N, ["NOACKS"]),
    (rules.check_approvals, ready_analysis(ready_epic(issuetype="Story", approvals=[])), True, N, []),
    # delivery owner
    (rules.check_delivery_owner, ready_analysis(ready_epic(owner="")), False, R, ["NODELIVERYOWNER"]),
    # planning flags
    (
        rules.check_planning_flags,
        ready_analysis(ready_epic(planning=PlanningFlags(no_qe=True, no_feature=True, no_doc=True))),
        True,
        N,
        ["NOQE", "NOFEATURE", "NODOC"],
    ),
    (rules.check_planning_flags, ready_analysis(ready_epic(planning=PlanningFlags(no_doc=True))), True, N, ["NODOC"]),
    # qa contact
    (
        rules.check_qa_contact_mismatch,
        ready_analysis(ready_epic(planning=PlanningFlags(no_qe=True))),
        False,
        N,
        ["NOQEMISMATCH"],
    ),
    (
        rules.check_qa_contact_mismatch,
        ready_analysis(ready_epic(planning=PlanningFlags(no_qe=True), qa_contact="")),
        True,
        N,
        [],
    ),
    (rules.check_qa_contact, ready_analysis(ready_epic(qa_contact="")), False, R, ["NOQACONTACT"]),
    (
        rules.check_qa_contact,
        ready_analysis(ready_epic(planning=PlanningFlags(no_qe=True), qa_contact="")),
        True,
        N,
        [],
    ),
    # criteria / priority
    (rules.check_acceptance_criteria, ready_analysis(ready_epic(acceptance="")), False, R, ["NOCRITERIA"]),
    (rules.check_priority, ready_analysis(ready_epic(priority=None)), False, R, ["NOPRIORITY"]),
    (rules.check_priority, ready_analysis(ready_epic(priority="Undefined")), False, R, ["NOPRIORITY"]),
    # started
    (rules.check_started, ready_analysis(ready_epic(status="Backlog")), True, Y, ["NOTSTARTED"]),
    (rules.check_started, ready_analysis(ready_epic(status="Done")), True, N, []),
    (rules.check_started, ready_analysis(ready_epic(status="Code Review")), True, N, []),
    # story points
    (
        rules.check_story_points,
        ready_analysis(points_completion=PointsCompletion(status=0, total=3, unknown=2)),
        True,
        N,
        ["NOSTORYPOINTS"],
    ),
    # impediment
    (rules.check_impediment, ready_analysis(ready_epic(impediment=True)), True, R, ["IMPEDIMENT"]),
    (
        rules.check_impediment,
        ready_analysis(ready_epic(linked_issues=[story(impediment=True)])),
        True,
        R,
        ["IMPEDIMENT"],
    ),
    # initiative / components
    (rules.check_initiative, ready_analysis(ready_epic(parent_link="")), False, N, ["NOINITIATIVE"]),
    (rules.check_initiative, ready_analysis(ready_epic(issuetype="Story", parent_link="")), True, N, []),
    (rules.check_issue_component, ready_analysis(issue_no_component=True), False, N, ["ISSUENOCOMPONENT"]),
    (rules.check_component, ready_analysis(component="Core"), True, N, []),
    (rules.check_component, ready_analysis(component=None), True, N, []),
    (
        rules.check_component,
        ready_analysis(ready_epic(components=["Other"]), component="Core"),
        False,
        Y,
        ["NOCOMPONENT"],
    ),
    # done consistency
    (rules.check_done, ready_analysis(), True, N, []),
    (
        rules.check_done,
        ready_analysis(
            ready_epic(status="Done"),
            issues_completion=Completion(5, 5),
            points_completion=PointsCompletion(8, 8, 0),
        ),
        True,
        G,
        [],
    ),
    (
        rules.check_done,
        ready_analysis(
            ready_epic(status="Done"),
            issues_completion=Completion(4, 5),
            points_completion=PointsCompletion(8, 8, 0),
        ),
        True,
        R,
        ["NOTDONE"],
    ),
    (
        rules.check_done,
        ready_analysis(
            ready_epic(status="Done"),
            issues_completion=Completion(5, 5),
            points_completion=PointsCompletion(5, 8, 0),
        ),
        True,
        R,
        ["NOTDONE"],
    ),
    # status comment
    (rules.check_status_comment, ready_analysis(comment_status=Severity.NONE), True, N, ["NOSTATUSCOMMENT"]),
    (rules.check_status_comment, ready_analysis(comment_status=Severity.YELLOW), True, Y, []),
    # linked epic
    (rules.check_linked_epic, ready_analysis(story(epic_key=None)), False, N, ["NOEPIC"]),
    (rules.check_linked_epic, ready_analysis(story(epic_key="")), False, N, ["NOEPIC"]),
    (rules.check_linked_epic, ready_analysis(story()), True, N, []),
    (rules.check_linked_epic, ready_analysis(ready_epic(epic_key=None)), True, N, []),
    # active stories
    (
        rules.check_active_stories,
        ready_analysis(ready_epic(linked_issues=[story(status="Backlog"), story("STOR-3", status="New")])),
        True,
        R,
        ["NOACTIVESTORIES"],
    ),
    (
        rules.check_active_stories,
        ready_analysis(ready_epic(linked_issues=[story(status="Done")])),
        True,
        N,
        [],
    ),
    (
        rules.check_active_stories,
        ready_analysis(ready_epic(linked_issues=[story(components=["Other"])]), component="Core"),
        True,
        R,
        ["NOACTIVESTORIES"],
    ),
    (
        rules.check_active_stories,
        ready_analysis(ready_epic(status="Backlog", linked_issues=[])),
        True,
        N,
        [],
    ),
    # design
    (rules.check_design, ready_analysis(ready_epic(design="")), False, N, ["NODESIGN"]),
    (
        rules.check_design,
        ready_analysis(ready_epic(design="", planning=PlanningFlags(no_feature=True))),
        True,
        N,
        [],
    ),
]


@pytest.mark.parametrize(("check", "analysis", "ready", "severity", "messages"), CASES)
def test_single_check(check, analysis, ready, severity, messages):
    assert _run(check, analysis) == (ready, severity, messages)


def test_every_registered_check_is_quiet_on_ready_epic():
    analysis = ready_analysis(comment_status=Severity.GREEN)
    for rule in rules.RULES:
        result = rule.check(analysis, CheckResult())
        if rule.name == "status_comment":
            assert result.severity == Severity.GREEN
        else:
            assert (result.ready, result.severity, result.messages) == (True, N, []), rule.name


def test_checks_do_not_mutate_snapshot():
    analysis = ready_analysis(ready_epic(owner="", fix_versions=[]), component="Core")
    before = repr(analysis)
    for rule in rules.RULES:
        rule.check(analysis, CheckResult())
    assert repr(analysis) == before


def test_registry_names_unique_and_codes_known():
    names = [r.name for r in rules.RULES]
    assert len(names) == len(set(names))
    assert len(rules.RULE_CODES) == 25
    assert rules.OBSOLETE in rules.MESSAGE_CODES
    assert rules.OBSOLETE not in rules.RULE_CODES
