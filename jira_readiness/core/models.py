"""Domain data models for Jira issues and their readiness analysis snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from jira_readiness.analysis.severity import Severity

from .config import REQUIRED_APPROVALS, UNPRIORITIZED_NAMES
from .status import is_active_status, normalize_workflow_status


@dataclass(slots=True)
class CommentModel:
    author: str | None
    created: datetime | None
    body: str | None


@dataclass(slots=True)
class PlanningFlags:
    no_qe: bool = False
    no_feature: bool = False
    no_doc: bool = False


@dataclass(slots=True)
class IssueModel:
    key: str
    summary: str | None = None
    issuetype: str | None = None
    status: str | None = None
    priority: str | None = None
    link: str | None = None
    owner: str = ""
    qa_contact: str = ""
    description: str = ""
    acceptance: str = ""
    design: str = ""
    parent_link: str = ""
    epic_key: str | None = None
    impediment: bool = False
    story_points: float | None = None
    planning: PlanningFlags = field(default_factory=PlanningFlags)
    fix_versions: list[str] = field(default_factory=list)
    components: list[str] = field(default_factory=list)
    approvals: list[str] = field(default_factory=list)
    comments: list[CommentModel] = field(default_factory=list)
    linked_issues: list[IssueModel] = field(default_factory=list)

    def is_type(self, issuetype: str) -> bool:
        return (self.issuetype or "").strip().lower() == issuetype.lower()

    def in_status(self, status: str) -> bool:
        return normalize_workflow_status(self.status) == status

    def is_active(self) -> bool:
        return is_active_status(self.status)

    def is_prioritized(self) -> bool:
        return (self.priority or "").strip().lower() not in UNPRIORITIZED_NAMES

    def approved(self) -> bool:
        acks = {a.strip().lower() for a in self.approvals}
        return all(required.lower() in acks for required in REQUIRED_APPROVALS)

    def has_component(self, name: str) -> bool:
        return name in self.components

    def any_linked_impediment(self) -> bool:
        return any(i.impediment for i in self.linked_issues)


@dataclass(slots=True)
class Completion:
    status: int = 0
    total: int = 0


@dataclass(slots=True)
class PointsCompletion:
    status: float = 0
    total: float = 0
    # Linked issues without a story point estimate
    unknown: int = 0


@dataclass(slots=True)
class IssueAnalysis:
    """Pre-aggregated, read-only view of one issue and its linked children."""

    issue: IssueModel
    component: str | None = None
    num_activities: int = 0
    issues_completion: Completion = field(default_factory=Completion)
    points_completion: PointsCompletion = field(default_factory=PointsCompletion)
    issue_no_component: bool = False
    comment_status: Severity = Severity.NONE
    comment_date: datetime | None = None
