"""ReadinessService: orchestrates fetching, snapshot building, and evaluation."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pandas as pd
import pytz

from jira_readiness.analysis.engine import evaluate_many
from jira_readiness.analysis.snapshot import build_issue_analysis
from jira_readiness.report.components import ComponentsCollection
from jira_readiness.report.rows import build_report

from .config import TIMEZONE, UNASSIGNED_COMPONENT
from .jira_client import JiraAPI
from .mappers import map_issue
from .models import IssueModel
from .profiles import SearchProfile

ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


class ReadinessService:
    def __init__(self, api: JiraAPI):
        self.api = api
        self._tz = pytz.timezone(TIMEZONE)

    def fetch_epics(
        self,
        jql: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[IssueModel]:
        if hasattr(self.api, "clear_cache"):
            self.api.clear_cache()
        logger.info("JQL = %s", jql)
        if progress:
            progress("Querying issues and their linked stories", None, None)
        raw = self.api.find_epics(jql)
        logger.info("JQL returned issues: %d", len(raw))
        return [map_issue(r, self.api.server) for r in raw]

    def evaluate_issues(
        self,
        issues: list[IssueModel],
        *,
        include: list[str] | None = None,
        exclude: list[str] | None = None,
        progress: ProgressCallback | None = None,
    ) -> pd.DataFrame:
        """Evaluate issues grouped by component and return the report frame.

        Every issue is evaluated once per component it is listed under, with
        that component as the target filter; issues without components are
        evaluated without a filter under the unassigned section.
        """
        groups = ComponentsCollection(include or [])
        groups.add_issues(issues)

        work: list[tuple[str, IssueModel, str | None]] = []
        for group in groups.without(exclude or []):
            work.extend((group.name, issue, group.name) for issue in group.issues)
        work.extend((UNASSIGNED_COMPONENT, issue, None) for issue in groups.orphans)

        if progress:
            progress("Evaluating readiness", 0, len(work))
        analyses = [build_issue_analysis(issue, target, tz=self._tz) for _, issue, target in work]
        verdicts = evaluate_many(analyses)
        if progress:
            progress("Evaluating readiness", len(work), len(work))
        return build_report(
            (section, analysis, verdict)
            for (section, _, _), analysis, verdict in zip(work, analyses, verdicts, strict=True)
        )

    def evaluate_profile(
        self,
        profile: SearchProfile,
        *,
        progress: ProgressCallback | None = None,
    ) -> pd.DataFrame:
        issues = self.fetch_epics(profile.jql, progress=progress)
        return self.evaluate_issues(
            issues,
            include=profile.include,
            exclude=profile.exclude,
            progress=progress,
        )
