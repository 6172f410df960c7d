"""Group issues into per-component report sections."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from jira_readiness.core.models import IssueModel


@dataclass(slots=True)
class ComponentIssues:
    name: str
    issues: list[IssueModel] = field(default_factory=list)


class ComponentsCollection:
    """Ordered component buckets plus the issues that have no component.

    Components registered up front keep their order; components first seen on
    an issue are appended as they appear. An issue with several components is
    listed under each of them.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._items: dict[str, ComponentIssues] = {}
        self.orphans: list[IssueModel] = []
        for name in names:
            self.add(name)

    def add(self, name: str) -> ComponentIssues:
        if name not in self._items:
            self._items[name] = ComponentIssues(name)
        return self._items[name]

    def add_issues(self, issues: Iterable[IssueModel]) -> None:
        for issue in issues:
            if not issue.components:
                self.orphans.append(issue)
                continue
            for name in issue.components:
                self.add(name).issues.append(issue)

    def without(self, excluded: Iterable[str]) -> Iterator[ComponentIssues]:
        skip = set(excluded)
        for item in self._items.values():
            if item.name not in skip:
                yield item
