import pytest

from jira_readiness.core.config import LINKED_FETCH_MIN_PARALLEL
from jira_readiness.core.jira_client import JiraAPI

EPICS_JQL = "project = STOR AND type = Epic"


class StubAPI(JiraAPI):
    """Serves canned search results; every other query returns one child."""

    def __init__(self, epics):
        self.server = "https://issues.example.com"
        self.epics = epics
        self.queries = []

    def search_enhanced(self, jql, fields=None, expand=None, page_size=1000):
        self.queries.append(jql)
        if jql == EPICS_JQL:
            return self.epics
        return [{"key": f"child-of[{jql}]"}]


def _epics(count):
    return [{"key": f"E-{i}", "fields": {"summary": f"Epic {i}"}} for i in range(1, count + 1)]


def test_fetch_linked_issues_jql():
    api = StubAPI([])
    api.fetch_linked_issues("E-1")
    assert api.queries == ['cf[12311140] = "E-1" OR parent = "E-1"']


@pytest.mark.parametrize("count", [1, LINKED_FETCH_MIN_PARALLEL - 1, LINKED_FETCH_MIN_PARALLEL, 10])
def test_find_epics_attaches_children(count):
    api = StubAPI(_epics(count))
    issues = api.find_epics(EPICS_JQL)

    assert [i["key"] for i in issues] == [f"E-{i}" for i in range(1, count + 1)]
    for issue in issues:
        key = issue["key"]
        assert issue["linked_issues"] == [{"key": f'child-of[cf[12311140] = "{key}" OR parent = "{key}"]'}]
    assert api.queries[0] == EPICS_JQL
    assert len(api.queries) == count + 1


def test_find_epics_issue_without_key():
    epics = _epics(LINKED_FETCH_MIN_PARALLEL)
    epics.append({"fields": {"summary": "no key"}})
    api = StubAPI(epics)
    issues = api.find_epics(EPICS_JQL)

    assert issues[-1]["linked_issues"] == []
    # no child search for the keyless issue
    assert len(api.queries) == LINKED_FETCH_MIN_PARALLEL + 1


def test_find_epics_empty():
    api = StubAPI([])
    assert api.find_epics(EPICS_JQL) == []


@pytest.mark.parametrize("count", [2, LINKED_FETCH_MIN_PARALLEL + 2])
def test_find_epics_leaves_search_results_untouched(count):
    epics = _epics(count)
    api = StubAPI(epics)
    first = api.find_epics(EPICS_JQL)
    second = api.find_epics(EPICS_JQL)

    assert all("linked_issues" not in epic for epic in epics)
    assert all("linked_issues" in issue for issue in first + second)
    assert first[0] is not second[0]
