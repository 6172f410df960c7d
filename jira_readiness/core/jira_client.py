"""Jira API client wrapper (REST v3 + enhanced search pagination)."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from jira import JIRA

from .config import (
    FIELD_IDS,
    JIRA_FETCH_BASE_FIELDS,
    LINKED_FETCH_MAX_WORKERS,
    LINKED_FETCH_MIN_PARALLEL,
)

logger = logging.getLogger(__name__)


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = 300.0  # seconds

    def clear_cache(self) -> None:
        """Reset the in-memory search cache."""
        cache = getattr(self, "_cache", None)
        if isinstance(cache, dict):
            cache.clear()

    def _cache_key(self, jql: str, fields, expand, page_size: int) -> str:
        payload = {
            "jql": jql,
            "fields": fields,
            "expand": expand,
            "page_size": page_size,
        }
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    def search_enhanced(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        page_size: int = 1000,
    ) -> list[dict[str, Any]]:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        url = f"{self.server}/rest/api/3/search/jql"
        key = self._cache_key(jql, fields, expand, page_size)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            return cached[1]
        params = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        token = None
        while True:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            resp = session.get(url, params=qp)
            if resp.status_code >= 400:
                raise RuntimeError(f"Enhanced search failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
            out.extend(data.get("issues", []))
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                break
        self._cache[key] = (now, out)
        return out

    def fetch_linked_issues(self, epic_key: str) -> list[dict[str, Any]]:
        """Return the raw child issues linked to an epic."""
        epic_field = FIELD_IDS["epic_link"].removeprefix("customfield_")
        jql = f'cf[{epic_field}] = "{epic_key}" OR parent = "{epic_key}"'
        return self.search_enhanced(jql, fields=list(JIRA_FETCH_BASE_FIELDS))

    def find_epics(self, jql: str) -> list[dict[str, Any]]:
        """Search issues and attach their linked children under ``linked_issues``.

        Children are fetched per issue; above a small batch size the fetches
        run on a thread pool since they are I/O bound. The returned dicts are
        shallow copies so cached search results stay untouched.
        """
        found = self.search_enhanced(jql, fields=list(JIRA_FETCH_BASE_FIELDS))
        issues = [dict(issue) for issue in found]
        if not issues:
            return []

        def _attach(issue: dict[str, Any]) -> None:
            key = issue.get("key")
            if not key:
                issue["linked_issues"] = []
                return
            issue["linked_issues"] = self.fetch_linked_issues(key)
            logger.debug("Fetched %d linked issues for %s", len(issue["linked_issues"]), key)

        if len(issues) < LINKED_FETCH_MIN_PARALLEL:
            for issue in issues:
                _attach(issue)
            return issues

        with ThreadPoolExecutor(max_workers=LINKED_FETCH_MAX_WORKERS) as pool:
            # list() surfaces the first failure to the caller
            list(pool.map(_attach, issues))
        return issues
