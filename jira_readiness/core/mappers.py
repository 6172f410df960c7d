"""Mapping raw Jira issue JSON into IssueModel instances."""

from __future__ import annotations

from typing import Any

import pandas as pd

from .config import (
    FIELD_IDS,
    IMPEDIMENT_FLAG,
    PLANNING_NO_DOC,
    PLANNING_NO_FEATURE,
    PLANNING_NO_QE,
)
from .models import CommentModel, IssueModel, PlanningFlags


def _text(value: Any) -> str:
    """Flatten plain strings or Atlassian document format nodes into text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    parts: list[str] = []

    def walk(node: Any):
        if isinstance(node, dict):
            txt = node.get("text")
            if isinstance(txt, str):
                parts.append(txt)
            walk(node.get("content"))
        elif isinstance(node, list):
            for item in node:
                walk(item)

    walk(value)
    return " ".join(p.strip() for p in parts if p.strip())


def _user_name(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, dict):
        return value.get("displayName") or value.get("name") or ""
    return str(value).strip()


def _names(values: Any) -> list[str]:
    out: list[str] = []
    for v in values or []:
        if isinstance(v, dict):
            nm = v.get("name") or v.get("value")
        else:
            nm = v
        if isinstance(nm, str) and nm.strip():
            out.append(nm.strip())
    return out


def _issue_key(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, dict):
        return value.get("key") or ""
    return str(value).strip()


def _story_points(value: Any) -> float | None:
    if value is None or value == "":
        return None
    points = pd.to_numeric(value, errors="coerce")
    if pd.isna(points):
        return None
    return float(points)


def map_planning(values: Any) -> PlanningFlags:
    selected = {n.lower() for n in _names(values)}
    return PlanningFlags(
        no_qe=PLANNING_NO_QE.lower() in selected,
        no_feature=PLANNING_NO_FEATURE.lower() in selected,
        no_doc=PLANNING_NO_DOC.lower() in selected,
    )


def map_issue(raw: dict[str, Any], server: str | None = None) -> IssueModel:
    fields = raw.get("fields", {}) or {}

    def parse_dt(val):
        if not val:
            return None
        ts = pd.to_datetime(val, utc=True, errors="coerce")
        if ts is None or pd.isna(ts):
            return None
        return ts.to_pydatetime()

    comments_raw = (fields.get("comment") or {}).get("comments", []) or []
    comments = [
        CommentModel(
            author=(c.get("author") or {}).get("displayName"),
            created=parse_dt(c.get("created")),
            body=_text(c.get("body")),
        )
        for c in comments_raw
    ]
    flagged = {n.lower() for n in _names(fields.get(FIELD_IDS["flagged"]))}
    # Next-gen projects link epics through "parent" instead of the Epic Link field
    epic_key = _issue_key(fields.get(FIELD_IDS["epic_link"])) or _issue_key(fields.get("parent"))
    key = raw.get("key")

    return IssueModel(
        key=key,
        summary=fields.get("summary"),
        issuetype=(fields.get("issuetype") or {}).get("name") if fields.get("issuetype") else None,
        status=(fields.get("status") or {}).get("name") if fields.get("status") else None,
        priority=(fields.get("priority") or {}).get("name") if fields.get("priority") else None,
        link=f"{server.rstrip('/')}/browse/{key}" if server and key else None,
        owner=_user_name(fields.get(FIELD_IDS["owner"])),
        qa_contact=_user_name(fields.get(FIELD_IDS["qa_contact"])),
        description=_text(fields.get("description")),
        acceptance=_text(fields.get(FIELD_IDS["acceptance"])),
        design=_text(fields.get(FIELD_IDS["design"])),
        parent_link=_issue_key(fields.get(FIELD_IDS["parent_link"])),
        epic_key=epic_key or None,
        impediment=IMPEDIMENT_FLAG.lower() in flagged,
        story_points=_story_points(fields.get(FIELD_IDS["story_points"])),
        planning=map_planning(fields.get(FIELD_IDS["planning"])),
        fix_versions=_names(fields.get("fixVersions")),
        components=_names(fields.get("components")),
        approvals=_names(fields.get(FIELD_IDS["approvals"])),
        comments=comments,
        linked_issues=[map_issue(child, server) for child in raw.get("linked_issues", []) or []],
    )
