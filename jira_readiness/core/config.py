"""Central configuration, constants, workflow vocabulary, and Jira field ids."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://issues.redhat.com"
TIMEZONE = "UTC"
PROFILES_FILE = "profiles.yaml"

# =============================================================================
# Issue Types
# =============================================================================
ISSUE_TYPE_EPIC = "Epic"
ISSUE_TYPE_STORY = "Story"

# =============================================================================
# Workflow Status Configuration
# =============================================================================
STATUS_OBSOLETE = "Obsolete"
STATUS_DONE = "Done"

# Canonical display order for status columns/charts
STATUS_DISPLAY_ORDER: Sequence[str] = (
    "New",
    "Backlog",
    "To Do",
    "Refinement",
    "In Progress",
    "Code Review",
    "Review",
    "Testing",
    "Done",
    "Obsolete",
)

# Statuses where work on the issue has started but is not finished
ACTIVE_STATUSES: frozenset[str] = frozenset(
    {
        "In Progress",
        "Code Review",
        "Review",
        "Testing",
    }
)

# Statuses counted as closed when computing completion ratios
CLOSED_STATUSES: frozenset[str] = frozenset({STATUS_DONE, STATUS_OBSOLETE})

# Map various status strings to canonical names
# Keys should be lowercase for case-insensitive matching
STATUS_ALIASES: dict[str, str] = {
    # Initial/Open statuses
    "new": "New",
    "open": "New",
    "backlog": "Backlog",
    "to do": "To Do",
    "todo": "To Do",
    "refinement": "Refinement",
    # In Progress variants
    "in progress": "In Progress",
    "inprogress": "In Progress",
    "in-progress": "In Progress",
    "coding in progress": "In Progress",
    "code review": "Code Review",
    "review": "Review",
    "modified": "Review",
    "on_qa": "Testing",
    "on qa": "Testing",
    "testing": "Testing",
    "verified": "Testing",
    # Done variants
    "done": "Done",
    "closed": "Done",
    "resolved": "Done",
    "release pending": "Done",
    # Obsolete variants
    "obsolete": "Obsolete",
    "won't do": "Obsolete",
    "won't fix": "Obsolete",
}

# =============================================================================
# Priority Configuration
# =============================================================================
# Priority names that mean nobody has prioritized the issue yet
UNPRIORITIZED_NAMES: frozenset[str] = frozenset({"", "undefined", "unprioritized", "none"})

# =============================================================================
# Planning / Approvals
# =============================================================================
# Values of the "Planning" multi-checkbox field
PLANNING_NO_QE = "No QE"
PLANNING_NO_FEATURE = "No Feature"
PLANNING_NO_DOC = "No Doc"

# Every ack below must be present for an epic to count as approved
REQUIRED_APPROVALS: Sequence[str] = ("Product", "Development", "Quality Engineering")

# Value of the "Flagged" field that marks an impediment
IMPEDIMENT_FLAG = "Impediment"

# Fix versions with this prefix are delivered together with another release
ALONGSIDE_VERSION_PREFIX = "Alongside"

# Status comments look like "Status: YELLOW - waiting on design review"
STATUS_COMMENT_PATTERN = r"^\s*status\s*:\s*(green|yellow|red)\b"

# =============================================================================
# Jira Custom Field IDs
# =============================================================================
FIELD_IDS = {
    "owner": "customfield_12315948",
    "qa_contact": "customfield_12315950",
    "acceptance": "customfield_12315940",
    "design": "customfield_12316546",
    "approvals": "customfield_12316543",
    "planning": "customfield_12316542",
    "flagged": "customfield_12315542",
    "parent_link": "customfield_12313140",
    "epic_link": "customfield_12311140",
    "story_points": "customfield_12310243",
}

# Parallel evaluation tuning
# Evaluations are pure CPU work so a small pool is enough; below the minimum
# batch size stay sequential to avoid executor overhead.
EVALUATION_MAX_WORKERS = 4
EVALUATION_MIN_PARALLEL = 32

# Linked issue hydration tuning (I/O bound HTTP calls)
LINKED_FETCH_MAX_WORKERS = 8
LINKED_FETCH_MIN_PARALLEL = 4

# Canonical field list for Jira fetches
JIRA_FETCH_BASE_FIELDS = [
    "summary",
    "description",
    "issuetype",
    "priority",
    "status",
    "fixVersions",
    "components",
    "comment",
    "parent",
    FIELD_IDS["owner"],
    FIELD_IDS["qa_contact"],
    FIELD_IDS["acceptance"],
    FIELD_IDS["design"],
    FIELD_IDS["approvals"],
    FIELD_IDS["planning"],
    FIELD_IDS["flagged"],
    FIELD_IDS["parent_link"],
    FIELD_IDS["epic_link"],
    FIELD_IDS["story_points"],
]

# Label used for the report section of issues without any component
UNASSIGNED_COMPONENT = "[UNASSIGNED]"

REPORT_COLUMNS: Sequence[str] = (
    "component",
    "key",
    "link",
    "summary",
    "type",
    "priority",
    "status",
    "owner",
    "qa_contact",
    "issues_progress",
    "points_progress",
    "status_comment_date",
    "ready",
    "severity",
    "messages",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    report_separator: str = "\t"


SETTINGS = AppSettings()
