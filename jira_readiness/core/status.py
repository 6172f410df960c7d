"""Status normalization and categorization utilities.

Centralized status handling shared by the models, the snapshot builder and
the readiness rules. It uses the workflow configuration from config.py
(STATUS_ALIASES, STATUS_DISPLAY_ORDER, ACTIVE_STATUSES, CLOSED_STATUSES).
"""

from __future__ import annotations

from .config import (
    ACTIVE_STATUSES,
    CLOSED_STATUSES,
    STATUS_ALIASES,
    STATUS_DISPLAY_ORDER,
)


def normalize_workflow_status(value: str | None) -> str:
    """Map raw Jira status to canonical workflow status names.

    Uses STATUS_ALIASES from config for mapping. Returns "Unknown" for any
    unmapped or empty value, which helps surface new/unexpected statuses.

    Parameters
    ----------
    value : str | None
        Raw status string from Jira.

    Returns
    -------
    str
        Canonical status name (e.g., "In Progress", "Done") or "Unknown".

    Examples
    --------
    >>> normalize_workflow_status("in progress")
    'In Progress'
    >>> normalize_workflow_status("closed")
    'Done'
    >>> normalize_workflow_status("some_new_status")
    'Unknown'
    """
    if not value:
        return "Unknown"
    text = str(value).strip().lower()
    if text in STATUS_ALIASES:
        return STATUS_ALIASES[text]
    for status in STATUS_DISPLAY_ORDER:
        if text == status.lower():
            return status
    return "Unknown"


def is_active_status(value: str | None) -> bool:
    """True if work on the issue has started and is not finished."""
    return normalize_workflow_status(value) in ACTIVE_STATUSES


def is_closed_status(value: str | None) -> bool:
    """Check if status counts as closed for completion ratios.

    Parameters
    ----------
    value : str | None
        Raw or normalized status string.

    Returns
    -------
    bool
        True for Done and Obsolete (and their aliases).
    """
    return normalize_workflow_status(value) in CLOSED_STATUSES
