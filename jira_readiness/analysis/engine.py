"""Readiness engine: folds the ordered checks into one verdict per issue."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import reduce

from jira_readiness.core.config import (
    EVALUATION_MAX_WORKERS,
    EVALUATION_MIN_PARALLEL,
    STATUS_OBSOLETE,
)
from jira_readiness.core.models import IssueAnalysis

from .result import CheckResult, ReadinessVerdict
from .rules import OBSOLETE, RULES, Rule

logger = logging.getLogger(__name__)


def evaluate(analysis: IssueAnalysis, rules: Sequence[Rule] = RULES) -> ReadinessVerdict:
    """Run the readiness checks against one issue analysis.

    Obsolete issues short-circuit: only ``OBSOLETE`` is recorded and no check
    runs, leaving the issue ready with no severity. Every other issue goes
    through ``rules`` in order, each check receiving the result returned by
    the previous one.

    Parameters
    ----------
    analysis : IssueAnalysis
        Snapshot of the issue and its linked children. Never mutated.
    rules : Sequence[Rule]
        Checks to apply, defaults to the full ordered registry.

    Returns
    -------
    ReadinessVerdict
        Immutable ready flag, severity and diagnostic codes.
    """
    result = CheckResult()
    if analysis.issue.in_status(STATUS_OBSOLETE):
        verdict = result.add_message(OBSOLETE).freeze()
    else:
        verdict = reduce(lambda r, rule: rule.check(analysis, r), rules, result).freeze()
    logger.debug(
        "Evaluated %s: ready=%s severity=%s messages=%s",
        analysis.issue.key,
        verdict.ready,
        verdict.severity,
        ",".join(verdict.messages),
    )
    return verdict


def evaluate_many(
    analyses: Sequence[IssueAnalysis],
    *,
    max_workers: int | None = None,
) -> list[ReadinessVerdict]:
    """Evaluate a batch of snapshots, preserving input order.

    Evaluations share no state, so large batches are spread over a thread
    pool; small batches stay sequential.
    """
    if len(analyses) < EVALUATION_MIN_PARALLEL:
        return [evaluate(a) for a in analyses]
    with ThreadPoolExecutor(max_workers=max_workers or EVALUATION_MAX_WORKERS) as pool:
        return list(pool.map(evaluate, analyses))
