"""Accumulator for the outcome of the readiness checks on one issue."""

from __future__ import annotations

from dataclasses import dataclass, field

from .severity import Severity, raise_severity


@dataclass(slots=True, frozen=True)
class ReadinessVerdict:
    """Immutable outcome returned to callers once all checks ran."""

    ready: bool
    severity: Severity
    messages: tuple[str, ...] = ()

    def sorted_messages(self, sep: str = ",") -> str:
        return sep.join(sorted(self.messages))


@dataclass(slots=True)
class CheckResult:
    """Mutable state shared by the checks of a single evaluation.

    ``ready`` is a one-way latch and ``severity`` only ever goes up, so the
    final verdict does not depend on the order the checks run in. Only the
    order of ``messages`` does.
    """

    ready: bool = True
    severity: Severity = Severity.NONE
    messages: list[str] = field(default_factory=list)

    def mark_not_ready(self) -> CheckResult:
        if self.ready:
            self.ready = False
        return self

    def raise_severity(self, level: Severity) -> CheckResult:
        self.severity = raise_severity(self.severity, level)
        return self

    def add_message(self, code: str) -> CheckResult:
        self.messages.append(code)
        return self

    def freeze(self) -> ReadinessVerdict:
        return ReadinessVerdict(ready=self.ready, severity=self.severity, messages=tuple(self.messages))
