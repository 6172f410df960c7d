"""Traffic-light severity used to summarize the risk of an issue."""

from __future__ import annotations

from enum import IntEnum


class Severity(IntEnum):
    """Totally ordered severity: NONE < GREEN < YELLOW < RED."""

    NONE = 0
    GREEN = 1
    YELLOW = 2
    RED = 3

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, value: str | None) -> Severity:
        """Parse a color name case-insensitively; unknown values map to NONE."""
        if not value:
            return cls.NONE
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            return cls.NONE


def raise_severity(current: Severity, candidate: Severity) -> Severity:
    return max(current, candidate)
