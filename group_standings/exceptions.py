"""
Exception classes for the group standings engine.

Centralized location for all custom exceptions to avoid circular imports.
"""

from collections.abc import Iterable


class StandingsError(Exception):
    """Base exception for all standings-related errors."""
    pass


class ValidationError(StandingsError):
    """
    Raised when input is rejected before any state is changed.

    Collects every violation found during a call so callers see all of them
    at once rather than only the first.
    """

    def __init__(self, violations: str | Iterable[str]):
        if isinstance(violations, str):
            violations = (violations,)
        self.violations: tuple[str, ...] = tuple(violations)
        super().__init__("; ".join(self.violations))


class InvariantViolation(StandingsError):
    """Raised when a comparison would break the ranking invariants."""
    pass


class TeamNotFoundError(StandingsError, KeyError):
    """Raised when a team name is not on the roster."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""
