"""
Name-keyed team registry.

Guarantees at most one Team object per name for the lifetime of the
registry, so every part of a session sees the same ledger.
"""

from collections.abc import Iterable

from .logging_config import get_logger
from .models import Match
from .team import Team


class TeamRegistry:
    """
    Memoizing Team factory.

    The first call for a name decides its initial matches and deducted
    points; later calls for the same name return the registered Team and
    ignore their arguments.
    """

    def __init__(self):
        self._teams = dict[str, Team]()
        self.logger = get_logger("team_registry")

    def create_team(
        self,
        name: str,
        matches: Iterable[Match] | None = None,
        deducted_points: int | None = None,
    ) -> Team:
        """
        Return the registered team for name, creating it if needed.

        Args:
            name: Team name
            matches: Initial records, used only when the team is new
            deducted_points: Initial deduction, used only when the team is new
        """
        if name in self._teams:
            if matches is not None or deducted_points is not None:
                self.logger.debug(f"Team {name!r} already registered, ignoring initial data")
            return self._teams[name]

        team = Team(name, matches or (), deducted_points or 0)
        self._teams[name] = team
        self.logger.debug(f"Registered team {name!r}")
        return team

    def __contains__(self, name: object) -> bool:
        return name in self._teams

    def __len__(self) -> int:
        return len(self._teams)

    def clear(self) -> None:
        """Forget every registered team."""
        self._teams.clear()
