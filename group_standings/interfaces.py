"""
Abstract base classes and result types for the group standings engine.

A Group delegates every ranking decision to a TieBreakPolicy, so the three
supported competitions share one engine and differ only in policy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypedDict

from .config import CompetitionConfig
from .exceptions import InvariantViolation
from .team import Team

if TYPE_CHECKING:
    from .group import Group


class Resolution(Enum):
    """External procedure needed when a tie-break cascade is exhausted."""

    DRAWING_OF_LOTS = "drawing of lots"
    PLAYOFF = "play-off"
    PENALTY_SHOOTOUT = "penalty shoot-out"


@dataclass(frozen=True)
class TieBreakResult:
    """Outcome of comparing two teams under a policy."""

    value: int  # 1 if the first team ranks above, -1 if below, 0 if tied
    criterion: str  # criterion that decided, or why the teams stay tied
    resolution: Resolution | None = None  # set only for unresolved ties

    @property
    def unresolved(self) -> bool:
        return self.resolution is not None


@dataclass(frozen=True)
class UnresolvedTie:
    """Block of teams sharing a position that only an external procedure can split."""

    position: int
    team_names: tuple[str, ...]
    resolution: Resolution


class StandingsRow(TypedDict):
    """TypedDict for one row of the standings table."""
    position: int
    name: str
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    goal_difference: int
    points: int


class TieBreakPolicy(ABC):
    """Interface for ordering the teams of a group."""

    def __init__(self, config: CompetitionConfig):
        self.config: CompetitionConfig = config

    @abstractmethod
    def partial_compare(self, team_a: Team, team_b: Team) -> int:
        """
        Compare two teams on the criteria applied before head-to-head.

        Returns:
            Positive if team_a ranks above team_b, negative if below,
            0 if they are tied on every such criterion
        """
        pass

    @abstractmethod
    def tie_break(self, group: "Group", team_a: Team, team_b: Team) -> TieBreakResult:
        """
        Run the full tie-break cascade for two distinct teams.

        Args:
            group: Group the teams belong to, used for head-to-head records
            team_a: A team of the group
            team_b: Another team of the group

        Returns:
            TieBreakResult naming the deciding criterion
        """
        pass

    def explain(self, group: "Group", team_a: Team, team_b: Team) -> TieBreakResult:
        """
        Compare two teams and report how the comparison was decided.

        Raises:
            InvariantViolation: If team_a and team_b are the same team
        """
        if team_a == team_b:
            raise InvariantViolation("Can not compare two identical teams.")
        return self.tie_break(group, team_a, team_b)

    def compare(self, group: "Group", team_a: Team, team_b: Team) -> int:
        """Return 1 if team_a ranks above team_b, -1 if below, 0 if tied."""
        return self.explain(group, team_a, team_b).value

    def build_subgroup(self, group: "Group", team: Team) -> "Group":
        """
        Build the head-to-head mini-table around team.

        The result holds team and every member of group tied with it on
        partial_compare, each keeping only the matches played among them.
        Mini-tables count results only, so deducted points are dropped.
        """
        tied = [
            other.name for other in group.get_teams()
            if self.partial_compare(team, other) == 0
        ]
        return group.restricted_to(tied)
