"""
Ranking criteria shared by the tie-break policies.

A criterion is a label plus a statistic; teams are compared on each
criterion in turn until one separates them.
"""

from collections.abc import Callable, Sequence

from ..interfaces import TieBreakResult
from ..team import Team

Criterion = tuple[str, Callable[[Team], int]]

POINTS: Criterion = ("points", lambda team: team.points)
GOAL_DIFFERENCE: Criterion = ("goal difference", lambda team: team.goal_difference)
GOALS_FOR: Criterion = ("goals for", lambda team: team.goals_for)
WINS: Criterion = ("wins", lambda team: team.wins)


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def first_difference(
    team_a: Team,
    team_b: Team,
    criteria: Sequence[Criterion],
    prefix: str = "",
) -> TieBreakResult | None:
    """
    Compare two teams criterion by criterion.

    Args:
        team_a: A team
        team_b: The team it is compared to
        criteria: Criteria in order of priority
        prefix: Prepended to the criterion label, e.g. "head-to-head "

    Returns:
        Result of the first criterion that separates the teams, or None
        if they are level on all of them
    """
    for label, statistic in criteria:
        difference = statistic(team_a) - statistic(team_b)
        if difference != 0:
            return TieBreakResult(value=sign(difference), criterion=prefix + label)
    return None
