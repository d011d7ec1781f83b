"""
Premier League policy.

Ranks teams on points, then goal difference, then goals scored. Clubs
still level share a position. When such a tie decides the champion,
relegation or qualification, the rules go on to head-to-head points, away
goals in head-to-head matches and finally a play-off; those steps are
not applied here and the tie is reported as needing a play-off.
"""

from typing import TYPE_CHECKING

from typing_extensions import override

from ..config import LEAGUE_CONFIG, CompetitionConfig
from ..interfaces import Resolution, TieBreakPolicy, TieBreakResult
from ..team import Team
from .criteria import GOAL_DIFFERENCE, GOALS_FOR, POINTS, first_difference

if TYPE_CHECKING:
    from ..group import Group

PRE_HEAD_TO_HEAD = (POINTS, GOAL_DIFFERENCE, GOALS_FOR)


class LeaguePolicy(TieBreakPolicy):
    """Tie-break policy of the Premier League (20 clubs, two legs)."""

    def __init__(self, config: CompetitionConfig = LEAGUE_CONFIG):
        super().__init__(config)

    @override
    def partial_compare(self, team_a: Team, team_b: Team) -> int:
        result = first_difference(team_a, team_b, PRE_HEAD_TO_HEAD)
        return result.value if result is not None else 0

    @override
    def tie_break(self, group: "Group", team_a: Team, team_b: Team) -> TieBreakResult:
        result = first_difference(team_a, team_b, PRE_HEAD_TO_HEAD)
        if result is not None:
            return result
        # TODO: apply head-to-head points, then head-to-head away goals, before the play-off
        return TieBreakResult(
            value=0, criterion="level on every criterion", resolution=Resolution.PLAYOFF
        )
