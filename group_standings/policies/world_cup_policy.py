"""
FIFA World Cup group policy.

Ranks teams on:

1. Points earned in all group matches
2. Goal difference in all group matches
3. Goals scored in all group matches
4. Points, goal difference and goals scored in the matches played
   between the teams still tied (one mini-table)
5. Fair play points in all group matches
6. Drawing of lots, which is reported as an unresolved tie
"""

from typing import TYPE_CHECKING

from typing_extensions import override

from ..config import WORLD_CUP_CONFIG, CompetitionConfig
from ..interfaces import Resolution, TieBreakPolicy, TieBreakResult
from ..logging_config import get_logger
from ..team import Team
from .criteria import GOAL_DIFFERENCE, GOALS_FOR, POINTS, first_difference, sign

if TYPE_CHECKING:
    from ..group import Group

# Module-level logger
logger = get_logger("world_cup_policy")

PRE_HEAD_TO_HEAD = (POINTS, GOAL_DIFFERENCE, GOALS_FOR)


class WorldCupPolicy(TieBreakPolicy):
    """Tie-break policy of a FIFA World Cup group (4 teams, one leg)."""

    def __init__(self, config: CompetitionConfig = WORLD_CUP_CONFIG):
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

        # head-to-head record only exists if both teams have faced each other
        if group.have_played_against(team_a, team_b):
            mini_table = self.build_subgroup(group, team_a)
            logger.debug(
                f"Head-to-head between {team_a.name} and {team_b.name} among {sorted(mini_table.team_names)}"
            )
            result = first_difference(
                mini_table.get_team_by_name(team_a.name),
                mini_table.get_team_by_name(team_b.name),
                PRE_HEAD_TO_HEAD,
                prefix="head-to-head ",
            )
            if result is not None:
                return result

        penalties = self.config.card_penalties
        fair_play = team_a.fair_play_points(penalties) - team_b.fair_play_points(penalties)
        if fair_play != 0:
            return TieBreakResult(value=sign(fair_play), criterion="fair play points")

        return TieBreakResult(
            value=0, criterion="level on every criterion", resolution=Resolution.DRAWING_OF_LOTS
        )
