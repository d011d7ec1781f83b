"""
UEFA European Championship group policy.

Ranks teams on:

1. Points earned in all group matches
2. Points, goal difference and goals scored in the matches played between
   the teams tied on points
3. If some of those teams are still level, points, goal difference and
   goals scored in the matches played between them only
4. Goal difference in all group matches
5. Goals scored in all group matches
6. Wins in all group matches
7. Fair play points, only when more than two teams are still level
8. Penalty shoot-out between two teams level after their last match, or
   drawing of lots for larger ties, both reported as unresolved ties
"""

from typing import TYPE_CHECKING

from typing_extensions import override

from ..config import QUALIFIER_CONFIG, CompetitionConfig
from ..interfaces import Resolution, TieBreakPolicy, TieBreakResult
from ..logging_config import get_logger
from ..team import Team
from .criteria import GOAL_DIFFERENCE, GOALS_FOR, POINTS, WINS, first_difference, sign

if TYPE_CHECKING:
    from ..group import Group

# Module-level logger
logger = get_logger("qualifier_policy")

HEAD_TO_HEAD = (POINTS, GOAL_DIFFERENCE, GOALS_FOR)
OVERALL = (GOAL_DIFFERENCE, GOALS_FOR, WINS)
BEFORE_FAIR_PLAY = (POINTS, GOAL_DIFFERENCE, GOALS_FOR, WINS)


class QualifierPolicy(TieBreakPolicy):
    """Tie-break policy of a UEFA Euro group (4 teams, one leg)."""

    def __init__(self, config: CompetitionConfig = QUALIFIER_CONFIG):
        super().__init__(config)

    @override
    def partial_compare(self, team_a: Team, team_b: Team) -> int:
        return sign(team_a.points - team_b.points)

    @override
    def tie_break(self, group: "Group", team_a: Team, team_b: Team) -> TieBreakResult:
        result = first_difference(team_a, team_b, (POINTS,))
        if result is not None:
            return result

        if team_a.played == 0 and team_b.played == 0:
            return TieBreakResult(value=0, criterion="no match played")

        if group.have_played_against(team_a, team_b):
            result = self._head_to_head(group, team_a, team_b)
            if result is not None:
                return result

        result = first_difference(team_a, team_b, OVERALL)
        if result is not None:
            return result

        still_tied = self.tied_before_fair_play(group, team_a)
        if len(still_tied) > 2:
            penalties = self.config.card_penalties
            fair_play = team_a.fair_play_points(penalties) - team_b.fair_play_points(penalties)
            if fair_play != 0:
                return TieBreakResult(value=sign(fair_play), criterion="fair play points")
            return TieBreakResult(
                value=0, criterion="level on every criterion", resolution=Resolution.DRAWING_OF_LOTS
            )

        return TieBreakResult(
            value=0, criterion="level on every criterion", resolution=Resolution.PENALTY_SHOOTOUT
        )

    def _head_to_head(self, group: "Group", team_a: Team, team_b: Team) -> TieBreakResult | None:
        """Apply the head-to-head mini-table, then the narrower one if needed."""
        mini_table = self.build_subgroup(group, team_a)
        logger.debug(
            f"Head-to-head between {team_a.name} and {team_b.name} among {sorted(mini_table.team_names)}"
        )
        mini_a = mini_table.get_team_by_name(team_a.name)
        result = first_difference(
            mini_a, mini_table.get_team_by_name(team_b.name), HEAD_TO_HEAD, prefix="head-to-head "
        )
        if result is not None:
            return result

        # teams still level on head-to-head points, with only their own matches
        narrower = self.build_subgroup(mini_table, mini_a)
        if len(narrower) == len(mini_table):
            return None
        logger.debug(f"Second head-to-head among {sorted(narrower.team_names)}")
        return first_difference(
            narrower.get_team_by_name(team_a.name),
            narrower.get_team_by_name(team_b.name),
            HEAD_TO_HEAD,
            prefix="second head-to-head ",
        )

    def tied_before_fair_play(self, group: "Group", team: Team) -> list[str]:
        """Names of the teams of group level with team before fair play points."""
        return [
            other.name for other in group.get_teams()
            if first_difference(team, other, BEFORE_FAIR_PLAY) is None
        ]
