"""
Standings engine for a round-robin group.

Owns a fixed roster of teams, registers and removes fixtures on both
ledgers at once, and keeps the table ordered by its tie-break policy.
"""

from collections.abc import Collection, Iterable, Sequence
from functools import cmp_to_key
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from .exceptions import TeamNotFoundError, ValidationError
from .interfaces import StandingsRow, TieBreakPolicy, TieBreakResult, UnresolvedTie
from .logging_config import get_logger
from .models import INVALID_SCORE_MESSAGE, NULL_CARDS_MESSAGE, Card, Match, is_valid_score
from .team import Team

SAME_TEAM_MESSAGE = "The names of the two teams facing each other cannot be the same."
UNKNOWN_TEAM_MESSAGE = "Team names must be among the ones in the group."

TABLE_ROW_FORMAT = "{pos}: {name}, Pld: {p}, W: {w}, D: {d}, L: {l}, GF: {gf}, GA: {ga}, GD: {gd}, Pts: {pts}"


class Group:
    """
    A group of teams competing in a round-robin tournament.

    In double-legged groups each team's ledger holds its home record of a
    fixture, and the opponent's ledger holds the reversed, away-flagged
    record of the same fixture. In single-legged groups both records are
    home records.

    Every query returns copies: mutating a returned Team never changes the
    group.
    """

    def __init__(self, teams: Sequence[Team], policy: TieBreakPolicy, *, rank: bool = True):
        """
        Initialize the group.

        Records against teams that are not in the group are dropped rather
        than rejected, so a group can be built from a subset of a larger
        group to isolate head-to-head results.

        Args:
            teams: Teams of the group
            policy: Tie-break policy deciding the order of the table
            rank: Whether to order the table right away. Head-to-head
                mini-tables are built unranked.

        Raises:
            ValidationError: If the roster is too large, names collide, or a
                single-legged group is given away records
        """
        self.policy: TieBreakPolicy = policy
        self.logger: Logger = get_logger("group")

        config = policy.config
        violations = list[str]()
        if len(teams) > config.roster_cap:
            violations.append(f"The number of teams must not exceed {config.roster_cap}.")
        names = [team.name for team in teams]
        if len(set(names)) != len(names):
            violations.append("Teams with duplicate names detected.")
        if violations:
            raise ValidationError(violations)

        roster = set(names)
        members = [team.restricted_to(roster) for team in teams]
        if not config.is_double_legged and any(team.away_matches for team in members):
            raise ValidationError("Single-legged tournaments can not contain away matches.")

        self._teams: list[Team] = members
        self._positions = dict[str, int]()

        if rank:
            self.logger.info(f"Created {config.name} with teams {names}")
            self._rank()

    @property
    def legs(self) -> int:
        return self.policy.config.legs

    @property
    def roster_cap(self) -> int:
        return self.policy.config.roster_cap

    # fixtures

    def add_match(
        self,
        team_a: str,
        team_b: str,
        score: str,
        cards_a: Iterable[Card] | None = (),
        cards_b: Iterable[Card] | None = (),
    ) -> None:
        """
        Record a fixture between two teams of the group, or update its score.

        Args:
            team_a: Name of the first team; the home team in double-legged groups
            team_b: Name of the second team; the away team in double-legged groups
            score: "goalsByTeamA-goalsByTeamB"
            cards_a: Cards received by team_a
            cards_b: Cards received by team_b

        Raises:
            ValidationError: If the score is malformed, the names are equal or
                unknown, or a card list is None
        """
        violations = list[str]()
        if not is_valid_score(score):
            violations.append(INVALID_SCORE_MESSAGE)
        if team_a == team_b:
            violations.append(SAME_TEAM_MESSAGE)
        if cards_a is None or cards_b is None:
            violations.append(NULL_CARDS_MESSAGE)
        violations.extend(self._unknown_name_violations(team_a, team_b))
        if violations:
            raise ValidationError(violations)

        home_record = Match(team_b, score, False, tuple(cards_a), tuple(cards_b))
        away_record = home_record.mirrored(team_a, is_away=self.policy.config.is_double_legged)
        self._team(team_a).add_match(home_record)
        self._team(team_b).add_match(away_record)
        self.logger.debug(f"Recorded {team_a} {score} {team_b}")
        self._rank()

    def remove_match(self, team_a: str, team_b: str) -> None:
        """
        Remove the fixture between two teams of the group, if it was recorded.

        Uses the same home/away convention as add_match.

        Raises:
            ValidationError: If the names are equal or unknown
        """
        violations = list[str]()
        if team_a == team_b:
            violations.append(SAME_TEAM_MESSAGE)
        violations.extend(self._unknown_name_violations(team_a, team_b))
        if violations:
            raise ValidationError(violations)

        self._team(team_a).remove_match(team_b, is_away=False)
        self._team(team_b).remove_match(team_a, is_away=self.policy.config.is_double_legged)
        self.logger.debug(f"Removed {team_a} vs {team_b}")
        self._rank()

    def _unknown_name_violations(self, *team_names: str) -> list[str]:
        roster = self.team_names
        if any(name not in roster for name in team_names):
            return [UNKNOWN_TEAM_MESSAGE]
        return []

    # ranking

    def compare(self, team_a: Team | str, team_b: Team | str) -> int:
        """
        Compare the ranking of two teams under the group's policy.

        Returns:
            Positive if team_a ranks above team_b, negative if below,
            0 if they share a position

        Raises:
            InvariantViolation: If both arguments are the same team
            TeamNotFoundError: If a name is not in the group
        """
        return self.policy.compare(self, self._resolve(team_a), self._resolve(team_b))

    def explain(self, team_a: Team | str, team_b: Team | str) -> TieBreakResult:
        """Compare two teams and report which criterion decided."""
        return self.policy.explain(self, self._resolve(team_a), self._resolve(team_b))

    def partial_compare(self, team_a: Team | str, team_b: Team | str) -> int:
        """Compare two teams on the criteria applied before head-to-head."""
        return self.policy.partial_compare(self._resolve(team_a), self._resolve(team_b))

    def build_subgroup(self, team: Team | str) -> "Group":
        """Build the head-to-head mini-table of the teams tied with team."""
        return self.policy.build_subgroup(self, self._resolve(team))

    def restricted_to(self, team_names: Collection[str]) -> "Group":
        """
        Build an unranked group of the given members.

        Each member keeps only its matches against the other members and
        loses its deducted points.
        """
        members = [
            team.restricted_to(team_names, keep_deduction=False)
            for team in self._teams if team.name in team_names
        ]
        return Group(members, self.policy, rank=False)

    def _sort(self, teams: Iterable[Team]) -> list[Team]:
        return sorted(teams, key=cmp_to_key(lambda a, b: self.compare(b, a)))

    def _rank(self) -> None:
        """Order the roster and rebuild the position table."""
        self._teams = self._sort(self._teams)
        positions = dict[str, int]()
        for index, team in enumerate(self._teams):
            if index == 0:
                positions[team.name] = 1
                continue
            previous = self._teams[index - 1]
            if self.compare(team, previous) < 0:
                positions[team.name] = index + 1
            else:
                positions[team.name] = positions[previous.name]
        self._positions = positions
        self.logger.debug(
            "Standings: " + ", ".join(f"{positions[t.name]}. {t.name}" for t in self._teams)
        )

    def _ranked_teams(self) -> list[Team]:
        if len(self._positions) != len(self._teams):
            self._rank()
        return self._teams

    # queries

    def _team(self, team_name: str) -> Team:
        for team in self._teams:
            if team.name == team_name:
                return team
        raise TeamNotFoundError(f"No team of name {team_name} is in this group.")

    def _resolve(self, team: Team | str) -> Team:
        return self._team(team) if isinstance(team, str) else team

    def get_team_by_name(self, team_name: str) -> Team:
        """
        Return a copy of the team called team_name.

        Raises:
            TeamNotFoundError: If no such team is in the group
        """
        return self._team(team_name).copy()

    def get_team_position(self, team_name: str) -> int:
        """
        Return the 1-based position of a team; tied teams share a position.

        Raises:
            TeamNotFoundError: If no such team is in the group
        """
        self._team(team_name)
        self._ranked_teams()
        return self._positions[team_name]

    @property
    def team_names(self) -> set[str]:
        return {team.name for team in self._teams}

    def get_teams(self) -> list[Team]:
        """Return copies of the teams of the group."""
        return [team.copy() for team in self._teams]

    def sorted_teams(self) -> list[Team]:
        """Return copies of the teams, highest ranked first."""
        return [team.copy() for team in self._sort(self._teams)]

    def have_played_against(self, team_a: Team | str, team_b: Team | str) -> bool:
        """Whether each team's ledger holds a record against the other."""
        first, second = self._resolve(team_a), self._resolve(team_b)
        return second.name in first.opponents and first.name in second.opponents

    def is_complete(self) -> bool:
        """Whether every team has faced every other team (twice if double-legged)."""
        expected = (len(self._teams) - 1) * self.legs
        return all(team.played == expected for team in self._teams)

    def table_row(self, team_name: str) -> str:
        """Return the table line of a team, e.g. "1: Italy, Pld: 3, ... Pts: 9"."""
        team = self._team(team_name)
        return TABLE_ROW_FORMAT.format(
            pos=self.get_team_position(team_name),
            name=team.name,
            p=team.played,
            w=team.wins,
            d=team.draws,
            l=team.losses,
            gf=team.goals_for,
            ga=team.goals_against,
            gd=team.goal_difference_display,
            pts=team.points,
        )

    def standings(self) -> list[StandingsRow]:
        """Return the table as typed rows, highest ranked first."""
        return [
            {
                "position": self._positions[team.name],
                "name": team.name,
                "played": team.played,
                "wins": team.wins,
                "draws": team.draws,
                "losses": team.losses,
                "goals_for": team.goals_for,
                "goals_against": team.goals_against,
                "goal_difference": team.goal_difference,
                "points": team.points,
            }
            for team in self._ranked_teams()
        ]

    def unresolved_ties(self) -> list[UnresolvedTie]:
        """
        Return the blocks of teams sharing a position that need an external
        procedure (drawing of lots, play-off, shoot-out) to be split.
        """
        teams = self._ranked_teams()
        blocks = list[list[Team]]()
        for team in teams:
            if blocks and self._positions[blocks[-1][0].name] == self._positions[team.name]:
                blocks[-1].append(team)
            else:
                blocks.append([team])

        ties = list[UnresolvedTie]()
        for block in blocks:
            if len(block) < 2:
                continue
            for previous, current in zip(block, block[1:]):
                result = self.explain(previous, current)
                if result.resolution is not None:
                    ties.append(UnresolvedTie(
                        position=self._positions[block[0].name],
                        team_names=tuple(team.name for team in block),
                        resolution=result.resolution,
                    ))
                    self.logger.info(
                        f"Teams {[t.name for t in block]} remain tied: {result.resolution.value} required"
                    )
                    break
        return ties

    def __len__(self) -> int:
        return len(self._teams)

    def __repr__(self) -> str:
        return (
            f"Group(policy={type(self.policy).__name__}, teams={self._teams!r}, "
            f"roster_cap={self.roster_cap}, legs={self.legs})"
        )
