"""
Team ledger.

A Team owns the match records of one side in a round-robin competition
plus the points deducted from it for policy violations. Every statistic
is recomputed from the ledger on read.
"""

from collections.abc import Collection, Iterable

from .exceptions import ValidationError
from .models import (
    INVALID_SCORE_MESSAGE,
    NULL_CARDS_MESSAGE,
    SELF_OPPONENT_MESSAGE,
    Card,
    CardPenaltyTable,
    Match,
    Outcome,
    is_valid_score,
)

NEGATIVE_DEDUCTION_MESSAGE = "Deducted points must be non-negative."


def _match_violations(name: str, opponent: str, score: str) -> list[str]:
    violations = list[str]()
    if not is_valid_score(score):
        violations.append(INVALID_SCORE_MESSAGE)
    if opponent == name:
        violations.append(SELF_OPPONENT_MESSAGE)
    return violations


class Team:
    """
    A football team and the ledger of matches it has played.

    Records are keyed by (opponent, is_away): adding a record whose key is
    already present replaces the score and cards of the existing one.
    """

    def __init__(
        self,
        name: str,
        matches: Iterable[Match] = (),
        deducted_points: int = 0,
    ):
        """
        Initialize a team.

        Args:
            name: Team name, unique within a group
            matches: Records to seed the ledger with
            deducted_points: Points deducted for policy violations

        Raises:
            ValidationError: If a seeded record is invalid, two records share
                a key, or deducted_points is negative
        """
        if not name:
            raise ValidationError("Team name cannot be empty.")
        self.name: str = name

        seeded = list(matches)
        violations = list[str]()
        for match in seeded:
            for violation in _match_violations(name, match.opponent, match.score):
                if violation not in violations:
                    violations.append(violation)
        if len({match.key for match in seeded}) != len(seeded):
            violations.append("Each opponent can appear at most once per venue.")
        if deducted_points < 0:
            violations.append(NEGATIVE_DEDUCTION_MESSAGE)
        if violations:
            raise ValidationError(violations)

        self._matches = {match.key: match for match in seeded}
        self._deducted_points: int = deducted_points

    # ledger mutation

    def add_or_update_match(
        self,
        opponent: str,
        score: str,
        is_away: bool = False,
        self_cards: Iterable[Card] | None = (),
        opponent_cards: Iterable[Card] | None = (),
    ) -> None:
        """
        Add a match, or update the score and cards of an existing one.

        Args:
            opponent: Name of the opposing team
            score: "goalsByThisTeam-goalsByOpponent"
            is_away: Whether this is the away leg (double-legged only)
            self_cards: Cards received by this team
            opponent_cards: Cards received by the opponent

        Raises:
            ValidationError: If the score is malformed, the opponent is the
                team itself, or a card list is None
        """
        violations = _match_violations(self.name, opponent, score)
        if self_cards is None or opponent_cards is None:
            violations.append(NULL_CARDS_MESSAGE)
        if violations:
            raise ValidationError(violations)
        self._matches[(opponent, is_away)] = Match(
            opponent=opponent,
            score=score,
            is_away=is_away,
            self_cards=tuple(self_cards),
            opponent_cards=tuple(opponent_cards),
        )

    def add_match(self, match: Match) -> None:
        """Add a prebuilt record, replacing any record with the same key."""
        self.add_matches(match)

    def add_matches(self, *matches: Match) -> None:
        """
        Add several records at once.

        The whole batch is validated before any record is stored.
        """
        violations = list[str]()
        for match in matches:
            for violation in _match_violations(self.name, match.opponent, match.score):
                if violation not in violations:
                    violations.append(violation)
        if violations:
            raise ValidationError(violations)
        for match in matches:
            self._matches[match.key] = match

    def remove_match(self, opponent: str, is_away: bool = False) -> None:
        """Remove the record against opponent, if there is one."""
        self._matches.pop((opponent, is_away), None)

    def set_deducted_points(self, points: int) -> None:
        """Set the number of points deducted for policy violations."""
        if points < 0:
            raise ValidationError(NEGATIVE_DEDUCTION_MESSAGE)
        self._deducted_points = points

    def adjust_deducted_points(self, delta: int) -> None:
        """Add to (or, with a negative delta, subtract from) the deduction."""
        self.set_deducted_points(self._deducted_points + delta)

    # ledger queries

    @property
    def matches(self) -> frozenset[Match]:
        return frozenset(self._matches.values())

    @property
    def deducted_points(self) -> int:
        return self._deducted_points

    @property
    def opponents(self) -> set[str]:
        return {match.opponent for match in self._matches.values()}

    @property
    def home_matches(self) -> frozenset[Match]:
        return frozenset(m for m in self._matches.values() if not m.is_away)

    @property
    def away_matches(self) -> frozenset[Match]:
        return frozenset(m for m in self._matches.values() if m.is_away)

    def get_match(self, opponent: str, is_away: bool = False) -> Match | None:
        return self._matches.get((opponent, is_away))

    # derived statistics

    @property
    def played(self) -> int:
        return len(self._matches)

    def _count(self, outcome: Outcome) -> int:
        return sum(1 for match in self._matches.values() if match.outcome is outcome)

    @property
    def wins(self) -> int:
        return self._count(Outcome.WIN)

    @property
    def draws(self) -> int:
        return self._count(Outcome.DRAW)

    @property
    def losses(self) -> int:
        return self._count(Outcome.LOSS)

    @property
    def points(self) -> int:
        """Points earned (3 per win, 1 per draw) minus deducted points."""
        earned = sum(match.outcome.points for match in self._matches.values())
        return earned - self._deducted_points

    @property
    def goals_for(self) -> int:
        return sum(match.goals_scored for match in self._matches.values())

    @property
    def goals_against(self) -> int:
        return sum(match.goals_conceded for match in self._matches.values())

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def goal_difference_display(self) -> str:
        """Goal difference with a '+' prefix when positive."""
        difference = self.goal_difference
        return f"+{difference}" if difference > 0 else str(difference)

    @property
    def away_goals(self) -> int:
        return sum(match.goals_scored for match in self.away_matches)

    @property
    def cards(self) -> list[Card]:
        """All cards received by the team, across every match."""
        return [card for match in self._matches.values() for card in match.self_cards]

    def fair_play_points(self, penalties: CardPenaltyTable) -> int:
        """Sum of the penalties of every card received by the team."""
        return penalties.total(self.cards)

    # copies

    def copy(self) -> "Team":
        """Return an independent copy of the team."""
        return Team(self.name, self._matches.values(), self._deducted_points)

    def restricted_to(
        self, opponents: Collection[str], keep_deduction: bool = True
    ) -> "Team":
        """
        Return a copy whose ledger only keeps records against opponents.

        Args:
            opponents: Names of the opponents to keep
            keep_deduction: Whether the copy keeps the deducted points
        """
        kept = [m for m in self._matches.values() if m.opponent in opponents]
        return Team(self.name, kept, self._deducted_points if keep_deduction else 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Team):
            return NotImplemented
        return (
            self.name == other.name
            and self.matches == other.matches
            and self._deducted_points == other._deducted_points
        )

    # mutable: equal teams must not be usable as dict keys
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        records = ", ".join(
            f"{m.opponent} {m.score}{' (away)' if m.is_away else ''}"
            for m in sorted(self._matches.values(), key=lambda m: m.key)
        )
        return f"Team(name={self.name!r}, matches=[{records}], deducted_points={self._deducted_points})"
