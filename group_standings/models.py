"""
Core dataclasses for the group standings engine.

Defines disciplinary cards, per-competition card penalty tables and the
Match record with validation.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ValidationError

# non-negative integer, hyphen, non-negative integer; no leading zeros
SCORE_PATTERN = re.compile(r"^(0|[1-9]\d*)-(0|[1-9]\d*)$")

INVALID_SCORE_MESSAGE = "The score must be two non-negative integers separated by '-'."
SELF_OPPONENT_MESSAGE = "All opponents' names should be different from the team's name."
NULL_CARDS_MESSAGE = "List of cards can not be None."


def is_valid_score(score: object) -> bool:
    """Return True if score is a string such as "0-0", "2-1" or "10-20"."""
    return isinstance(score, str) and SCORE_PATTERN.match(score) is not None


def parse_score(score: str) -> tuple[int, int]:
    """Split a validated score string into (goals for, goals against)."""
    if not is_valid_score(score):
        raise ValidationError(INVALID_SCORE_MESSAGE)
    goals_for, goals_against = score.split("-")
    return int(goals_for), int(goals_against)


class Card(Enum):
    """Kinds of disciplinary card counted towards fair play points."""

    CAUTION = "caution"
    INDIRECT_SEND_OFF = "indirect_send_off"
    DIRECT_SEND_OFF = "direct_send_off"
    CAUTION_AND_SEND_OFF = "caution_and_send_off"


@dataclass(frozen=True)
class CardPenaltyTable:
    """Fair play penalty of each card kind for one competition."""

    caution: int
    indirect_send_off: int
    direct_send_off: int
    caution_and_send_off: int

    def __post_init__(self) -> None:
        """Validate penalties."""
        for card in Card:
            value = getattr(self, card.value)
            if not isinstance(value, int) or value > 0:
                raise ValidationError(
                    f"Penalty for {card.name} must be a non-positive integer, got {value!r}"
                )

    def penalty(self, card: Card) -> int:
        """Return the fair play penalty for a card."""
        return getattr(self, card.value)

    def total(self, cards: Iterable[Card]) -> int:
        """Sum the penalties of a sequence of cards."""
        return sum(self.penalty(card) for card in cards)


WORLD_CUP_CARD_PENALTIES = CardPenaltyTable(
    caution=-1, indirect_send_off=-3, direct_send_off=-4, caution_and_send_off=-5
)
QUALIFIER_CARD_PENALTIES = CardPenaltyTable(
    caution=-1, indirect_send_off=-3, direct_send_off=-3, caution_and_send_off=-4
)
# disciplinary record does not break ties in the league
LEAGUE_CARD_PENALTIES = CardPenaltyTable(
    caution=0, indirect_send_off=0, direct_send_off=0, caution_and_send_off=0
)


class Outcome(Enum):
    """Result of a match for the team that owns the record."""

    LOSS = 0
    DRAW = 1
    WIN = 3

    @property
    def points(self) -> int:
        return self.value


def _card_tuple(cards: Iterable[Card] | None) -> tuple[Card, ...]:
    if cards is None:
        raise ValidationError(NULL_CARDS_MESSAGE)
    return tuple(cards)


@dataclass(frozen=True)
class Match:
    """
    One fixture seen from the perspective of the team that owns the record.

    The score reads "goalsByThisTeam-goalsByOpponent", so a record with
    opponent "Japan" and score "1-2" is a 2-1 defeat against Japan.
    Away records only exist in double-legged competitions.
    """

    opponent: str
    score: str
    is_away: bool = False
    self_cards: tuple[Card, ...] = field(default=())
    opponent_cards: tuple[Card, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate match data."""
        violations = list[str]()
        if not is_valid_score(self.score):
            violations.append(INVALID_SCORE_MESSAGE)
        if self.self_cards is None or self.opponent_cards is None:
            violations.append(NULL_CARDS_MESSAGE)
        if violations:
            raise ValidationError(violations)
        # frozen dataclass: normalize lists to tuples through object.__setattr__
        object.__setattr__(self, "self_cards", _card_tuple(self.self_cards))
        object.__setattr__(self, "opponent_cards", _card_tuple(self.opponent_cards))

    @property
    def key(self) -> tuple[str, bool]:
        """Identity of the record inside a ledger."""
        return self.opponent, self.is_away

    @property
    def goals_scored(self) -> int:
        return parse_score(self.score)[0]

    @property
    def goals_conceded(self) -> int:
        return parse_score(self.score)[1]

    @property
    def reversed_score(self) -> str:
        """The score from the opponent's perspective."""
        return f"{self.goals_conceded}-{self.goals_scored}"

    @property
    def outcome(self) -> Outcome:
        if self.goals_scored > self.goals_conceded:
            return Outcome.WIN
        if self.goals_scored == self.goals_conceded:
            return Outcome.DRAW
        return Outcome.LOSS

    def mirrored(self, owner: str, is_away: bool) -> "Match":
        """Build the complementary record for the opponent's ledger."""
        return Match(
            opponent=owner,
            score=self.reversed_score,
            is_away=is_away,
            self_cards=self.opponent_cards,
            opponent_cards=self.self_cards,
        )
