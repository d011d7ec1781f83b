"""Competition configuration."""

from dataclasses import dataclass

from .exceptions import ValidationError
from .models import (
    LEAGUE_CARD_PENALTIES,
    QUALIFIER_CARD_PENALTIES,
    WORLD_CUP_CARD_PENALTIES,
    CardPenaltyTable,
)

VALID_LEGS = (1, 2)


@dataclass(frozen=True)
class CompetitionConfig:
    """Configuration for one round-robin competition."""

    name: str
    roster_cap: int  # maximum number of teams in a group
    legs: int  # matches played between each pair of teams
    card_penalties: CardPenaltyTable

    def __post_init__(self):
        """Validate configuration."""
        violations = list[str]()
        if self.roster_cap < 1:
            violations.append(f"roster_cap must be positive, got {self.roster_cap}")
        if self.legs not in VALID_LEGS:
            violations.append("The number of legs must be either 1 or 2.")
        if violations:
            raise ValidationError(violations)

    @property
    def is_double_legged(self) -> bool:
        return self.legs == 2


WORLD_CUP_CONFIG = CompetitionConfig(
    name="FIFA World Cup group",
    roster_cap=4,
    legs=1,
    card_penalties=WORLD_CUP_CARD_PENALTIES,
)
LEAGUE_CONFIG = CompetitionConfig(
    name="Premier League",
    roster_cap=20,
    legs=2,
    card_penalties=LEAGUE_CARD_PENALTIES,
)
QUALIFIER_CONFIG = CompetitionConfig(
    name="UEFA European Championship group",
    roster_cap=4,
    legs=1,
    card_penalties=QUALIFIER_CARD_PENALTIES,
)
