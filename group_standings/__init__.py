"""
Group Standings - Round-Robin Ranking Engine

Computes ranked standings for the teams of a round-robin group from a
ledger of match results, applying competition-specific tie-break rules.
"""

from loguru import logger

from .competitions import league, qualifier_group, world_cup_group
from .config import LEAGUE_CONFIG, QUALIFIER_CONFIG, WORLD_CUP_CONFIG, CompetitionConfig
from .exceptions import InvariantViolation, StandingsError, TeamNotFoundError, ValidationError
from .group import Group
from .interfaces import Resolution, StandingsRow, TieBreakPolicy, TieBreakResult, UnresolvedTie
from .models import (
    LEAGUE_CARD_PENALTIES,
    QUALIFIER_CARD_PENALTIES,
    WORLD_CUP_CARD_PENALTIES,
    Card,
    CardPenaltyTable,
    Match,
    Outcome,
)
from .policies import LeaguePolicy, QualifierPolicy, WorldCupPolicy
from .registry import TeamRegistry
from .team import Team

# silent until the application calls setup_logging
logger.disable("group_standings")

__version__ = "0.1.0"
__all__ = [
    "Card",
    "CardPenaltyTable",
    "CompetitionConfig",
    "Group",
    "InvariantViolation",
    "LEAGUE_CARD_PENALTIES",
    "LEAGUE_CONFIG",
    "LeaguePolicy",
    "Match",
    "Outcome",
    "QUALIFIER_CARD_PENALTIES",
    "QUALIFIER_CONFIG",
    "QualifierPolicy",
    "Resolution",
    "StandingsError",
    "StandingsRow",
    "Team",
    "TeamNotFoundError",
    "TeamRegistry",
    "TieBreakPolicy",
    "TieBreakResult",
    "UnresolvedTie",
    "ValidationError",
    "WORLD_CUP_CARD_PENALTIES",
    "WORLD_CUP_CONFIG",
    "WorldCupPolicy",
    "league",
    "qualifier_group",
    "world_cup_group",
]
