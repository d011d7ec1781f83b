"""
Tie-break policy implementations.

Provides implementations of the TieBreakPolicy interface, one per
supported competition.

Available implementations:
- WorldCupPolicy: FIFA World Cup group, one head-to-head mini-table then
  fair play points
- LeaguePolicy: Premier League, clubs level on points, goal difference and
  goals scored share a position
- QualifierPolicy: UEFA Euro group, two levels of head-to-head mini-tables
  then overall goal difference, goals scored and wins
"""

from .league_policy import LeaguePolicy
from .qualifier_policy import QualifierPolicy
from .world_cup_policy import WorldCupPolicy

__all__ = ["LeaguePolicy", "QualifierPolicy", "WorldCupPolicy"]
