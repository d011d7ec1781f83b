"""Ready-made groups for the supported competitions."""

from collections.abc import Sequence

from .group import Group
from .policies import LeaguePolicy, QualifierPolicy, WorldCupPolicy
from .team import Team


def world_cup_group(teams: Sequence[Team]) -> Group:
    """Build a FIFA World Cup group: up to 4 teams, one leg."""
    return Group(teams, WorldCupPolicy())


def league(teams: Sequence[Team]) -> Group:
    """Build a Premier League table: up to 20 clubs, two legs."""
    return Group(teams, LeaguePolicy())


def qualifier_group(teams: Sequence[Team]) -> Group:
    """Build a UEFA Euro group: up to 4 teams, one leg."""
    return Group(teams, QualifierPolicy())
