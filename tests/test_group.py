"""
Tests for the Group standings engine.

Focus on roster validation, fixture bookkeeping on both ledgers and
position assignment.
"""

import pytest
from group_standings.competitions import league, world_cup_group
from group_standings.exceptions import InvariantViolation, TeamNotFoundError, ValidationError
from group_standings.group import SAME_TEAM_MESSAGE, UNKNOWN_TEAM_MESSAGE, Group
from group_standings.interfaces import Resolution, UnresolvedTie
from group_standings.models import INVALID_SCORE_MESSAGE, Card, Match
from group_standings.policies import WorldCupPolicy
from group_standings.registry import TeamRegistry
from group_standings.team import Team

CAUTION = Card.CAUTION


def group_c_2022() -> Group:
    """2022 World Cup Group C with no match played."""
    registry = TeamRegistry()
    teams = [registry.create_team(name) for name in ("Argentina", "Saudi Arabia", "Poland", "Mexico")]
    return world_cup_group(teams)


def group_c_2022_complete() -> Group:
    """2022 World Cup Group C with every result and caution."""
    group = group_c_2022()
    group.add_match("Argentina", "Saudi Arabia", "1-2", [], [CAUTION] * 6)
    group.add_match("Poland", "Mexico", "0-0", [CAUTION], [CAUTION] * 2)
    group.add_match("Poland", "Saudi Arabia", "2-0", [CAUTION] * 3, [CAUTION] * 2)
    group.add_match("Argentina", "Mexico", "2-0", [CAUTION], [CAUTION] * 4)
    group.add_match("Poland", "Argentina", "0-2", [CAUTION], [CAUTION])
    group.add_match("Saudi Arabia", "Mexico", "1-2", [CAUTION] * 6, [CAUTION])
    return group


def premier_league() -> Group:
    """A small Premier League table with no match played."""
    return league([Team(name) for name in ("Manchester City", "Chelsea", "Arsenal", "Liverpool")])


class TestGroupConstruction:
    """Test roster validation when building a group."""

    def test_too_many_teams(self) -> None:
        """A World Cup group holds at most 4 teams."""
        teams = [Team(name) for name in ("Argentina", "Saudi Arabia", "Poland", "Mexico", "Australia")]
        with pytest.raises(ValidationError) as exc_info:
            world_cup_group(teams)
        assert str(exc_info.value) == "The number of teams must not exceed 4."

    def test_duplicate_names(self) -> None:
        """Two teams can not share a name."""
        # Arrange
        teams = [
            Team("Argentina"),
            Team("Poland"),
            Team("Saudi Arabia"),
            Team("Poland", [Match("Argentina", "2-0")]),
        ]

        # Act / Assert
        with pytest.raises(ValidationError) as exc_info:
            world_cup_group(teams)
        assert str(exc_info.value) == "Teams with duplicate names detected."

    def test_away_records_in_single_leg_group(self) -> None:
        """Single-legged groups reject away records."""
        teams = [
            Team("Argentina", [Match("Saudi Arabia", "1-2", True)]),
            Team("Poland"),
            Team("Saudi Arabia"),
            Team("Mexico"),
        ]
        with pytest.raises(ValidationError, match="Single-legged tournaments"):
            world_cup_group(teams)

    def test_away_records_allowed_in_league(self) -> None:
        """Double-legged groups accept away records."""
        group = league([Team("Chelsea", [Match("Arsenal", "1-3", True)]), Team("Arsenal")])
        assert group.get_team_by_name("Chelsea").away_matches == {Match("Arsenal", "1-3", True)}

    def test_drops_records_against_outsiders(self) -> None:
        """Records against teams outside the roster are filtered out."""
        # Arrange
        argentina = Team("Argentina", [
            Match("Mexico", "2-0"),
            Match("Poland", "2-0"),
            Match("Croatia", "3-0"),
        ])

        # Act
        group = world_cup_group([argentina, Team("Poland"), Team("Saudi Arabia"), Team("Mexico")])

        # Assert
        assert group.get_team_by_name("Argentina").matches == {Match("Mexico", "2-0"), Match("Poland", "2-0")}
        assert argentina.played == 3, "Caller's team must not be modified"

    def test_fresh_group_shape(self) -> None:
        """Size, legs and roster cap come from the policy's configuration."""
        group = group_c_2022()
        assert len(group) == 4
        assert group.legs == 1
        assert group.roster_cap == 4
        assert group.team_names == {"Argentina", "Saudi Arabia", "Poland", "Mexico"}


class TestGroupFixtures:
    """Test adding, updating and removing fixtures."""

    def test_add_match_one_leg(self) -> None:
        """Both ledgers get a home record, the second one reversed."""
        # Arrange
        group = group_c_2022()

        # Act
        group.add_match("Argentina", "Saudi Arabia", "1-2")

        # Assert
        assert group.get_team_by_name("Argentina").matches == {Match("Saudi Arabia", "1-2")}
        assert group.get_team_by_name("Saudi Arabia").matches == {Match("Argentina", "2-1")}
        assert group.get_team_by_name("Poland").matches == frozenset()
        assert group.get_team_by_name("Mexico").matches == frozenset()

    def test_same_fixture_twice(self) -> None:
        """Registering an unchanged fixture again keeps one record per side."""
        # Arrange
        group = group_c_2022()

        # Act
        group.add_match("Argentina", "Saudi Arabia", "1-2")
        group.add_match("Argentina", "Saudi Arabia", "1-2")

        # Assert
        assert group.get_team_by_name("Argentina").matches == {Match("Saudi Arabia", "1-2")}
        assert group.get_team_by_name("Saudi Arabia").matches == {Match("Argentina", "2-1")}
        assert group.get_team_by_name("Argentina").played == 1

    def test_update_match_one_leg(self) -> None:
        """Registering the same fixture again replaces the score."""
        # Arrange
        group = group_c_2022()
        group.add_match("Argentina", "Saudi Arabia", "1-0")

        # Act
        group.add_match("Argentina", "Saudi Arabia", "1-2")

        # Assert
        assert group.get_team_by_name("Argentina").matches == {Match("Saudi Arabia", "1-2")}
        assert group.get_team_by_name("Saudi Arabia").matches == {Match("Argentina", "2-1")}

    def test_add_match_two_legs(self) -> None:
        """The second team gets an away-flagged, reversed record."""
        # Arrange
        pl = premier_league()

        # Act
        pl.add_match("Arsenal", "Manchester City", "1-0")

        # Assert
        assert pl.get_team_by_name("Arsenal").matches == {Match("Manchester City", "1-0")}
        assert pl.get_team_by_name("Manchester City").matches == {Match("Arsenal", "0-1", True)}

    def test_both_legs_are_kept(self) -> None:
        """Home and away fixtures between two clubs are separate records."""
        # Arrange
        pl = premier_league()

        # Act
        pl.add_match("Manchester City", "Chelsea", "0-3")
        pl.add_match("Manchester City", "Chelsea", "2-1")
        pl.add_match("Chelsea", "Manchester City", "2-2")
        pl.add_match("Chelsea", "Manchester City", "2-4")
        pl.add_match("Chelsea", "Arsenal", "2-3")
        pl.add_match("Chelsea", "Arsenal", "4-1")

        # Assert
        assert pl.get_team_by_name("Manchester City").matches == {
            Match("Chelsea", "2-1", False),
            Match("Chelsea", "4-2", True),
        }
        assert pl.get_team_by_name("Chelsea").matches == {
            Match("Manchester City", "1-2", True),
            Match("Manchester City", "2-4", False),
            Match("Arsenal", "4-1", False),
        }

    def test_cards_are_recorded_on_both_sides(self) -> None:
        """Each side's record carries its own and the opponent's cards."""
        # Arrange
        group = group_c_2022()

        # Act
        group.add_match("Poland", "Mexico", "0-0", [CAUTION], [CAUTION, CAUTION])

        # Assert
        poland_record = group.get_team_by_name("Poland").get_match("Mexico")
        mexico_record = group.get_team_by_name("Mexico").get_match("Poland")
        assert poland_record is not None and mexico_record is not None
        assert poland_record.self_cards == (CAUTION,)
        assert mexico_record.self_cards == (CAUTION, CAUTION)
        assert mexico_record.opponent_cards == (CAUTION,)

    def test_fair_play_points_after_group_stage(self) -> None:
        """Fair play points of every team of 2022 Group C."""
        group = group_c_2022_complete()
        penalties = group.policy.config.card_penalties
        assert group.get_team_by_name("Argentina").fair_play_points(penalties) == -2
        assert group.get_team_by_name("Poland").fair_play_points(penalties) == -5
        assert group.get_team_by_name("Mexico").fair_play_points(penalties) == -7
        assert group.get_team_by_name("Saudi Arabia").fair_play_points(penalties) == -14

    def test_invalid_score(self) -> None:
        """A malformed score is rejected."""
        group = group_c_2022()
        with pytest.raises(ValidationError) as exc_info:
            group.add_match("Argentina", "Mexico", "2 -0")
        assert str(exc_info.value) == INVALID_SCORE_MESSAGE

    def test_same_team(self) -> None:
        """A team can not face itself."""
        group = group_c_2022()
        with pytest.raises(ValidationError) as exc_info:
            group.add_match("Argentina", "Argentina", "0-0")
        assert str(exc_info.value) == SAME_TEAM_MESSAGE

    def test_multiple_errors(self) -> None:
        """Every violation is reported in one error."""
        group = group_c_2022()
        with pytest.raises(ValidationError) as exc_info:
            group.add_match("Argentina", "Argentina", "2 -0")
        assert exc_info.value.violations == (INVALID_SCORE_MESSAGE, SAME_TEAM_MESSAGE)
        assert str(exc_info.value) == f"{INVALID_SCORE_MESSAGE}; {SAME_TEAM_MESSAGE}"

    def test_unknown_team(self) -> None:
        """Both teams must be on the roster."""
        group = group_c_2022()
        with pytest.raises(ValidationError) as exc_info:
            group.add_match("Argentina", "Australia", "2-1")
        assert str(exc_info.value) == UNKNOWN_TEAM_MESSAGE

    def test_none_cards(self) -> None:
        """A None card list is rejected and nothing is recorded."""
        # Arrange
        group = group_c_2022()

        # Act
        with pytest.raises(ValidationError, match="can not be None"):
            group.add_match("Argentina", "Mexico", "2-0", None, [])

        # Assert
        assert group.get_team_by_name("Argentina").played == 0
        assert group.get_team_by_name("Mexico").played == 0

    def test_add_then_remove_restores_ledgers(self) -> None:
        """Removing a fixture undoes adding it on both sides."""
        # Arrange
        group = group_c_2022()
        argentina_before = group.get_team_by_name("Argentina")
        mexico_before = group.get_team_by_name("Mexico")

        # Act
        group.add_match("Argentina", "Mexico", "2-0")
        group.remove_match("Argentina", "Mexico")

        # Assert
        assert group.get_team_by_name("Argentina") == argentina_before
        assert group.get_team_by_name("Mexico") == mexico_before

    def test_remove_match_one_leg(self) -> None:
        """Only the removed fixture disappears."""
        # Arrange
        group = group_c_2022_complete()

        # Act
        group.remove_match("Argentina", "Mexico")

        # Assert
        assert group.get_team_by_name("Argentina").matches == {
            Match("Saudi Arabia", "1-2", self_cards=(), opponent_cards=(CAUTION,) * 6),
            Match("Poland", "2-0", self_cards=(CAUTION,), opponent_cards=(CAUTION,)),
        }
        assert "Argentina" not in group.get_team_by_name("Mexico").opponents

    def test_remove_match_twice_is_noop(self) -> None:
        """Removing an absent fixture changes nothing."""
        # Arrange
        group = group_c_2022_complete()
        group.remove_match("Argentina", "Poland")
        after_first = group.get_team_by_name("Argentina")

        # Act
        group.remove_match("Argentina", "Poland")

        # Assert
        assert group.get_team_by_name("Argentina") == after_first
        assert after_first.played == 2

    def test_remove_match_two_legs(self) -> None:
        """Only the leg hosted by the first team is removed."""
        # Arrange
        pl = premier_league()
        pl.add_match("Manchester City", "Chelsea", "2-1")
        pl.add_match("Chelsea", "Manchester City", "3-2")
        pl.add_match("Chelsea", "Arsenal", "4-1")

        # Act
        pl.remove_match("Chelsea", "Manchester City")
        pl.remove_match("Chelsea", "Manchester City")

        # Assert
        assert pl.get_team_by_name("Manchester City").matches == {Match("Chelsea", "2-1", False)}
        assert pl.get_team_by_name("Chelsea").matches == {
            Match("Arsenal", "4-1", False),
            Match("Manchester City", "1-2", True),
        }

    def test_remove_match_validation(self) -> None:
        """remove_match validates names like add_match."""
        group = group_c_2022_complete()
        with pytest.raises(ValidationError) as exc_info:
            group.remove_match("Argentina", "Argentina")
        assert str(exc_info.value) == SAME_TEAM_MESSAGE
        with pytest.raises(ValidationError) as exc_info:
            group.remove_match("Argentina", "Australia")
        assert str(exc_info.value) == UNKNOWN_TEAM_MESSAGE


class TestGroupQueries:
    """Test lookups, snapshots and completion."""

    def test_unknown_team_lookup(self) -> None:
        """Looking up an unknown name raises TeamNotFoundError."""
        group = group_c_2022()
        with pytest.raises(TeamNotFoundError) as exc_info:
            group.get_team_by_name("Australia")
        assert str(exc_info.value) == "No team of name Australia is in this group."
        with pytest.raises(KeyError):
            group.get_team_position("Australia")

    def test_snapshots_are_independent(self) -> None:
        """Mutating a returned team does not change the group."""
        # Arrange
        group = group_c_2022()
        snapshot = group.get_team_by_name("Argentina")

        # Act
        snapshot.add_or_update_match("Mexico", "9-0")
        for team in group.get_teams():
            team.set_deducted_points(3)

        # Assert
        assert group.get_team_by_name("Argentina").played == 0
        assert all(team.deducted_points == 0 for team in group.sorted_teams())

    def test_have_played_against(self) -> None:
        """Fixtures are visible from both sides."""
        # Arrange
        group = group_c_2022()

        # Act
        group.add_match("Poland", "Mexico", "0-0")

        # Assert
        assert group.have_played_against("Poland", "Mexico")
        assert group.have_played_against("Mexico", "Poland")
        assert not group.have_played_against("Poland", "Argentina")

    def test_is_complete_one_leg(self) -> None:
        """A 4-team single-leg group is complete after 6 fixtures."""
        assert not group_c_2022().is_complete()
        assert group_c_2022_complete().is_complete()

    def test_is_complete_two_legs(self) -> None:
        """Two clubs need both legs."""
        # Arrange
        pl = league([Team("Chelsea"), Team("Arsenal")])

        # Act
        pl.add_match("Chelsea", "Arsenal", "1-0")
        first_leg_only = pl.is_complete()
        pl.add_match("Arsenal", "Chelsea", "2-2")

        # Assert
        assert not first_leg_only
        assert pl.is_complete()

    def test_compare_identical_teams(self) -> None:
        """A team can not be compared with itself."""
        group = group_c_2022()
        with pytest.raises(InvariantViolation, match="Can not compare two identical teams."):
            group.compare(group.get_team_by_name("Argentina"), group.get_team_by_name("Argentina"))
        with pytest.raises(InvariantViolation):
            group.compare("Argentina", "Argentina")

    def test_repr(self) -> None:
        """repr names the policy and the group shape."""
        assert "WorldCupPolicy" in repr(group_c_2022())


class TestGroupPositions:
    """Test sorting and shared positions."""

    def test_tied_teams_share_position(self) -> None:
        """Points [6, 4, 4, 3] with a 2-3 tie give positions [1, 2, 2, 4]."""
        # Arrange
        group = world_cup_group([Team(name) for name in ("Senegal", "Japan", "Poland", "Colombia")])

        # Act
        group.add_match("Colombia", "Japan", "1-2")
        group.add_match("Poland", "Senegal", "1-2")
        group.add_match("Japan", "Senegal", "2-2")
        group.add_match("Poland", "Colombia", "0-3")
        group.add_match("Japan", "Poland", "0-1")
        group.add_match("Senegal", "Colombia", "0-1")

        # Assert
        assert [group.get_team_position(name) for name in ("Colombia", "Japan", "Senegal", "Poland")] == [1, 2, 2, 4]
        assert [team.name for team in group.sorted_teams()][0] == "Colombia"
        assert [team.name for team in group.sorted_teams()][-1] == "Poland"

    def test_unresolved_ties(self) -> None:
        """Teams level on every criterion are reported with the required procedure."""
        # Arrange
        group = world_cup_group([Team(name) for name in ("Senegal", "Japan", "Poland", "Colombia")])
        group.add_match("Colombia", "Japan", "1-2")
        group.add_match("Poland", "Senegal", "1-2")
        group.add_match("Japan", "Senegal", "2-2")
        group.add_match("Poland", "Colombia", "0-3")
        group.add_match("Japan", "Poland", "0-1")
        group.add_match("Senegal", "Colombia", "0-1")

        # Act
        ties = group.unresolved_ties()

        # Assert
        assert len(ties) == 1
        assert ties[0].position == 2
        assert set(ties[0].team_names) == {"Japan", "Senegal"}
        assert ties[0].resolution is Resolution.DRAWING_OF_LOTS

    def test_no_unresolved_ties_when_positions_differ(self) -> None:
        """A fully separated table has no unresolved ties."""
        assert group_c_2022_complete().unresolved_ties() == list[UnresolvedTie]()

    def test_deducted_points_move_team_down(self) -> None:
        """Deducted points count in the overall table."""
        # Arrange
        teams = [
            Team("Argentina", deducted_points=3),
            Team("Saudi Arabia"),
            Team("Poland"),
            Team("Mexico"),
        ]
        group = world_cup_group(teams)

        # Act
        group.add_match("Argentina", "Saudi Arabia", "1-2")
        group.add_match("Poland", "Mexico", "0-0")
        group.add_match("Poland", "Saudi Arabia", "2-0")
        group.add_match("Argentina", "Mexico", "2-0")
        group.add_match("Poland", "Argentina", "0-2")
        group.add_match("Saudi Arabia", "Mexico", "1-2")

        # Assert
        assert [team.name for team in group.sorted_teams()] == ["Poland", "Mexico", "Argentina", "Saudi Arabia"]
        assert group.get_team_by_name("Argentina").points == 3

    def test_standings_rows(self) -> None:
        """standings returns typed rows in table order."""
        # Arrange
        group = group_c_2022_complete()

        # Act
        rows = group.standings()

        # Assert
        assert [row["name"] for row in rows] == ["Argentina", "Poland", "Mexico", "Saudi Arabia"]
        assert rows[0] == {
            "position": 1,
            "name": "Argentina",
            "played": 3,
            "wins": 2,
            "draws": 0,
            "losses": 1,
            "goals_for": 5,
            "goals_against": 2,
            "goal_difference": 3,
            "points": 6,
        }

    def test_subgroup_keeps_only_matches_among_tied_teams(self) -> None:
        """The head-to-head mini-table holds the tied teams and their mutual fixtures."""
        # Arrange
        group = group_c_2022_complete()

        # Act
        subgroup = group.build_subgroup("Poland")

        # Assert
        assert isinstance(subgroup.policy, WorldCupPolicy)
        assert subgroup.team_names == {"Poland"}
        assert subgroup.get_team_by_name("Poland").matches == frozenset()

    def test_restricted_group_drops_deductions(self) -> None:
        """Mini-tables count results only."""
        # Arrange
        group = world_cup_group([Team("Poland", deducted_points=2), Team("Mexico")])
        group.add_match("Poland", "Mexico", "0-0")

        # Act
        subgroup = group.restricted_to({"Poland", "Mexico"})

        # Assert
        assert subgroup.get_team_by_name("Poland").points == 1
        assert group.get_team_by_name("Poland").points == -1
