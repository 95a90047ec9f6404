import pytest

from americanopairing.exceptions import InvalidConfigurationException, InvalidMatchError
from americanopairing.models.match import Match, matches_by_round, players_in_schedule
from americanopairing.models.player import Player, player_ids
from americanopairing.models.tournament_config import TournamentConfig


def test_match_row_round_trip():
    match = Match(3, ("A", "B"), ("C", "D"), score=(9, 7), confirmed=True)
    row = match.to_dict()

    assert row == {
        "round": 3,
        "team1_player1": "A",
        "team1_player2": "B",
        "team2_player1": "C",
        "team2_player2": "D",
        "score1": 9,
        "score2": 7,
        "confirmed": True,
    }
    assert Match.from_dict(row) == match


def test_null_scores_read_as_unset():
    row = Match(1, ("A", "B"), ("C", "D")).to_dict()
    assert row["score1"] is None
    row["score1"] = 5
    assert Match.from_dict(row).score is None


def test_team_lists_are_accepted():
    match = Match.from_dict(
        {"round": 1, "team1": ["A", "B"], "team2": ["C", "D"], "score": [4, 12]}
    )
    assert match.team1 == ("A", "B")
    assert match.score == (4, 12)
    assert not match.confirmed


@pytest.mark.parametrize(
    "team1,team2,round_number",
    [
        (("A", "B"), ("B", "C"), 1),
        (("A", "A"), ("C", "D"), 1),
        (("A",), ("C", "D"), 1),
        (("A", "B"), ("C", "D"), 0),
    ],
)
def test_invalid_matches_raise(team1, team2, round_number):
    with pytest.raises(InvalidMatchError):
        Match(round_number, team1, team2)


def test_match_helpers():
    match = Match(1, ("A", "B"), ("C", "D"), score=(10, 6))
    assert match.partner_of("A") == "B"
    assert match.opponents_of("D") == ("A", "B")
    assert match.score_for("C") == (6, 10)
    assert Match(1, ("A", "B"), ("C", "D")).score_for("A") == (0, 0)
    with pytest.raises(KeyError):
        match.partner_of("Z")


def test_grouping_helpers():
    schedule = [
        Match(2, ("E", "A"), ("B", "C")),
        Match(1, ("A", "B"), ("C", "D")),
    ]
    assert list(matches_by_round(schedule)) == [1, 2]
    assert players_in_schedule(schedule) == ["E", "A", "B", "C", "D"]


def test_player_identity_is_the_id():
    first = Player("Erik", id="1")
    renamed = Player("Erik S", id="1")
    assert first == renamed
    assert len({first, renamed}) == 1
    assert Player("Erik") != Player("Erik")
    assert str(first) == "Erik"
    assert Player.from_dict(first.to_dict()) == first
    assert player_ids([first, Player("Anna", id="2")]) == ["1", "2"]


def test_config_round_trip_and_validation():
    config = TournamentConfig(name="Friday", points_per_match=24, seed=5)
    assert TournamentConfig.from_dict(config.to_dict()) == config
    assert TournamentConfig.from_dict({}) == TournamentConfig()
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(strategy="swiss")
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(points_per_match=0)
