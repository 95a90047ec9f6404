import logging

from americanopairing.models.match import Match
from americanopairing.tournament.standings import compute_standings, top_three


def _rows_by_player(rows):
    return {row.player: row for row in rows}


def test_single_confirmed_match():
    schedule = [Match(1, ("A", "B"), ("C", "D"), score=(8, 2), confirmed=True)]
    rows = compute_standings(schedule)

    by_player = _rows_by_player(rows)
    for winner in ("A", "B"):
        row = by_player[winner]
        assert (row.games_played, row.wins, row.point_differential, row.total_points) == (
            1,
            1,
            6,
            8,
        )
    for loser in ("C", "D"):
        row = by_player[loser]
        assert (row.games_played, row.wins, row.point_differential, row.total_points) == (
            1,
            0,
            -6,
            2,
        )
    order = [row.player for row in rows]
    assert order.index("A") < order.index("C")


def test_unconfirmed_matches_are_ignored(scored_schedule):
    with_last = compute_standings(scored_schedule)
    scored_schedule[1].confirmed = False
    without = _rows_by_player(compute_standings(scored_schedule))

    for player in ("A", "B", "C", "D"):
        assert without[player].games_played == 1
    assert without["A"].total_points == 10
    assert without["D"].point_differential == -4
    assert _rows_by_player(with_last)["A"].games_played == 2


def test_tie_break_cascade():
    schedule = [
        Match(1, ("M", "m1"), ("m2", "m3"), score=(10, 6), confirmed=True),
        Match(2, ("M", "m4"), ("m5", "m6"), score=(4, 8), confirmed=True),
        Match(1, ("Y", "y1"), ("y2", "y3"), score=(7, 7), confirmed=True),
        Match(2, ("Y", "y4"), ("y5", "y6"), score=(7, 7), confirmed=True),
        Match(1, ("H", "h1"), ("h2", "h3"), score=(6, 10), confirmed=True),
        Match(1, ("I", "i1"), ("i2", "i3"), score=(6, 6), confirmed=True),
        Match(1, ("K", "k1"), ("k2", "k3"), score=(15, 1), confirmed=True),
    ]
    rows = compute_standings(schedule, ["H", "I", "Y", "M", "K"])

    assert [r.player for r in rows] == ["K", "M", "Y", "I", "H"]
    assert [r.total_points for r in rows] == [15, 14, 14, 6, 6]
    assert [r.point_differential for r in rows] == [14, 0, 0, 0, -4]
    assert [r.wins for r in rows] == [1, 1, 0, 0, 0]


def test_full_ties_keep_player_list_order():
    schedule = [Match(1, ("A", "B"), ("C", "D"), score=(8, 8), confirmed=True)]
    assert [r.player for r in compute_standings(schedule, ["C", "A", "D", "B"])] == [
        "C",
        "A",
        "D",
        "B",
    ]


def test_players_without_games_are_listed():
    rows = compute_standings([], ["A", "B"])
    assert [(r.player, r.games_played, r.total_points) for r in rows] == [
        ("A", 0, 0),
        ("B", 0, 0),
    ]


def test_standings_are_idempotent(scored_schedule):
    first = [r.to_dict() for r in compute_standings(scored_schedule)]
    second = [r.to_dict() for r in compute_standings(scored_schedule)]
    assert first == second


def test_top_three_skips_players_without_games():
    schedule = [
        Match(1, ("A", "B"), ("C", "D"), score=(10, 6), confirmed=True),
        Match(2, ("A", "C"), ("B", "D"), score=(4, 12)),
    ]
    assert top_three(schedule, ["E", "A", "B", "C", "D"]) == ["A", "B", "C"]
    assert top_three([], ["A", "B"]) == []


def test_confirmed_row_without_score_counts_as_nil_nil(caplog):
    stored = {
        "round": 1,
        "team1_player1": "A",
        "team1_player2": "B",
        "team2_player1": "C",
        "team2_player2": "D",
        "score1": None,
        "score2": None,
        "confirmed": True,
    }
    schedule = [Match.from_dict(stored)]

    with caplog.at_level(logging.WARNING, logger="americanopairing.tournament.standings"):
        rows = compute_standings(schedule)

    for row in rows:
        assert (row.games_played, row.wins, row.point_differential, row.total_points) == (
            1,
            0,
            0,
            0,
        )
    assert "has no score, counted as 0-0" in caplog.text
