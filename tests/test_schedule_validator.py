from americanopairing.exceptions import ScheduleIncompleteWarning
from americanopairing.models.match import Match
from americanopairing.models.tournament_config import TournamentConfig
from americanopairing.pairing.scheduler import generate_schedule
from americanopairing.validation.schedule_validator import IssueType, validate_schedule

PLAYERS = ["A", "B", "C", "D"]


def _full_four():
    return [
        Match(1, ("A", "B"), ("C", "D")),
        Match(2, ("A", "C"), ("B", "D")),
        Match(3, ("A", "D"), ("B", "C")),
    ]


def test_complete_schedule_is_valid():
    report = validate_schedule(_full_four(), PLAYERS)
    assert report.valid
    assert report.issues == []
    assert report.warning_category is None
    assert report.stats == {
        "total_matches": 3,
        "rounds": 3,
        "max_opponent_meetings": 2,
        "avg_opponent_meetings": 2.0,
        "histogram": {"1": 0, "2": 6, "3": 0, ">3": 0},
        "missing_partnerships": 0,
    }


def test_missing_partnerships_are_reported():
    schedule = _full_four()[:2]
    report = validate_schedule(schedule, PLAYERS)

    assert not report.valid
    assert report.stats["missing_partnerships"] == 2
    missing = report.by_type(IssueType.PARTNER_COUNT)
    assert {frozenset(issue.players) for issue in missing} == {
        frozenset("AD"),
        frozenset("BC"),
    }
    assert all(issue.count == 0 for issue in missing)
    assert report.warning_category is ScheduleIncompleteWarning


def test_repeated_partnership_is_reported():
    schedule = _full_four() + [Match(4, ("A", "B"), ("C", "D"))]
    report = validate_schedule(schedule, PLAYERS)

    repeats = report.by_type(IssueType.PARTNER_COUNT)
    assert len(repeats) == 2
    assert any("A and B partnered 2 times" in issue for issue in report.issues)


def test_opponent_threshold():
    schedule = _full_four() + [
        Match(4, ("A", "B"), ("C", "D")),
        Match(5, ("A", "B"), ("C", "D")),
    ]
    report = validate_schedule(schedule, PLAYERS, threshold=3)

    over = report.by_type(IssueType.OPPONENT_REPEAT)
    assert {frozenset(issue.players) for issue in over} == {
        frozenset("AC"),
        frozenset("AD"),
        frozenset("BC"),
        frozenset("BD"),
    }
    assert report.stats["max_opponent_meetings"] == 4
    assert report.stats["histogram"][">3"] == 4


def test_structural_problems():
    schedule = [
        Match(1, ("A", "B"), ("C", "D")),
        Match(1, ("A", "C"), ("B", "E")),
    ]
    report = validate_schedule(schedule, PLAYERS)

    assert [i.players for i in report.by_type(IssueType.UNKNOWN_PLAYER)] == [("E",)]
    booked = {i.players[0] for i in report.by_type(IssueType.DOUBLE_BOOKED)}
    assert booked == {"A", "B", "C"}


def test_validator_ignores_scores_and_does_not_mutate():
    schedule = generate_schedule(PLAYERS, TournamentConfig(seed=4))
    schedule[0].score = (16, 0)
    before = [m.to_dict() for m in schedule]

    report = validate_schedule(schedule, PLAYERS)

    assert report.valid
    assert [m.to_dict() for m in schedule] == before


def test_report_to_dict():
    data = validate_schedule(_full_four()[:1], PLAYERS).to_dict()
    assert data["valid"] is False
    assert len(data["issues"]) == 4
    assert data["stats"]["total_matches"] == 1
