import pytest

from americanopairing.models.match import Match


@pytest.fixture
def scored_schedule():
    """Three matches of A-D, the last one scored but not confirmed."""
    return [
        Match(1, ("A", "B"), ("C", "D"), score=(10, 6), confirmed=True),
        Match(2, ("A", "C"), ("B", "D"), score=(4, 12), confirmed=True),
        Match(3, ("A", "D"), ("B", "C"), score=(8, 8), confirmed=False),
    ]
