"""Schedule validation for Americano tournaments.

This module re-derives partner and opponent meeting counts from a schedule
and reports every pair that breaks the partner-once rule or meets as
opponents more often than the threshold allows, together with summary
statistics about how evenly opponents were spread.
"""

# Americano Pairing
# Copyright (C) 2025  Americano Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Any, Dict, List, Sequence, Tuple

from americanopairing.constants import DEFAULT_OPPONENT_THRESHOLD, HISTOGRAM_BUCKETS
from americanopairing.exceptions import ScheduleIncompleteWarning
from americanopairing.models.match import Match, matches_by_round
from americanopairing.pairing.base import cross_pairs
from americanopairing.pairing.universe import pair_key
from americanopairing.type_hints import PairKey, PlayerId
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)


class IssueType(Enum):
    """Kinds of schedule problems."""

    PARTNER_COUNT = "PARTNER_COUNT"  # pair partnered zero or several times
    OPPONENT_REPEAT = "OPPONENT_REPEAT"  # above the opponent threshold
    DOUBLE_BOOKED = "DOUBLE_BOOKED"  # player twice in one round
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    REPEATED_PLAYER = "REPEATED_PLAYER"  # same id twice in one match


@dataclass
class ScheduleIssue:
    """A single problem found in a schedule."""

    issue_type: IssueType
    description: str
    players: Tuple[PlayerId, ...] = ()
    count: int = 0

    def __str__(self) -> str:
        return self.description


@dataclass
class ValidationReport:
    """Complete validation report for a schedule."""

    valid: bool
    violations: List[ScheduleIssue] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def issues(self) -> List[str]:
        """One message per violation."""
        return [str(v) for v in self.violations]

    @property
    def warning_category(self):
        """Warning category matching this report, None when valid."""
        return None if self.valid else ScheduleIncompleteWarning

    def by_type(self, issue_type: IssueType) -> List[ScheduleIssue]:
        return [v for v in self.violations if v.issue_type == issue_type]

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "issues": self.issues, "stats": dict(self.stats)}


def _pair_label(key: PairKey, order: Dict[PlayerId, int]) -> Tuple[PlayerId, ...]:
    return tuple(sorted(key, key=lambda p: order.get(p, len(order))))


def _structural_issues(
    schedule: Sequence[Match], known: Dict[PlayerId, int]
) -> List[ScheduleIssue]:
    """Players outside the list, repeated inside a match or double-booked."""
    issues: List[ScheduleIssue] = []
    for match in schedule:
        for player_id in match.players:
            if player_id not in known:
                issues.append(
                    ScheduleIssue(
                        IssueType.UNKNOWN_PLAYER,
                        f"Round {match.round}: player {player_id} is not in the player list",
                        (player_id,),
                    )
                )
        if len(set(match.players)) != len(match.players):
            issues.append(
                ScheduleIssue(
                    IssueType.REPEATED_PLAYER,
                    f"Round {match.round}: match repeats a player {match.players}",
                    tuple(match.players),
                )
            )

    for round_number, matches in matches_by_round(schedule).items():
        seen: Counter = Counter(p for m in matches for p in set(m.players))
        for player_id, times in seen.items():
            if times > 1:
                issues.append(
                    ScheduleIssue(
                        IssueType.DOUBLE_BOOKED,
                        f"Round {round_number}: player {player_id} plays {times} matches",
                        (player_id,),
                        times,
                    )
                )
    return issues


def _opponent_histogram(opponents: Counter) -> Dict[str, int]:
    histogram = {bucket: 0 for bucket in HISTOGRAM_BUCKETS}
    for count in opponents.values():
        if count <= 0:
            continue
        bucket = str(count) if count <= 3 else ">3"
        histogram[bucket] += 1
    return histogram


def validate_schedule(
    schedule: Sequence[Match],
    player_ids: Sequence[PlayerId],
    threshold: int = DEFAULT_OPPONENT_THRESHOLD,
) -> ValidationReport:
    """Check a schedule against the partner-once and opponent-repeat rules.

    Parameters
    ----------
    schedule : Sequence[Match]
        Matches to check. Scores and confirmation flags are ignored.
    player_ids : Sequence[str]
        Players the schedule is meant for.
    threshold : int
        Highest acceptable number of opponent meetings per pair.

    Returns
    -------
    ValidationReport
        ``valid`` is True only when every pair of ``player_ids`` partnered
        exactly once, no pair met more than ``threshold`` times and the
        schedule has no structural problem.
    """
    order = {p: i for i, p in enumerate(player_ids)}
    partners: Counter = Counter()
    opponents: Counter = Counter()
    for match in schedule:
        partners[pair_key(*match.team1)] += 1
        partners[pair_key(*match.team2)] += 1
        opponents.update(cross_pairs(match.team1, match.team2))

    violations = _structural_issues(schedule, order)

    missing = 0
    for a, b in combinations(player_ids, 2):
        count = partners[pair_key(a, b)]
        if count != 1:
            if count == 0:
                missing += 1
            violations.append(
                ScheduleIssue(
                    IssueType.PARTNER_COUNT,
                    f"{a} and {b} partnered {count} times (expected 1)",
                    (a, b),
                    count,
                )
            )

    for key, count in opponents.items():
        if count > threshold:
            a, b = _pair_label(key, order)
            violations.append(
                ScheduleIssue(
                    IssueType.OPPONENT_REPEAT,
                    f"{a} and {b} met as opponents {count} times (max {threshold})",
                    (a, b),
                    count,
                )
            )

    met = [c for c in opponents.values() if c > 0]
    stats = {
        "total_matches": len(schedule),
        "rounds": len({m.round for m in schedule}),
        "max_opponent_meetings": max(met, default=0),
        "avg_opponent_meetings": round(sum(met) / len(met), 2) if met else 0.0,
        "histogram": _opponent_histogram(opponents),
        "missing_partnerships": missing,
    }

    report = ValidationReport(valid=not violations, violations=violations, stats=stats)
    if report.valid:
        logger.debug("Schedule of %d matches is valid", len(schedule))
    else:
        logger.info(
            "Schedule of %d matches has %d issue(s)", len(schedule), len(violations)
        )
    return report
