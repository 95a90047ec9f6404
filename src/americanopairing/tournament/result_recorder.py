"""Result recording and validation for tournaments.

This module handles entering match scores with proper validation and the
confirmation flag that decides whether a score counts in the standings.
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

from typing import List, Optional, Sequence, Set, Tuple

from americanopairing.constants import DEFAULT_POINTS_PER_MATCH
from americanopairing.exceptions import (
    InvalidResultError,
    ResultException,
    ResultNotRecordedError,
)
from americanopairing.models.match import Match
from americanopairing.type_hints import Team
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)

# (team1, team2, score1, score2)
ResultEntry = Tuple[Team, Team, int, int]


class ResultRecorder:
    """Handles recording and confirming match scores.

    This class is responsible for:
    - Checking scores against the points played per match
    - Amending scores, which takes back an earlier confirmation
    - Confirming and un-confirming results
    """

    def __init__(self, points_per_match: int = DEFAULT_POINTS_PER_MATCH) -> None:
        self.points_per_match = points_per_match

    def validate_score(self, score1: int, score2: int) -> None:
        """Check a score pair.

        Raises:
            InvalidResultError: If a score is out of range or the two scores
                do not add up to the points per match
        """
        for value in (score1, score2):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidResultError(f"Score must be an integer, got {value!r}")
            if not 0 <= value <= self.points_per_match:
                raise InvalidResultError(
                    f"Invalid score: {value} (must be between 0 and {self.points_per_match})"
                )
        if score1 + score2 != self.points_per_match:
            raise InvalidResultError(
                f"Scores {score1}-{score2} must add up to {self.points_per_match}"
            )

    def record_score(self, match: Match, score1: int, score2: int) -> Match:
        """Set the score of ``match``.

        Recording over a confirmed result is an amendment and leaves the match
        unconfirmed.

        Args:
            match: Match to score
            score1: Points of team1
            score2: Points of team2

        Returns:
            The updated match
        """
        self.validate_score(score1, score2)
        if match.confirmed:
            logger.info(
                "Round %s: amending confirmed result %s -> %s, confirmation cleared",
                match.round,
                match.score,
                (score1, score2),
            )
            match.confirmed = False
        match.score = (score1, score2)
        logger.debug(
            "Recorded round %s: %s %d-%d %s",
            match.round,
            match.team1,
            score1,
            score2,
            match.team2,
        )
        return match

    def confirm(self, match: Match) -> Match:
        """Mark the result of ``match`` as final.

        Raises:
            ResultNotRecordedError: If the match has no score yet
            InvalidResultError: If the stored score breaks the points rule
        """
        if match.score is None:
            raise ResultNotRecordedError(
                f"Round {match.round}: cannot confirm a match without a score"
            )
        self.validate_score(*match.score)
        match.confirmed = True
        return match

    def unconfirm(self, match: Match) -> Match:
        match.confirmed = False
        return match

    def toggle_confirmed(self, match: Match) -> Match:
        """Flip the confirmation flag, confirming only a valid score."""
        if match.confirmed:
            return self.unconfirm(match)
        return self.confirm(match)

    def record_round_results(
        self,
        schedule: Sequence[Match],
        round_number: int,
        results: Sequence[ResultEntry],
        confirm: bool = False,
    ) -> bool:
        """Record results for the matches of one round.

        Args:
            schedule: The full schedule
            round_number: Round the results belong to
            results: ``(team1, team2, score1, score2)`` entries; teams are
                matched regardless of player or side order
            confirm: Confirm every result that was recorded

        Returns:
            True if all results recorded successfully, False if any errors occurred
        """
        round_matches = [m for m in schedule if m.round == round_number]
        if not round_matches:
            logger.warning("Round %s has no matches", round_number)
            return False

        processed: Set[int] = set()
        success = True
        for team1, team2, score1, score2 in results:
            index, flipped = self._find_match(round_matches, team1, team2)
            if index is None:
                logger.error(
                    "Match %s vs %s not found in round %s", team1, team2, round_number
                )
                success = False
                continue
            if index in processed:
                logger.warning(
                    "Result for %s vs %s already recorded in this batch", team1, team2
                )
                success = False
                continue

            match = round_matches[index]
            if flipped:
                score1, score2 = score2, score1
            try:
                self.record_score(match, score1, score2)
                if confirm:
                    self.confirm(match)
            except ResultException as e:
                logger.error("Round %s: %s", round_number, e)
                success = False
                continue
            processed.add(index)

        unprocessed = len(round_matches) - len(processed)
        if unprocessed:
            logger.warning(
                "Round %s: %d match(es) were not processed", round_number, unprocessed
            )
        return success

    @staticmethod
    def _find_match(
        matches: List[Match], team1: Team, team2: Team
    ) -> Tuple[Optional[int], bool]:
        """Index of the match played by ``team1`` and ``team2``, and whether
        the sides are swapped relative to it."""
        side1, side2 = set(team1), set(team2)
        for index, match in enumerate(matches):
            if set(match.team1) == side1 and set(match.team2) == side2:
                return index, False
            if set(match.team1) == side2 and set(match.team2) == side1:
                return index, True
        return None, False
