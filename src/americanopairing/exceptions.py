"""Exceptions for use in Americano Pairing"""

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


# ========== Base Application Exception ==========


class AmericanoPairingException(Exception):
    """Base exception for all Americano Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all package-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(AmericanoPairingException):
    """Base exception for scheduling errors."""

    pass


class InvalidPlayerCountError(PairingException):
    """Raised when the player count is not a positive multiple of four."""

    def __init__(self, count: int, detail: str = ""):
        self.count = count
        message = f"Player count must be a multiple of 4 and at least 4, got {count}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DuplicatePlayerError(PairingException):
    """Raised when the same player id is listed more than once."""

    pass


class ScheduleIncompleteError(PairingException):
    """Raised when the builder could not place every partnership."""

    def __init__(self, missing: int, attempts: int):
        self.missing = missing
        self.attempts = attempts
        super().__init__(
            f"Schedule incomplete: {missing} partnership(s) unscheduled "
            f"after {attempts} attempt(s)"
        )


class ScheduleIncompleteWarning(UserWarning):
    """Category for schedules that break the partner-once or opponent rules.

    Used for log records and validator summaries, never raised by the core.
    """

    pass


# ========== Match Exceptions ==========


class MatchException(AmericanoPairingException):
    """Base exception for match record errors."""

    pass


class InvalidMatchError(MatchException):
    """Raised when a match does not hold four distinct players in two teams."""

    pass


# ========== Result Exceptions ==========


class ResultException(AmericanoPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultError(ResultException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


class ResultNotRecordedError(ResultException):
    """Raised when confirming a match that has no score."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(AmericanoPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
