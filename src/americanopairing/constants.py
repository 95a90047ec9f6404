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

# --- Constants ---

# Players per match (two teams of two)
TEAM_SIZE = 2
MATCH_SIZE = 4
MIN_PLAYERS = 4

# Scoring
DEFAULT_POINTS_PER_MATCH = 16

# Opponent repeats above this count are reported by the validator
DEFAULT_OPPONENT_THRESHOLD = 3

# Builder budgets
DEFAULT_MAX_ATTEMPTS = 1000  # sub-steps per construction run
DEFAULT_MAX_RESTARTS = 25  # reshuffled runs before giving up
DEFAULT_BALANCE_PASSES = 20  # regrouping sweeps per run

# Schedule strategies
STRATEGY_AUTO = "auto"
STRATEGY_GREEDY = "greedy"
STRATEGY_FIXED = "fixed"
STRATEGIES = (STRATEGY_AUTO, STRATEGY_GREEDY, STRATEGY_FIXED)
DEFAULT_STRATEGY = STRATEGY_AUTO

# Opponent meeting histogram buckets
HISTOGRAM_BUCKETS = ("1", "2", "3", ">3")

# Medal positions
GOLD = "gold"
SILVER = "silver"
BRONZE = "bronze"
MEDALS = (GOLD, SILVER, BRONZE)

# Environment variable naming a folder for the rotating log file
LOG_DIR_ENV = "AMERICANO_PAIRING_LOG_DIR"
