# Match Center
# Copyright (C) 2025  Match Center developers
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

# --- Tournament formats ---
FORMAT_MATCH = "match"
FORMAT_FIXED = "fixed"
FORMAT_ROTATING = "rotating"
FORMAT_FREE = "free"
FORMAT_LADDER = "ladder"
FORMAT_PLAYOFF = "playoff"

TOURNAMENT_FORMATS = (
    FORMAT_MATCH,
    FORMAT_FIXED,
    FORMAT_ROTATING,
    FORMAT_FREE,
    FORMAT_LADDER,
    FORMAT_PLAYOFF,
)

# Formats ranked per team, per player, or not ranked at all
TEAM_RANKED_FORMATS = (FORMAT_MATCH, FORMAT_FIXED)
PLAYER_RANKED_FORMATS = (FORMAT_ROTATING, FORMAT_FREE)
LADDER_RANKED_FORMATS = (FORMAT_LADDER,)

# Formats whose matches are appended by hand
MANUAL_FORMATS = (FORMAT_FREE, FORMAT_LADDER)

# --- Scoring ---
SCORING_SETS = "sets"
SCORING_AMERICANO = "americano"
SCORING_MODES = (SCORING_SETS, SCORING_AMERICANO)

BEST_OF_OPTIONS = (1, 3, 5)
DEFAULT_SETS_TO_PLAY = 3
DEFAULT_AMERICANO_POINTS = 24
DEFAULT_COURTS = 1

# Americano ranking bonus added on top of the raw points
AMERICANO_WIN_BONUS = 2
AMERICANO_TIE_BONUS = 1
AMERICANO_LOSS_BONUS = 0

# Set-scored player rankings award one point per match won
MATCH_WIN_POINTS = 1

# --- Playoff ---
PLAYOFF_MANUAL = "manual"
PLAYOFF_SEEDED = "seeded"
PLAYOFF_MODES = (PLAYOFF_MANUAL, PLAYOFF_SEEDED)

# Team display name joiner, e.g. "Ana & Bea"
TEAM_NAME_SEPARATOR = " & "
TEAM_ID_PREFIX = "team"
BYE_TEAM_ID = "bye"
BYE_TEAM_NAME = "BYE"

PLAYERS_PER_SIDE = 2

# --- Participant count bounds per format: (minimum, maximum, must_be_even) ---
PARTICIPANT_BOUNDS = {
    FORMAT_MATCH: (4, 4, False),
    FORMAT_FIXED: (6, 16, True),
    FORMAT_ROTATING: (4, 16, False),
    FORMAT_FREE: (2, 30, False),
    FORMAT_LADDER: (2, 30, False),
    FORMAT_PLAYOFF: (4, 32, True),
}

# Rotating fallback: weight of matches already played against rest rounds
ROTATING_PLAYED_WEIGHT = 0.1

# Environment variable read by the logger setup
LOG_LEVEL_ENV_VAR = "MATCHCENTER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
