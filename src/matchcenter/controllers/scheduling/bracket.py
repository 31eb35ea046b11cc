"""Single-elimination bracket construction."""

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

import math
import random
from typing import List, Optional, Sequence

from matchcenter.exceptions import InvalidParticipantCountException
from matchcenter.models.tournament import Match, Team
from matchcenter.type_hints import Schedule
from matchcenter.utils import setup_logger

logger = setup_logger(__name__)


def bracket_size(num_teams: int) -> int:
    """Smallest power of two that holds ``num_teams`` teams."""
    size = 1
    while size < num_teams:
        size *= 2
    return size


def _build_rounds(slots: List[Optional[Team]]) -> Schedule:
    """First round from ``slots``, later rounds empty until filled."""
    num_rounds = int(math.log2(len(slots)))
    schedule: Schedule = []
    matches_in_round = len(slots) // 2
    for round_index in range(num_rounds):
        matches = []
        for i in range(matches_in_round):
            if round_index == 0:
                team_a, team_b = slots[2 * i], slots[2 * i + 1]
            else:
                team_a = team_b = None
            matches.append(
                Match(round=round_index + 1, court=1, team_a=team_a, team_b=team_b)
            )
        schedule.append(matches)
        matches_in_round //= 2
    return schedule


def generate_bracket(
    teams: Sequence[Team], rng: Optional[random.Random] = None
) -> Schedule:
    """Seeded bracket: teams shuffled into first-round slots.

    Byes are spread over the first round so that no first-round match is
    left without any team. The lone teams are advanced later by the bracket
    engine's bye propagation.

    Args:
        teams: At least two teams
        rng: Random source for the draw (a fresh one when omitted)

    Returns:
        Rounds of the bracket, first round fully drawn
    """
    if len(teams) < 2:
        raise InvalidParticipantCountException(
            f"A bracket needs at least 2 teams, got {len(teams)}"
        )

    rng = rng or random.Random()
    drawn = list(teams)
    rng.shuffle(drawn)

    size = bracket_size(len(drawn))
    num_matches = size // 2
    full_matches = len(drawn) - num_matches
    # evenly spaced first-round matches with two teams; the rest get a bye
    full_indices = {j * num_matches // full_matches for j in range(full_matches)}

    slots: List[Optional[Team]] = []
    pool = iter(drawn)
    for i in range(num_matches):
        slots.append(next(pool))
        slots.append(next(pool) if i in full_indices else None)

    schedule = _build_rounds(slots)
    logger.info(
        f"Generated bracket of size {size} for {len(drawn)} teams "
        f"({num_matches - full_matches} byes)"
    )
    return schedule


def generate_empty_bracket(num_players: int) -> Schedule:
    """Bracket with every slot empty, sized for teams of two players.

    Args:
        num_players: Players that will be formed into teams

    Returns:
        Rounds of empty matches
    """
    num_teams = math.ceil(num_players / 2)
    if num_teams < 2:
        raise InvalidParticipantCountException(
            f"A bracket needs at least 4 players, got {num_players}"
        )
    size = bracket_size(num_teams)
    logger.info(f"Generated empty bracket of size {size} for {num_players} players")
    return _build_rounds([None] * size)
