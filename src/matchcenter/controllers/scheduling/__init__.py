"""Schedule generators, one per tournament format."""

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

import random
from typing import Optional, Sequence, Union

from matchcenter.constants import (
    FORMAT_FIXED,
    FORMAT_MATCH,
    FORMAT_PLAYOFF,
    FORMAT_ROTATING,
    MANUAL_FORMATS,
)
from matchcenter.exceptions import InvalidConfigurationException
from matchcenter.models.player import Player
from matchcenter.models.tournament import Team
from matchcenter.type_hints import Schedule, TournamentFormat

from .bracket import bracket_size, generate_bracket, generate_empty_bracket
from .rotating import (
    RotatingSchedule,
    generate_balanced,
    generate_greedy,
    generate_rotating,
)
from .round_robin import circle_rounds, generate_round_robin


def generate_schedule(
    tournament_format: TournamentFormat,
    participants: Sequence[Union[Team, Player]],
    courts: int = 1,
    rng: Optional[random.Random] = None,
) -> Schedule:
    """Generate the initial schedule for a format.

    Args:
        tournament_format: Tournament format
        participants: Teams for ``match``, ``fixed`` and ``playoff``;
            players for ``rotating``
        courts: Courts available
        rng: Random source for the playoff draw

    Returns:
        The schedule; empty for formats whose matches are added by hand

    Raises:
        InvalidConfigurationException: If the format is unknown
    """
    if tournament_format in (FORMAT_MATCH, FORMAT_FIXED):
        return generate_round_robin(participants, courts)
    if tournament_format == FORMAT_ROTATING:
        return generate_rotating(participants, courts).schedule
    if tournament_format == FORMAT_PLAYOFF:
        return generate_bracket(participants, rng)
    if tournament_format in MANUAL_FORMATS:
        return []
    raise InvalidConfigurationException(
        f"Unknown tournament format: {tournament_format}"
    )


__all__ = [
    "RotatingSchedule",
    "bracket_size",
    "circle_rounds",
    "generate_balanced",
    "generate_bracket",
    "generate_empty_bracket",
    "generate_greedy",
    "generate_rotating",
    "generate_round_robin",
    "generate_schedule",
]
