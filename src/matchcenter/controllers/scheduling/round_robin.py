"""Fixed-partner round robin using the circle method."""

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

from typing import List, Sequence, Tuple, TypeVar

from matchcenter.models.tournament import Match, Team, make_bye_team
from matchcenter.type_hints import Schedule
from matchcenter.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


def circle_rounds(participants: Sequence[T]) -> List[List[Tuple[T, T]]]:
    """Pair participants for a single round robin.

    The first participant stays fixed and the others rotate one place per
    round. ``None`` entries act as a bye: pairings involving them are left
    out.

    Parameters
    ----------
    participants : sequence
        An even number of participants, ``None`` allowed as bye filler.

    Returns
    -------
    list
        ``len(participants) - 1`` rounds, each a list of pairs.
    """
    num = len(participants)
    indices = list(range(num))
    rounds: List[List[Tuple[T, T]]] = []

    for _ in range(num - 1):
        pairs = []
        for m in range(num // 2):
            first = participants[indices[m]]
            second = participants[indices[num - 1 - m]]
            if first is None or second is None:
                continue
            pairs.append((first, second))
        rounds.append(pairs)
        # keep index 0 fixed, move the last one to position 1
        indices.insert(1, indices.pop())

    return rounds


def generate_round_robin(
    teams: Sequence[Team], courts: int, round_offset: int = 0
) -> Schedule:
    """Every team plays every other team exactly once.

    An odd number of teams gets a BYE sentinel, whose pairings are skipped. Each
    logical round is split into sub-rounds of at most ``courts`` matches,
    every sub-round becoming its own numbered round.

    Parameters
    ----------
    teams : sequence of Team
        Participating teams.
    courts : int
        Courts available (at least 1).
    round_offset : int
        Number of rounds already scheduled; the first generated round is
        numbered ``round_offset + 1``. Used to append a second leg.

    Returns
    -------
    list of rounds
        ``N * (N - 1) / 2`` matches in total for ``N`` real teams.
    """
    entrants: List[Team] = list(teams)
    if len(entrants) < 2:
        logger.warning(f"Round robin needs at least 2 teams, got {len(entrants)}")
        return []

    if len(entrants) % 2:
        entrants.append(make_bye_team())

    schedule: Schedule = []
    round_number = round_offset
    for pairs in circle_rounds([t if not t.is_bye else None for t in entrants]):
        for start in range(0, len(pairs), courts):
            round_number += 1
            chunk = pairs[start : start + courts]
            schedule.append(
                [
                    Match(round=round_number, court=court, team_a=a, team_b=b)
                    for court, (a, b) in enumerate(chunk, start=1)
                ]
            )

    logger.info(
        f"Generated round robin for {len(teams)} teams: "
        f"{sum(len(r) for r in schedule)} matches in {len(schedule)} rounds"
    )
    return schedule
