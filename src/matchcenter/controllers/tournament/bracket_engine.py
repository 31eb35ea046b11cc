"""Bracket progression: winners, byes and undo."""

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

from typing import Dict, Optional, Tuple

from matchcenter.models.tournament import Match
from matchcenter.type_hints import MaybeSide, Schedule
from matchcenter.utils import setup_logger

logger = setup_logger(__name__)


def feeder_side(match_index: int) -> str:
    """Side of the next-round match that receives this match's winner."""
    return "A" if match_index % 2 == 0 else "B"


def parent_of(
    schedule: Schedule, round_index: int, match_index: int
) -> Optional[Match]:
    """Next-round match fed by the given match, None after the final."""
    next_round = round_index + 1
    if next_round >= len(schedule):
        return None
    matches = schedule[next_round]
    parent_index = match_index // 2
    if parent_index >= len(matches):
        return None
    return matches[parent_index]


def _set_advanced_slot(
    schedule: Schedule, round_index: int, match_index: int, value: MaybeSide
) -> bool:
    """Write ``value`` into the slot fed by a match.

    When the slot changes and the next-round match was already played, its
    score is reset and its own advanced slot cleared, recursively.

    Returns:
        True if the slot changed
    """
    parent = parent_of(schedule, round_index, match_index)
    if parent is None:
        return False

    side = feeder_side(match_index)
    if parent.get_side(side) == value:
        return False

    if parent.score is not None:
        logger.info(
            f"Resetting round {round_index + 2} match {match_index // 2 + 1}: "
            "a participant changed"
        )
        parent.score = None
        _set_advanced_slot(schedule, round_index + 1, match_index // 2, None)

    parent.set_side(side, value)
    return True


def clear_advanced_slot(schedule: Schedule, round_index: int, match_index: int) -> bool:
    """Remove whatever a match advanced into the next round."""
    return _set_advanced_slot(schedule, round_index, match_index, None)


def progress_winner(
    schedule: Schedule, round_index: int, match_index: int
) -> MaybeSide:
    """Advance the winner of a scored match into the next round.

    A tied score has no winner, so the next-round slot is left empty.

    Returns:
        The advanced side, or None
    """
    match = schedule[round_index][match_index]
    if match.score is None:
        return None

    winner = match.winner()
    if winner is None:
        logger.warning(
            f"Round {round_index + 1} match {match_index + 1} is tied, "
            "no winner advanced"
        )
    _set_advanced_slot(schedule, round_index, match_index, winner)
    if winner is not None:
        logger.debug(f"{winner.name} advances to round {round_index + 2}")
    return winner


class _DeadSlots:
    """Which bracket slots can never receive a team.

    An empty first-round slot is dead once the bracket is closed. A later
    slot is dead when both slots of the match feeding it are dead.
    """

    def __init__(self, schedule: Schedule, first_round_open: bool):
        self.schedule = schedule
        self.first_round_open = first_round_open
        self._cache: Dict[Tuple[int, int, str], bool] = {}

    def is_dead(self, round_index: int, match_index: int, side: str) -> bool:
        key = (round_index, match_index, side)
        if key not in self._cache:
            self._cache[key] = self._compute(round_index, match_index, side)
        return self._cache[key]

    def _compute(self, round_index: int, match_index: int, side: str) -> bool:
        if round_index == 0:
            slot = self.schedule[0][match_index].get_side(side)
            return slot is None and not self.first_round_open
        feeder = 2 * match_index + (0 if side == "A" else 1)
        if feeder >= len(self.schedule[round_index - 1]):
            return True
        return self.is_dead(round_index - 1, feeder, "A") and self.is_dead(
            round_index - 1, feeder, "B"
        )


def _bye_winner(
    match: Match, round_index: int, match_index: int, dead: _DeadSlots
) -> MaybeSide:
    """Participant an unscored match sends forward without being played."""
    lone = match.lone_side
    if lone is None:
        return None
    empty_side = "B" if match.team_a is not None else "A"
    if dead.is_dead(round_index, match_index, empty_side):
        return lone
    return None


def propagate_byes(schedule: Schedule, first_round_open: bool = False) -> int:
    """Advance lone participants whose opponent slot can never be filled.

    Every unscored, non-final match is checked: a lone participant facing a
    dead slot is written into the next round, any other stale entry there
    is removed. The scan repeats until nothing changes. Each pass settles
    at least one more round, so at most ``len(schedule) + 1`` passes run.

    Args:
        schedule: Bracket rounds, modified in place
        first_round_open: True while first-round slots may still be filled

    Returns:
        Number of passes performed
    """
    max_passes = len(schedule) + 1
    passes = 0
    changed = True
    while changed and passes < max_passes:
        changed = False
        passes += 1
        dead = _DeadSlots(schedule, first_round_open)
        for round_index in range(len(schedule) - 1):
            for match_index, match in enumerate(schedule[round_index]):
                if match.score is not None:
                    continue
                expected = _bye_winner(match, round_index, match_index, dead)
                if _set_advanced_slot(schedule, round_index, match_index, expected):
                    changed = True
                    if expected is not None:
                        logger.debug(
                            f"{expected.name} gets a bye into round {round_index + 2}"
                        )

    if changed:
        logger.warning(f"Bye propagation still changing after {passes} passes")
    return passes


def champion(schedule: Schedule) -> MaybeSide:
    """Winner of the final, None until it is decided."""
    if not schedule or not schedule[-1]:
        return None
    final = schedule[-1][0]
    return final.winner()
