"""Rotating-partner schedules: balanced circle method or greedy fallback."""

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

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from matchcenter.constants import ROTATING_PLAYED_WEIGHT
from matchcenter.exceptions import InvalidParticipantCountException
from matchcenter.models.player import Player
from matchcenter.models.tournament import Match, PlayerPair
from matchcenter.type_hints import Schedule
from matchcenter.utils import setup_logger

from .round_robin import circle_rounds

logger = setup_logger(__name__)


@dataclass
class RotatingSchedule:
    """Generated rotating schedule plus the partnerships left unplayed."""

    schedule: Schedule
    unscheduled: List[PlayerPair] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.unscheduled


@dataclass
class _RestStats:
    matches_played: int = 0
    consecutive_rest: int = 0


def _regroup(matches: List[Tuple[PlayerPair, PlayerPair]], per_round: int) -> Schedule:
    schedule: Schedule = []
    for start in range(0, len(matches), per_round):
        round_number = len(schedule) + 1
        schedule.append(
            [
                Match(round=round_number, court=court, team_a=a, team_b=b)
                for court, (a, b) in enumerate(
                    matches[start : start + per_round], start=1
                )
            ]
        )
    return schedule


def generate_balanced(players: Sequence[Player], courts: int) -> Schedule:
    """Every player partners every other player exactly once.

    Only valid when the number of players is a multiple of four: each of the
    ``n - 1`` circle rounds yields ``n / 2`` partnerships, taken two at a
    time to form matches.
    """
    num = len(players)
    if num < 4 or num % 4:
        raise InvalidParticipantCountException(
            f"Balanced rotation needs a multiple of 4 players, got {num}"
        )

    matches: List[Tuple[PlayerPair, PlayerPair]] = []
    for pairs in circle_rounds(list(players)):
        sides = [PlayerPair(a, b) for a, b in pairs]
        for i in range(0, len(sides) - 1, 2):
            matches.append((sides[i], sides[i + 1]))

    return _regroup(matches, min(courts, num // 4))


def _priority(pair: Tuple[Player, Player], stats: Dict[str, _RestStats]) -> float:
    first, second = stats[pair[0].id], stats[pair[1].id]
    rested = first.consecutive_rest + second.consecutive_rest
    played = first.matches_played + second.matches_played
    return rested - ROTATING_PLAYED_WEIGHT * played


def generate_greedy(players: Sequence[Player], courts: int) -> RotatingSchedule:
    """Greedy rotation for player counts that are not a multiple of four.

    All partnerships start as candidates. Each round repeatedly takes the
    candidate whose players rested longest and played least, matches it with
    the next candidate sharing no player, and stops when the round is full
    or no such pair exists. This is a fairness heuristic, not an optimum:
    when a round cannot form a single match the remaining partnerships stay
    unscheduled.
    """
    pending: List[Tuple[Player, Player]] = [
        (players[i], players[j])
        for i in range(len(players))
        for j in range(i + 1, len(players))
    ]
    stats = {p.id: _RestStats() for p in players}
    matches_per_round = max(1, min(len(players) // 4, courts))
    schedule: Schedule = []

    while pending:
        used: set = set()
        current: List[Match] = []

        while len(current) < matches_per_round:
            candidates = [
                pair
                for pair in pending
                if pair[0].id not in used and pair[1].id not in used
            ]
            if len(candidates) < 2:
                break
            # stable sort keeps generation order among equal priorities
            candidates.sort(key=lambda pair: _priority(pair, stats), reverse=True)
            first = candidates[0]
            first_ids = {first[0].id, first[1].id}
            second = next(
                (
                    pair
                    for pair in candidates[1:]
                    if pair[0].id not in first_ids and pair[1].id not in first_ids
                ),
                None,
            )
            if second is None:
                break

            pending.remove(first)
            pending.remove(second)
            used.update(first_ids)
            used.update((second[0].id, second[1].id))
            current.append(
                Match(
                    round=len(schedule) + 1,
                    court=(len(current) % courts) + 1,
                    team_a=PlayerPair(*first),
                    team_b=PlayerPair(*second),
                )
            )

        if not current:
            break

        for player in players:
            player_stats = stats[player.id]
            if player.id in used:
                player_stats.matches_played += 1
                player_stats.consecutive_rest = 0
            else:
                player_stats.consecutive_rest += 1
        schedule.append(current)

    unscheduled = [PlayerPair(a, b) for a, b in pending]
    if unscheduled:
        logger.warning(
            f"Rotating schedule for {len(players)} players left "
            f"{len(unscheduled)} partnerships unscheduled"
        )
    return RotatingSchedule(schedule=schedule, unscheduled=unscheduled)


def generate_rotating(players: Sequence[Player], courts: int) -> RotatingSchedule:
    """Build a rotating-partner schedule.

    Parameters
    ----------
    players : sequence of Player
        Participating players (at least 4).
    courts : int
        Courts available.

    Returns
    -------
    RotatingSchedule
        The schedule, and any partnerships the greedy fallback could not
        place.
    """
    if len(players) >= 4 and len(players) % 4 == 0:
        result = RotatingSchedule(schedule=generate_balanced(players, courts))
    else:
        result = generate_greedy(players, courts)

    logger.info(
        f"Generated rotating schedule for {len(players)} players: "
        f"{sum(len(r) for r in result.schedule)} matches in "
        f"{len(result.schedule)} rounds"
    )
    return result
