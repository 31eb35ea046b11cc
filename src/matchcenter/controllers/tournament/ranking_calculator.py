"""Standings computation for every tournament format."""

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

from typing import Dict, FrozenSet, Hashable, Iterable, List, Tuple

from matchcenter.constants import (
    AMERICANO_LOSS_BONUS,
    AMERICANO_TIE_BONUS,
    AMERICANO_WIN_BONUS,
    FORMAT_PLAYOFF,
    LADDER_RANKED_FORMATS,
    MATCH_WIN_POINTS,
    PLAYER_RANKED_FORMATS,
    TEAM_RANKED_FORMATS,
)
from matchcenter.exceptions import InvalidConfigurationException
from matchcenter.models.player import Player
from matchcenter.models.tournament import (
    Match,
    PointsScore,
    RankingEntry,
    SetsScore,
    Team,
    Tournament,
)
from matchcenter.type_hints import Schedule, Score, Side
from matchcenter.utils import setup_logger

logger = setup_logger(__name__)


def _key_text(key: Hashable) -> str:
    if isinstance(key, frozenset):
        return ",".join(sorted(key))
    return str(key)


def _name_order(entry: RankingEntry) -> Tuple[str, str, str]:
    return (entry.name.casefold(), entry.name, _key_text(entry.key))


def _americano_order(entry: RankingEntry) -> Tuple:
    return (-entry.wins, -entry.avg_points) + _name_order(entry)


def _team_sets_order(entry: RankingEntry) -> Tuple:
    return (-entry.wins, -entry.set_diff, -entry.game_diff) + _name_order(entry)


def _player_sets_order(entry: RankingEntry) -> Tuple:
    return (-entry.points, -entry.game_diff, -entry.games_won) + _name_order(entry)


def _ladder_order(entry: RankingEntry) -> Tuple:
    return (-entry.points, -entry.wins) + _name_order(entry)


def _completed(schedule: Schedule) -> Iterable[Match]:
    for matches in schedule:
        for match in matches:
            if match.score is not None and match.has_both_sides:
                yield match


def _credit(entry: RankingEntry, score: Score, side: str) -> None:
    """Add one match, seen from ``side``, to an entry."""
    winner = score.winner()
    won = winner == side
    tied = winner is None

    entry.matches += 1
    if won:
        entry.wins += 1
    elif not tied:
        entry.losses += 1

    games_a, games_b = score.games()
    own_games, other_games = (games_a, games_b) if side == "A" else (games_b, games_a)
    entry.games_won += own_games
    entry.games_lost += other_games

    if isinstance(score, SetsScore):
        sets_a, sets_b = score.sets_won()
        entry.sets_won += sets_a if side == "A" else sets_b
        entry.sets_lost += sets_b if side == "A" else sets_a
        if won:
            entry.points += MATCH_WIN_POINTS
    elif isinstance(score, PointsScore):
        if won:
            bonus = AMERICANO_WIN_BONUS
        elif tied:
            bonus = AMERICANO_TIE_BONUS
        else:
            bonus = AMERICANO_LOSS_BONUS
        entry.total_points += own_games + bonus
        entry.points += own_games + bonus


class RankingCalculator:
    """Computes standings from completed matches.

    Three computations exist:
    - Team based (``match``, ``fixed``): one entry per side
    - Player based (``rotating``, ``free``): both partners credited alike
    - Ladder: player based, ordered by points then wins

    Every registered participant gets an entry, so newcomers show up at the
    bottom with zero statistics. Each order ends with name and key, which
    makes it total.
    """

    def compute(self, tournament: Tournament) -> List[RankingEntry]:
        """Standings for a tournament, dispatched on its format.

        Playoff brackets have no standings table and yield an empty list.

        Raises:
            InvalidConfigurationException: If the format is unknown
        """
        tournament_format = tournament.tournament_format
        americano = tournament.config.is_americano
        players = list(tournament.players.values())

        if tournament_format in TEAM_RANKED_FORMATS:
            return self.team_ranking(
                tournament.schedule, tournament.teams.values(), americano
            )
        if tournament_format in PLAYER_RANKED_FORMATS:
            return self.player_ranking(tournament.schedule, players, americano)
        if tournament_format in LADDER_RANKED_FORMATS:
            return self.ladder_ranking(tournament.schedule, players)
        if tournament_format == FORMAT_PLAYOFF:
            return []
        raise InvalidConfigurationException(
            f"Unknown tournament format: {tournament_format}"
        )

    # ========== Team based ==========

    def team_ranking(
        self, schedule: Schedule, teams: Iterable[Team], americano: bool
    ) -> List[RankingEntry]:
        """Per-team standings.

        Americano order: wins, average points, name. Set order: wins, set
        difference, game difference, name. A pair of players counts for the
        registered team made of the same two players.
        """
        entries: Dict[Hashable, RankingEntry] = {}
        team_keys: Dict[FrozenSet[str], Hashable] = {}
        for team in teams:
            entries[team.key] = RankingEntry(key=team.key, name=team.name)
            team_keys[team.player_ids] = team.key

        def entry_for(side: Side) -> RankingEntry:
            key = team_keys.get(side.player_ids, side.key)
            if key not in entries:
                entries[key] = RankingEntry(key=key, name=side.name)
            return entries[key]

        for match in _completed(schedule):
            _credit(entry_for(match.team_a), match.score, "A")
            _credit(entry_for(match.team_b), match.score, "B")

        order = _americano_order if americano else _team_sets_order
        return sorted(entries.values(), key=order)

    # ========== Player based ==========

    def _fold_players(
        self, schedule: Schedule, players: Iterable[Player]
    ) -> Dict[str, RankingEntry]:
        entries: Dict[str, RankingEntry] = {}
        for player in players:
            entries[player.id] = RankingEntry(key=player.id, name=player.name)

        for match in _completed(schedule):
            for side, side_name in ((match.team_a, "A"), (match.team_b, "B")):
                for player in side.players:
                    if player.id not in entries:
                        entries[player.id] = RankingEntry(
                            key=player.id, name=player.name
                        )
                    _credit(entries[player.id], match.score, side_name)
        return entries

    def player_ranking(
        self, schedule: Schedule, players: Iterable[Player], americano: bool
    ) -> List[RankingEntry]:
        """Per-player standings for rotating partners.

        A set-scored win earns each winner one point. Americano order: wins,
        average points, name. Set order: points, game difference, games won,
        name.
        """
        entries = self._fold_players(schedule, players)
        order = _americano_order if americano else _player_sets_order
        return sorted(entries.values(), key=order)

    def ladder_ranking(
        self, schedule: Schedule, players: Iterable[Player]
    ) -> List[RankingEntry]:
        """Ladder standings: points, then wins, then name.

        Points are one per match won, or americano points plus bonus.
        """
        entries = self._fold_players(schedule, players)
        return sorted(entries.values(), key=_ladder_order)
