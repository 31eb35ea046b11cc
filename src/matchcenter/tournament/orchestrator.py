"""Tournament orchestration.

The orchestrator is the single entry point for creating and changing a
tournament. Every operation either completes fully or raises before the
tournament is touched, and ends by refreshing the standings.
"""

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
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple, Union

from matchcenter.constants import (
    FORMAT_FIXED,
    FORMAT_MATCH,
    FORMAT_PLAYOFF,
    FORMAT_ROTATING,
    PLAYERS_PER_SIDE,
    PLAYOFF_MANUAL,
)
from matchcenter.controllers.scheduling import (
    generate_empty_bracket,
    generate_schedule,
)
from matchcenter.controllers.tournament import (
    RankingCalculator,
    ResultRecorder,
    RoundManager,
    champion,
    clear_advanced_slot,
    progress_winner,
    propagate_byes,
)
from matchcenter.exceptions import (
    DuplicatePlayerException,
    IncompleteTeamException,
    InvalidConfigurationException,
    InvalidPlayerDataException,
    TournamentStateException,
)
from matchcenter.models.player import Player
from matchcenter.models.tournament import (
    Match,
    RankingEntry,
    Team,
    Tournament,
    TournamentConfig,
)
from matchcenter.type_hints import MaybeSide, Schedule, Score, TournamentFormat
from matchcenter.utils import setup_logger
from matchcenter.utils.validation import (
    validate_participant_count_strict,
    validate_side_selection,
)

logger = setup_logger(__name__)


@dataclass
class FinalResult:
    """Outcome of a finished tournament."""

    ranking: List[RankingEntry] = field(default_factory=list)
    # playoff only
    champion: MaybeSide = None


class TournamentOrchestrator:
    """Creates tournaments and applies every change to them.

    The orchestrator holds no tournament state of its own: each operation
    receives the Tournament it works on. It coordinates:
    - schedule generators, by format
    - ResultRecorder: score validation
    - bracket progression and bye propagation for playoffs
    - RoundManager: manual matches, deletion and second legs
    - RankingCalculator: standings, refreshed after every change

    Args:
        rng: Random source for team formation and draws
        seed: Seed for a new random source, ignored when ``rng`` is given
    """

    def __init__(
        self, rng: Optional[random.Random] = None, seed: Optional[int] = None
    ) -> None:
        self.rng = rng or random.Random(seed)
        self.result_recorder = ResultRecorder()
        self.round_manager = RoundManager()
        self.ranking_calculator = RankingCalculator()

    # ========== Creation ==========

    def create_tournament(
        self,
        tournament_format: TournamentFormat,
        players: Sequence[Player],
        config: Optional[TournamentConfig] = None,
        teams: Optional[Sequence[Team]] = None,
    ) -> Tournament:
        """Validate the participants and build a tournament with its schedule.

        Args:
            tournament_format: One of the supported formats
            players: Participating players
            config: Scoring and court settings (defaults when omitted)
            teams: Pre-formed teams for ``fixed`` or seeded ``playoff``;
                formed at random from the players when omitted

        Returns:
            The new tournament

        Raises:
            InvalidConfigurationException: If the format or a setting is invalid
            InvalidParticipantCountException: If the player count is out of bounds
            DuplicatePlayerException: If a player appears twice
            IncompleteTeamException: If given teams do not cover all players
        """
        config = config or TournamentConfig()
        config.validate()
        validate_participant_count_strict(tournament_format, len(players))

        seen = set()
        for player in players:
            if player.id in seen:
                raise DuplicatePlayerException(f"{player.name} is registered twice")
            seen.add(player.id)

        if teams is not None:
            self._check_teams_allowed(tournament_format, config)
            self._validate_teams(players, teams)

        if not config.use_handicap:
            for player in players:
                player.handicap = 0

        tournament = Tournament(
            tournament_format=tournament_format,
            config=config,
            players={p.id: p for p in players},
        )

        if tournament_format == FORMAT_MATCH:
            # players 1 & 2 against players 3 & 4
            home = Team.from_players(tournament.mint_team_id(), players[0], players[1])
            away = Team.from_players(tournament.mint_team_id(), players[2], players[3])
            self._register_teams(tournament, [home, away])
        elif tournament_format == FORMAT_FIXED:
            self._register_teams(tournament, teams or self._form_teams(tournament))
        elif tournament_format == FORMAT_PLAYOFF:
            self._setup_playoff(tournament, teams)

        if tournament_format in (FORMAT_MATCH, FORMAT_FIXED):
            tournament.league_team_ids = list(tournament.teams)
            tournament.schedule = self.generate_schedule(
                tournament_format, tournament.league_teams, config.courts
            )
        elif tournament_format == FORMAT_ROTATING:
            drawn = list(players)
            self.rng.shuffle(drawn)
            tournament.schedule = self.generate_schedule(
                tournament_format, drawn, config.courts
            )

        logger.info(
            f"Created {tournament_format} tournament with {len(players)} players, "
            f"{len(tournament.teams)} teams and "
            f"{sum(len(r) for r in tournament.schedule)} matches"
        )
        self._refresh(tournament)
        return tournament

    def _check_teams_allowed(
        self, tournament_format: str, config: TournamentConfig
    ) -> None:
        if tournament_format == FORMAT_FIXED:
            return
        if tournament_format == FORMAT_PLAYOFF:
            if config.playoff_mode != PLAYOFF_MANUAL:
                return
            raise InvalidConfigurationException(
                "Manual brackets start empty; assign teams to matches instead"
            )
        raise InvalidConfigurationException(
            f"Teams cannot be given for a {tournament_format} tournament"
        )

    def _validate_teams(
        self, players: Sequence[Player], teams: Sequence[Team]
    ) -> None:
        """Given teams: two distinct players each, every player exactly once."""
        registered = {p.id for p in players}
        covered = set()
        for team in teams:
            if len(team.players) != PLAYERS_PER_SIDE or len(team.player_ids) != 2:
                raise IncompleteTeamException(
                    f"Team {team.name} needs exactly two different players"
                )
            for player in team.players:
                if player.id not in registered:
                    raise InvalidPlayerDataException(
                        f"{player.name} is not registered in this tournament"
                    )
                if player.id in covered:
                    raise DuplicatePlayerException(
                        f"{player.name} cannot play in two teams"
                    )
                covered.add(player.id)
        if covered != registered:
            raise IncompleteTeamException(
                f"{len(registered - covered)} players are not in any team"
            )

    def _form_teams(self, tournament: Tournament) -> List[Team]:
        """Shuffle the players and pair them off."""
        drawn = list(tournament.players.values())
        self.rng.shuffle(drawn)
        return [
            Team.from_players(tournament.mint_team_id(), drawn[i], drawn[i + 1])
            for i in range(0, len(drawn) - 1, 2)
        ]

    def _register_teams(self, tournament: Tournament, teams: Sequence[Team]) -> None:
        for team in teams:
            tournament.teams[team.id] = team

    def _setup_playoff(
        self, tournament: Tournament, teams: Optional[Sequence[Team]]
    ) -> None:
        players = list(tournament.players.values())
        if tournament.config.playoff_mode == PLAYOFF_MANUAL:
            tournament.schedule = generate_empty_bracket(len(players))
            tournament.unassigned_players = players
            return

        bracket_teams = list(teams) if teams else self._form_teams(tournament)
        self._register_teams(tournament, bracket_teams)
        tournament.assigned_players = players
        tournament.schedule = self.generate_schedule(
            FORMAT_PLAYOFF, bracket_teams, tournament.config.courts
        )
        propagate_byes(tournament.schedule, first_round_open=False)

    def generate_schedule(
        self,
        tournament_format: TournamentFormat,
        participants: Sequence[Union[Team, Player]],
        courts: int = 1,
    ) -> Schedule:
        """Run the generator for a format, using this orchestrator's random source."""
        return generate_schedule(tournament_format, participants, courts, self.rng)

    # ========== Results ==========

    def record_score(
        self, tournament: Tournament, round_index: int, match_index: int, score: Any
    ) -> Score:
        """Validate and store a score, then advance the bracket and standings.

        Raises:
            MatchNotFoundException: If the indices do not point at a match
            MatchNotReadyException: If the match is missing a side
            InvalidScoreException: If the score does not fit the scoring mode
        """
        match = tournament.get_match(round_index, match_index)
        recorded = self.result_recorder.record(match, score, tournament.config)

        if tournament.is_playoff:
            progress_winner(tournament.schedule, round_index, match_index)
            self._propagate(tournament)

        logger.info(
            f"Score {recorded.to_dict()} recorded for round {round_index + 1} "
            f"match {match_index + 1}"
        )
        self._refresh(tournament)
        return recorded

    def reset_score(
        self, tournament: Tournament, round_index: int, match_index: int
    ) -> None:
        """Clear a score and undo what it advanced in a bracket.

        Raises:
            MatchNotFoundException: If the indices do not point at a match
        """
        match = tournament.get_match(round_index, match_index)
        if not self.result_recorder.reset(match):
            return

        if tournament.is_playoff:
            clear_advanced_slot(tournament.schedule, round_index, match_index)
            self._propagate(tournament)

        logger.info(f"Score reset for round {round_index + 1} match {match_index + 1}")
        self._refresh(tournament)

    # ========== Schedule changes ==========

    def add_match(
        self,
        tournament: Tournament,
        side_a_players: Sequence[Player],
        side_b_players: Sequence[Player],
    ) -> Match:
        """Append a hand-picked match in its own round."""
        match = self.round_manager.add_match(tournament, side_a_players, side_b_players)
        self._refresh(tournament)
        return match

    def delete_match(
        self, tournament: Tournament, round_index: int, match_index: int
    ) -> Match:
        """Remove a match, collapsing its round when it becomes empty."""
        match = self.round_manager.delete_match(tournament, round_index, match_index)
        self._refresh(tournament)
        return match

    def add_second_round(self, tournament: Tournament) -> None:
        """Append the second leg of a fixed-partner round robin."""
        self.round_manager.add_second_round(tournament)
        self._refresh(tournament)

    # ========== Bracket assignment ==========

    def _bracket_open(self, tournament: Tournament) -> bool:
        """True while first-round slots can still receive a team."""
        return (
            tournament.config.playoff_mode == PLAYOFF_MANUAL
            and len(tournament.unassigned_players) >= PLAYERS_PER_SIDE
        )

    def _propagate(self, tournament: Tournament) -> None:
        propagate_byes(tournament.schedule, self._bracket_open(tournament))

    def _manual_first_round_match(
        self, tournament: Tournament, match_index: int
    ) -> Match:
        manual = tournament.config.playoff_mode == PLAYOFF_MANUAL
        if not tournament.is_playoff or not manual:
            raise TournamentStateException(
                "Teams can only be assigned in a manual playoff bracket"
            )
        return tournament.get_match(0, match_index)

    def assign_bracket_teams(
        self,
        tournament: Tournament,
        match_index: int,
        side_a_players: Sequence[Player],
        side_b_players: Sequence[Player] = (),
    ) -> Tuple[Team, Optional[Team]]:
        """Form two teams from unassigned players and place them in a first-round match.

        Side B may stay empty only when fewer than four players are left
        unassigned; that team then receives a bye.

        Args:
            tournament: Playoff tournament with a manual bracket
            match_index: Index of the match in the first round
            side_a_players: Two players for side A
            side_b_players: Two players for side B

        Returns:
            The teams created for side A and side B (None when left empty)

        Raises:
            TournamentStateException: If the bracket is not manual or the match
                already has teams
            IncompleteTeamException: If a side does not have two players
            DuplicatePlayerException: If a player is picked twice
            InvalidPlayerDataException: If a player is not in the unassigned pool
        """
        match = self._manual_first_round_match(tournament, match_index)
        if match.team_a is not None or match.team_b is not None:
            raise TournamentStateException(
                f"Match {match_index + 1} already has teams; unassign them first"
            )

        allow_bye = len(tournament.unassigned_players) < 2 * PLAYERS_PER_SIDE
        validate_side_selection(
            [p.id for p in side_a_players],
            [p.id for p in side_b_players],
            allow_empty_b=allow_bye,
        )
        pool = {p.id for p in tournament.unassigned_players}
        for player in list(side_a_players) + list(side_b_players):
            if player.id not in pool:
                raise InvalidPlayerDataException(
                    f"{player.name} is not available for a new team"
                )

        team_a = self._mint_bracket_team(tournament, side_a_players)
        team_b = (
            self._mint_bracket_team(tournament, side_b_players)
            if side_b_players
            else None
        )
        match.team_a = team_a
        match.team_b = team_b

        logger.info(
            f"Assigned {team_a.name} vs {team_b.name if team_b else 'nobody'} "
            f"to first-round match {match_index + 1}"
        )
        self._propagate(tournament)
        self._refresh(tournament)
        return team_a, team_b

    def _mint_bracket_team(
        self, tournament: Tournament, players: Sequence[Player]
    ) -> Team:
        team = Team.from_players(tournament.mint_team_id(), players[0], players[1])
        tournament.teams[team.id] = team
        moved = team.player_ids
        tournament.unassigned_players = [
            p for p in tournament.unassigned_players if p.id not in moved
        ]
        tournament.assigned_players.extend(team.players)
        return team

    def unassign_bracket_teams(self, tournament: Tournament, match_index: int) -> None:
        """Dissolve the teams of a first-round match.

        Players return to the unassigned pool, the teams are unregistered and
        anything the match advanced into later rounds is cleared.

        Raises:
            TournamentStateException: If the bracket is not manual
            MatchNotFoundException: If there is no such first-round match
        """
        match = self._manual_first_round_match(tournament, match_index)
        teams = [t for t in (match.team_a, match.team_b) if t is not None]
        if not teams:
            logger.warning(f"First-round match {match_index + 1} has no teams")
            return

        for team in teams:
            released = team.player_ids
            tournament.assigned_players = [
                p for p in tournament.assigned_players if p.id not in released
            ]
            pool = {p.id for p in tournament.unassigned_players}
            tournament.unassigned_players.extend(
                p for p in team.players if p.id not in pool
            )
            tournament.teams.pop(team.id, None)

        match.team_a = None
        match.team_b = None
        match.score = None
        clear_advanced_slot(tournament.schedule, 0, match_index)
        self._propagate(tournament)

        logger.info(
            f"Unassigned {', '.join(t.name for t in teams)} "
            f"from first-round match {match_index + 1}"
        )
        self._refresh(tournament)

    # ========== Standings ==========

    def compute_ranking(self, tournament: Tournament) -> List[RankingEntry]:
        """Standings for a tournament; empty for playoff brackets."""
        return self.ranking_calculator.compute(tournament)

    def _refresh(self, tournament: Tournament) -> None:
        """Recompute the standings.

        A failure is logged and leaves the standings unavailable until the
        next change.
        """
        try:
            tournament.ranking = self.ranking_calculator.compute(tournament)
        except Exception:
            logger.exception("Ranking computation failed, standings unavailable")
            tournament.ranking = None

    def finish_tournament(self, tournament: Tournament) -> FinalResult:
        """Mark the tournament over and return the final standings.

        Returns:
            Final ranking, plus the champion for a decided playoff
        """
        tournament.config.tournament_over = True
        self._refresh(tournament)

        if tournament.is_playoff:
            winner = champion(tournament.schedule)
            if winner is None:
                logger.warning("Playoff finished before the final was decided")
            else:
                logger.info(f"Champion: {winner.name}")
            return FinalResult(ranking=[], champion=winner)

        ranking = tournament.ranking or []
        logger.info(f"Tournament finished with {len(ranking)} ranked entries")
        return FinalResult(ranking=list(ranking))
