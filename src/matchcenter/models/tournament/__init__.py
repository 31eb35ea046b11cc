"""Tournament-related models."""

from .match import Match, MatchState
from .ranking_entry import RankingEntry
from .score import PointsScore, SetsScore
from .side import PlayerPair, Team, join_names, make_bye_team, team_id_for
from .tournament import Tournament
from .tournament_config import TournamentConfig

__all__ = [
    "Match",
    "MatchState",
    "PlayerPair",
    "PointsScore",
    "RankingEntry",
    "SetsScore",
    "Team",
    "Tournament",
    "TournamentConfig",
    "join_names",
    "make_bye_team",
    "team_id_for",
]
