"""Type hints used in Match Center."""

from typing import TYPE_CHECKING, List, Literal, Optional, Tuple, Union

if TYPE_CHECKING:
    from matchcenter.models.tournament.match import Match
    from matchcenter.models.tournament.score import PointsScore, SetsScore
    from matchcenter.models.tournament.side import PlayerPair, Team

# Side of a match that won, None for a tie
WinningSide = Optional[Literal["A", "B"]]

TournamentFormat = Literal["match", "fixed", "rotating", "free", "ladder", "playoff"]
ScoringMode = Literal["sets", "americano"]
PlayoffMode = Literal["manual", "seeded"]

# One set as (games_a, games_b)
SetGames = Tuple[int, int]

# Either a registered team or a transient pair of players
Side = Union["Team", "PlayerPair"]
MaybeSide = Optional[Side]
Score = Union["SetsScore", "PointsScore"]

Round = List["Match"]
Schedule = List[Round]
