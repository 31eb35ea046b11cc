"""Tournament controllers: bracket progression, results, rounds and ranking."""

from matchcenter.controllers.tournament.bracket_engine import (
    champion,
    clear_advanced_slot,
    progress_winner,
    propagate_byes,
)
from matchcenter.controllers.tournament.ranking_calculator import RankingCalculator
from matchcenter.controllers.tournament.result_recorder import ResultRecorder
from matchcenter.controllers.tournament.round_manager import RoundManager

__all__ = [
    "RankingCalculator",
    "ResultRecorder",
    "RoundManager",
    "champion",
    "clear_advanced_slot",
    "progress_winner",
    "propagate_byes",
]
