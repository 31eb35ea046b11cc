"""Tournament orchestration."""

from matchcenter.tournament.orchestrator import FinalResult, TournamentOrchestrator

__all__ = ["FinalResult", "TournamentOrchestrator"]
