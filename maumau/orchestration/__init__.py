"""Match orchestration."""

from maumau.orchestration.game_runner import GameRunner, MatchResult, RoundResult
from maumau.orchestration.tournament import run_tournament

__all__ = ["GameRunner", "MatchResult", "RoundResult", "run_tournament"]
