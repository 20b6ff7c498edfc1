"""Match runner: plays rounds until fewer than two players remain."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from maumau.engine import (
    GameSettings,
    GameState,
    MatchEndedError,
    Player,
    PlayerView,
    apply_action,
    get_legal_actions,
    start_match,
    start_next_round,
)
from maumau.engine.rules import Action, DrawCard, PassTurn

if TYPE_CHECKING:
    from maumau.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 1000
DEFAULT_MAX_ROUNDS = 50


@dataclass
class RoundResult:
    """Result of one round. ``winner`` is None if the round stalled."""

    winner: Optional[str]
    num_turns: int
    scores: dict[str, int]


@dataclass
class MatchResult:
    """Result of a completed match."""

    winner: Optional[str]
    standings: tuple[Player, ...]
    rounds: list[RoundResult] = field(default_factory=list)

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)


class GameRunner:
    """Runs a Mau Mau match to completion.

    ``agents`` maps player id to agent, in seating order. The match winner is
    the player with the highest score once the match ends.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        settings: Optional[GameSettings] = None,
        seed: Optional[int] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ):
        self._agents = agents
        self._settings = settings or GameSettings()
        self._rng = random.Random(seed)
        self._max_turns = max_turns
        self._max_rounds = max_rounds

    def run(self) -> MatchResult:
        """Run the match and return the result."""
        seats = [(pid, agent.name) for pid, agent in self._agents.items()]
        state = start_match(seats, self._settings, rng=self._rng)
        rounds: list[RoundResult] = []

        while True:
            logger.info("Round %d: %s", len(rounds) + 1, ", ".join(p.name for p in state.players))
            state, result = self.play_round(state)
            rounds.append(result)
            if result.winner is None or len(rounds) >= self._max_rounds:
                standings = tuple(sorted(state.players, key=lambda p: p.score, reverse=True))
                break
            previous = {p.id for p in state.players}
            try:
                state = start_next_round(state, rng=self._rng)
            except MatchEndedError as e:
                standings = e.standings
                break
            eliminated = previous - {p.id for p in state.players}
            for pid in sorted(eliminated):
                logger.info("%s eliminated", pid)

        winner = standings[0].id if standings else None
        logger.info("Match over after %d rounds, winner: %s", len(rounds), winner)
        return MatchResult(winner=winner, standings=standings, rounds=rounds)

    def play_round(self, state: GameState) -> tuple[GameState, RoundResult]:
        """Play one dealt round until someone goes out or the turn limit hits."""
        num_turns = 0
        while not state.game_ended and num_turns < self._max_turns:
            index = state.current_player_index
            pid = state.players[index].id
            legal = get_legal_actions(state, index)
            if not legal:
                logger.warning("%s has no legal action, round stalled", pid)
                break

            view = PlayerView.from_state(state, index)
            action = self._agents[pid].get_action(view, legal, index)
            if action is None:
                action = _fallback(legal)

            state = apply_action(state, action, rng=self._rng)
            logger.debug("%s", state.last_action)
            num_turns += 1

        if not state.game_ended:
            logger.warning("Round ended without a winner after %d turns", num_turns)
        scores = {p.id: p.score for p in state.players}
        return state, RoundResult(winner=state.winner, num_turns=num_turns, scores=scores)


def _fallback(legal: list[Action]) -> Action:
    """Draw if possible, else pass, else the first legal action."""
    for kind in (DrawCard, PassTurn):
        for a in legal:
            if isinstance(a, kind):
                return a
    return legal[0]
