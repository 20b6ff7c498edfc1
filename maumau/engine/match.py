"""Round lifecycle: starting a match and dealing follow-up rounds."""

import random
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from maumau.engine.dealer import INITIAL_HAND_SIZE, deal, seed_discard
from maumau.engine.deck import build_deck, shuffle
from maumau.engine.errors import MatchEndedError, RoundInProgressError
from maumau.engine.game_state import Direction, GameSettings, GameState, Player

MIN_PLAYERS = 2


def max_players(settings: GameSettings) -> int:
    """Largest table a full deal (plus one face-up card) still fits."""
    return (len(build_deck(settings.include_wildcards)) - 1) // INITIAL_HAND_SIZE


def start_match(
    players: Sequence[Tuple[str, str]],
    settings: Optional[GameSettings] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Create the first round of a match.

    ``players`` is a sequence of (player_id, name) pairs in seating order.
    Everyone starts with ``settings.starting_score`` points.
    """
    settings = settings or GameSettings()
    seated = [Player(id=pid, name=name, score=settings.starting_score) for pid, name in players]
    _check_seating(seated, settings)
    return _deal_round(seated, settings, rng, f"Game started! {seated[0].name} goes first.")


def start_next_round(prior: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Deal a new round to the players of a finished round who are still in.

    Raises MatchEndedError when fewer than two players have a positive score.
    """
    if not prior.game_ended:
        raise RoundInProgressError("The current round has not ended yet")

    carried = [
        replace(p, hand=(), declared_last_card=False, eliminated=p.score <= 0)
        for p in prior.players
    ]
    active = [p for p in carried if not p.eliminated]
    if len(active) < MIN_PLAYERS:
        standings = sorted(carried, key=lambda p: p.score, reverse=True)
        raise MatchEndedError("Not enough players left to continue", standings=standings)

    return _deal_round(active, prior.settings, rng, "New round started!")


def _check_seating(players: Sequence[Player], settings: GameSettings) -> None:
    if len(players) < MIN_PLAYERS:
        raise ValueError(f"At least {MIN_PLAYERS} players are required")
    if len({p.id for p in players}) != len(players):
        raise ValueError("Player ids must be unique")
    limit = max_players(settings)
    if len(players) > limit:
        raise ValueError(f"At most {limit} players fit the deck")


def _deal_round(
    players: Sequence[Player],
    settings: GameSettings,
    rng: Optional[random.Random],
    message: str,
) -> GameState:
    deck = shuffle(build_deck(settings.include_wildcards), rng)
    dealt, deck = deal(players, deck, INITIAL_HAND_SIZE)
    deck, discard = seed_discard(deck)
    return GameState(
        players=tuple(dealt),
        current_player_index=0,
        deck=tuple(deck),
        discard_pile=tuple(discard),
        direction=Direction.CLOCKWISE,
        game_started=True,
        game_ended=False,
        winner=None,
        last_action=message,
        settings=settings,
        history=(message,),
    )
