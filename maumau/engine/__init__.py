"""Game engine for Mau Mau."""

from maumau.engine.card import Card, Suit
from maumau.engine.deck import build_deck, shuffle
from maumau.engine.dealer import deal, seed_discard
from maumau.engine.draw import DrawResult, reshuffle_on_empty
from maumau.engine.errors import (
    GameNotInProgressError,
    InvalidMoveError,
    MatchEndedError,
    MauMauError,
    NotYourTurnError,
    RoundInProgressError,
)
from maumau.engine.game_state import Direction, GameSettings, GameState, Player, PlayerView
from maumau.engine.match import start_match, start_next_round
from maumau.engine.rules import (
    Action,
    PlayCard,
    DrawCard,
    DeclareLastCard,
    PassTurn,
    StartMatch,
    StartNextRound,
    is_valid_move,
    apply_play_card,
    apply_draw_card,
    declare_last_card,
    pass_turn,
    get_legal_actions,
    apply_action,
)
from maumau.engine.scoring import calculate_scores, card_points

__all__ = [
    "Card",
    "Suit",
    "build_deck",
    "shuffle",
    "deal",
    "seed_discard",
    "DrawResult",
    "reshuffle_on_empty",
    "MauMauError",
    "InvalidMoveError",
    "NotYourTurnError",
    "GameNotInProgressError",
    "RoundInProgressError",
    "MatchEndedError",
    "Direction",
    "GameSettings",
    "GameState",
    "Player",
    "PlayerView",
    "start_match",
    "start_next_round",
    "Action",
    "PlayCard",
    "DrawCard",
    "DeclareLastCard",
    "PassTurn",
    "StartMatch",
    "StartNextRound",
    "is_valid_move",
    "apply_play_card",
    "apply_draw_card",
    "declare_last_card",
    "pass_turn",
    "get_legal_actions",
    "apply_action",
    "calculate_scores",
    "card_points",
]
