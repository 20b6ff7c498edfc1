"""Mau Mau rules: legal actions and state transitions."""

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union

from maumau.engine.card import Card
from maumau.engine.draw import can_draw
from maumau.engine.effects import Table, resolve_effect
from maumau.engine.errors import GameNotInProgressError, InvalidMoveError, NotYourTurnError
from maumau.engine.game_state import GameSettings, GameState
from maumau.engine.match import start_match, start_next_round
from maumau.engine.scoring import calculate_scores

PENALTY_DRAW = 2


@dataclass
class PlayCard:
    """Action: play a card from hand."""

    player_index: int
    card: Card


@dataclass
class DrawCard:
    """Action: draw one card."""

    player_index: int


@dataclass
class DeclareLastCard:
    """Action: announce being down to the last card."""

    player_index: int


@dataclass
class PassTurn:
    """Action: keep a playable card that was just drawn and end the turn."""

    player_index: int


@dataclass
class StartMatch:
    """Action: seat (player_id, name) pairs and deal the first round."""

    players: Sequence[Tuple[str, str]]
    settings: Optional[GameSettings] = None


@dataclass
class StartNextRound:
    """Action: deal the next round of the match."""

    pass


Action = Union[PlayCard, DrawCard, DeclareLastCard, PassTurn, StartMatch, StartNextRound]


def is_valid_move(card: Card, top_card: Card, bluffing_enabled: bool = False) -> bool:
    """Check if ``card`` can be played on ``top_card``."""
    # Wildcards play on anything and accept anything
    if card.is_wild or top_card.is_wild:
        return True
    if bluffing_enabled:
        return True
    return card.suit == top_card.suit or card.rank == top_card.rank


def _check_player(state: GameState, player_index: int) -> None:
    if not 0 <= player_index < len(state.players):
        raise InvalidMoveError(f"No player at seat {player_index}")


def _require_turn(state: GameState, player_index: int) -> None:
    if not state.in_progress:
        raise GameNotInProgressError("The round is not in progress")
    _check_player(state, player_index)
    if player_index != state.current_player_index:
        raise NotYourTurnError(f"It is not {state.players[player_index].name}'s turn")


def _finish(state: GameState, table: Table, **changes) -> GameState:
    """Freeze ``table`` back into a new state, appending its messages."""
    messages = tuple(table.messages)
    return replace(
        state,
        deck=tuple(table.deck),
        discard_pile=tuple(table.discard),
        direction=table.direction,
        last_action=" ".join(messages) if messages else state.last_action,
        history=state.history + messages,
        **changes,
    )


def _auto_declare(state: GameState) -> GameState:
    """Declare last card for the current player when the engine does it for them."""
    settings = state.settings
    if not (settings.enable_last_card_rule and settings.auto_declare_last_card):
        return state
    if not state.in_progress:
        return state
    player = state.current_player
    if player.card_count != 1 or player.declared_last_card:
        return state
    players = list(state.players)
    players[state.current_player_index] = replace(player, declared_last_card=True)
    return replace(state, players=tuple(players)).with_message(f"{player.name} declared last card!")


def _owes_penalty(state: GameState, player_index: int) -> bool:
    settings = state.settings
    if not settings.enable_last_card_rule or settings.auto_declare_last_card:
        return False
    player = state.players[player_index]
    return player.card_count == 1 and not player.declared_last_card


def apply_play_card(
    state: GameState,
    player_index: int,
    card: Card,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Play ``card`` from the current player's hand and return the new state.

    Raises InvalidMoveError (state untouched) if the card is not in hand or
    does not match the active card.
    """
    _require_turn(state, player_index)
    player = state.players[player_index]
    played = next((c for c in player.hand if c.id == card.id), None)
    if played is None:
        raise InvalidMoveError(f"{card} is not in {player.name}'s hand")
    top = state.top_discard()
    if top is not None and not is_valid_move(played, top, state.settings.enable_bluffing):
        raise InvalidMoveError(f"{played} cannot be played on {top}")

    table = Table.from_state(state, rng)
    if _owes_penalty(state, player_index):
        result = table.draw_into(player_index, PENALTY_DRAW)
        table.say(
            f"{player.name} forgot to declare last card! +{len(result.drawn)} penalty cards."
        )

    table.hands[player_index] = [c for c in table.hands[player_index] if c.id != played.id]
    table.discard.append(played)
    table.say(f"{player.name} played {played}.")

    if not table.hands[player_index]:
        table.say(f"{player.name} wins the round!")
        return _finish(
            state,
            table,
            players=calculate_scores(table.build_players(), player.id),
            game_ended=True,
            winner=player.id,
            drawn_playable=None,
        )

    next_index = resolve_effect(played, table)
    new_state = _finish(
        state,
        table,
        players=table.build_players(reset_declarations=True),
        current_player_index=next_index,
        drawn_playable=None,
    )
    return _auto_declare(new_state)


def apply_draw_card(
    state: GameState,
    player_index: int,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Draw one card for the current player.

    The turn stays with the player if the drawn card is playable. When no
    card can be drawn at all the state only gains a "no cards left" message.
    """
    _require_turn(state, player_index)
    player = state.players[player_index]

    table = Table.from_state(state, rng)
    result = table.draw_into(player_index, 1)
    if not result.drawn:
        return state.with_message("No cards left to draw.")

    drawn = result.drawn[0]
    table.say(f"{player.name} drew a card.")
    top = state.top_discard()
    if top is None or is_valid_move(drawn, top, state.settings.enable_bluffing):
        return _finish(
            state,
            table,
            players=table.build_players(),
            drawn_playable=player_index,
        )

    new_state = _finish(
        state,
        table,
        players=table.build_players(reset_declarations=True),
        current_player_index=table.next_index(player_index),
        drawn_playable=None,
    )
    return _auto_declare(new_state)


def declare_last_card(state: GameState, player_index: int) -> GameState:
    """Record that a player declared their last card. Nothing else changes."""
    _check_player(state, player_index)
    players = list(state.players)
    players[player_index] = replace(players[player_index], declared_last_card=True)
    return replace(state, players=tuple(players))


def pass_turn(state: GameState, player_index: int) -> GameState:
    """End the turn after drawing a playable card without playing it."""
    _require_turn(state, player_index)
    if state.drawn_playable != player_index:
        raise InvalidMoveError("Passing is only allowed after drawing a playable card")
    player = state.players[player_index]
    new_state = replace(
        state,
        players=tuple(replace(p, declared_last_card=False) for p in state.players),
        current_player_index=state.next_index(player_index),
        drawn_playable=None,
    ).with_message(f"{player.name} passed.")
    return _auto_declare(new_state)


def get_legal_actions(state: GameState, player_index: int) -> List[Action]:
    """Return all legal in-round actions for a player."""
    if not state.in_progress or player_index != state.current_player_index:
        return []

    player = state.players[player_index]
    settings = state.settings
    top = state.top_discard()
    actions: List[Action] = []

    if (
        settings.enable_last_card_rule
        and not settings.auto_declare_last_card
        and player.card_count == 1
        and not player.declared_last_card
    ):
        actions.append(DeclareLastCard(player_index))

    for card in player.hand:
        if top is None or is_valid_move(card, top, settings.enable_bluffing):
            actions.append(PlayCard(player_index, card))

    if can_draw(state.deck, state.discard_pile):
        actions.append(DrawCard(player_index))

    if state.drawn_playable == player_index:
        actions.append(PassTurn(player_index))

    return actions


def apply_action(
    state: Optional[GameState],
    action: Action,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Apply any action and return the new game state.

    ``state`` is ignored (and may be None) for StartMatch.
    """
    if isinstance(action, StartMatch):
        return start_match(action.players, action.settings, rng)
    if state is None:
        raise GameNotInProgressError("No game has been started")
    if isinstance(action, PlayCard):
        return apply_play_card(state, action.player_index, action.card, rng)
    if isinstance(action, DrawCard):
        return apply_draw_card(state, action.player_index, rng)
    if isinstance(action, DeclareLastCard):
        return declare_last_card(state, action.player_index)
    if isinstance(action, PassTurn):
        return pass_turn(state, action.player_index)
    if isinstance(action, StartNextRound):
        return start_next_round(state, rng)
    raise TypeError(f"Unknown action: {action!r}")
