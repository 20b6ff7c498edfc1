"""Special-card effects.

Each effect works on a ``Table``, a mutable scratch copy of one transition,
and returns the index of the player who acts next. Ranks without an entry in
``EFFECTS`` just pass the turn on.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Tuple

from maumau.engine.card import WILD_RANK, Card
from maumau.engine.draw import DrawResult, reshuffle_on_empty
from maumau.engine.game_state import Direction, GameState, Player

WILDCARD_DRAW = 5
NINE_DRAW = 1


@dataclass
class Table:
    """Working copy of a GameState while a single action is resolved."""

    players: List[Player]
    hands: List[List[Card]]
    deck: List[Card]
    discard: List[Card]
    direction: Direction
    current: int
    rng: Optional[random.Random] = None
    messages: List[str] = field(default_factory=list)

    @classmethod
    def from_state(cls, state: GameState, rng: Optional[random.Random] = None) -> "Table":
        return cls(
            players=list(state.players),
            hands=[list(p.hand) for p in state.players],
            deck=list(state.deck),
            discard=list(state.discard_pile),
            direction=state.direction,
            current=state.current_player_index,
            rng=rng,
        )

    def next_index(self, from_index: int, direction: Optional[Direction] = None) -> int:
        step = direction if direction is not None else self.direction
        return (from_index + step) % len(self.players)

    def name(self, index: int) -> str:
        return self.players[index].name

    def say(self, message: str) -> None:
        self.messages.append(message)

    def draw_into(self, index: int, count: int) -> DrawResult:
        """Draw ``count`` cards (or fewer) into the hand at ``index``."""
        result = reshuffle_on_empty(self.deck, self.discard, count, self.rng)
        self.hands[index].extend(result.drawn)
        self.deck = list(result.deck)
        self.discard = list(result.discard_pile)
        if result.reshuffled:
            self.say("The discard pile was reshuffled into the deck.")
        return result

    def build_players(self, reset_declarations: bool = False) -> Tuple[Player, ...]:
        built = []
        for player, hand in zip(self.players, self.hands):
            updated = replace(player, hand=tuple(hand))
            if reset_declarations:
                updated = replace(updated, declared_last_card=False)
            built.append(updated)
        return tuple(built)


Effect = Callable[[Table], int]


def _advance(table: Table) -> int:
    return table.next_index(table.current)


def _wildcard(table: Table) -> int:
    """Next player draws five cards and loses their turn."""
    target = table.next_index(table.current)
    result = table.draw_into(target, WILDCARD_DRAW)
    if result.drawn:
        count = len(result.drawn)
        noun = "card" if count == 1 else "cards"
        table.say(f"{table.name(target)} draws {count} {noun} and loses their turn!")
    else:
        table.say(f"{table.name(target)} loses their turn!")
    return table.next_index(target)


def _skip(table: Table) -> int:
    skipped = table.next_index(table.current)
    table.say(f"{table.name(skipped)} is skipped!")
    return table.next_index(skipped)


def _reverse(table: Table) -> int:
    table.direction = table.direction.reversed()
    table.say("Direction reversed!")
    return table.next_index(table.current)


def _previous_draws(table: Table) -> int:
    previous = table.next_index(table.current, table.direction.reversed())
    result = table.draw_into(previous, NINE_DRAW)
    if result.drawn:
        table.say(f"{table.name(previous)} draws a card!")
    return table.next_index(table.current)


EFFECTS: Dict[str, Effect] = {
    WILD_RANK: _wildcard,
    "A": _skip,
    "Q": _reverse,
    "9": _previous_draws,
}


def resolve_effect(card: Card, table: Table) -> int:
    """Apply ``card``'s effect to ``table`` and return the next player's index."""
    return EFFECTS.get(card.rank, _advance)(table)
