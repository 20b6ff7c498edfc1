"""Game state for Mau Mau."""

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from maumau.engine.card import Card

DEFAULT_STARTING_SCORE = 100


class Direction(IntEnum):
    """Seat traversal order; the value is the seat step."""

    CLOCKWISE = 1
    COUNTERCLOCKWISE = -1

    def reversed(self) -> "Direction":
        return Direction(-self.value)


@dataclass(frozen=True)
class GameSettings:
    """Rule options fixed for a whole match."""

    starting_score: int = DEFAULT_STARTING_SCORE
    include_wildcards: bool = False
    enable_bluffing: bool = False  # any card may be played on anything
    enable_last_card_rule: bool = True
    auto_declare_last_card: bool = True  # declare on the player's behalf, never penalize


@dataclass(frozen=True)
class Player:
    """A seated player. Hands keep insertion order for display."""

    id: str
    name: str
    hand: Tuple[Card, ...] = ()
    score: int = DEFAULT_STARTING_SCORE
    declared_last_card: bool = False
    eliminated: bool = False

    @property
    def card_count(self) -> int:
        return len(self.hand)

    def has_card(self, card: Card) -> bool:
        return any(c.id == card.id for c in self.hand)


@dataclass(frozen=True)
class GameState:
    """Immutable Mau Mau round state.

    ``deck`` is drawn from the end; the last card of ``discard_pile`` is the
    active card. ``drawn_playable`` is the index of a player who just drew a
    playable card and may now pass.
    """

    players: Tuple[Player, ...] = ()
    current_player_index: int = 0
    deck: Tuple[Card, ...] = ()
    discard_pile: Tuple[Card, ...] = ()
    direction: Direction = Direction.CLOCKWISE
    game_started: bool = False
    game_ended: bool = False
    winner: Optional[str] = None
    last_action: str = ""
    settings: GameSettings = field(default_factory=GameSettings)
    drawn_playable: Optional[int] = None
    history: Tuple[str, ...] = ()

    @property
    def in_progress(self) -> bool:
        return self.game_started and not self.game_ended

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def top_discard(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None

    def next_index(self, from_index: int, direction: Optional[Direction] = None) -> int:
        """Seat one step away from ``from_index`` in ``direction`` (default: current)."""
        step = direction if direction is not None else self.direction
        return (from_index + step) % len(self.players)

    def total_cards(self) -> int:
        """Cards across every hand, the deck and the discard pile."""
        return sum(p.card_count for p in self.players) + len(self.deck) + len(self.discard_pile)

    def with_message(self, message: str) -> "GameState":
        return replace(self, last_action=message, history=self.history + (message,))


@dataclass
class PlayerView:
    """Filtered game state visible to a single player.

    Contains only that player's hand and public info.
    """

    player_index: int
    my_hand: List[Card]
    top_discard: Optional[Card]
    current_player_index: int
    direction: Direction
    deck_size: int
    names: List[str]
    num_cards_per_player: Dict[str, int]  # player_id -> count
    scores: Dict[str, int]
    declared_last_card: Dict[str, bool]
    settings: GameSettings
    history: List[str]  # Recent game events

    @classmethod
    def from_state(cls, state: GameState, player_index: int) -> "PlayerView":
        """Create a player view from full game state, hiding other players' hands."""
        return cls(
            player_index=player_index,
            my_hand=list(state.players[player_index].hand),
            top_discard=state.top_discard(),
            current_player_index=state.current_player_index,
            direction=state.direction,
            deck_size=len(state.deck),
            names=[p.name for p in state.players],
            num_cards_per_player={p.id: p.card_count for p in state.players},
            scores={p.id: p.score for p in state.players},
            declared_last_card={p.id: p.declared_last_card for p in state.players},
            settings=state.settings,
            history=list(state.history[-10:]),  # Last 10 events
        )
