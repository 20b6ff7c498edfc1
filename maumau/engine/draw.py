"""Drawing with discard-pile recycling."""

import random
from typing import List, NamedTuple, Optional, Sequence, Tuple

from maumau.engine.card import Card
from maumau.engine.deck import shuffle


class DrawResult(NamedTuple):
    """Outcome of a draw. ``drawn`` may be shorter than requested."""

    drawn: Tuple[Card, ...]
    deck: Tuple[Card, ...]
    discard_pile: Tuple[Card, ...]
    reshuffled: bool


def reshuffle_on_empty(
    deck: Sequence[Card],
    discard_pile: Sequence[Card],
    count: int,
    rng: Optional[random.Random] = None,
) -> DrawResult:
    """Draw up to ``count`` cards from the end of ``deck``.

    When the deck runs out, every discard except the active top card is
    shuffled into a new deck. Stops early once the deck is empty and the
    discard pile has a single card left.
    """
    draw_pile: List[Card] = list(deck)
    discard: List[Card] = list(discard_pile)
    drawn: List[Card] = []
    reshuffled = False

    for _ in range(count):
        if not draw_pile:
            if len(discard) <= 1:
                break
            top = discard.pop()
            draw_pile = shuffle(discard, rng)
            discard = [top]
            reshuffled = True
        drawn.append(draw_pile.pop())

    return DrawResult(tuple(drawn), tuple(draw_pile), tuple(discard), reshuffled)


def can_draw(deck: Sequence[Card], discard_pile: Sequence[Card]) -> bool:
    """True if at least one card could still be drawn."""
    return bool(deck) or len(discard_pile) > 1
