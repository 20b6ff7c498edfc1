"""Deck creation and shuffling."""

import random
from typing import List, Optional, Sequence

from maumau.engine.card import RANKS, STANDARD_SUITS, WILD_RANK, Card, Suit

DECKS_PER_BUILD = 2
WILDCARDS_PER_DECK = 2


def build_deck(include_wildcards: bool = False) -> List[Card]:
    """Create two standard 52-card decks combined, unshuffled.

    - 2 decks × 4 suits × 13 ranks: 104 cards
    - With wildcards, 2 jokers per deck: 108 cards

    Ids are "<suit>-<rank>-<deck index>", so they never collide.
    """
    cards: List[Card] = []

    for d in range(DECKS_PER_BUILD):
        for suit in STANDARD_SUITS:
            for rank in RANKS:
                cards.append(Card(id=f"{suit.value}-{rank}-{d}", suit=suit, rank=rank))

        if include_wildcards:
            cards.append(Card(id=f"joker-red-{d}", suit=Suit.JOKER, rank=WILD_RANK))
            cards.append(Card(id=f"joker-black-{d}", suit=Suit.JOKER, rank=WILD_RANK))

    return cards


def shuffle(cards: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards``; the input is untouched."""
    shuffled = list(cards)
    # random.shuffle is a Fisher-Yates shuffle
    (rng or random).shuffle(shuffled)
    return shuffled
