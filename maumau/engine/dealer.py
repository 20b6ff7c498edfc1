"""Dealing hands and seeding the discard pile."""

from dataclasses import replace
from typing import List, Sequence, Tuple

from maumau.engine.card import Card
from maumau.engine.game_state import Player

INITIAL_HAND_SIZE = 7


def deal(
    players: Sequence[Player],
    deck: Sequence[Card],
    hand_size: int = INITIAL_HAND_SIZE,
) -> Tuple[List[Player], List[Card]]:
    """Deal ``hand_size`` cards round-robin from the end of ``deck``.

    Deals what is available when the deck runs short. Returns the updated
    players and the remaining deck; the inputs are not modified.
    """
    hands = [list(p.hand) for p in players]
    remaining = list(deck)
    for _ in range(hand_size):
        for hand in hands:
            if remaining:
                hand.append(remaining.pop())
    dealt = [replace(p, hand=tuple(hand)) for p, hand in zip(players, hands)]
    return dealt, remaining


def seed_discard(deck: Sequence[Card]) -> Tuple[List[Card], List[Card]]:
    """Turn the top card of ``deck`` face up. Returns (deck, discard_pile)."""
    remaining = list(deck)
    if not remaining:
        raise ValueError("Cannot seed the discard pile from an empty deck")
    return remaining, [remaining.pop()]
