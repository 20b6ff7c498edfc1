"""End-of-round scoring."""

from dataclasses import replace
from typing import Sequence, Tuple

from maumau.engine.card import Card
from maumau.engine.game_state import Player

WILDCARD_POINTS = 20
ACE_POINTS = 15
FACE_POINTS = 10


def card_points(card: Card) -> int:
    """Penalty value of a card left in hand."""
    if card.is_wild:
        return WILDCARD_POINTS
    if card.rank == "A":
        return ACE_POINTS
    if card.rank in ("J", "Q", "K"):
        return FACE_POINTS
    return int(card.rank)


def hand_points(hand: Sequence[Card]) -> int:
    return sum(card_points(c) for c in hand)


def calculate_scores(players: Sequence[Player], winner_id: str) -> Tuple[Player, ...]:
    """Subtract each loser's remaining hand value from their score.

    The winner keeps their score. A loser whose score drops to 0 or below is
    marked eliminated.
    """
    scored = []
    for player in players:
        if player.id == winner_id:
            scored.append(player)
            continue
        score = player.score - hand_points(player.hand)
        scored.append(replace(player, score=score, eliminated=score <= 0))
    return tuple(scored)
