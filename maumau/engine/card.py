"""Card and Suit types for Mau Mau."""

from dataclasses import dataclass
from enum import Enum


class Suit(str, Enum):
    """Card suits. JOKER is only used by wildcards."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"
    JOKER = "joker"


STANDARD_SUITS = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)

RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
WILD_RANK = "joker"

_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


@dataclass(frozen=True)
class Card:
    """A playing card.

    Standard cards have one of the four standard suits and a rank "2"-"A".
    Wildcards have suit=JOKER and rank="joker".
    """

    id: str
    suit: Suit
    rank: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS and self.rank != WILD_RANK:
            raise ValueError(f"Invalid card rank: {self.rank}")
        if (self.rank == WILD_RANK) != (self.suit == Suit.JOKER):
            raise ValueError("Wildcards must have suit=joker and rank=joker")

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK

    @property
    def is_red(self) -> bool:
        return self.suit in (Suit.HEARTS, Suit.DIAMONDS)

    def __str__(self) -> str:
        if self.is_wild:
            return "JOKER"
        return f"{self.rank}{_SUIT_SYMBOLS[self.suit]}"
