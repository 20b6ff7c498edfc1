"""Random agent - plays a random legal card, draws only when it must."""

import random
from typing import Optional

from maumau.engine import Action, PlayerView
from maumau.engine.rules import DeclareLastCard, PlayCard


class RandomAgent:
    """Agent that picks uniformly among playable cards.

    Always declares its last card when asked to, unless ``forgetful`` is set,
    in which case it never does and eats the penalty.
    """

    def __init__(self, name: str = "random", seed: Optional[int] = None, forgetful: bool = False):
        self._name = name
        self._rng = random.Random(seed)
        self._forgetful = forgetful

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        if not legal_actions:
            return None

        declares = [a for a in legal_actions if isinstance(a, DeclareLastCard)]
        if declares and not self._forgetful:
            return declares[0]

        # Prefer playing over drawing to make game progress
        plays = [a for a in legal_actions if isinstance(a, PlayCard)]
        if plays:
            return self._rng.choice(plays)
        return None
