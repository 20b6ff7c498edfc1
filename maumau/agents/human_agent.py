"""Human agent - reads actions from terminal."""

from maumau.engine import Action, PlayerView
from maumau.engine.rules import DeclareLastCard, DrawCard, PassTurn, PlayCard


def describe_action(action: Action) -> str:
    if isinstance(action, PlayCard):
        return f"PLAY {action.card}"
    if isinstance(action, DrawCard):
        return "DRAW"
    if isinstance(action, DeclareLastCard):
        return "DECLARE LAST CARD"
    if isinstance(action, PassTurn):
        return "PASS"
    return type(action).__name__


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

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

        print("\n--- Your turn ---")
        if player_view.history:
            print("Last:", player_view.history[-1])
        print("Your hand:", " ".join(str(c) for c in player_view.my_hand))
        print("Top discard:", player_view.top_discard)
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
