"""Agent protocol - interface that bots and human players implement."""

from typing import Protocol

from maumau.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for Mau Mau-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            player_index: This agent's seat in the current round.

        Returns:
            One of the legal actions, or None to draw (when DrawCard is legal).
        """
        ...
