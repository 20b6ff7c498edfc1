"""Simulate a match between random agents and print every move."""

import logging

from maumau.agents.random_agent import RandomAgent
from maumau.engine import GameSettings
from maumau.logging_config import setup_logging
from maumau.orchestration.game_runner import GameRunner


def main():
    setup_logging("DEBUG")
    agents = {
        "p1": RandomAgent("Bot1", seed=1),
        "p2": RandomAgent("Bot2", seed=2),
        "p3": RandomAgent("Bot3", seed=3, forgetful=True),
        "p4": RandomAgent("Bot4", seed=4),
    }
    settings = GameSettings(include_wildcards=True, auto_declare_last_card=False)

    runner = GameRunner(agents, settings=settings, seed=42)
    result = runner.run()

    log = logging.getLogger("simulate_game")
    log.info("Match finished! Winner: %s", result.winner)
    for i, r in enumerate(result.rounds, 1):
        log.info("Round %d: winner %s in %d turns, scores %s", i, r.winner, r.num_turns, r.scores)


if __name__ == "__main__":
    main()
