"""Tournament - run many matches and aggregate results."""

import logging
import random
from collections import defaultdict
from typing import Any, Optional

from maumau.engine import GameSettings
from maumau.orchestration.game_runner import GameRunner

logger = logging.getLogger(__name__)


def run_tournament(
    agents: dict[str, Any],
    num_matches: int = 100,
    settings: Optional[GameSettings] = None,
    seed: int | None = None,
) -> dict[str, int]:
    """Run ``num_matches`` full matches between the same agents.

    Seating rotates by one seat every match so nobody always leads.

    Returns:
        Dict mapping player_id to number of match wins.
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for m in range(num_matches):
        shift = m % len(player_ids)
        order = player_ids[shift:] + player_ids[:shift]
        ordered_agents = {pid: agents[pid] for pid in order}
        runner = GameRunner(ordered_agents, settings=settings, seed=rng.randint(0, 2**31 - 1))
        result = runner.run()
        logger.info("Match %d: winner %s after %d rounds", m + 1, result.winner, result.num_rounds)
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
