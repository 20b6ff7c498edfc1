"""LLM agent using OpenAI library with OpenRouter, Groq or a local Ollama."""

import json
import logging
import os
import re
import time
from typing import Optional

from openai import OpenAI

from maumau.agents.human_agent import describe_action
from maumau.engine import Action, PlayerView
from maumau.engine.game_state import Direction
from maumau.engine.rules import DrawCard, PassTurn

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"

MAX_ATTEMPTS = 3

RULES_SUMMARY = """Match the top discard card by suit or rank. Jokers can be played on anything
and anything can be played on a joker.
Special cards: Joker = next player draws 5 and is skipped; A = next player is skipped;
Q = direction reverses; 9 = the previous player draws 1 card.
When you are down to one card you must declare it before playing it, or you draw 2 penalty cards.
Cards left in hand when someone goes out cost points: numbers face value, J/Q/K 10, A 15, Joker 20."""


def _format_player_view(pv: PlayerView) -> str:
    """Format player view as text for the LLM."""
    me = pv.player_index
    lines = [
        "=== Your hand ===",
        " ".join(str(c) for c in pv.my_hand),
        "",
        "=== Top card on discard ===",
        str(pv.top_discard) if pv.top_discard else "None",
        "",
        "=== Other players ===",
    ]
    for i, (pid, count) in enumerate(pv.num_cards_per_player.items()):
        if i != me:
            lines.append(f"  {pv.names[i]}: {count} cards, {pv.scores[pid]} points")
    lines.extend([
        "",
        "=== Direction ===",
        "clockwise" if pv.direction == Direction.CLOCKWISE else "counter-clockwise",
        "",
        "=== Cards left in deck ===",
        str(pv.deck_size),
        "",
        "=== Game History (last 10 events) ===",
    ])
    if pv.history:
        lines.extend(f"- {h}" for h in pv.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _format_legal_actions(actions: list[Action]) -> str:
    """Format legal actions as text."""
    return "\n".join(f"{i}: {describe_action(a)}" for i, a in enumerate(actions))


def _pick(idx: int, actions: list[Action]) -> Action | None:
    if 0 <= idx < len(actions):
        return actions[idx]
    logger.debug("Index %d out of range (0-%d)", idx, len(actions) - 1)
    return None


def _parse_action_response(response: str, actions: list[Action]) -> Action | None:
    """Parse LLM response into an Action."""
    # 1. A JSON object, allowing single quotes
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                return _pick(data["action_index"], actions)

    # 2. "action_index": N with any quoting
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        action = _pick(int(match.group(1)), actions)
        if action is not None:
            return action

    # 3. Look for "DRAW" or "PASS" literally
    upper = response.upper()
    for keyword, kind in (("DRAW", DrawCard), ("PASS", PassTurn)):
        if keyword in upper:
            for a in actions:
                if isinstance(a, kind):
                    return a

    # 4. Last resort: a standalone number
    cleaned_response = re.sub(r"[{}\[\]\"'.,:]", " ", response)
    for word in cleaned_response.split():
        if word.isdigit():
            action = _pick(int(word), actions)
            if action is not None:
                return action

    return None


class LLMAgent:
    """Agent that uses an LLM to choose actions."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._request_history: list[float] = []

        logger.info(
            "[%s] provider=%s base_url=%s timeout=%ss rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            # Wait until the oldest request in the window expires
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info("[%s] Rate limit reached, waiting %.2fs", self.name, wait_time)
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _build_prompt(self, player_view: PlayerView, legal_actions: list[Action]) -> str:
        return f"""You are playing Mau Mau.
Objective: get rid of all your cards before the other players.
{RULES_SUMMARY}

{_format_player_view(player_view)}

=== Legal actions ===
{_format_legal_actions(legal_actions)}

INSTRUCTIONS:
Select the best action to win the round.
Respond with a JSON object containing the index of your chosen action.
Example: {{"action_index": 2}}
"""

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        if not legal_actions:
            return None

        prompt = self._build_prompt(player_view, legal_actions)
        kwargs = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "timeout": self._timeout,
        }
        # Only request JSON mode where the provider is known to support it
        if "gpt-4" in self._model or "gpt-3.5" in self._model or self._provider == "groq":
            kwargs["response_format"] = {"type": "json_object"}

        for attempt in range(1, MAX_ATTEMPTS + 1):
            self._wait_for_rate_limit()
            start_time = time.time()
            try:
                resp = self._client.chat.completions.create(**kwargs)
            except Exception as e:
                logger.warning(
                    "[%s] Attempt %d failed after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )
                continue

            content = resp.choices[0].message.content or ""
            logger.debug("[%s] Response in %.2fs: %s", self.name, time.time() - start_time, content)
            action = _parse_action_response(content, legal_actions)
            if action is not None:
                return action
            logger.warning("[%s] Could not parse an action from: %r", self.name, content)

        logger.warning("[%s] All retries failed, drawing instead", self.name)
        return None
