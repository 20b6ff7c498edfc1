"""Built-in agents."""

from maumau.agents.llm_agent import LLMAgent
from maumau.agents.human_agent import HumanAgent
from maumau.agents.random_agent import RandomAgent

__all__ = ["LLMAgent", "HumanAgent", "RandomAgent"]
