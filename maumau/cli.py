"""CLI entry point."""

from __future__ import annotations

from typing import Optional

import typer

from maumau.config import config
from maumau.engine import GameSettings
from maumau.logging_config import setup_logging

app = typer.Typer(help="Mau Mau with bot, LLM and human players")


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int],
) -> dict[str, "AgentProtocol"]:
    from maumau.agent.protocol import AgentProtocol
    from maumau.agents.human_agent import HumanAgent
    from maumau.agents.llm_agent import LLMAgent
    from maumau.agents.random_agent import RandomAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "llm":
            agents[pid] = LLMAgent(provider=llm_provider, model=model, timeout=config.LLM_TIMEOUT)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "random":
            agents[pid] = RandomAgent(name=f"Bot_{i}", seed=None if seed is None else seed + i)
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'random', 'llm' or 'human'.")
    if len(agents) < 2:
        raise typer.BadParameter("At least two agents are required.")
    return agents


def _settings(
    starting_score: Optional[int],
    wildcards: Optional[bool],
    bluffing: Optional[bool],
    last_card_rule: Optional[bool],
    auto_last_card: Optional[bool],
) -> GameSettings:
    defaults = config.game_settings()
    return GameSettings(
        starting_score=defaults.starting_score if starting_score is None else starting_score,
        include_wildcards=defaults.include_wildcards if wildcards is None else wildcards,
        enable_bluffing=defaults.enable_bluffing if bluffing is None else bluffing,
        enable_last_card_rule=defaults.enable_last_card_rule if last_card_rule is None else last_card_rule,
        auto_declare_last_card=defaults.auto_declare_last_card if auto_last_card is None else auto_last_card,
    )


AGENTS_HELP = "Comma-separated: random, human, llm, or llm:model_name (e.g. random,human,llm:gpt-4o)"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every move"),
) -> None:
    setup_logging("DEBUG" if verbose else config.LOG_LEVEL)


@app.command()
def play(
    agents: str = typer.Option("random,random,random,random", "--agents", "-a", help=AGENTS_HELP),
    llm_provider: str = typer.Option(
        config.LLM_PROVIDER,
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(config.LLM_MODEL, "--llm-model", "-m", help="Model name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    starting_score: Optional[int] = typer.Option(None, "--starting-score", help="Points each player starts with"),
    wildcards: Optional[bool] = typer.Option(None, "--wildcards/--no-wildcards", help="Add 4 jokers to the deck"),
    bluffing: Optional[bool] = typer.Option(None, "--bluffing/--no-bluffing", help="Allow any card on anything"),
    last_card_rule: Optional[bool] = typer.Option(
        None, "--last-card-rule/--no-last-card-rule", help="Penalize undeclared last cards"
    ),
    auto_last_card: Optional[bool] = typer.Option(
        None, "--auto-last-card/--manual-last-card", help="Declare last card automatically"
    ),
) -> None:
    """Run a single Mau Mau match."""
    from maumau.orchestration.game_runner import GameRunner

    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    settings = _settings(starting_score, wildcards, bluffing, last_card_rule, auto_last_card)
    runner = GameRunner(
        agent_map,
        settings=settings,
        seed=seed,
        max_turns=config.MAX_TURNS,
        max_rounds=config.MAX_ROUNDS,
    )
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None'}")
    typer.echo(f"Rounds: {result.num_rounds}")
    typer.echo("Standings:")
    for p in result.standings:
        typer.echo(f"  {p.id} ({p.name}): {p.score}")


@app.command()
def tournament(
    agents: str = typer.Option("random,random", "--agents", "-a", help=AGENTS_HELP),
    matches: int = typer.Option(100, "--matches", "-g", help="Number of matches"),
    llm_provider: str = typer.Option(
        config.LLM_PROVIDER,
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(config.LLM_MODEL, "--llm-model", "-m", help="Model name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    starting_score: Optional[int] = typer.Option(None, "--starting-score", help="Points each player starts with"),
    wildcards: Optional[bool] = typer.Option(None, "--wildcards/--no-wildcards", help="Add 4 jokers to the deck"),
    bluffing: Optional[bool] = typer.Option(None, "--bluffing/--no-bluffing", help="Allow any card on anything"),
    last_card_rule: Optional[bool] = typer.Option(
        None, "--last-card-rule/--no-last-card-rule", help="Penalize undeclared last cards"
    ),
    auto_last_card: Optional[bool] = typer.Option(
        None, "--auto-last-card/--manual-last-card", help="Declare last card automatically"
    ),
) -> None:
    """Run a tournament of full matches."""
    from maumau.orchestration.tournament import run_tournament

    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    settings = _settings(starting_score, wildcards, bluffing, last_card_rule, auto_last_card)
    wins = run_tournament(agent_map, num_matches=matches, settings=settings, seed=seed)
    typer.echo("Tournament results:")
    for pid in agent_map:
        typer.echo(f"  {pid}: {wins.get(pid, 0)} wins")


if __name__ == "__main__":
    app()
