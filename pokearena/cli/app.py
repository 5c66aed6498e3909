"""Main CLI application for PokeArena."""

import logging
import random
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pokearena import __version__
from pokearena.cli.playback import EventPlayer
from pokearena.cli.ui.displays import display_battle_result, display_battle_status, display_roster
from pokearena.cli.ui.menus import (
    confirm_action,
    select_item,
    select_move,
    select_pokemon,
    show_action_menu,
)
from pokearena.core.battle import BattleEngine, BattlePhase, TurnEvent, create_battle
from pokearena.core.items import Inventory
from pokearena.core.pokemon import BattlePokemon
from pokearena.data.roster import ROSTER, RosterError, build_team, get_entry, random_team
from pokearena.utils.config import config

# Create main app
app = typer.Typer(
    name="pokearena",
    help="PokeArena - turn-based Pokemon battles against a CPU trainer",
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_team(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _load_team(
    names: list[str],
    size: int,
    rng: random.Random,
    online: bool,
    exclude: Optional[list[str]] = None,
) -> list[BattlePokemon]:
    """Build a team from names (or at random), from PokeAPI when online."""
    if not online:
        return build_team(names) if names else random_team(size, rng, exclude)

    from pokearena.data.pokeapi import create_battle_pokemon_sync

    keys = names or [e.name for e in rng.sample(ROSTER, size)]
    team = []
    for key in keys:
        pokedex_id = int(key) if key.isdigit() else get_entry(key).pokedex_id
        mon = create_battle_pokemon_sync(pokedex_id, rng=rng)
        if mon is None:
            console.print(f"[yellow]Could not fetch {key} from PokeAPI, using built-in data.[/yellow]")
            mon = build_team([key])[0]
        team.append(mon)
    return team


def _setup_battle(
    team: Optional[str], cpu_team: Optional[str], size: int, seed: Optional[int], online: bool
) -> BattleEngine:
    rng = random.Random(seed)
    try:
        player = _load_team(_parse_team(team), size, rng, online)
        cpu = _load_team(_parse_team(cpu_team), size, rng, online, exclude=[p.name for p in player])
    except RosterError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    state = create_battle(player, cpu, player_name="You", cpu_name="CPU", inventory=Inventory())
    logger.debug("Battle %s: %s vs %s", state.battle_id,
                 [p.name for p in player], [p.name for p in cpu])
    return BattleEngine(state, rng)


def _next_player_events(engine: BattleEngine) -> Optional[list[TurnEvent]]:
    """Prompt for the player's next intent. None means they backed out of a menu."""
    state = engine.state

    if state.phase == BattlePhase.AWAITING_FORCED_SWITCH:
        index = select_pokemon(state.player, "Send out which Pokemon?", allow_back=False)
        return engine.switch(index)

    if state.phase == BattlePhase.AWAITING_SWITCH_PROMPT:
        if confirm_action("Will you change Pokemon?"):
            index = select_pokemon(state.player)
            if index is not None:
                return engine.switch(index)
        return engine.keep()

    choice = show_action_menu()
    if choice == "1":
        index = select_move(state.player.active_pokemon)
        return engine.use_move(index) if index is not None else None
    if choice == "2":
        item = select_item(state.inventory)
        if item is None:
            return None
        target = select_pokemon(state.player, "Use on which Pokemon? (0 to go back)")
        return engine.use_item(item, target) if target is not None else None
    if choice == "3":
        index = select_pokemon(state.player)
        return engine.switch(index) if index is not None else None
    return engine.run()


def _auto_events(engine: BattleEngine, rng: random.Random) -> list[TurnEvent]:
    """A random player policy for simulations."""
    state = engine.state
    switchable = [i for i in range(len(state.player.roster)) if state.player.can_switch_to(i)]

    if state.phase == BattlePhase.AWAITING_SWITCH_PROMPT:
        return engine.keep()
    if state.phase == BattlePhase.AWAITING_FORCED_SWITCH:
        return engine.switch(rng.choice(switchable))

    usable = [i for i, m in enumerate(state.player.active_pokemon.moves) if m.has_pp]
    if usable:
        return engine.use_move(rng.choice(usable))
    if switchable:
        return engine.switch(rng.choice(switchable))
    return engine.run()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(f"PokeArena v{__version__}")


@app.command("roster")
def show_roster() -> None:
    """List the built-in roster."""
    display_roster(ROSTER)


@app.command("battle")
def battle(
    team: Optional[str] = typer.Option(None, "--team", "-t", help="Comma-separated names or Pokedex IDs"),
    cpu_team: Optional[str] = typer.Option(None, "--cpu-team", "-c", help="CPU team, random if omitted"),
    size: int = typer.Option(3, "--size", "-n", min=1, max=6, help="Team size when picking at random"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible battle"),
    delay: Optional[float] = typer.Option(None, "--delay", "-d", help="Seconds between battle messages"),
    online: bool = typer.Option(False, "--online", help="Fetch species and movesets from PokeAPI"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging"),
) -> None:
    """Play a battle against the CPU."""
    _setup_logging(verbose)
    engine = _setup_battle(team, cpu_team, size, seed, online)
    state = engine.state
    player = EventPlayer(console, delay)

    player.play(engine.opening_events())
    while True:
        while not state.is_over:
            display_battle_status(state)
            events = _next_player_events(engine)
            if events is not None:
                player.play(events)

        display_battle_result(state)
        if not confirm_action("Rematch?"):
            break
        player.play(engine.reset())


@app.command("simulate")
def simulate(
    team: Optional[str] = typer.Option(None, "--team", "-t", help="Comma-separated names or Pokedex IDs"),
    cpu_team: Optional[str] = typer.Option(None, "--cpu-team", "-c", help="CPU team, random if omitted"),
    size: int = typer.Option(3, "--size", "-n", min=1, max=6, help="Team size when picking at random"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible battle"),
    max_turns: int = typer.Option(200, "--max-turns", min=1, help="Stop after this many player actions"),
    online: bool = typer.Option(False, "--online", help="Fetch species and movesets from PokeAPI"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging"),
) -> None:
    """Auto-play a battle with a random player policy and print the log."""
    _setup_logging(verbose)
    engine = _setup_battle(team, cpu_team, size, seed, online)
    state = engine.state
    policy_rng = random.Random(seed)
    player = EventPlayer(console, delay=0)

    player.play(engine.opening_events())
    for _ in range(max_turns):
        if state.is_over:
            break
        if state.phase == BattlePhase.IDLE:
            console.print(f"[dim]-- Turn {state.turn_number + 1} --[/dim]")
        player.play(_auto_events(engine, policy_rng))

    if state.is_over:
        display_battle_result(state)
        winner = "none" if state.fled else state.winner.value
        console.print(f"Winner: {winner}")
    else:
        console.print(f"Stopped after {max_turns} actions with no winner.")


if __name__ == "__main__":
    app()
