"""Rich display components for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokearena.core.battle import BattleState, Side
from pokearena.core.items import Inventory
from pokearena.core.moves import StatusCondition
from pokearena.core.pokemon import BattlePokemon, BattleTeam
from pokearena.data.roster import RosterEntry

console = Console()


TYPE_COLORS = {
    "normal": "white",
    "fire": "red",
    "water": "blue",
    "electric": "yellow",
    "grass": "green",
    "ice": "cyan",
    "fighting": "red",
    "poison": "magenta",
    "ground": "yellow",
    "flying": "cyan",
    "psychic": "magenta",
    "bug": "green",
    "rock": "yellow",
    "ghost": "magenta",
    "dragon": "blue",
    "dark": "white",
    "steel": "white",
    "fairy": "magenta",
}

STATUS_LABELS = {
    StatusCondition.PARALYSIS: ("PAR", "yellow"),
    StatusCondition.BURN: ("BRN", "red"),
    StatusCondition.POISON: ("PSN", "magenta"),
    StatusCondition.BADLY_POISONED: ("TOX", "magenta"),
    StatusCondition.SLEEP: ("SLP", "dim"),
    StatusCondition.FREEZE: ("FRZ", "cyan"),
}


def hp_bar(mon: BattlePokemon, width: int = 20) -> str:
    """Coloured HP bar markup, e.g. '[green]#####-----[/green] 50/100'."""
    filled = round(width * mon.current_hp / mon.max_hp) if mon.max_hp else 0
    if mon.hp_percent > 50:
        color = "green"
    elif mon.hp_percent > 20:
        color = "yellow"
    else:
        color = "red"
    bar = "#" * filled + "-" * (width - filled)
    return f"[{color}]{bar}[/{color}] {mon.current_hp}/{mon.max_hp}"


def status_label(mon: BattlePokemon) -> str:
    if mon.is_fainted:
        return "[red]FNT[/red]"
    label = STATUS_LABELS.get(mon.status)
    if not label:
        return ""
    text, color = label
    return f"[{color}]{text}[/{color}]"


def types_markup(types: list[str] | tuple[str, ...]) -> str:
    parts = []
    for t in types:
        color = TYPE_COLORS.get(t, "white")
        parts.append(f"[{color}]{t.capitalize()}[/{color}]")
    return "/".join(parts)


def display_roster(entries: list[RosterEntry]) -> None:
    """Display the built-in roster in a table."""
    table = Table(title="Roster", box=box.ROUNDED)
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", min_width=12)
    table.add_column("Type", width=16)
    table.add_column("HP/Atk/Def/SpA/SpD/Spe", width=24)
    table.add_column("Moves")

    for e in entries:
        s = e.base_stats
        stats = "/".join(
            str(s[k]) for k in ("hp", "attack", "defense", "special-attack", "special-defense", "speed")
        )
        table.add_row(
            f"{e.pokedex_id:03d}",
            e.name.capitalize(),
            types_markup(e.types),
            stats,
            ", ".join(m.replace("-", " ").title() for m in e.moves),
        )

    console.print(table)


def _combatant_panel(mon: BattlePokemon, title: str, border: str) -> Panel:
    content = f"""[bold]{mon.display_name}[/bold] [dim]Lv{mon.level}[/dim] {status_label(mon)}
{types_markup(mon.types)}
{hp_bar(mon)}"""
    return Panel(content, title=title, border_style=border, box=box.ROUNDED)


def display_battle_status(state: BattleState) -> None:
    """Both active Pokemon with HP bars."""
    cpu = state.active(Side.CPU)
    player = state.active(Side.PLAYER)
    console.print()
    if cpu:
        console.print(_combatant_panel(cpu, state.cpu.trainer_name or "Opponent", "red"))
    if player:
        console.print(_combatant_panel(player, state.player.trainer_name or "You", "cyan"))


def display_moves(mon: BattlePokemon) -> None:
    table = Table(title=f"{mon.display_name}'s moves", box=box.SIMPLE)
    table.add_column("", style="dim", width=3)
    table.add_column("Move", style="bold")
    table.add_column("Type")
    table.add_column("Pow", justify="right")
    table.add_column("Acc", justify="right")
    table.add_column("PP", justify="right")

    for i, m in enumerate(mon.moves, 1):
        color = TYPE_COLORS.get(m.type, "white")
        style = "" if m.has_pp else "dim"
        table.add_row(
            str(i),
            m.display_name,
            f"[{color}]{m.type.capitalize()}[/{color}]",
            str(m.power or "-"),
            str(m.accuracy or "-"),
            f"{m.current_pp}/{m.pp}",
            style=style,
        )

    console.print(table)


def display_team(team: BattleTeam, title: str = "Your Team") -> None:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("", style="dim", width=3)
    table.add_column("Pokemon", style="bold")
    table.add_column("HP", justify="right")
    table.add_column("Status")

    for i, p in enumerate(team.roster, 1):
        marker = ">>" if i - 1 == team.active_index else ""
        style = "red dim" if p.is_fainted else ""
        table.add_row(f"{marker}{i}", p.display_name, f"{p.current_hp}/{p.max_hp}", status_label(p), style=style)

    console.print(table)


def display_bag(inventory: Inventory) -> None:
    table = Table(title="Bag", box=box.SIMPLE)
    table.add_column("", style="dim", width=3)
    table.add_column("Item", style="bold")
    table.add_column("Qty", justify="right")
    table.add_column("Effect", style="dim")

    for i, item in enumerate(inventory.available, 1):
        table.add_row(str(i), item.name, str(item.quantity), item.description)

    console.print(table)


def display_battle_result(state: BattleState) -> None:
    if state.fled:
        console.print(Panel("You got away safely.", title="Battle Over", border_style="yellow"))
    elif state.winner == Side.PLAYER:
        console.print(Panel(f"[bold green]You won in {state.turn_number} turns![/bold green]",
                            title="Battle Over", border_style="green"))
    else:
        console.print(Panel(f"[bold red]You lost after {state.turn_number} turns.[/bold red]",
                            title="Battle Over", border_style="red"))
