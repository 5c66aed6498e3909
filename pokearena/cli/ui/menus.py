"""Interactive menu components for the CLI."""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from pokearena.core.items import Inventory, Item
from pokearena.core.pokemon import BattlePokemon, BattleTeam
from pokearena.cli.ui.displays import display_bag, display_moves, display_team

console = Console()


def show_action_menu() -> str:
    """Display the battle action menu and get the player's choice."""
    console.print(Panel(
        """[bold]What will you do?[/bold]

[1] Fight
[2] Bag
[3] Pokemon
[4] Run""",
        box=box.ROUNDED
    ))

    return Prompt.ask("Select option", choices=["1", "2", "3", "4"], default="1")


def select_move(mon: BattlePokemon) -> Optional[int]:
    """Pick a move index, or None to go back."""
    display_moves(mon)
    return select_index(len(mon.moves), "Move (0 to go back)")


def select_item(inventory: Inventory) -> Optional[Item]:
    items = inventory.available
    if not items:
        console.print("[dim]Your bag is empty.[/dim]")
        return None
    display_bag(inventory)
    index = select_index(len(items), "Item (0 to go back)")
    return items[index] if index is not None else None


def select_pokemon(team: BattleTeam, prompt: str = "Pokemon (0 to go back)", allow_back: bool = True) -> Optional[int]:
    """Pick a roster index. Loops until a choice is made when allow_back is False."""
    display_team(team)
    while True:
        index = select_index(len(team.roster), prompt)
        if index is not None or allow_back:
            return index


def select_index(count: int, prompt: str = "Select") -> Optional[int]:
    """Ask for a number in 1..count; returns a zero-based index or None."""
    try:
        choice = IntPrompt.ask(prompt, default=1)
        if 1 <= choice <= count:
            return choice - 1
    except ValueError:
        pass
    return None


def confirm_action(message: str) -> bool:
    """Confirm an action with the user."""
    return Confirm.ask(message)
