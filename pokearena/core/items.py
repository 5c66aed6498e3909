"""Bag items usable in battle and the player's inventory."""

from enum import Enum

from pydantic import BaseModel, Field

from pokearena.core.moves import StatusCondition
from pokearena.core.pokemon import BattlePokemon


class ItemKind(str, Enum):
    """What an item does."""

    HEALING = "healing"
    REVIVE = "revive"
    PP_RESTORE = "pp_restore"
    STATUS_CURE = "status_cure"


class Item(BaseModel):
    """A bag item. `amount` is HP healed, PP restored, or % HP on revive."""

    id: str
    name: str
    description: str = ""
    kind: ItemKind
    amount: int = 0
    quantity: int = 1
    cures: list[StatusCondition] = Field(default_factory=list)


STARTER_ITEMS: list[Item] = [
    Item(id="potion", name="Potion", description="Restores 20 HP",
         kind=ItemKind.HEALING, amount=20, quantity=5),
    Item(id="super-potion", name="Super Potion", description="Restores 50 HP",
         kind=ItemKind.HEALING, amount=50, quantity=3),
    Item(id="hyper-potion", name="Hyper Potion", description="Restores 200 HP",
         kind=ItemKind.HEALING, amount=200, quantity=2),
    Item(id="max-potion", name="Max Potion", description="Fully restores HP",
         kind=ItemKind.HEALING, amount=1000, quantity=1),
    Item(id="revive", name="Revive", description="Revives with half HP",
         kind=ItemKind.REVIVE, amount=50, quantity=2),
    Item(id="max-revive", name="Max Revive", description="Revives with full HP",
         kind=ItemKind.REVIVE, amount=100, quantity=1),
    Item(id="ether", name="Ether", description="Restores 10 PP to each move",
         kind=ItemKind.PP_RESTORE, amount=10, quantity=2),
    Item(id="full-heal", name="Full Heal", description="Cures any status condition",
         kind=ItemKind.STATUS_CURE, quantity=2,
         cures=[s for s in StatusCondition if s != StatusCondition.NONE]),
]


def starter_items() -> list[Item]:
    """A fresh copy of the starting bag."""
    return [item.model_copy(deep=True) for item in STARTER_ITEMS]


def item_refusal(item: Item, target: BattlePokemon) -> str | None:
    """Why item would have no effect on target, or None if it can be used."""
    name = target.display_name

    if item.kind == ItemKind.HEALING:
        if target.is_fainted:
            return f"{item.name} can't be used on a fainted Pokemon."
        if target.current_hp >= target.max_hp:
            return f"{name}'s HP is already full!"
    elif item.kind == ItemKind.REVIVE:
        if not target.is_fainted:
            return f"{name} hasn't fainted!"
    elif item.kind == ItemKind.PP_RESTORE:
        if target.is_fainted:
            return f"{item.name} can't be used on a fainted Pokemon."
        if all((m.current_pp or 0) >= m.pp for m in target.moves):
            return f"{name}'s PP is already full!"
    elif item.kind == ItemKind.STATUS_CURE:
        if target.is_fainted or target.status not in item.cures:
            return "It won't have any effect."
    return None


def apply_item(item: Item, target: BattlePokemon) -> tuple[bool, str]:
    """Apply an item's effect to target.

    Returns (applied, message). When applied is False nothing changed and the
    message says why.
    """
    refusal = item_refusal(item, target)
    if refusal:
        return False, refusal

    name = target.display_name
    if item.kind == ItemKind.HEALING:
        healed = target.heal(item.amount)
        return True, f"{name} recovered {healed} HP!"
    if item.kind == ItemKind.REVIVE:
        target.revive(target.max_hp * item.amount // 100)
        return True, f"{name} was revived!"
    if item.kind == ItemKind.PP_RESTORE:
        for m in target.moves:
            m.restore_pp(item.amount)
        return True, f"{name}'s PP was restored!"
    target.cure_status()
    return True, f"{name} was cured of its status condition!"


class Inventory(BaseModel):
    """The player's bag for one battle session."""

    items: list[Item] = Field(default_factory=starter_items)

    def get(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @property
    def available(self) -> list[Item]:
        return [i for i in self.items if i.quantity > 0]

    def consume(self, item_id: str) -> bool:
        """Use up one of an item. False if none are left."""
        item = self.get(item_id)
        if item is None or item.quantity <= 0:
            return False
        item.quantity -= 1
        return True

    def reset(self) -> None:
        self.items = starter_items()
