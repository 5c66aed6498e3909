"""Status and volatile condition rules.

Everything here is a pure classification over a BattlePokemon: whether it
can act, whether it is immune to a status, how much a status hurts at the
end of a turn. Applying the outcome is left to the turn resolver.
"""

import random
from enum import Enum
from typing import NamedTuple

from pokearena.core.moves import StatusCondition, VolatileCondition
from pokearena.core.pokemon import BattlePokemon

PARALYSIS_CHANCE = 0.25
FREEZE_HOLD_CHANCE = 0.8
CONFUSION_SELF_HIT_CHANCE = 0.33
CONFUSION_SELF_HIT_POWER = 40

# type -> statuses that type can never receive
STATUS_IMMUNE_TYPES: dict[str, set[StatusCondition]] = {
    "fire": {StatusCondition.BURN},
    "electric": {StatusCondition.PARALYSIS},
    "poison": {StatusCondition.POISON, StatusCondition.BADLY_POISONED},
    "steel": {StatusCondition.POISON, StatusCondition.BADLY_POISONED},
    "ice": {StatusCondition.FREEZE},
}

_STATUS_VERB = {
    StatusCondition.PARALYSIS: "paralyzed! It may be unable to move",
    StatusCondition.BURN: "burned",
    StatusCondition.POISON: "poisoned",
    StatusCondition.BADLY_POISONED: "badly poisoned",
    StatusCondition.SLEEP: "fell asleep",
    StatusCondition.FREEZE: "frozen solid",
}


class BlockReason(str, Enum):
    """Why a Pokemon could not execute its move this turn."""

    NONE = "none"
    PARALYSIS = "paralysis"
    SLEEP = "sleep"
    FREEZE = "freeze"
    CONFUSION = "confusion"
    FLINCH = "flinch"


class ActionCheck(NamedTuple):
    """Result of can_act().

    woke_up / thawed mark a status that ends as the Pokemon tries to move;
    the caller clears the status and narrates it.
    """

    reason: BlockReason
    woke_up: bool = False
    thawed: bool = False

    @property
    def allowed(self) -> bool:
        return self.reason == BlockReason.NONE


def can_act(mon: BattlePokemon, rng=random) -> ActionCheck:
    """Decide whether mon may use its move right now.

    Precedence is paralysis, sleep, freeze, confusion, flinch; the first
    blocking reason wins. Sleep turns are not decremented here.
    """
    woke_up = False
    thawed = False

    if mon.status == StatusCondition.PARALYSIS and rng.random() < PARALYSIS_CHANCE:
        return ActionCheck(BlockReason.PARALYSIS)

    if mon.status == StatusCondition.SLEEP:
        if mon.status_turns > 0:
            return ActionCheck(BlockReason.SLEEP)
        woke_up = True

    if mon.status == StatusCondition.FREEZE:
        if rng.random() < FREEZE_HOLD_CHANCE:
            return ActionCheck(BlockReason.FREEZE)
        thawed = True

    if (
        mon.has_volatile(VolatileCondition.CONFUSION)
        and mon.confusion_turns > 0
        and rng.random() < CONFUSION_SELF_HIT_CHANCE
    ):
        return ActionCheck(BlockReason.CONFUSION, woke_up, thawed)

    if mon.has_volatile(VolatileCondition.FLINCH):
        return ActionCheck(BlockReason.FLINCH, woke_up, thawed)

    return ActionCheck(BlockReason.NONE, woke_up, thawed)


def block_message(reason: BlockReason, pokemon_name: str) -> str:
    """Narration for a blocked action."""
    messages = {
        BlockReason.PARALYSIS: f"{pokemon_name} is paralyzed! It can't move!",
        BlockReason.SLEEP: f"{pokemon_name} is fast asleep.",
        BlockReason.FREEZE: f"{pokemon_name} is frozen solid!",
        BlockReason.CONFUSION: f"{pokemon_name} is confused! It hurt itself in its confusion!",
        BlockReason.FLINCH: f"{pokemon_name} flinched and couldn't move!",
    }
    return messages.get(reason, "")


def is_immune_to_status(mon: BattlePokemon, status: StatusCondition) -> bool:
    """True if mon already has a status or its types rule this one out."""
    if mon.status != StatusCondition.NONE:
        return True
    return any(status in STATUS_IMMUNE_TYPES.get(t.lower(), set()) for t in mon.types)


def is_immune_to_volatile(mon: BattlePokemon, condition: VolatileCondition) -> bool:
    return mon.has_volatile(condition)


def end_of_turn_status_damage(mon: BattlePokemon) -> int:
    """HP lost to burn or poison this end-of-turn (0 for other statuses)."""
    if mon.status in (StatusCondition.BURN, StatusCondition.POISON):
        return mon.max_hp // 16
    if mon.status == StatusCondition.BADLY_POISONED:
        return mon.max_hp * max(1, mon.status_turns) // 16
    return 0


def initial_status_turns(status: StatusCondition, rng=random) -> int:
    """Counter value a freshly inflicted status starts with."""
    if status == StatusCondition.SLEEP:
        return roll_sleep_turns(rng)
    if status == StatusCondition.BADLY_POISONED:
        return 1
    return 0


def roll_sleep_turns(rng=random) -> int:
    return rng.randint(1, 3)


def roll_confusion_turns(rng=random) -> int:
    return rng.randint(1, 4)


def confusion_self_damage(mon: BattlePokemon) -> int:
    """Damage of hitting itself in confusion: typeless 40-power physical hit
    using its own attack and defense, no STAB, crit, or random factor."""
    attack = mon.stat("attack")
    defense = max(1, mon.stat("defense"))
    base = (((2 * mon.level / 5 + 2) * CONFUSION_SELF_HIT_POWER * attack / defense) / 50) + 2
    return int(base)


def status_inflicted_message(pokemon_name: str, status: StatusCondition) -> str:
    verb = _STATUS_VERB.get(status, "afflicted")
    if status == StatusCondition.SLEEP:
        return f"{pokemon_name} {verb}!"
    return f"{pokemon_name} was {verb}!"


def end_of_turn_status_message(pokemon_name: str, status: StatusCondition) -> str:
    if status == StatusCondition.BURN:
        return f"{pokemon_name} was hurt by its burn!"
    if status == StatusCondition.BADLY_POISONED:
        return f"{pokemon_name} was badly hurt by poison!"
    return f"{pokemon_name} was hurt by poison!"
