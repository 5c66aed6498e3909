"""Stat stage multipliers, clamping, and stat change narration."""

from typing import NamedTuple

MIN_STAGE = -6
MAX_STAGE = 6

# Stats that carry a stage in battle. HP never does.
BATTLE_STATS = ("attack", "defense", "special-attack", "special-defense", "speed")
STAGE_STATS = BATTLE_STATS + ("accuracy", "evasion")


class StatChangeResult(NamedTuple):
    """Outcome of applying a stage delta to one stat."""

    new_stages: dict[str, int]
    actual_change: int
    maxed_out: bool


def default_stat_stages() -> dict[str, int]:
    """Fresh stages for a new battle: every stat at 0."""
    return {stat: 0 for stat in STAGE_STATS}


def clamp_stage(stage: int) -> int:
    return max(MIN_STAGE, min(MAX_STAGE, stage))


def stat_multiplier(stage: int) -> float:
    """Multiplier for attack/defense/special/speed stages.

    +n -> (2 + n) / 2, -n -> 2 / (2 + n).
    """
    stage = clamp_stage(stage)
    if stage >= 0:
        return (2 + stage) / 2
    return 2 / (2 - stage)


def accuracy_multiplier(stage: int) -> float:
    """Multiplier for accuracy/evasion stages (shallower curve, thirds)."""
    stage = clamp_stage(stage)
    if stage >= 0:
        return (3 + stage) / 3
    return 3 / (3 - stage)


def effective_stat(base_stat: int, stage: int) -> int:
    """Stat value after its stage multiplier, floored."""
    return int(base_stat * stat_multiplier(stage))


def apply_stat_change(stages: dict[str, int], stat: str, change: int) -> StatChangeResult:
    """Apply a stage delta to one stat, clamped to [-6, +6].

    Returns a new stages dict (the input is not modified), the change that
    actually happened, and whether a non-zero request was fully absorbed by
    the clamp. Unknown stat names leave everything as it was.
    """
    new_stages = dict(stages)
    if stat not in STAGE_STATS:
        return StatChangeResult(new_stages, 0, False)

    current = stages.get(stat, 0)
    new_stage = clamp_stage(current + change)
    actual = new_stage - current
    new_stages[stat] = new_stage
    return StatChangeResult(new_stages, actual, actual == 0 and change != 0)


def format_stat_name(stat: str) -> str:
    """'special-attack' -> 'Special Attack'."""
    return " ".join(word.capitalize() for word in stat.split("-"))


def stat_change_message(pokemon_name: str, stat: str, change: int, maxed_out: bool) -> str:
    """Narration for a stat stage change.

    For a maxed-out change pass the requested delta, so the direction is known.
    """
    label = format_stat_name(stat)
    if maxed_out:
        if change > 0:
            return f"{pokemon_name}'s {label} won't go any higher!"
        return f"{pokemon_name}'s {label} won't go any lower!"

    size = abs(change)
    if size == 1:
        intensity = ""
    elif size == 2:
        intensity = " sharply"
    else:
        intensity = " drastically"

    verb = "rose" if change > 0 else "fell"
    return f"{pokemon_name}'s {label} {verb}{intensity}!"
