"""Ability-based immunities and what they do when they trigger."""

from pydantic import BaseModel

from pokearena.core.pokemon import BattlePokemon

# move type -> abilities that make the holder immune to it
ABILITY_IMMUNITIES: dict[str, list[str]] = {
    "ground": ["levitate"],
    "electric": ["volt-absorb", "lightning-rod", "motor-drive"],
    "water": ["water-absorb", "storm-drain", "dry-skin"],
    "fire": ["flash-fire", "well-baked-body"],
    "grass": ["sap-sipper"],
}

# Abilities that restore 25% max HP when they absorb a hit
HEALING_ABILITIES: dict[str, list[str]] = {
    "electric": ["volt-absorb"],
    "water": ["water-absorb", "dry-skin"],
}

# move type -> ability -> (stat, stages)
STAT_BOOST_ABILITIES: dict[str, dict[str, tuple[str, int]]] = {
    "electric": {
        "lightning-rod": ("special-attack", 1),
        "motor-drive": ("speed", 1),
    },
    "water": {
        "storm-drain": ("special-attack", 1),
    },
    "fire": {
        "well-baked-body": ("defense", 2),
    },
    "grass": {
        "sap-sipper": ("attack", 1),
    },
}

# Abilities that power up the holder's own moves of the absorbed type
TYPE_BOOST_ABILITIES: dict[str, list[str]] = {
    "fire": ["flash-fire"],
}

FLASH_FIRE_TYPE = "fire"
FLASH_FIRE_MULTIPLIER = 1.5
HEALING_FRACTION = 0.25


class AbilityEffect(BaseModel):
    """What a defender's ability does to an incoming move it is immune to."""

    ability_name: str
    healing: int = 0
    stat_boost: tuple[str, int] | None = None
    type_boost: str | None = None  # e.g. "fire" for Flash Fire


def resolve_ability(defender: BattlePokemon, move_type: str) -> AbilityEffect | None:
    """Return the immunity effect of the defender's ability against move_type.

    Abilities are checked in table order, first match wins. Abilities or
    types not in the tables give no effect.
    """
    move_type = move_type.lower()
    held = {a.lower() for a in defender.abilities}

    for ability in ABILITY_IMMUNITIES.get(move_type, []):
        if ability not in held:
            continue

        effect = AbilityEffect(ability_name=ability)
        if ability in HEALING_ABILITIES.get(move_type, []):
            effect.healing = int(defender.max_hp * HEALING_FRACTION)
        boost = STAT_BOOST_ABILITIES.get(move_type, {}).get(ability)
        if boost:
            effect.stat_boost = boost
        if ability in TYPE_BOOST_ABILITIES.get(move_type, []):
            effect.type_boost = move_type
        return effect

    return None


def format_ability_name(ability: str) -> str:
    """'volt-absorb' -> 'Volt Absorb'."""
    return ability.replace("-", " ").title()
