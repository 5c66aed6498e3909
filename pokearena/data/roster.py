"""Built-in offline roster: species data and curated movesets.

Lets a battle run without touching PokeAPI. Move data mirrors the PokeAPI
"move" resource (power, accuracy, PP, priority and the meta block).
"""

import random
from typing import NamedTuple

from pokearena.core.moves import (
    DamageClass,
    Move,
    MoveStatChange,
    StatusCondition,
    VolatileCondition,
)
from pokearena.core.pokemon import BattlePokemon, create_battle_pokemon
from pokearena.utils.config import config


class RosterError(ValueError):
    """Raised for unknown species or malformed species/move data."""


class RosterEntry(NamedTuple):
    pokedex_id: int
    name: str
    types: tuple[str, ...]
    base_stats: dict[str, int]
    abilities: tuple[str, ...]
    moves: tuple[str, ...]
    category: str


def _stats(hp: int, atk: int, defense: int, spa: int, spd: int, spe: int) -> dict[str, int]:
    return {
        "hp": hp,
        "attack": atk,
        "defense": defense,
        "special-attack": spa,
        "special-defense": spd,
        "speed": spe,
    }


def _drop(stat: str, change: int = -1) -> list[MoveStatChange]:
    return [MoveStatChange(stat=stat, change=change)]


PHYSICAL = DamageClass.PHYSICAL
SPECIAL = DamageClass.SPECIAL
STATUS = DamageClass.STATUS

# Keyword arguments for Move(), keyed by PokeAPI move name
MOVE_DATA: dict[str, dict] = {
    # Electric
    "thunderbolt": dict(id=85, type="electric", damage_class=SPECIAL, power=90, accuracy=100, pp=15,
                        ailment=StatusCondition.PARALYSIS, ailment_chance=10),
    "thunder-wave": dict(id=86, type="electric", damage_class=STATUS, accuracy=90, pp=20,
                         ailment=StatusCondition.PARALYSIS),
    # Normal
    "quick-attack": dict(id=98, type="normal", damage_class=PHYSICAL, power=40, accuracy=100, pp=30,
                         priority=1),
    "extreme-speed": dict(id=245, type="normal", damage_class=PHYSICAL, power=80, accuracy=100, pp=5,
                          priority=2),
    "body-slam": dict(id=34, type="normal", damage_class=PHYSICAL, power=85, accuracy=100, pp=15,
                      ailment=StatusCondition.PARALYSIS, ailment_chance=30),
    "double-edge": dict(id=38, type="normal", damage_class=PHYSICAL, power=120, accuracy=100, pp=15,
                        drain_percent=-33),
    "scary-face": dict(id=184, type="normal", damage_class=STATUS, accuracy=100, pp=10,
                       stat_changes=_drop("speed", -2)),
    "sing": dict(id=47, type="normal", damage_class=STATUS, accuracy=55, pp=15,
                 ailment=StatusCondition.SLEEP),
    "recover": dict(id=105, type="normal", damage_class=STATUS, pp=5, target="user",
                    healing_percent=50),
    "defense-curl": dict(id=111, type="normal", damage_class=STATUS, pp=40, target="user",
                         stat_changes=_drop("defense", 1)),
    "growth": dict(id=74, type="normal", damage_class=STATUS, pp=20, target="user",
                   stat_changes=[MoveStatChange(stat="attack", change=1),
                                 MoveStatChange(stat="special-attack", change=1)]),
    # Fire
    "flamethrower": dict(id=53, type="fire", damage_class=SPECIAL, power=90, accuracy=100, pp=15,
                         ailment=StatusCondition.BURN, ailment_chance=10),
    "flare-blitz": dict(id=394, type="fire", damage_class=PHYSICAL, power=120, accuracy=100, pp=15,
                        ailment=StatusCondition.BURN, ailment_chance=10, drain_percent=-33),
    "fire-punch": dict(id=7, type="fire", damage_class=PHYSICAL, power=75, accuracy=100, pp=15,
                       ailment=StatusCondition.BURN, ailment_chance=10),
    "will-o-wisp": dict(id=261, type="fire", damage_class=STATUS, accuracy=85, pp=15,
                        ailment=StatusCondition.BURN),
    # Water
    "surf": dict(id=57, type="water", damage_class=SPECIAL, power=90, accuracy=100, pp=15),
    "hydro-pump": dict(id=56, type="water", damage_class=SPECIAL, power=110, accuracy=80, pp=5),
    "withdraw": dict(id=110, type="water", damage_class=STATUS, pp=40, target="user",
                     stat_changes=_drop("defense", 1)),
    # Ice
    "ice-beam": dict(id=58, type="ice", damage_class=SPECIAL, power=90, accuracy=100, pp=10,
                     ailment=StatusCondition.FREEZE, ailment_chance=10),
    # Grass
    "giga-drain": dict(id=202, type="grass", damage_class=SPECIAL, power=75, accuracy=100, pp=10,
                       drain_percent=50),
    "sleep-powder": dict(id=79, type="grass", damage_class=STATUS, accuracy=75, pp=15,
                         ailment=StatusCondition.SLEEP),
    # Poison
    "sludge-bomb": dict(id=188, type="poison", damage_class=SPECIAL, power=90, accuracy=100, pp=10,
                        ailment=StatusCondition.POISON, ailment_chance=30),
    "toxic": dict(id=92, type="poison", damage_class=STATUS, accuracy=90, pp=10,
                  ailment=StatusCondition.BADLY_POISONED),
    # Flying
    "air-slash": dict(id=403, type="flying", damage_class=SPECIAL, power=75, accuracy=95, pp=15,
                      flinch_chance=30),
    # Dragon
    "dragon-claw": dict(id=337, type="dragon", damage_class=PHYSICAL, power=80, accuracy=100, pp=15),
    "dragon-dance": dict(id=349, type="dragon", damage_class=STATUS, pp=20, target="user",
                         stat_changes=[MoveStatChange(stat="attack", change=1),
                                       MoveStatChange(stat="speed", change=1)]),
    # Dark
    "bite": dict(id=44, type="dark", damage_class=PHYSICAL, power=60, accuracy=100, pp=25,
                 flinch_chance=30),
    "crunch": dict(id=242, type="dark", damage_class=PHYSICAL, power=80, accuracy=100, pp=15,
                   stat_changes=_drop("defense"), stat_chance=20),
    # Steel
    "iron-tail": dict(id=231, type="steel", damage_class=PHYSICAL, power=100, accuracy=75, pp=15,
                      stat_changes=_drop("defense"), stat_chance=30),
    # Ghost
    "shadow-ball": dict(id=247, type="ghost", damage_class=SPECIAL, power=80, accuracy=100, pp=15,
                        stat_changes=_drop("special-defense"), stat_chance=20),
    "confuse-ray": dict(id=109, type="ghost", damage_class=STATUS, accuracy=100, pp=10,
                        ailment=VolatileCondition.CONFUSION),
    # Psychic
    "psychic": dict(id=94, type="psychic", damage_class=SPECIAL, power=90, accuracy=100, pp=10,
                    stat_changes=_drop("special-defense"), stat_chance=10),
    "hypnosis": dict(id=95, type="psychic", damage_class=STATUS, accuracy=60, pp=20,
                     ailment=StatusCondition.SLEEP),
    "calm-mind": dict(id=347, type="psychic", damage_class=STATUS, pp=20, target="user",
                      stat_changes=[MoveStatChange(stat="special-attack", change=1),
                                    MoveStatChange(stat="special-defense", change=1)]),
    "amnesia": dict(id=133, type="psychic", damage_class=STATUS, pp=20, target="user",
                    stat_changes=_drop("special-defense", 2)),
    # Fighting
    "cross-chop": dict(id=238, type="fighting", damage_class=PHYSICAL, power=100, accuracy=80, pp=5),
    "close-combat": dict(id=370, type="fighting", damage_class=PHYSICAL, power=120, accuracy=100, pp=5,
                         stat_changes=[MoveStatChange(stat="defense", change=-1),
                                       MoveStatChange(stat="special-defense", change=-1)],
                         stat_chance=100),
    "bulk-up": dict(id=339, type="fighting", damage_class=STATUS, pp=20, target="user",
                    stat_changes=[MoveStatChange(stat="attack", change=1),
                                  MoveStatChange(stat="defense", change=1)]),
    # Ground / Rock
    "earthquake": dict(id=89, type="ground", damage_class=PHYSICAL, power=100, accuracy=100, pp=10),
    "rock-slide": dict(id=157, type="rock", damage_class=PHYSICAL, power=75, accuracy=90, pp=10,
                       flinch_chance=30),
}


ROSTER: list[RosterEntry] = [
    RosterEntry(3, "venusaur", ("grass", "poison"), _stats(80, 82, 83, 100, 100, 80),
                ("overgrow", "chlorophyll"),
                ("giga-drain", "sludge-bomb", "sleep-powder", "toxic"), "Grass/Poison"),
    RosterEntry(6, "charizard", ("fire", "flying"), _stats(78, 84, 78, 109, 85, 100),
                ("blaze", "solar-power"),
                ("flamethrower", "air-slash", "dragon-claw", "scary-face"), "Fire/Flying"),
    RosterEntry(9, "blastoise", ("water",), _stats(79, 83, 100, 85, 105, 78),
                ("torrent", "rain-dish"),
                ("surf", "ice-beam", "bite", "withdraw"), "Water"),
    RosterEntry(25, "pikachu", ("electric",), _stats(35, 55, 40, 50, 50, 90),
                ("static", "lightning-rod"),
                ("thunderbolt", "quick-attack", "iron-tail", "thunder-wave"), "Electric"),
    RosterEntry(59, "arcanine", ("fire",), _stats(90, 110, 80, 100, 80, 95),
                ("flash-fire", "intimidate"),
                ("flare-blitz", "extreme-speed", "crunch", "will-o-wisp"), "Fire"),
    RosterEntry(65, "alakazam", ("psychic",), _stats(55, 50, 45, 135, 95, 120),
                ("synchronize", "inner-focus"),
                ("psychic", "shadow-ball", "recover", "calm-mind"), "Psychic"),
    RosterEntry(68, "machamp", ("fighting",), _stats(90, 130, 80, 65, 85, 55),
                ("guts", "no-guard"),
                ("cross-chop", "close-combat", "rock-slide", "bulk-up"), "Fighting"),
    RosterEntry(76, "golem", ("rock", "ground"), _stats(80, 120, 130, 55, 65, 45),
                ("rock-head", "sturdy"),
                ("earthquake", "rock-slide", "double-edge", "defense-curl"), "Rock/Ground"),
    RosterEntry(94, "gengar", ("ghost", "poison"), _stats(60, 65, 60, 130, 75, 110),
                ("levitate",),
                ("shadow-ball", "sludge-bomb", "hypnosis", "confuse-ray"), "Ghost/Poison"),
    RosterEntry(131, "lapras", ("water", "ice"), _stats(130, 85, 80, 85, 95, 60),
                ("water-absorb", "shell-armor"),
                ("ice-beam", "hydro-pump", "body-slam", "sing"), "Water/Ice"),
    RosterEntry(143, "snorlax", ("normal",), _stats(160, 110, 65, 65, 110, 30),
                ("immunity", "thick-fat"),
                ("body-slam", "crunch", "earthquake", "amnesia"), "Normal"),
    RosterEntry(149, "dragonite", ("dragon", "flying"), _stats(91, 134, 95, 100, 100, 80),
                ("inner-focus", "multiscale"),
                ("dragon-claw", "extreme-speed", "fire-punch", "dragon-dance"), "Dragon"),
]


def build_move(name: str) -> Move:
    """A fresh Move (full PP) from the built-in move table."""
    data = MOVE_DATA.get(name)
    if data is None:
        raise RosterError(f"Unknown move: {name}")
    return Move(name=name, **data)


def get_entry(key: str | int) -> RosterEntry:
    """Look up a roster entry by name (case-insensitive) or Pokedex ID."""
    text = str(key).strip().lower()
    for entry in ROSTER:
        if text.isdigit() and entry.pokedex_id == int(text):
            return entry
        if entry.name == text:
            return entry
    raise RosterError(f"{key} is not in the roster")


def build_pokemon(key: str | int, level: int | None = None) -> BattlePokemon:
    """Create a battle-ready Pokemon from the roster."""
    entry = get_entry(key)
    return create_battle_pokemon(
        pokedex_id=entry.pokedex_id,
        name=entry.name,
        types=list(entry.types),
        base_stats=entry.base_stats,
        moves=[build_move(m) for m in entry.moves],
        abilities=list(entry.abilities),
        level=level or config.default_level,
    )


def build_team(keys: list[str | int], level: int | None = None) -> list[BattlePokemon]:
    if not keys:
        raise RosterError("A team needs at least one Pokemon")
    if len(keys) > config.max_team_size:
        raise RosterError(f"A team can have at most {config.max_team_size} Pokemon")
    return [build_pokemon(k, level) for k in keys]


def random_team(size: int = 3, rng=random, exclude: list[str] | None = None) -> list[BattlePokemon]:
    """Draw size distinct species, skipping names in exclude when possible."""
    pool = [e for e in ROSTER if e.name not in (exclude or [])]
    if len(pool) < size:
        pool = list(ROSTER)
    picks = rng.sample(pool, min(size, len(pool)))
    return [build_pokemon(e.name) for e in picks]
