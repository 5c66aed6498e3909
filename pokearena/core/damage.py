"""Damage, accuracy and speed calculations for a single attack."""

import random

from pydantic import BaseModel

from pokearena.core.abilities import (
    FLASH_FIRE_MULTIPLIER,
    FLASH_FIRE_TYPE,
    AbilityEffect,
    resolve_ability,
)
from pokearena.core.moves import DamageClass, Move, StatusCondition, get_type_effectiveness
from pokearena.core.pokemon import BattlePokemon
from pokearena.core.stages import accuracy_multiplier, clamp_stage

CRITICAL_HIT_CHANCE = 1 / 16
CRITICAL_HIT_MULTIPLIER = 1.5
STAB_MULTIPLIER = 1.5
RANDOM_FACTOR_MIN = 0.85
RANDOM_FACTOR_MAX = 1.0


class DamageResult(BaseModel):
    """Outcome of one attack before it is applied."""

    damage: int = 0
    effectiveness: float = 1.0
    is_critical: bool = False
    ability_effect: AbilityEffect | None = None


def calculate_damage(
    attacker: BattlePokemon,
    defender: BattlePokemon,
    move: Move,
    rng=random,
) -> DamageResult:
    """Calculate damage using the Gen V+ formula.

    Formula:
        base = (((2 * level / 5 + 2) * power * A / D) / 50) + 2
        damage = floor(base * STAB * type * crit * random(0.85..1.0) * flash_fire)

    There is no minimum of 1: extreme stat ratios can floor to 0.
    """
    if move.damage_class == DamageClass.STATUS or not move.power:
        return DamageResult()

    # Ability immunity short-circuits everything else
    ability_effect = resolve_ability(defender, move.type)
    if ability_effect:
        return DamageResult(effectiveness=0.0, ability_effect=ability_effect)

    if move.damage_class == DamageClass.PHYSICAL:
        attack_stat: float = attacker.stat("attack")
        defense_stat = defender.stat("defense")
        # Burn halves physical attack, after the stage multiplier
        if attacker.status == StatusCondition.BURN:
            attack_stat = attack_stat / 2
    else:
        attack_stat = attacker.stat("special-attack")
        defense_stat = defender.stat("special-defense")
    defense_stat = max(1, defense_stat)

    effectiveness = get_type_effectiveness(move.type, defender.types)
    if effectiveness == 0:
        return DamageResult(effectiveness=0.0)

    stab = STAB_MULTIPLIER if attacker.has_type(move.type) else 1.0

    is_crit = rng.random() < CRITICAL_HIT_CHANCE
    crit_mult = CRITICAL_HIT_MULTIPLIER if is_crit else 1.0

    rand_factor = rng.uniform(RANDOM_FACTOR_MIN, RANDOM_FACTOR_MAX)

    flash_fire = 1.0
    if attacker.flash_fire_active and move.type.lower() == FLASH_FIRE_TYPE:
        flash_fire = FLASH_FIRE_MULTIPLIER

    base = (((2 * attacker.level / 5 + 2) * move.power * attack_stat / defense_stat) / 50) + 2
    damage = int(base * stab * effectiveness * crit_mult * rand_factor * flash_fire)

    return DamageResult(damage=damage, effectiveness=effectiveness, is_critical=is_crit)


def check_accuracy(
    move: Move,
    attacker: BattlePokemon | None = None,
    defender: BattlePokemon | None = None,
    rng=random,
) -> bool:
    """Roll whether a move hits.

    Moves with accuracy None never miss. Otherwise the accuracy is scaled by
    the attacker's accuracy stage minus the defender's evasion stage and
    compared against a roll in [0, 100).
    """
    if move.accuracy is None:
        return True

    stage = 0
    if attacker is not None:
        stage += attacker.stat_stages.get("accuracy", 0)
    if defender is not None:
        stage -= defender.stat_stages.get("evasion", 0)
    threshold = move.accuracy * accuracy_multiplier(clamp_stage(stage))
    return rng.random() * 100 < threshold


def effective_speed(mon: BattlePokemon) -> int:
    """Speed for turn order: stage-adjusted, halved when paralyzed."""
    speed = mon.stat("speed")
    if mon.status == StatusCondition.PARALYSIS:
        speed = speed // 2
    return speed
