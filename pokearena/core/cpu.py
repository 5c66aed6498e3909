"""CPU opponent policy: which move to use and when to switch."""

import logging
import random

from pokearena.core.moves import Move
from pokearena.core.pokemon import BattlePokemon, BattleTeam

logger = logging.getLogger(__name__)

STATUS_MOVE_CHANCE = 0.4
STRONGEST_MOVE_CHANCE = 0.5
SWITCH_HP_THRESHOLD = 40.0
SWITCH_CHANCE = 0.8


def select_cpu_move(cpu: BattlePokemon, rng=random) -> Move | None:
    """Pick the CPU's move, or None when every move is out of PP."""
    available = [m for m in cpu.moves if m.has_pp]
    if not available:
        return None

    status_moves = [m for m in available if m.is_status]
    damaging = [m for m in available if m.is_damaging]

    if status_moves and rng.random() < STATUS_MOVE_CHANCE:
        return rng.choice(status_moves)

    if not damaging:
        return rng.choice(available)

    if rng.random() < STRONGEST_MOVE_CHANCE:
        # max() keeps the first of equal-power moves
        return max(damaging, key=lambda m: m.power or 0)

    return rng.choice(damaging)


def should_cpu_switch(team: BattleTeam, rng=random) -> bool:
    """True when the active Pokemon is low and a healthy teammate is benched.

    Even then the switch only happens 80% of the time.
    """
    active = team.active_pokemon
    if active is None or active.hp_percent > SWITCH_HP_THRESHOLD:
        return False

    has_healthier = any(
        i != team.active_index and not p.is_fainted and p.hp_percent > SWITCH_HP_THRESHOLD
        for i, p in enumerate(team.roster)
    )
    if not has_healthier:
        return False

    decision = rng.random() < SWITCH_CHANCE
    logger.debug("CPU switch warranted for %s, switching=%s", active.name, decision)
    return decision


def select_cpu_switch_target(team: BattleTeam) -> int | None:
    """Index of the benched, non-fainted teammate with the highest HP %."""
    best_index = None
    best_percent = 0.0
    for i, p in enumerate(team.roster):
        if i == team.active_index or p.is_fainted:
            continue
        if best_index is None or p.hp_percent > best_percent:
            best_index = i
            best_percent = p.hp_percent
    return best_index
