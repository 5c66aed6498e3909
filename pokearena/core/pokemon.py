"""Battle combatant and team models."""

from pydantic import BaseModel, Field

from pokearena.core.moves import Move, StatusCondition, VolatileCondition
from pokearena.core.stages import (
    StatChangeResult,
    apply_stat_change,
    default_stat_stages,
    effective_stat,
)

# Fallbacks when a base stat is missing from the source data.
DEFAULT_BASE_STAT = 100
DEFAULT_BASE_SPEED = 50


class BattlePokemon(BaseModel):
    """A Pokemon prepared for battle with runtime HP, PP, status and stage tracking.

    Max HP is derived once when the Pokemon is created and stays fixed for
    the battle. Attack, defense and speed come straight from the base stats.
    """

    # Identity
    pokedex_id: int
    name: str
    nickname: str | None = None
    types: list[str] = Field(min_length=1, max_length=2)
    base_stats: dict[str, int] = Field(default_factory=dict)
    abilities: list[str] = Field(default_factory=list)

    # HP and level
    level: int = 50
    max_hp: int
    current_hp: int

    # Moves (up to 4)
    moves: list[Move] = Field(default_factory=list, max_length=4)

    # Non-volatile status; status_turns is sleep turns left or the toxic multiplier
    status: StatusCondition = StatusCondition.NONE
    status_turns: int = 0

    # Volatile conditions
    volatile_conditions: set[VolatileCondition] = Field(default_factory=set)
    confusion_turns: int = 0

    # Stages, -6..+6
    stat_stages: dict[str, int] = Field(default_factory=default_stat_stages)

    # Set by Flash Fire; boosts the holder's own Fire moves
    flash_fire_active: bool = False

    @property
    def display_name(self) -> str:
        return self.nickname or self.name.capitalize()

    @property
    def is_fainted(self) -> bool:
        return self.current_hp <= 0

    @property
    def hp_percent(self) -> float:
        if self.max_hp == 0:
            return 0.0
        return (self.current_hp / self.max_hp) * 100

    @property
    def has_usable_moves(self) -> bool:
        return any(m.has_pp for m in self.moves)

    def base_stat(self, stat: str) -> int:
        default = DEFAULT_BASE_SPEED if stat == "speed" else DEFAULT_BASE_STAT
        return self.base_stats.get(stat, default)

    def stat(self, stat: str) -> int:
        """Base stat after its stage multiplier."""
        return effective_stat(self.base_stat(stat), self.stat_stages.get(stat, 0))

    def has_type(self, type_name: str) -> bool:
        return type_name.lower() in (t.lower() for t in self.types)

    def has_volatile(self, condition: VolatileCondition) -> bool:
        return condition in self.volatile_conditions

    # -- documented mutations ------------------------------------------------

    def take_damage(self, amount: int) -> int:
        """Apply damage, return actual amount dealt. HP never goes below 0."""
        actual = max(0, min(amount, self.current_hp))
        self.current_hp -= actual
        return actual

    def heal(self, amount: int) -> int:
        """Heal HP, return actual amount healed. Fainted Pokemon cannot be healed."""
        if self.is_fainted:
            return 0
        actual = max(0, min(amount, self.max_hp - self.current_hp))
        self.current_hp += actual
        return actual

    def revive(self, hp: int) -> int:
        """Bring a fainted Pokemon back with the given HP. Returns HP restored."""
        if not self.is_fainted:
            return 0
        self.current_hp = max(1, min(hp, self.max_hp))
        self.status = StatusCondition.NONE
        self.status_turns = 0
        return self.current_hp

    def apply_status(self, status: StatusCondition, turns: int = 0) -> None:
        """Set the non-volatile status and its counter."""
        self.status = status
        self.status_turns = turns

    def cure_status(self) -> None:
        self.status = StatusCondition.NONE
        self.status_turns = 0

    def add_volatile(self, condition: VolatileCondition, turns: int = 0) -> None:
        self.volatile_conditions.add(condition)
        if condition == VolatileCondition.CONFUSION:
            self.confusion_turns = turns

    def remove_volatile(self, condition: VolatileCondition) -> None:
        self.volatile_conditions.discard(condition)
        if condition == VolatileCondition.CONFUSION:
            self.confusion_turns = 0

    def change_stat(self, stat: str, change: int) -> StatChangeResult:
        """Apply a stage change and store the new stages."""
        result = apply_stat_change(self.stat_stages, stat, change)
        self.stat_stages = result.new_stages
        return result

    def reset_for_battle(self) -> None:
        """Restore everything a fresh battle starts with."""
        self.current_hp = self.max_hp
        self.cure_status()
        self.volatile_conditions = set()
        self.confusion_turns = 0
        self.stat_stages = default_stat_stages()
        self.flash_fire_active = False
        for move in self.moves:
            move.restore_pp()


class BattleTeam(BaseModel):
    """One side's roster plus a pointer at the Pokemon currently out."""

    trainer_name: str = ""
    roster: list[BattlePokemon] = Field(default_factory=list, max_length=6)
    active_index: int = 0

    @property
    def active_pokemon(self) -> BattlePokemon | None:
        if 0 <= self.active_index < len(self.roster):
            return self.roster[self.active_index]
        return None

    @property
    def has_usable_pokemon(self) -> bool:
        return any(not p.is_fainted for p in self.roster)

    @property
    def alive_count(self) -> int:
        return sum(1 for p in self.roster if not p.is_fainted)

    @property
    def has_switch_option(self) -> bool:
        """True when a benched, non-fainted teammate exists."""
        return any(
            i != self.active_index and not p.is_fainted
            for i, p in enumerate(self.roster)
        )

    def can_switch_to(self, index: int) -> bool:
        return (
            0 <= index < len(self.roster)
            and index != self.active_index
            and not self.roster[index].is_fainted
        )

    def switch_to(self, index: int) -> BattlePokemon:
        """Make roster[index] the active Pokemon. Stages are kept on switch-out."""
        self.active_index = index
        return self.roster[index]

    def reset(self) -> None:
        self.active_index = 0
        for mon in self.roster:
            mon.reset_for_battle()


# ---------------------------------------------------------------------------
# Battle Pokemon factory
# ---------------------------------------------------------------------------

def calculate_max_hp(base_hp: int, level: int) -> int:
    """Max HP from the base HP stat and level (no IVs or EVs)."""
    return int(2 * base_hp * level / 100) + level + 10


def create_battle_pokemon(
    pokedex_id: int,
    name: str,
    types: list[str],
    base_stats: dict[str, int],
    moves: list[Move],
    abilities: list[str] | None = None,
    level: int = 50,
    nickname: str | None = None,
) -> BattlePokemon:
    """Create a BattlePokemon from species data and a chosen moveset.

    Max HP is derived once from base HP and level, and all move PP is reset.
    """
    for m in moves:
        m.current_pp = m.pp

    hp = calculate_max_hp(base_stats.get("hp", DEFAULT_BASE_STAT), level)
    return BattlePokemon(
        pokedex_id=pokedex_id,
        name=name,
        nickname=nickname,
        types=[t.lower() for t in types],
        base_stats=dict(base_stats),
        abilities=list(abilities or []),
        level=level,
        max_hp=hp,
        current_hp=hp,
        moves=moves[:4],
    )
