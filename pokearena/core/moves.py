"""Move model, type effectiveness chart, and move metadata enums."""

from enum import Enum

from pydantic import BaseModel, Field


class PokemonType(str, Enum):
    """All 18 Pokemon types."""

    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


class DamageClass(str, Enum):
    """Move damage classification."""

    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class StatusCondition(str, Enum):
    """Non-volatile status conditions. A Pokemon carries at most one."""

    NONE = "none"
    PARALYSIS = "paralysis"
    BURN = "burn"
    POISON = "poison"
    BADLY_POISONED = "badly-poisoned"
    SLEEP = "sleep"
    FREEZE = "freeze"


class VolatileCondition(str, Enum):
    """Short-lived conditions that can stack with each other."""

    CONFUSION = "confusion"
    FLINCH = "flinch"


# Move targets that resolve to the user for status moves.
SELF_TARGETS = frozenset({
    "user",
    "users-field",
    "user-or-ally",
    "user-and-allies",
    "ally",
})


# ---------------------------------------------------------------------------
# Type effectiveness chart
# ---------------------------------------------------------------------------
# Encoded as: TYPE_CHART[attacking_type][defending_type] = multiplier
# 2.0 = super effective, 0.5 = not very effective, 0.0 = immune, 1.0 = normal
# ---------------------------------------------------------------------------

_ALL_TYPES = [t.value for t in PokemonType]

# Start with all 1.0, then override
TYPE_CHART: dict[str, dict[str, float]] = {a: {d: 1.0 for d in _ALL_TYPES} for a in _ALL_TYPES}

# fmt: off
_SUPER_EFFECTIVE: list[tuple[str, str]] = [
    ("fire", "grass"), ("fire", "ice"), ("fire", "bug"), ("fire", "steel"),
    ("water", "fire"), ("water", "ground"), ("water", "rock"),
    ("electric", "water"), ("electric", "flying"),
    ("grass", "water"), ("grass", "ground"), ("grass", "rock"),
    ("ice", "grass"), ("ice", "ground"), ("ice", "flying"), ("ice", "dragon"),
    ("fighting", "normal"), ("fighting", "ice"), ("fighting", "rock"),
    ("fighting", "dark"), ("fighting", "steel"),
    ("poison", "grass"), ("poison", "fairy"),
    ("ground", "fire"), ("ground", "electric"), ("ground", "poison"),
    ("ground", "rock"), ("ground", "steel"),
    ("flying", "grass"), ("flying", "fighting"), ("flying", "bug"),
    ("psychic", "fighting"), ("psychic", "poison"),
    ("bug", "grass"), ("bug", "psychic"), ("bug", "dark"),
    ("rock", "fire"), ("rock", "ice"), ("rock", "flying"), ("rock", "bug"),
    ("ghost", "psychic"), ("ghost", "ghost"),
    ("dragon", "dragon"),
    ("dark", "psychic"), ("dark", "ghost"),
    ("steel", "ice"), ("steel", "rock"), ("steel", "fairy"),
    ("fairy", "fighting"), ("fairy", "dragon"), ("fairy", "dark"),
]

_NOT_VERY_EFFECTIVE: list[tuple[str, str]] = [
    ("normal", "rock"), ("normal", "steel"),
    ("fire", "fire"), ("fire", "water"), ("fire", "rock"), ("fire", "dragon"),
    ("water", "water"), ("water", "grass"), ("water", "dragon"),
    ("electric", "electric"), ("electric", "grass"), ("electric", "dragon"),
    ("grass", "fire"), ("grass", "grass"), ("grass", "poison"),
    ("grass", "flying"), ("grass", "bug"), ("grass", "dragon"), ("grass", "steel"),
    ("ice", "fire"), ("ice", "water"), ("ice", "ice"), ("ice", "steel"),
    ("fighting", "poison"), ("fighting", "flying"), ("fighting", "psychic"),
    ("fighting", "bug"), ("fighting", "fairy"),
    ("poison", "poison"), ("poison", "ground"), ("poison", "rock"), ("poison", "ghost"),
    ("ground", "grass"), ("ground", "bug"),
    ("flying", "electric"), ("flying", "rock"), ("flying", "steel"),
    ("psychic", "psychic"), ("psychic", "steel"),
    ("bug", "fire"), ("bug", "fighting"), ("bug", "poison"),
    ("bug", "flying"), ("bug", "ghost"), ("bug", "steel"), ("bug", "fairy"),
    ("rock", "fighting"), ("rock", "ground"), ("rock", "steel"),
    ("ghost", "dark"),
    ("dragon", "steel"),
    ("dark", "fighting"), ("dark", "dark"), ("dark", "fairy"),
    ("steel", "fire"), ("steel", "water"), ("steel", "electric"), ("steel", "steel"),
    ("fairy", "fire"), ("fairy", "poison"), ("fairy", "steel"),
]

_IMMUNE: list[tuple[str, str]] = [
    ("normal", "ghost"),
    ("electric", "ground"),
    ("fighting", "ghost"),
    ("poison", "steel"),
    ("ground", "flying"),
    ("psychic", "dark"),
    ("ghost", "normal"),
    ("dragon", "fairy"),
]
# fmt: on

for atk, dfn in _SUPER_EFFECTIVE:
    TYPE_CHART[atk][dfn] = 2.0
for atk, dfn in _NOT_VERY_EFFECTIVE:
    TYPE_CHART[atk][dfn] = 0.5
for atk, dfn in _IMMUNE:
    TYPE_CHART[atk][dfn] = 0.0


def get_type_effectiveness(move_type: str, defender_types: list[str]) -> float:
    """Calculate the combined type effectiveness multiplier.

    Multiplies the chart entry for each defending type, so results are one of
    0x, 0.25x, 0.5x, 1x, 2x or 4x. An immunity on either type makes the whole
    result 0 no matter what the other type contributes. Unknown types are
    treated as neutral.
    """
    row = TYPE_CHART.get(move_type.lower(), {})
    mult = 1.0
    for dtype in defender_types[:2]:
        single = row.get(dtype.lower(), 1.0)
        if single == 0.0:
            return 0.0
        mult *= single
    return mult


def effectiveness_message(effectiveness: float, defender_name: str) -> str:
    """Narration for an effectiveness multiplier ('' for neutral hits)."""
    if effectiveness == 0:
        return f"It doesn't affect {defender_name}..."
    if effectiveness > 1.0:
        return "It's super effective!"
    if effectiveness < 1.0:
        return "It's not very effective..."
    return ""


# ---------------------------------------------------------------------------
# Move model
# ---------------------------------------------------------------------------

class MoveStatChange(BaseModel):
    """A stat stage delta carried by a move, e.g. {"stat": "attack", "change": 2}."""

    stat: str
    change: int


class Move(BaseModel):
    """A move as it is used in battle, with PP tracking and effect metadata."""

    id: int | None = None  # PokeAPI move ID
    name: str
    display_name: str = ""  # Human-friendly (computed from name if blank)
    type: str  # Pokemon type (e.g. "fire")
    damage_class: DamageClass = DamageClass.PHYSICAL
    power: int | None = None  # None for status moves
    accuracy: int | None = None  # None means always hits
    pp: int = 20  # Max PP
    current_pp: int | None = None  # Reset to pp at battle start
    priority: int = 0
    target: str = "selected-pokemon"

    # Secondary effect metadata
    ailment: StatusCondition | VolatileCondition | None = None
    ailment_chance: int = 0  # %; 0 on a status move means guaranteed
    stat_changes: list[MoveStatChange] = Field(default_factory=list)
    stat_chance: int = 0  # %; 0 means unconditional
    flinch_chance: int = 0
    drain_percent: int = 0  # Positive = drain, negative = recoil
    healing_percent: int = 0  # % of max HP healed (recovery moves)

    def model_post_init(self, __context) -> None:
        """Set display_name from name and fill current PP if not provided."""
        if not self.display_name:
            self.display_name = self.name.replace("-", " ").title()
        if self.current_pp is None:
            self.current_pp = self.pp

    @property
    def is_status(self) -> bool:
        return self.damage_class == DamageClass.STATUS

    @property
    def is_damaging(self) -> bool:
        return not self.is_status and bool(self.power)

    @property
    def has_pp(self) -> bool:
        return (self.current_pp or 0) > 0

    def use_pp(self) -> None:
        """Spend one PP. Never goes below zero."""
        self.current_pp = max(0, (self.current_pp or 0) - 1)

    def restore_pp(self, amount: int | None = None) -> int:
        """Restore PP (all of it when amount is None). Returns PP restored."""
        current = self.current_pp or 0
        target = self.pp if amount is None else min(self.pp, current + amount)
        self.current_pp = target
        return target - current
