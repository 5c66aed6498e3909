"""PokeAPI client for fetching battle-ready Pokemon and move data."""

import asyncio
import json
import logging
import random
from pathlib import Path
from typing import Optional

import httpx

from pokearena.core.moves import (
    DamageClass,
    Move,
    MoveStatChange,
    StatusCondition,
    VolatileCondition,
)
from pokearena.core.pokemon import BattlePokemon, create_battle_pokemon
from pokearena.data.roster import RosterError
from pokearena.utils.config import config

logger = logging.getLogger(__name__)

# PokeAPI meta.ailment names we model; anything else is dropped
AILMENT_MAP: dict[str, StatusCondition | VolatileCondition] = {
    "paralysis": StatusCondition.PARALYSIS,
    "burn": StatusCondition.BURN,
    "poison": StatusCondition.POISON,
    "badly-poisoned": StatusCondition.BADLY_POISONED,
    "sleep": StatusCondition.SLEEP,
    "freeze": StatusCondition.FREEZE,
    "confusion": VolatileCondition.CONFUSION,
}

# PokeAPI reports Toxic's ailment as plain poison
BADLY_POISONING_MOVES = {"toxic", "poison-fang"}


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------

def move_from_api(data: dict) -> Move:
    """Build a Move from a PokeAPI /move/{name} payload."""
    try:
        name = data["name"]
        move_type = data["type"]["name"]
        damage_class = DamageClass(data["damage_class"]["name"])
    except (KeyError, TypeError, ValueError) as e:
        raise RosterError(f"Malformed move payload: {e}") from e

    meta = data.get("meta") or {}
    ailment_name = (meta.get("ailment") or {}).get("name", "none")
    ailment = AILMENT_MAP.get(ailment_name)
    if ailment == StatusCondition.POISON and name in BADLY_POISONING_MOVES:
        ailment = StatusCondition.BADLY_POISONED

    stat_changes = [
        MoveStatChange(stat=sc["stat"]["name"], change=sc["change"])
        for sc in data.get("stat_changes") or []
        if sc.get("stat") and sc.get("change")
    ]

    return Move(
        id=data.get("id"),
        name=name,
        type=move_type,
        damage_class=damage_class,
        power=data.get("power"),
        accuracy=data.get("accuracy"),
        pp=data.get("pp") or 1,
        priority=data.get("priority") or 0,
        target=(data.get("target") or {}).get("name", "selected-pokemon"),
        ailment=ailment,
        ailment_chance=meta.get("ailment_chance") or 0,
        stat_changes=stat_changes,
        stat_chance=meta.get("stat_chance") or 0,
        flinch_chance=meta.get("flinch_chance") or 0,
        drain_percent=meta.get("drain") or 0,
        healing_percent=meta.get("healing") or 0,
    )


def pokemon_from_api(data: dict, moves: list[Move], level: int | None = None) -> BattlePokemon:
    """Build a BattlePokemon from a PokeAPI /pokemon/{id} payload and a moveset."""
    try:
        pokedex_id = data["id"]
        name = data["name"]
        slots = sorted(data["types"], key=lambda t: t.get("slot", 0))
        types = [t["type"]["name"] for t in slots]
        base_stats = {s["stat"]["name"]: s["base_stat"] for s in data["stats"]}
    except (KeyError, TypeError) as e:
        raise RosterError(f"Malformed pokemon payload: {e}") from e

    if not types:
        raise RosterError(f"{name} has no types")

    abilities = [a["ability"]["name"] for a in data.get("abilities", []) if a.get("ability")]

    return create_battle_pokemon(
        pokedex_id=pokedex_id,
        name=name,
        types=types[:2],
        base_stats=base_stats,
        moves=moves[: config.max_moves],
        abilities=abilities,
        level=level or config.default_level,
    )


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

class PokeAPIClient:
    """Client for interacting with PokeAPI.

    Responses are kept in memory and as JSON files under the cache
    directory, so a species or move is only ever downloaded once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        cache_dir: Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or config.pokeapi_base_url).rstrip("/")
        self.cache_dir = cache_dir or config.cache_dir
        self.timeout = timeout or config.request_timeout
        self._transport = transport
        self._pokemon_cache: dict[int, dict] = {}
        self._move_cache: dict[str, dict] = {}
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    def _read_cache(self, cache_file: Path) -> Optional[dict]:
        if not cache_file.exists():
            return None
        try:
            with open(cache_file, "r") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", cache_file, e)
            return None

    async def _fetch(self, path: str, cache_file: Path) -> Optional[dict]:
        async with self._client() as client:
            try:
                response = await client.get(path)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("PokeAPI request %s failed: %s", path, e)
                return None

        with open(cache_file, "w") as f:
            json.dump(data, f)
        return data

    async def get_pokemon(self, pokemon_id: int) -> Optional[dict]:
        """Fetch Pokemon data from API or cache."""
        if pokemon_id in self._pokemon_cache:
            return self._pokemon_cache[pokemon_id]

        cache_file = self.cache_dir / f"pokemon_{pokemon_id}.json"
        data = self._read_cache(cache_file)
        if data is not None:
            logger.debug("Cache hit for pokemon %s", pokemon_id)
        else:
            data = await self._fetch(f"/pokemon/{pokemon_id}", cache_file)
        if data is not None:
            self._pokemon_cache[pokemon_id] = data
        return data

    async def get_move(self, name: str) -> Optional[dict]:
        """Fetch move data from API or cache."""
        if name in self._move_cache:
            return self._move_cache[name]

        cache_file = self.cache_dir / f"move_{name}.json"
        data = self._read_cache(cache_file)
        if data is not None:
            logger.debug("Cache hit for move %s", name)
        else:
            data = await self._fetch(f"/move/{name}", cache_file)
        if data is not None:
            self._move_cache[name] = data
        return data

    async def get_random_moves(self, pokemon_data: dict, count: int = 4, rng=random) -> list[Move]:
        """Pick up to count moves from a Pokemon's learnset.

        Samples count * 4 candidates, keeps damaging moves first and fills any
        remaining slots with whatever else loaded. Moves that fail to load or
        parse are skipped.
        """
        names = [m["move"]["name"] for m in pokemon_data.get("moves", []) if m.get("move")]
        rng.shuffle(names)
        candidates = names[: count * 4]

        payloads = await asyncio.gather(*(self.get_move(n) for n in candidates))
        moves: list[Move] = []
        for payload in payloads:
            if payload is None:
                continue
            try:
                moves.append(move_from_api(payload))
            except RosterError as e:
                logger.warning("Skipping move: %s", e)

        damaging = [m for m in moves if m.power and m.power > 0][:count]
        if len(damaging) < count:
            rest = [m for m in moves if m not in damaging]
            damaging.extend(rest[: count - len(damaging)])
        return damaging

    async def create_battle_pokemon(
        self, pokemon_id: int, level: int | None = None, rng=random
    ) -> Optional[BattlePokemon]:
        """Create a battle-ready Pokemon with a random moveset from API data."""
        pokemon_data = await self.get_pokemon(pokemon_id)
        if not pokemon_data:
            return None
        moves = await self.get_random_moves(pokemon_data, config.max_moves, rng)
        return pokemon_from_api(pokemon_data, moves, level)


# Synchronous wrapper for CLI usage
def create_battle_pokemon_sync(
    pokemon_id: int, level: int | None = None, rng=random
) -> Optional[BattlePokemon]:
    """Synchronous wrapper for creating a battle Pokemon."""
    client = PokeAPIClient()
    return asyncio.run(client.create_battle_pokemon(pokemon_id, level, rng))
