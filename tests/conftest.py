"""Shared fixtures for PokeArena tests."""

import pytest
from typer.testing import CliRunner

from pokearena.core.battle import BattleEngine, create_battle
from pokearena.core.items import Inventory
from pokearena.data.roster import build_pokemon
from pokearena.utils import config as config_module
from tests.factories import FixedRandom, make_move, make_pokemon


# Combatant fixtures
@pytest.fixture
def attacker():
    """Level 50, 100 in every stat, Normal type, knows Tackle."""
    return make_pokemon(name="attacker")


@pytest.fixture
def defender():
    return make_pokemon(name="defender")


@pytest.fixture
def pikachu():
    return build_pokemon("pikachu")


@pytest.fixture
def snorlax():
    return build_pokemon("snorlax")


# RNG fixtures
@pytest.fixture
def steady_rng():
    """Hits, never crits, never triggers secondary effects below 50%."""
    return FixedRandom(0.5)


# Battle fixtures
@pytest.fixture
def duel():
    """A 1v1 battle: a fast player against a slow CPU, both with Tackle only."""

    def _build(player=None, cpu=None, rng=None, inventory=None):
        player = player or make_pokemon(name="hero", speed=120, moves=[make_move()])
        cpu = cpu or make_pokemon(name="rival", speed=80, moves=[make_move()])
        state = create_battle([player], [cpu], inventory=inventory)
        return BattleEngine(state, rng or FixedRandom(0.5))

    return _build


@pytest.fixture
def bag():
    return Inventory()


# Utility fixtures
@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI runner for command tests."""
    return CliRunner()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point data and cache directories at a temporary directory."""
    data_dir = tmp_path / "data"
    cache_dir = data_dir / "cache"
    monkeypatch.setattr(config_module.config, "data_dir", data_dir)
    monkeypatch.setattr(config_module.config, "cache_dir", cache_dir)
    monkeypatch.setattr(config_module.config, "message_delay", 0.0)
    return config_module.config
