"""Tests for ability-based immunities."""

from pokearena.core.abilities import format_ability_name, resolve_ability
from tests.factories import make_pokemon


class TestResolveAbility:

    def test_no_ability_no_effect(self):
        assert resolve_ability(make_pokemon(), "electric") is None

    def test_unknown_ability_no_effect(self):
        assert resolve_ability(make_pokemon(abilities=["pixel-power"]), "electric") is None

    def test_ability_only_for_its_type(self):
        assert resolve_ability(make_pokemon(abilities=["levitate"]), "water") is None

    def test_levitate_plain_immunity(self):
        effect = resolve_ability(make_pokemon(abilities=["levitate"]), "ground")
        assert effect.ability_name == "levitate"
        assert effect.healing == 0
        assert effect.stat_boost is None
        assert effect.type_boost is None

    def test_volt_absorb_heals_quarter(self):
        effect = resolve_ability(make_pokemon(hp=150, abilities=["volt-absorb"]), "electric")
        assert effect.healing == 37

    def test_lightning_rod_boost(self):
        effect = resolve_ability(make_pokemon(abilities=["lightning-rod"]), "electric")
        assert effect.stat_boost == ("special-attack", 1)
        assert effect.healing == 0

    def test_well_baked_body_boost(self):
        effect = resolve_ability(make_pokemon(abilities=["well-baked-body"]), "fire")
        assert effect.stat_boost == ("defense", 2)

    def test_sap_sipper_boost(self):
        effect = resolve_ability(make_pokemon(abilities=["sap-sipper"]), "grass")
        assert effect.stat_boost == ("attack", 1)

    def test_flash_fire_type_boost(self):
        effect = resolve_ability(make_pokemon(abilities=["flash-fire"]), "fire")
        assert effect.type_boost == "fire"

    def test_case_insensitive(self):
        assert resolve_ability(make_pokemon(abilities=["Water-Absorb"]), "Water") is not None

    def test_first_table_entry_wins(self):
        mon = make_pokemon(abilities=["motor-drive", "volt-absorb"])
        assert resolve_ability(mon, "electric").ability_name == "volt-absorb"


def test_format_ability_name():
    assert format_ability_name("volt-absorb") == "Volt Absorb"
