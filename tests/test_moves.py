"""Tests for the move model, type chart, and move metadata enums."""

import pytest

from pokearena.core.moves import (
    TYPE_CHART,
    DamageClass,
    Move,
    PokemonType,
    StatusCondition,
    VolatileCondition,
    effectiveness_message,
    get_type_effectiveness,
)


class TestPokemonType:
    """Tests for the PokemonType enum."""

    def test_all_18_types_present(self):
        assert len(PokemonType) == 18

    def test_type_values_lowercase(self):
        for t in PokemonType:
            assert t.value == t.value.lower()


class TestConditions:

    def test_status_values(self):
        expected = {"none", "paralysis", "burn", "poison", "badly-poisoned", "sleep", "freeze"}
        assert {s.value for s in StatusCondition} == expected

    def test_volatile_values(self):
        assert {v.value for v in VolatileCondition} == {"confusion", "flinch"}


class TestTypeChart:
    """Spot checks on the 18x18 chart."""

    def test_chart_has_all_types(self):
        for t in PokemonType:
            assert t.value in TYPE_CHART
            assert len(TYPE_CHART[t.value]) == 18

    def test_fire_beats_grass(self):
        assert TYPE_CHART["fire"]["grass"] == 2.0

    def test_water_resists_water(self):
        assert TYPE_CHART["water"]["water"] == 0.5

    def test_ground_immune_to_electric(self):
        assert TYPE_CHART["electric"]["ground"] == 0.0

    def test_ghost_immune_to_normal(self):
        assert TYPE_CHART["normal"]["ghost"] == 0.0

    def test_fairy_immune_to_dragon(self):
        assert TYPE_CHART["dragon"]["fairy"] == 0.0

    def test_steel_immune_to_poison(self):
        assert TYPE_CHART["poison"]["steel"] == 0.0

    def test_multipliers_are_closed_set(self):
        for row in TYPE_CHART.values():
            for mult in row.values():
                assert mult in (0.0, 0.5, 1.0, 2.0)


class TestTypeEffectiveness:

    def test_single_type_super_effective(self):
        assert get_type_effectiveness("water", ["fire"]) == 2.0

    def test_single_type_not_very_effective(self):
        assert get_type_effectiveness("fire", ["water"]) == 0.5

    def test_dual_type_4x(self):
        assert get_type_effectiveness("ice", ["dragon", "flying"]) == 4.0

    def test_dual_type_quarter(self):
        assert get_type_effectiveness("fire", ["water", "rock"]) == 0.25

    def test_dual_type_cancels_to_neutral(self):
        assert get_type_effectiveness("ice", ["water", "flying"]) == 1.0

    def test_immunity_wins_over_weakness(self):
        # Electric is 2x on flying but ground is immune
        assert get_type_effectiveness("electric", ["ground", "flying"]) == 0.0
        assert get_type_effectiveness("electric", ["flying", "ground"]) == 0.0

    def test_immunity_on_second_type(self):
        assert get_type_effectiveness("ground", ["electric", "flying"]) == 0.0

    def test_case_insensitive(self):
        assert get_type_effectiveness("Water", ["FIRE"]) == 2.0

    def test_unknown_types_are_neutral(self):
        assert get_type_effectiveness("shadow", ["fire"]) == 1.0
        assert get_type_effectiveness("fire", ["shadow"]) == 1.0

    @pytest.mark.parametrize("attack", [t.value for t in PokemonType])
    def test_every_pairing_in_closed_set(self, attack):
        for first in PokemonType:
            for second in PokemonType:
                mult = get_type_effectiveness(attack, [first.value, second.value])
                assert mult in (0.0, 0.25, 0.5, 1.0, 2.0, 4.0)


class TestEffectivenessMessage:

    def test_super_effective(self):
        assert effectiveness_message(2.0, "Onix") == "It's super effective!"

    def test_not_very_effective(self):
        assert effectiveness_message(0.25, "Onix") == "It's not very effective..."

    def test_immune_names_defender(self):
        assert effectiveness_message(0.0, "Gengar") == "It doesn't affect Gengar..."

    def test_neutral_is_silent(self):
        assert effectiveness_message(1.0, "Onix") == ""


class TestMove:

    def test_display_name_auto_generated(self):
        move = Move(name="thunder-punch", type="electric", power=75)
        assert move.display_name == "Thunder Punch"

    def test_pp_initialized(self):
        move = Move(name="tackle", type="normal", power=40, pp=35)
        assert move.current_pp == 35

    def test_status_move_flags(self):
        move = Move(name="growl", type="normal", damage_class=DamageClass.STATUS)
        assert move.is_status
        assert not move.is_damaging

    def test_use_pp_never_negative(self):
        move = Move(name="tackle", type="normal", power=40, pp=1)
        move.use_pp()
        move.use_pp()
        assert move.current_pp == 0
        assert not move.has_pp

    def test_restore_pp_capped(self):
        move = Move(name="tackle", type="normal", power=40, pp=10, current_pp=2)
        assert move.restore_pp(5) == 5
        assert move.current_pp == 7
        assert move.restore_pp(50) == 3
        assert move.current_pp == 10

    def test_restore_all_pp(self):
        move = Move(name="tackle", type="normal", power=40, pp=10, current_pp=0)
        move.restore_pp()
        assert move.current_pp == 10
