"""Tests for status and volatile condition rules."""

import random

import pytest

from pokearena.core.moves import StatusCondition, VolatileCondition
from pokearena.core.status import (
    BlockReason,
    block_message,
    can_act,
    confusion_self_damage,
    end_of_turn_status_damage,
    initial_status_turns,
    is_immune_to_status,
    is_immune_to_volatile,
    roll_confusion_turns,
    roll_sleep_turns,
    status_inflicted_message,
)
from tests.factories import FixedRandom, make_pokemon


def _make_statused(status, turns=0, **kwargs):
    mon = make_pokemon(**kwargs)
    mon.apply_status(status, turns)
    return mon


class TestCanAct:

    def test_healthy_pokemon_acts(self):
        check = can_act(make_pokemon(), FixedRandom(0.0))
        assert check.allowed
        assert check.reason == BlockReason.NONE

    def test_paralysis_blocks_below_threshold(self):
        mon = _make_statused(StatusCondition.PARALYSIS)
        assert can_act(mon, FixedRandom(0.24)).reason == BlockReason.PARALYSIS

    def test_paralysis_never_blocks_at_threshold(self):
        mon = _make_statused(StatusCondition.PARALYSIS)
        rng = FixedRandom(0.25)
        for _ in range(10_000):
            assert can_act(mon, rng).reason != BlockReason.PARALYSIS

    def test_sleep_blocks_while_turns_remain(self):
        mon = _make_statused(StatusCondition.SLEEP, turns=2)
        check = can_act(mon, FixedRandom(0.99))
        assert check.reason == BlockReason.SLEEP
        # The counter only ticks at end of turn
        assert mon.status_turns == 2

    def test_wakes_when_counter_is_zero(self):
        mon = _make_statused(StatusCondition.SLEEP, turns=0)
        check = can_act(mon, FixedRandom(0.99))
        assert check.allowed
        assert check.woke_up

    def test_freeze_holds(self):
        mon = _make_statused(StatusCondition.FREEZE)
        assert can_act(mon, FixedRandom(0.79)).reason == BlockReason.FREEZE

    def test_freeze_thaws(self):
        mon = _make_statused(StatusCondition.FREEZE)
        check = can_act(mon, FixedRandom(0.8))
        assert check.allowed
        assert check.thawed

    def test_confusion_self_hit(self):
        mon = make_pokemon()
        mon.add_volatile(VolatileCondition.CONFUSION, 2)
        assert can_act(mon, FixedRandom(0.32)).reason == BlockReason.CONFUSION

    def test_confusion_with_no_turns_left_does_not_block(self):
        mon = make_pokemon()
        mon.add_volatile(VolatileCondition.CONFUSION, 0)
        assert can_act(mon, FixedRandom(0.0)).allowed

    def test_flinch_blocks(self):
        mon = make_pokemon()
        mon.add_volatile(VolatileCondition.FLINCH)
        assert can_act(mon, FixedRandom(0.99)).reason == BlockReason.FLINCH

    def test_paralysis_reported_before_flinch(self):
        mon = _make_statused(StatusCondition.PARALYSIS)
        mon.add_volatile(VolatileCondition.FLINCH)
        assert can_act(mon, FixedRandom(0.1)).reason == BlockReason.PARALYSIS

    def test_sleep_reported_before_confusion(self):
        mon = _make_statused(StatusCondition.SLEEP, turns=1)
        mon.add_volatile(VolatileCondition.CONFUSION, 3)
        assert can_act(mon, FixedRandom(0.0)).reason == BlockReason.SLEEP


class TestBlockMessage:

    @pytest.mark.parametrize("reason", [r for r in BlockReason if r != BlockReason.NONE])
    def test_every_reason_has_text(self, reason):
        assert "Pikachu" in block_message(reason, "Pikachu")

    def test_paralysis_text(self):
        assert block_message(BlockReason.PARALYSIS, "Pikachu") == "Pikachu is paralyzed! It can't move!"


class TestImmunity:

    def test_existing_status_blocks_new_one(self):
        mon = _make_statused(StatusCondition.BURN)
        assert is_immune_to_status(mon, StatusCondition.POISON)

    @pytest.mark.parametrize("type_,status", [
        ("fire", StatusCondition.BURN),
        ("electric", StatusCondition.PARALYSIS),
        ("poison", StatusCondition.POISON),
        ("steel", StatusCondition.BADLY_POISONED),
        ("ice", StatusCondition.FREEZE),
    ])
    def test_type_immunities(self, type_, status):
        assert is_immune_to_status(make_pokemon(types=(type_,)), status)

    def test_dual_type_immunity_on_second_type(self):
        assert is_immune_to_status(make_pokemon(types=("water", "ice")), StatusCondition.FREEZE)

    def test_not_immune(self):
        assert not is_immune_to_status(make_pokemon(types=("water",)), StatusCondition.BURN)

    def test_volatile_immunity_only_when_already_present(self):
        mon = make_pokemon()
        assert not is_immune_to_volatile(mon, VolatileCondition.CONFUSION)
        mon.add_volatile(VolatileCondition.CONFUSION, 2)
        assert is_immune_to_volatile(mon, VolatileCondition.CONFUSION)


class TestEndOfTurnDamage:

    def test_burn_sixteenth(self):
        assert end_of_turn_status_damage(_make_statused(StatusCondition.BURN, hp=160)) == 10

    def test_poison_floors(self):
        assert end_of_turn_status_damage(_make_statused(StatusCondition.POISON, hp=100)) == 6

    def test_badly_poisoned_escalates(self):
        mon = _make_statused(StatusCondition.BADLY_POISONED, turns=1, hp=160)
        ticks = []
        for _ in range(3):
            ticks.append(end_of_turn_status_damage(mon))
            mon.status_turns += 1
        assert ticks == [10, 20, 30]

    def test_no_damage_for_sleep(self):
        assert end_of_turn_status_damage(_make_statused(StatusCondition.SLEEP, turns=2)) == 0


class TestCounters:

    def test_sleep_turns_in_range(self):
        rng = random.Random(3)
        assert {roll_sleep_turns(rng) for _ in range(200)} == {1, 2, 3}

    def test_confusion_turns_in_range(self):
        rng = random.Random(3)
        assert {roll_confusion_turns(rng) for _ in range(200)} == {1, 2, 3, 4}

    def test_initial_turns(self):
        rng = FixedRandom(randint_value=2)
        assert initial_status_turns(StatusCondition.SLEEP, rng) == 2
        assert initial_status_turns(StatusCondition.BADLY_POISONED, rng) == 1
        assert initial_status_turns(StatusCondition.BURN, rng) == 0


class TestConfusionSelfDamage:

    def test_forty_power_physical(self):
        # ((22 * 40 * 100 / 100) / 50) + 2 = 19.6
        assert confusion_self_damage(make_pokemon()) == 19

    def test_uses_stages(self):
        mon = make_pokemon()
        mon.change_stat("attack", 2)
        # ((22 * 40 * 200 / 100) / 50) + 2 = 37.2
        assert confusion_self_damage(mon) == 37


class TestMessages:

    def test_sleep_message(self):
        assert status_inflicted_message("Snorlax", StatusCondition.SLEEP) == "Snorlax fell asleep!"

    def test_burn_message(self):
        assert status_inflicted_message("Snorlax", StatusCondition.BURN) == "Snorlax was burned!"
