"""Tests for bag items and the inventory."""

from pokearena.core.items import (
    STARTER_ITEMS,
    Inventory,
    ItemKind,
    apply_item,
    item_refusal,
    starter_items,
)
from pokearena.core.moves import StatusCondition
from tests.factories import make_move, make_pokemon


def _item(item_id):
    for item in starter_items():
        if item.id == item_id:
            return item
    raise KeyError(item_id)


class TestApplyItem:

    def test_potion_heals_twenty(self):
        mon = make_pokemon(hp=100)
        mon.current_hp = 50
        applied, message = apply_item(_item("potion"), mon)
        assert applied
        assert mon.current_hp == 70
        assert message == "Pikachu recovered 20 HP!"

    def test_heal_capped(self):
        mon = make_pokemon(hp=100)
        mon.current_hp = 95
        apply_item(_item("hyper-potion"), mon)
        assert mon.current_hp == 100

    def test_potion_refused_at_full_hp(self):
        mon = make_pokemon()
        applied, message = apply_item(_item("potion"), mon)
        assert not applied
        assert "already full" in message

    def test_potion_refused_when_fainted(self):
        mon = make_pokemon()
        mon.current_hp = 0
        applied, _ = apply_item(_item("max-potion"), mon)
        assert not applied
        assert mon.current_hp == 0

    def test_revive_half(self):
        mon = make_pokemon(hp=101)
        mon.current_hp = 0
        mon.apply_status(StatusCondition.BURN)
        applied, _ = apply_item(_item("revive"), mon)
        assert applied
        assert mon.current_hp == 50
        assert mon.status == StatusCondition.NONE

    def test_max_revive_full(self):
        mon = make_pokemon(hp=120)
        mon.current_hp = 0
        apply_item(_item("max-revive"), mon)
        assert mon.current_hp == 120

    def test_revive_refused_on_healthy(self):
        assert item_refusal(_item("revive"), make_pokemon()) is not None

    def test_ether_restores_pp(self):
        move = make_move(pp=35)
        move.current_pp = 20
        mon = make_pokemon(moves=[move])
        applied, _ = apply_item(_item("ether"), mon)
        assert applied
        assert mon.moves[0].current_pp == 30

    def test_ether_refused_at_full_pp(self):
        assert item_refusal(_item("ether"), make_pokemon()) is not None

    def test_full_heal(self):
        mon = make_pokemon()
        mon.apply_status(StatusCondition.SLEEP, 2)
        applied, _ = apply_item(_item("full-heal"), mon)
        assert applied
        assert mon.status == StatusCondition.NONE
        assert mon.status_turns == 0

    def test_full_heal_refused_without_status(self):
        assert item_refusal(_item("full-heal"), make_pokemon()) == "It won't have any effect."

    def test_refusal_does_not_mutate(self):
        mon = make_pokemon()
        item_refusal(_item("potion"), mon)
        assert mon.current_hp == mon.max_hp


class TestInventory:

    def test_default_bag(self):
        inventory = Inventory()
        assert [i.id for i in inventory.items] == [i.id for i in STARTER_ITEMS]

    def test_starter_items_are_copies(self):
        inventory = Inventory()
        inventory.consume("potion")
        assert STARTER_ITEMS[0].quantity == 5

    def test_consume(self):
        inventory = Inventory()
        assert inventory.consume("max-potion")
        assert not inventory.consume("max-potion")
        assert inventory.get("max-potion").quantity == 0
        assert "max-potion" not in [i.id for i in inventory.available]

    def test_consume_unknown(self):
        assert not Inventory().consume("rare-candy")

    def test_reset(self):
        inventory = Inventory()
        inventory.consume("potion")
        inventory.reset()
        assert inventory.get("potion").quantity == 5

    def test_kinds(self):
        kinds = {i.kind for i in STARTER_ITEMS}
        assert kinds == set(ItemKind)
