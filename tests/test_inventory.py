"""
Tests for the host inventory model.

Verifies:
- Containers keep slot order and reject taken/out-of-range slots
- Giving items tops up stacks before opening new ones
- The catalog builds guns with loaded magazines
- The player store builds players from item specs
"""
import pytest

from reload_hotbar.core.errors import ItemNotFoundError, ValidationError
from reload_hotbar.models.inventory import (
    HeldEntity,
    Item,
    ItemContainer,
    Player,
    PlayerInventory,
    Projectile,
)
from reload_hotbar.services import player_store

from conftest import pool_amounts


class TestItemContainer:
    """Slot handling."""

    def test_insert_first_free_slot(self, catalog):
        container = ItemContainer(3)
        container.insert(catalog.create_item("wood", 10), position=0)
        container.insert(catalog.create_item("wood", 20), position=2)
        bandage = catalog.create_item("bandage")

        assert container.insert(bandage) is True
        assert bandage.position == 1
        assert [item.position for item in container.item_list] == [0, 1, 2]
        assert container.is_full() is True

    def test_insert_rejects_taken_and_out_of_range(self, catalog):
        container = ItemContainer(2)
        container.insert(catalog.create_item("wood"), position=0)

        assert container.insert(catalog.create_item("wood"), position=0) is False
        assert container.insert(catalog.create_item("wood"), position=5) is False

    def test_insert_into_full_container(self, catalog):
        container = ItemContainer(1)
        container.insert(catalog.create_item("wood"))

        assert container.insert(catalog.create_item("wood")) is False

    def test_moving_item_between_containers(self, catalog):
        first, second = ItemContainer(2), ItemContainer(2)
        item = catalog.create_item("wood")
        first.insert(item)

        second.insert(item)

        assert first.item_list == []
        assert item.parent is second

    def test_use_item_marks_dirty(self, catalog):
        container = ItemContainer(2)
        stack = catalog.create_item("ammo.rifle", 10)
        container.insert(stack)
        dirty = container.dirty

        stack.use_item(4)

        assert stack.amount == 6
        assert container.dirty == dirty + 1

    def test_use_item_never_negative(self, catalog):
        stack = catalog.create_item("ammo.rifle", 3)
        stack.use_item(10)
        assert stack.amount == 0


class TestGiveItem:
    """Player.give_item stacking rules."""

    def test_tops_up_then_opens_new_stacks(self, catalog):
        player = Player(user_id="1")
        ammo = catalog.find("ammo.rifle")
        player.inventory.container_main.insert(Item(info=ammo, amount=120))

        leftover = player.give_item(ammo, 300)

        assert leftover == 0
        assert pool_amounts(player.inventory.container_main, "ammo.rifle") == [128, 128, 128, 36]

    def test_returns_what_does_not_fit(self, catalog):
        inventory = PlayerInventory(container_main=ItemContainer(1))
        player = Player(user_id="1", inventory=inventory)

        assert player.give_item(catalog.find("ammo.shotgun"), 100) == 36

    def test_no_main_container(self, catalog):
        player = Player(user_id="1", inventory=PlayerInventory(container_main=None))
        assert player.give_item(catalog.find("ammo.rifle"), 5) == 5


class TestCatalog:
    """Default catalog contents."""

    def test_gun_has_loaded_magazine(self, catalog):
        ak = catalog.create_item("rifle.ak", contents=12)

        assert isinstance(ak.held_entity, Projectile)
        assert ak.held_entity.primary_magazine.capacity == 30
        assert ak.held_entity.primary_magazine.contents == 12
        assert ak.held_entity.primary_magazine.ammo_type.shortname == "ammo.rifle"

    def test_contents_clamped_to_capacity(self, catalog):
        revolver = catalog.create_item("pistol.revolver", contents=99)
        assert revolver.held_entity.primary_magazine.contents == 8

    def test_tool_is_not_a_projectile(self, catalog):
        hatchet = catalog.create_item("hatchet")
        assert type(hatchet.held_entity) is HeldEntity

    def test_lookup_is_case_insensitive(self, catalog):
        assert catalog.find("AMMO.RIFLE").shortname == "ammo.rifle"

    def test_unknown_item(self, catalog):
        assert catalog.create_item("rifle.laser") is None


class TestPlayerStore:
    """Building players from specs."""

    @pytest.fixture(autouse=True)
    def reset_players(self):
        player_store.active_players.clear()
        yield
        player_store.active_players.clear()

    def test_register_player(self):
        player = player_store.register_player(
            "7",
            belt=[{"shortname": "rifle.ak", "position": 2, "contents": 5}],
            main=[{"shortname": "ammo.rifle", "amount": 40}],
        )

        assert player_store.require_player("7") is player
        assert player.inventory.container_belt.get_slot(2).display_name == "Assault Rifle"
        assert pool_amounts(player.inventory.container_main, "ammo.rifle") == [40]

    def test_ammo_override(self):
        player = player_store.register_player(
            "7", belt=[{"shortname": "rifle.ak", "ammo": "ammo.pistol"}],
        )
        magazine = player.inventory.container_belt.item_list[0].held_entity.primary_magazine
        assert magazine.ammo_type.shortname == "ammo.pistol"

    def test_unknown_ammo_override(self):
        with pytest.raises(ItemNotFoundError):
            player_store.register_player("7", belt=[{"shortname": "rifle.ak", "ammo": "ammo.laser"}])

    def test_missing_shortname(self):
        with pytest.raises(ValidationError):
            player_store.register_player("7", main=[{"amount": 3}])

    def test_remove_player(self):
        player_store.register_player("7")

        assert player_store.remove_player("7") is True
        assert player_store.get_player("7") is None
