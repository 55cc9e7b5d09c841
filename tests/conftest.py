"""
Reload Hotbar - Test Configuration and Fixtures
Shared test utilities and fixtures for pytest.
"""
import pytest
from typing import Any, Dict, List, Optional
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reload_hotbar.core.commands import CommandRegistry
from reload_hotbar.core.localization import LocalizationService
from reload_hotbar.core.permissions import PERMISSION_USE, PermissionService
from reload_hotbar.core.plugin import ReloadHotbarPlugin
from reload_hotbar.core.plugin_config import get_default_config
from reload_hotbar.models.inventory import (
    Item,
    ItemCategory,
    ItemContainer,
    ItemDefinition,
    Magazine,
    Player,
    PlayerInventory,
    Projectile,
    build_default_catalog,
)


# ==================== Catalog Fixtures ====================

@pytest.fixture
def catalog():
    """Default item catalog."""
    return build_default_catalog()


@pytest.fixture
def rifle_ammo() -> ItemDefinition:
    """Ammo definition shared by the reload tests."""
    return ItemDefinition("rifle.ammo", "Rifle Ammo", ItemCategory.AMMUNITION.value, 128)


# ==================== Item Factories ====================

@pytest.fixture
def make_gun():
    """Factory for belt weapons with a magazine."""
    def _make_gun(name: str, capacity: int, contents: int, ammo: Optional[ItemDefinition]):
        definition = ItemDefinition(name.lower().replace(" ", "."), name, ItemCategory.WEAPON.value)
        return Item(
            info=definition,
            held_entity=Projectile(primary_magazine=Magazine(capacity=capacity, contents=contents, ammo_type=ammo)),
        )
    return _make_gun


@pytest.fixture
def make_stack():
    """Factory for inventory stacks."""
    def _make_stack(definition: ItemDefinition, amount: int):
        return Item(info=definition, amount=amount)
    return _make_stack


@pytest.fixture
def make_player():
    """Factory for players with the given belt and main items."""
    def _make_player(belt: List[Item] = None, main: List[Item] = None, user_id: str = "76561198000000001"):
        inventory = PlayerInventory()
        for item in belt or []:
            assert inventory.container_belt.insert(item)
        for item in main or []:
            assert inventory.container_main.insert(item)
        return Player(user_id=user_id, display_name="Tester", inventory=inventory)
    return _make_player


# ==================== Plugin Fixtures ====================

@pytest.fixture
def permissions() -> PermissionService:
    return PermissionService()


@pytest.fixture
def lang(tmp_path) -> LocalizationService:
    return LocalizationService(tmp_path / "lang")


@pytest.fixture
def commands() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture
def plugin(permissions, lang, commands) -> ReloadHotbarPlugin:
    """Initialised plugin with default configuration."""
    plugin = ReloadHotbarPlugin(
        config=get_default_config(),
        permissions=permissions,
        lang=lang,
        commands=commands,
    )
    plugin.init()
    yield plugin
    plugin.unload()


@pytest.fixture
def authorized(plugin, permissions):
    """Grant the use permission to a player."""
    def _authorized(player: Player) -> Player:
        permissions.grant_user_permission(player.user_id_string, PERMISSION_USE)
        return player
    return _authorized


# ==================== Test Data Helpers ====================

def pool_amounts(container: ItemContainer, shortname: str) -> List[int]:
    """Amounts of every stack of one item, in container order."""
    return [item.amount for item in container.item_list if item.info.shortname == shortname]


def player_spec(user_id: str = "player-1", **overrides) -> Dict[str, Any]:
    """Request body for registering a player over the API."""
    spec = {
        "user_id": user_id,
        "display_name": "Rusty",
        "belt": [
            {"shortname": "rifle.ak", "position": 0, "contents": 10},
            {"shortname": "hatchet", "position": 1},
            {"shortname": "pistol.revolver", "position": 3, "contents": 8},
        ],
        "main": [
            {"shortname": "ammo.rifle", "amount": 5},
            {"shortname": "wood", "amount": 300},
            {"shortname": "ammo.rifle", "amount": 20},
        ],
        "permissions": ["reloadhotbar.use"],
    }
    spec.update(overrides)
    return spec


# ==================== Test Categories ====================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
