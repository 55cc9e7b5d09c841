"""
Shared storage for connected players.

Players are owned by the host; this module keeps them addressable by id
for the HTTP routes and builds them from item specs.
"""
from typing import Any, Dict, List, Optional
import logging

from reload_hotbar.core.errors import ItemNotFoundError, PlayerNotFoundError, ValidationError
from reload_hotbar.models.inventory import (
    InventoryType,
    ItemContainer,
    ItemDefinitions,
    Player,
    PlayerInventory,
    build_default_catalog,
)

logger = logging.getLogger("reload_hotbar.players")


# In-memory storage for connected players
# Keys are user ids (str), values are Player objects
active_players: Dict[str, Player] = {}

# Item catalog shared by every player
item_catalog: ItemDefinitions = build_default_catalog()


def get_player(user_id: str) -> Optional[Player]:
    return active_players.get(str(user_id))


def require_player(user_id: str) -> Player:
    """Get a connected player or raise PlayerNotFoundError."""
    player = get_player(user_id)
    if player is None:
        raise PlayerNotFoundError(user_id)
    return player


def remove_player(user_id: str) -> bool:
    return active_players.pop(str(user_id), None) is not None


def fill_container(
    container: ItemContainer,
    specs: List[Dict[str, Any]],
    inventory_type: InventoryType,
    catalog: ItemDefinitions,
) -> None:
    """
    Insert items described by dicts into a container.

    Each spec needs a "shortname" and may give "amount", "position",
    "contents" (rounds in the magazine) and "ammo" (magazine ammo type).
    """
    for index, spec in enumerate(specs):
        shortname = spec.get("shortname")
        if not shortname:
            raise ValidationError(f"{inventory_type.value}[{index}].shortname", "Item shortname is required")

        item = catalog.create_item(
            shortname,
            amount=spec.get("amount", 1),
            contents=spec.get("contents", 0),
            ammo_shortname=spec.get("ammo"),
        )
        if item is None:
            raise ItemNotFoundError(shortname)

        if spec.get("ammo") and catalog.find(spec["ammo"]) is None:
            raise ItemNotFoundError(spec["ammo"])

        if not container.insert(item, spec.get("position")):
            raise ValidationError(
                f"{inventory_type.value}[{index}].position",
                f"No room for {shortname} in the {inventory_type.value} container",
                value=spec.get("position"),
            )


def register_player(
    user_id: str,
    display_name: str = "",
    belt: Optional[List[Dict[str, Any]]] = None,
    main: Optional[List[Dict[str, Any]]] = None,
    language: str = "en",
    catalog: Optional[ItemDefinitions] = None,
) -> Player:
    """
    Create a player with the given belt and main items and store it.

    Re-registering an id replaces the previous player.
    """
    catalog = catalog or item_catalog
    inventory = PlayerInventory()

    fill_container(inventory.container_belt, belt or [], InventoryType.BELT, catalog)
    fill_container(inventory.container_main, main or [], InventoryType.MAIN, catalog)

    player = Player(
        user_id=str(user_id),
        display_name=display_name or str(user_id),
        inventory=inventory,
        language=language,
    )
    active_players[player.user_id_string] = player
    logger.info(f"Registered player {player.user_id_string} ({len(inventory.container_belt.item_list)} belt items)")
    return player
