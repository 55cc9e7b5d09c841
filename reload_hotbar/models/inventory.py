"""
Player Inventory Model.

Host-side entities the hotbar commands read and mutate:
- Item definitions (catalog entries keyed by shortname)
- Items and stacks living in fixed-size containers
- Projectile weapons with a primary magazine
- Player inventory with main, belt and wear containers
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum
import logging
import uuid

logger = logging.getLogger("reload_hotbar.inventory")


class ItemCategory(str, Enum):
    """Item categories used by the catalog."""
    WEAPON = "weapon"
    AMMUNITION = "ammunition"
    TOOL = "tool"
    MEDICAL = "medical"
    MISC = "misc"


class InventoryType(str, Enum):
    """Container roles inside a player inventory."""
    MAIN = "main"
    BELT = "belt"  # Quick-access hotbar
    WEAR = "wear"


# Default container sizes
MAIN_CAPACITY = 24
BELT_CAPACITY = 6
WEAR_CAPACITY = 7


@dataclass
class ItemDefinition:
    """A catalog entry describing a kind of item."""
    shortname: str
    display_name: str
    category: str = ItemCategory.MISC.value
    stackable: int = 1  # Max stack size

    @property
    def is_ammunition(self) -> bool:
        return self.category == ItemCategory.AMMUNITION.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "shortname": self.shortname,
            "display_name": self.display_name,
            "category": self.category,
            "stackable": self.stackable,
        }


@dataclass
class Magazine:
    """A weapon's internal ammo buffer."""
    capacity: int
    contents: int = 0
    ammo_type: Optional[ItemDefinition] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "contents": self.contents,
            "ammo_type": self.ammo_type.shortname if self.ammo_type else None,
        }


@dataclass
class HeldEntity:
    """Entity spawned in the world while an item is held."""
    network_updates: int = 0

    def send_network_update_immediate(self) -> None:
        """Push the entity state to clients right away."""
        self.network_updates += 1

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "held"}


@dataclass
class Projectile(HeldEntity):
    """A held entity that fires ammunition from a magazine."""
    primary_magazine: Optional[Magazine] = None

    def unload_ammo(self, item: "Item", player: "Player") -> int:
        """
        Empty the magazine into the player's inventory.

        Rounds that do not fit in the main container are dropped on the
        ground next to the player. A magazine with no ammo type is only
        emptied, there is no item to hand back.

        Returns:
            Number of rounds taken out of the magazine
        """
        magazine = self.primary_magazine
        if magazine is None or magazine.contents <= 0:
            return 0

        amount = magazine.contents
        magazine.contents = 0

        if magazine.ammo_type is None:
            logger.debug(f"Emptied {amount} untyped rounds from {item.display_name}")
            self.send_network_update_immediate()
            return amount

        leftover = player.give_item(magazine.ammo_type, amount)
        if leftover > 0:
            player.drop_item(magazine.ammo_type, leftover)
            logger.debug(f"Dropped {leftover} {magazine.ammo_type.shortname} from {item.display_name}: inventory full")

        self.send_network_update_immediate()
        return amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "projectile",
            "primary_magazine": self.primary_magazine.to_dict() if self.primary_magazine else None,
        }


@dataclass(eq=False)
class Item:
    """A single item or stack of items."""
    info: ItemDefinition
    amount: int = 1
    uid: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    position: int = -1
    held_entity: Optional[HeldEntity] = None
    parent: Optional["ItemContainer"] = field(default=None, repr=False, compare=False)

    @property
    def display_name(self) -> str:
        return self.info.display_name

    def get_held_entity(self) -> Optional[HeldEntity]:
        return self.held_entity

    def use_item(self, amount: int = 1) -> None:
        """Consume part of the stack. Never drops below zero."""
        if amount <= 0:
            return
        self.amount = max(0, self.amount - amount)
        if self.parent is not None:
            self.parent.mark_dirty()

    def remove_from_container(self) -> None:
        if self.parent is not None:
            self.parent.remove(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "uid": self.uid,
            "shortname": self.info.shortname,
            "name": self.display_name,
            "amount": self.amount,
            "position": self.position,
            "held_entity": self.held_entity.to_dict() if self.held_entity else None,
        }


@dataclass
class ItemContainer:
    """Fixed-size container; item_list is kept ordered by slot position."""
    capacity: int
    item_list: List[Item] = field(default_factory=list)
    dirty: int = 0

    def mark_dirty(self) -> None:
        self.dirty += 1

    def is_full(self) -> bool:
        return len(self.item_list) >= self.capacity

    def find_free_position(self) -> Optional[int]:
        taken = {item.position for item in self.item_list}
        for position in range(self.capacity):
            if position not in taken:
                return position
        return None

    def get_slot(self, position: int) -> Optional[Item]:
        for item in self.item_list:
            if item.position == position:
                return item
        return None

    def insert(self, item: Item, position: Optional[int] = None) -> bool:
        """
        Place an item into a slot.

        Args:
            item: Item to insert
            position: Slot index, or None for the first free slot

        Returns:
            True if the item was placed, False if the slot is taken or
            the container is full
        """
        if position is None:
            position = self.find_free_position()
            if position is None:
                return False
        elif position < 0 or position >= self.capacity or self.get_slot(position) is not None:
            return False

        if item.parent is not None:
            item.parent.remove(item)

        item.position = position
        item.parent = self
        self.item_list.append(item)
        self.item_list.sort(key=lambda i: i.position)
        self.mark_dirty()
        return True

    def remove(self, item: Item) -> bool:
        if item not in self.item_list:
            return False
        self.item_list.remove(item)
        item.parent = None
        item.position = -1
        self.mark_dirty()
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "items": [item.to_dict() for item in self.item_list],
        }


@dataclass
class PlayerInventory:
    """The three containers a player owns."""
    container_main: Optional[ItemContainer] = field(default_factory=lambda: ItemContainer(MAIN_CAPACITY))
    container_belt: Optional[ItemContainer] = field(default_factory=lambda: ItemContainer(BELT_CAPACITY))
    container_wear: Optional[ItemContainer] = field(default_factory=lambda: ItemContainer(WEAR_CAPACITY))

    # Batched container updates sent to the client, oldest first
    sent_updates: List[InventoryType] = field(default_factory=list)

    def send_updated_inventory(self, inventory_type: InventoryType, container: Optional[ItemContainer]) -> None:
        """Sync a whole container to the owning client."""
        if container is None:
            return
        self.sent_updates.append(inventory_type)

    def get_container(self, inventory_type: InventoryType) -> Optional[ItemContainer]:
        if inventory_type == InventoryType.MAIN:
            return self.container_main
        if inventory_type == InventoryType.BELT:
            return self.container_belt
        return self.container_wear

    def to_dict(self) -> Dict[str, Any]:
        return {
            "main": self.container_main.to_dict() if self.container_main else None,
            "belt": self.container_belt.to_dict() if self.container_belt else None,
            "wear": self.container_wear.to_dict() if self.container_wear else None,
        }


@dataclass
class Player:
    """A connected player."""
    user_id: str
    display_name: str = ""
    inventory: Optional[PlayerInventory] = field(default_factory=PlayerInventory)
    language: str = "en"

    # Chat replies sent to this player, oldest first
    replies: List[str] = field(default_factory=list)
    # Stacks dropped on the ground when the inventory was full
    dropped_items: List[Item] = field(default_factory=list)

    @property
    def user_id_string(self) -> str:
        return str(self.user_id)

    def send_reply(self, message: str) -> None:
        self.replies.append(message)

    def give_item(self, definition: ItemDefinition, amount: int) -> int:
        """
        Move `amount` units of an item into the main container.

        Tops up existing stacks first, then opens new stacks in free slots.

        Returns:
            Units that did not fit
        """
        if self.inventory is None or self.inventory.container_main is None:
            return amount

        container = self.inventory.container_main
        remaining = amount
        max_stack = max(1, definition.stackable)

        for item in container.item_list:
            if remaining <= 0:
                break
            if item.info.shortname != definition.shortname:
                continue
            room = max_stack - item.amount
            if room <= 0:
                continue
            added = min(room, remaining)
            item.amount += added
            remaining -= added
            container.mark_dirty()

        while remaining > 0 and not container.is_full():
            added = min(max_stack, remaining)
            container.insert(Item(info=definition, amount=added))
            remaining -= added

        return remaining

    def drop_item(self, definition: ItemDefinition, amount: int) -> Item:
        dropped = Item(info=definition, amount=amount)
        self.dropped_items.append(dropped)
        return dropped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id_string,
            "display_name": self.display_name,
            "language": self.language,
            "inventory": self.inventory.to_dict() if self.inventory else None,
            "dropped_items": [item.to_dict() for item in self.dropped_items],
        }


# =============================================================================
# Item Catalog
# =============================================================================

class ItemDefinitions:
    """Catalog of item definitions keyed by shortname (case-insensitive)."""

    def __init__(self, definitions: Optional[List[ItemDefinition]] = None):
        self._definitions: Dict[str, ItemDefinition] = {}
        self._magazines: Dict[str, Dict[str, Any]] = {}
        for definition in definitions or []:
            self.add(definition)

    def add(self, definition: ItemDefinition, magazine_capacity: Optional[int] = None,
            ammo_shortname: Optional[str] = None) -> None:
        self._definitions[definition.shortname.casefold()] = definition
        if magazine_capacity is not None:
            self._magazines[definition.shortname.casefold()] = {
                "capacity": magazine_capacity,
                "ammo": ammo_shortname,
            }

    def find(self, shortname: str) -> Optional[ItemDefinition]:
        return self._definitions.get(shortname.casefold())

    def all(self) -> List[ItemDefinition]:
        return list(self._definitions.values())

    def create_item(self, shortname: str, amount: int = 1, contents: int = 0,
                    ammo_shortname: Optional[str] = None) -> Optional[Item]:
        """
        Build an item from the catalog.

        Weapons registered with a magazine get a Projectile held entity
        whose magazine holds `contents` rounds of their default ammo (or
        `ammo_shortname` when given).
        """
        definition = self.find(shortname)
        if definition is None:
            return None

        item = Item(info=definition, amount=amount)
        spec = self._magazines.get(definition.shortname.casefold())
        if spec is not None:
            ammo_name = ammo_shortname or spec["ammo"]
            ammo_type = self.find(ammo_name) if ammo_name else None
            capacity = spec["capacity"]
            item.held_entity = Projectile(
                primary_magazine=Magazine(
                    capacity=capacity,
                    contents=max(0, min(contents, capacity)),
                    ammo_type=ammo_type,
                )
            )
        elif definition.category == ItemCategory.TOOL.value:
            item.held_entity = HeldEntity()
        return item


def build_default_catalog() -> ItemDefinitions:
    """Catalog with the stock guns, ammo and a few non-ammo items."""
    catalog = ItemDefinitions()

    # Ammunition
    catalog.add(ItemDefinition("ammo.rifle", "5.56 Rifle Ammo", ItemCategory.AMMUNITION.value, 128))
    catalog.add(ItemDefinition("ammo.pistol", "Pistol Bullet", ItemCategory.AMMUNITION.value, 128))
    catalog.add(ItemDefinition("ammo.shotgun", "12 Gauge Buckshot", ItemCategory.AMMUNITION.value, 64))
    catalog.add(ItemDefinition("arrow.wooden", "Wooden Arrow", ItemCategory.AMMUNITION.value, 64))

    # Guns: capacity, default ammo
    catalog.add(ItemDefinition("rifle.ak", "Assault Rifle", ItemCategory.WEAPON.value), 30, "ammo.rifle")
    catalog.add(ItemDefinition("rifle.semiauto", "Semi-Automatic Rifle", ItemCategory.WEAPON.value), 16, "ammo.rifle")
    catalog.add(ItemDefinition("pistol.semiauto", "Semi-Automatic Pistol", ItemCategory.WEAPON.value), 10, "ammo.pistol")
    catalog.add(ItemDefinition("pistol.revolver", "Revolver", ItemCategory.WEAPON.value), 8, "ammo.pistol")
    catalog.add(ItemDefinition("shotgun.pump", "Pump Shotgun", ItemCategory.WEAPON.value), 6, "ammo.shotgun")
    catalog.add(ItemDefinition("bow.hunting", "Hunting Bow", ItemCategory.WEAPON.value), 1, "arrow.wooden")

    # Non-ammo
    catalog.add(ItemDefinition("hatchet", "Hatchet", ItemCategory.TOOL.value))
    catalog.add(ItemDefinition("bandage", "Bandage", ItemCategory.MEDICAL.value, 3))
    catalog.add(ItemDefinition("wood", "Wood", ItemCategory.MISC.value, 1000))

    return catalog
