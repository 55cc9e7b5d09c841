# Host Models

from .inventory import (
    HeldEntity,
    InventoryType,
    Item,
    ItemCategory,
    ItemContainer,
    ItemDefinition,
    ItemDefinitions,
    Magazine,
    Player,
    PlayerInventory,
    Projectile,
    build_default_catalog,
)
