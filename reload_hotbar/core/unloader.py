"""
Hotbar Unloader.

Empties every loaded gun on the belt back into the player's inventory.
Which weapons qualify and how much they held is decided here; moving the
rounds (including dropping them when the inventory is full) is left to
the weapon's own unload primitive.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
import logging

from reload_hotbar.models.inventory import InventoryType, Player, Projectile

logger = logging.getLogger("reload_hotbar.unloader")


@dataclass
class UnloadDetail:
    """One weapon emptied by an unload."""
    weapon_name: str
    amount: int

    def to_line(self) -> str:
        return f"- {self.weapon_name}: -{self.amount}"

    def to_dict(self) -> Dict[str, Any]:
        return {"weapon_name": self.weapon_name, "amount": self.amount}


@dataclass
class UnloadResult:
    """Outcome of unloading one belt."""
    weapons_unloaded: int = 0
    total_ammo_unloaded: int = 0
    details: List[UnloadDetail] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.weapons_unloaded > 0

    @property
    def detail_text(self) -> str:
        return "\n".join(detail.to_line() for detail in self.details)

    def add(self, detail: UnloadDetail) -> None:
        self.details.append(detail)
        self.weapons_unloaded += 1
        self.total_ammo_unloaded += detail.amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weapons_unloaded": self.weapons_unloaded,
            "total_ammo_unloaded": self.total_ammo_unloaded,
            "details": [detail.to_dict() for detail in self.details],
        }


def unload_hotbar(player: Player) -> Optional[UnloadResult]:
    """
    Move the contents of every loaded belt weapon into the inventory.

    Returns:
        UnloadResult, or None when the player has no belt
    """
    inventory = player.inventory
    if inventory is None:
        return None

    belt = inventory.container_belt
    if belt is None or belt.item_list is None:
        return None

    result = UnloadResult()

    # Unloading may add stacks to other containers, never to the belt
    for item in list(belt.item_list):
        if item is None:
            continue

        weapon = item.get_held_entity()
        if not isinstance(weapon, Projectile) or weapon.primary_magazine is None:
            continue

        current = weapon.primary_magazine.contents
        if current <= 0:
            continue

        # Recorded before the transfer empties the magazine
        removed = current
        weapon.unload_ammo(item, player)

        logger.debug(f"Unloaded {removed} rounds from {item.display_name}")
        result.add(UnloadDetail(weapon_name=item.display_name, amount=removed))

    inventory.send_updated_inventory(InventoryType.BELT, belt)

    logger.info(
        f"Player {player.user_id_string} unloaded {result.weapons_unloaded} weapons, "
        f"removing {result.total_ammo_unloaded} ammo"
    )
    return result
