"""
Hotbar Reloader.

Tops up every gun on the belt from matching ammo in the main container:
- Slots are processed in belt order
- Each weapon gets min(room left in magazine, matching ammo available)
- Full weapons, weapons without a magazine or ammo type, and weapons with
  no matching ammo are skipped silently
- One batched belt update is sent after all weapons are processed
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
import logging

from reload_hotbar.core.ammunition import count_matching_ammo, consume_matching_ammo
from reload_hotbar.models.inventory import InventoryType, ItemContainer, Player, Projectile

logger = logging.getLogger("reload_hotbar.reloader")


@dataclass
class ReloadDetail:
    """One weapon topped up by a reload."""
    weapon_name: str
    ammo_type: str
    amount: int

    def to_line(self) -> str:
        return f"- {self.weapon_name} ({self.ammo_type}) +{self.amount}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weapon_name": self.weapon_name,
            "ammo_type": self.ammo_type,
            "amount": self.amount,
        }


@dataclass
class ReloadResult:
    """Outcome of reloading one belt."""
    weapons_reloaded: int = 0
    total_ammo_used: int = 0
    details: List[ReloadDetail] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.weapons_reloaded > 0

    @property
    def detail_text(self) -> str:
        return "\n".join(detail.to_line() for detail in self.details)

    def add(self, detail: ReloadDetail) -> None:
        self.details.append(detail)
        self.weapons_reloaded += 1
        self.total_ammo_used += detail.amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weapons_reloaded": self.weapons_reloaded,
            "total_ammo_used": self.total_ammo_used,
            "details": [detail.to_dict() for detail in self.details],
        }


def reload_belt(belt: ItemContainer, main: Optional[ItemContainer]) -> ReloadResult:
    """
    Refill the magazines of the weapons on a belt.

    Args:
        belt: Quick-access container holding the weapons
        main: General pool the ammo is drawn from (can be None)

    Returns:
        ReloadResult with one detail line per weapon topped up
    """
    result = ReloadResult()

    for item in belt.item_list:
        if item is None:
            continue

        weapon = item.get_held_entity()
        if not isinstance(weapon, Projectile) or weapon.primary_magazine is None:
            continue

        magazine = weapon.primary_magazine
        if magazine.contents >= magazine.capacity:
            continue

        ammo_def = magazine.ammo_type
        if ammo_def is None:
            continue

        if main is None or main.item_list is None:
            continue

        available = count_matching_ammo(main, ammo_def.shortname)
        needed = magazine.capacity - magazine.contents
        if available <= 0 or needed <= 0:
            continue

        to_add = min(needed, available)
        consumed = consume_matching_ammo(main, ammo_def.shortname, to_add)

        magazine.contents += consumed
        weapon.send_network_update_immediate()

        logger.debug(f"Reloaded {item.display_name} with {consumed} {ammo_def.shortname}")
        result.add(ReloadDetail(
            weapon_name=item.display_name,
            ammo_type=ammo_def.shortname,
            amount=consumed,
        ))

    return result


def reload_hotbar(player: Player) -> Optional[ReloadResult]:
    """
    Reload every weapon on a player's belt from their main inventory.

    Returns:
        ReloadResult, or None when the player has no belt
    """
    inventory = player.inventory
    if inventory is None:
        return None

    belt = inventory.container_belt
    if belt is None or belt.item_list is None:
        return None

    result = reload_belt(belt, inventory.container_main)
    inventory.send_updated_inventory(InventoryType.BELT, belt)

    logger.info(
        f"Player {player.user_id_string} reloaded {result.weapons_reloaded} weapons "
        f"using {result.total_ammo_used} ammo"
    )
    return result
