"""
Ammunition Matching System.

Rules shared by reload and unload:
- A stack is the right ammo for a weapon iff the shortnames are equal,
  ignoring case. No partial matches, no ammo-tier substitution.
- Consumption is first-fit in container order; emptied stacks are removed
- Ammo is relocated, never created or destroyed
"""
from typing import Iterable, Optional

from reload_hotbar.models.inventory import Item, ItemContainer, Projectile


def ammo_types_match(first: Optional[str], second: Optional[str]) -> bool:
    """Case-insensitive ordinal comparison of two ammo shortnames."""
    if first is None or second is None:
        return False
    return first.casefold() == second.casefold()


def is_matching_stack(item: Optional[Item], ammo_shortname: str) -> bool:
    """Check if an inventory entry is a stack of the given ammo type."""
    if item is None or item.info is None:
        return False
    return ammo_types_match(item.info.shortname, ammo_shortname)


def count_matching_ammo(container: Optional[ItemContainer], ammo_shortname: str) -> int:
    """
    Sum the amount of every stack matching an ammo type.

    Args:
        container: Container to scan (can be None)
        ammo_shortname: Ammo type the weapon requires

    Returns:
        Total rounds available, 0 if the container is absent
    """
    if container is None or container.item_list is None:
        return 0

    available = 0
    for item in container.item_list:
        if is_matching_stack(item, ammo_shortname):
            available += item.amount
    return available


def consume_matching_ammo(container: Optional[ItemContainer], ammo_shortname: str, amount: int) -> int:
    """
    Take rounds out of matching stacks in container order.

    Each matching stack gives up to its whole amount until `amount` is
    covered. Stacks that reach zero are removed from the container.

    Args:
        container: Container to draw from
        ammo_shortname: Ammo type to consume
        amount: Rounds wanted

    Returns:
        Rounds actually consumed (less than `amount` only if the container
        ran dry)
    """
    if container is None or container.item_list is None or amount <= 0:
        return 0

    remaining = amount
    # Snapshot: emptied stacks are removed while we walk the list
    for item in list(container.item_list):
        if not is_matching_stack(item, ammo_shortname):
            continue

        take = min(remaining, item.amount)
        remaining -= take
        item.use_item(take)
        if item.amount <= 0:
            item.remove_from_container()

        if remaining <= 0:
            break

    return amount - remaining


def total_ammo(
    containers: Iterable[Optional[ItemContainer]],
    weapons: Iterable[Optional[Projectile]],
    ammo_shortname: str
) -> int:
    """
    Count every round of an ammo type across containers and magazines.

    Used to check that commands only relocate ammunition.
    """
    total = 0
    for container in containers:
        total += count_matching_ammo(container, ammo_shortname)

    for weapon in weapons:
        if weapon is None or weapon.primary_magazine is None:
            continue
        magazine = weapon.primary_magazine
        if magazine.ammo_type is not None and ammo_types_match(magazine.ammo_type.shortname, ammo_shortname):
            total += magazine.contents

    return total
