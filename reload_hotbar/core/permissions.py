"""
Permission Service.

Named permissions registered by plugins and granted to users directly or
through groups. Every user is implicitly a member of the "default" group.
Permission and group names are case-insensitive.
"""
from typing import Dict, List, Optional, Set
import logging

from reload_hotbar.core.errors import PermissionNotFoundError, ValidationError
from reload_hotbar.models.inventory import Player

logger = logging.getLogger("reload_hotbar.permissions")

PERMISSION_USE = "reloadhotbar.use"
DEFAULT_GROUP = "default"

# Permissions this plugin registers on init
PLUGIN_PERMISSIONS: List[str] = [
    PERMISSION_USE,
]


class PermissionService:
    """In-memory permission registry with user and group grants."""

    def __init__(self):
        self._permissions: Dict[str, str] = {}  # permission -> owner
        self._user_grants: Dict[str, Set[str]] = {}
        self._group_grants: Dict[str, Set[str]] = {DEFAULT_GROUP: set()}
        self._user_groups: Dict[str, Set[str]] = {}

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().casefold()

    def register_permission(self, name: str, owner: str) -> None:
        key = self._normalize(name)
        if not key:
            raise ValidationError("permission", "Permission name cannot be empty")
        self._permissions[key] = owner
        logger.debug(f"Registered permission {key} for {owner}")

    def unregister_permissions(self, owner: str) -> None:
        """Drop every permission registered by an owner, with its grants."""
        removed = {name for name, o in self._permissions.items() if o == owner}
        for name in removed:
            del self._permissions[name]
        for grants in list(self._user_grants.values()) + list(self._group_grants.values()):
            grants.difference_update(removed)

    def permission_exists(self, name: str) -> bool:
        return self._normalize(name) in self._permissions

    def get_permissions(self) -> List[str]:
        return sorted(self._permissions)

    def _require(self, name: str) -> str:
        key = self._normalize(name)
        if key not in self._permissions:
            raise PermissionNotFoundError(name)
        return key

    # ==================== Users ====================

    def grant_user_permission(self, user_id: str, name: str) -> None:
        key = self._require(name)
        self._user_grants.setdefault(str(user_id), set()).add(key)
        logger.info(f"Granted {key} to user {user_id}")

    def revoke_user_permission(self, user_id: str, name: str) -> None:
        key = self._require(name)
        self._user_grants.get(str(user_id), set()).discard(key)
        logger.info(f"Revoked {key} from user {user_id}")

    def user_has_permission(self, user_id: str, name: str) -> bool:
        """Check a direct grant, then every group the user belongs to."""
        key = self._normalize(name)
        if key not in self._permissions:
            return False

        if key in self._user_grants.get(str(user_id), set()):
            return True

        for group in self.get_user_groups(user_id):
            if key in self._group_grants.get(group, set()):
                return True
        return False

    # ==================== Groups ====================

    def create_group(self, group: str) -> None:
        self._group_grants.setdefault(self._normalize(group), set())

    def grant_group_permission(self, group: str, name: str) -> None:
        key = self._require(name)
        self._group_grants.setdefault(self._normalize(group), set()).add(key)
        logger.info(f"Granted {key} to group {group}")

    def revoke_group_permission(self, group: str, name: str) -> None:
        key = self._require(name)
        self._group_grants.get(self._normalize(group), set()).discard(key)

    def add_user_to_group(self, user_id: str, group: str) -> None:
        group_key = self._normalize(group)
        self.create_group(group_key)
        self._user_groups.setdefault(str(user_id), set()).add(group_key)

    def remove_user_from_group(self, user_id: str, group: str) -> None:
        self._user_groups.get(str(user_id), set()).discard(self._normalize(group))

    def get_user_groups(self, user_id: str) -> List[str]:
        groups = {DEFAULT_GROUP}
        groups.update(self._user_groups.get(str(user_id), set()))
        return sorted(groups)


def has_permission(permissions: PermissionService, player: Optional[Player], name: str) -> bool:
    """Check a permission for a connected player."""
    if player is None:
        return False
    return permissions.user_has_permission(player.user_id_string, name)
