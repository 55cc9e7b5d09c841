"""Tests for the permission service."""
import pytest

from reload_hotbar.core.errors import PermissionNotFoundError
from reload_hotbar.core.permissions import PERMISSION_USE, PermissionService, has_permission
from reload_hotbar.models.inventory import Player


@pytest.fixture
def service() -> PermissionService:
    service = PermissionService()
    service.register_permission(PERMISSION_USE, "ReloadHotbar")
    return service


class TestUserPermissions:
    """Direct grants to users."""

    def test_not_granted_by_default(self, service):
        assert service.user_has_permission("1", PERMISSION_USE) is False

    def test_grant_and_revoke(self, service):
        service.grant_user_permission("1", PERMISSION_USE)
        assert service.user_has_permission("1", PERMISSION_USE) is True

        service.revoke_user_permission("1", PERMISSION_USE)
        assert service.user_has_permission("1", PERMISSION_USE) is False

    def test_names_are_case_insensitive(self, service):
        service.grant_user_permission("1", "ReloadHotbar.Use")
        assert service.user_has_permission("1", "RELOADHOTBAR.USE") is True

    def test_grant_unknown_permission_raises(self, service):
        with pytest.raises(PermissionNotFoundError) as exc_info:
            service.grant_user_permission("1", "reloadhotbar.admin")
        assert exc_info.value.http_status == 404

    def test_unknown_permission_is_never_held(self, service):
        assert service.user_has_permission("1", "other.use") is False


class TestGroupPermissions:
    """Grants through groups."""

    def test_default_group_applies_to_everyone(self, service):
        service.grant_group_permission("default", PERMISSION_USE)
        assert service.user_has_permission("anyone", PERMISSION_USE) is True

    def test_custom_group_membership(self, service):
        service.grant_group_permission("vip", PERMISSION_USE)
        assert service.user_has_permission("1", PERMISSION_USE) is False

        service.add_user_to_group("1", "VIP")
        assert service.user_has_permission("1", PERMISSION_USE) is True
        assert service.get_user_groups("1") == ["default", "vip"]

        service.remove_user_from_group("1", "vip")
        assert service.user_has_permission("1", PERMISSION_USE) is False

    def test_revoke_group_permission(self, service):
        service.grant_group_permission("default", PERMISSION_USE)
        service.revoke_group_permission("default", PERMISSION_USE)
        assert service.user_has_permission("1", PERMISSION_USE) is False


class TestUnregister:
    """Removing a plugin's permissions."""

    def test_unregister_drops_grants(self, service):
        service.grant_user_permission("1", PERMISSION_USE)
        service.unregister_permissions("ReloadHotbar")

        assert service.permission_exists(PERMISSION_USE) is False
        assert service.user_has_permission("1", PERMISSION_USE) is False


class TestHasPermission:
    """Player-level helper."""

    def test_player_check(self, service):
        player = Player(user_id="42")
        service.grant_user_permission("42", PERMISSION_USE)
        assert has_permission(service, player, PERMISSION_USE) is True

    def test_absent_player(self, service):
        assert has_permission(service, None, PERMISSION_USE) is False
