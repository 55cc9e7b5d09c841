"""
Reload Hotbar plugin.

Wires the reload/unload operations to the host services: permission
checks, chat commands and localized replies. One instance is built at
startup and handed to whoever needs it.
"""
from typing import List, Optional, Union
import logging

from reload_hotbar.core.commands import CommandRegistry
from reload_hotbar.core.localization import DEFAULT_MESSAGES, Lang, LocalizationService, format_message
from reload_hotbar.core.permissions import PERMISSION_USE, PLUGIN_PERMISSIONS, PermissionService, has_permission
from reload_hotbar.core.plugin_config import PLUGIN_NAME, PluginConfig
from reload_hotbar.core.reloader import ReloadResult, reload_hotbar
from reload_hotbar.core.unloader import UnloadResult, unload_hotbar
from reload_hotbar.models.inventory import Player

logger = logging.getLogger("reload_hotbar.plugin")


class ReloadHotbarPlugin:
    """Chat commands that reload or unload every weapon on the hotbar."""

    name = PLUGIN_NAME

    def __init__(
        self,
        config: PluginConfig,
        permissions: PermissionService,
        lang: LocalizationService,
        commands: CommandRegistry,
    ):
        self.config = config
        self.permissions = permissions
        self.lang = lang
        self.commands = commands
        self.loaded = False

    # ==================== Lifecycle ====================

    def init(self) -> None:
        """Register permissions, messages and chat commands."""
        for permission in PLUGIN_PERMISSIONS:
            self.permissions.register_permission(permission, self.name)

        self.lang.register_messages(DEFAULT_MESSAGES, self.name, "en")

        self.commands.add_chat_command(self.config.reload_chat_command, self.name, self.cmd_reload)
        self.commands.add_chat_command(self.config.unload_chat_command, self.name, self.cmd_unload)

        self.loaded = True
        logger.info(
            f"{self.name} loaded: /{self.config.reload_chat_command}, /{self.config.unload_chat_command}"
        )

    def unload(self) -> None:
        """Remove everything init() registered."""
        self.commands.remove_plugin_commands(self.name)
        self.permissions.unregister_permissions(self.name)
        self.lang.unregister_messages(self.name)
        self.loaded = False
        logger.info(f"{self.name} unloaded")

    # ==================== Commands ====================

    def cmd_reload(self, player: Optional[Player], command: str = "", args: Optional[List[str]] = None) -> Optional[ReloadResult]:
        if player is None:
            return None

        if not has_permission(self.permissions, player, PERMISSION_USE):
            self.message_player(player, Lang.NO_PERMISSION)
            return None

        self.message_player(player, Lang.RELOADING)

        result = reload_hotbar(player)
        if result is None:
            self.message_player(player, Lang.NO_WEAPON)
            return None

        self._report(player, result, Lang.SUCCESS_RELOAD, result.weapons_reloaded, result.total_ammo_used)
        return result

    def cmd_unload(self, player: Optional[Player], command: str = "", args: Optional[List[str]] = None) -> Optional[UnloadResult]:
        if player is None:
            return None

        if not has_permission(self.permissions, player, PERMISSION_USE):
            self.message_player(player, Lang.NO_PERMISSION)
            return None

        self.message_player(player, Lang.UNLOADING)

        result = unload_hotbar(player)
        if result is None:
            self.message_player(player, Lang.NO_WEAPON)
            return None

        self._report(player, result, Lang.SUCCESS_UNLOAD, result.weapons_unloaded, result.total_ammo_unloaded)
        return result

    def _report(self, player: Player, result: Union[ReloadResult, UnloadResult], success_key: str,
                count: int, total: int) -> None:
        if result.succeeded:
            self.message_player(player, success_key, count, total, result.detail_text)
        else:
            self.message_player(player, Lang.NO_WEAPON)

    # ==================== Messaging ====================

    def get_message(self, player: Optional[Player], key: str, *args) -> str:
        user_id = player.user_id_string if player is not None else None
        template = self.lang.get_message(key, self.name, user_id)
        return format_message(template, *args, fallback=DEFAULT_MESSAGES.get(key))

    def message_player(self, player: Player, key: str, *args) -> str:
        message = self.get_message(player, key, *args)
        player.send_reply(message)
        return message
