"""
Chat command registry.

Maps command tokens typed in chat ("/reload") to plugin handlers. Tokens
are matched case-insensitively and the leading slash is optional.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from reload_hotbar.core.errors import CommandConflictError, CommandNotFoundError, ValidationError
from reload_hotbar.models.inventory import Player

logger = logging.getLogger("reload_hotbar.commands")

# handler(player, command, args)
CommandHandler = Callable[[Optional[Player], str, List[str]], Any]


@dataclass
class ChatCommand:
    """A registered chat command."""
    name: str
    plugin: str
    handler: CommandHandler


def normalize_command(token: str) -> str:
    return token.strip().lstrip("/").casefold()


def parse_chat_message(message: str) -> Tuple[str, List[str]]:
    """
    Split a chat line into command token and arguments.

    "/Reload now" -> ("reload", ["now"])
    """
    parts = message.strip().split()
    if not parts:
        raise ValidationError("message", "Chat message is empty")
    command = normalize_command(parts[0])
    if not command:
        raise ValidationError("message", "Chat message has no command", value=message)
    return command, parts[1:]


class CommandRegistry:
    """Chat commands registered by plugins."""

    def __init__(self):
        self._commands: Dict[str, ChatCommand] = {}

    def add_chat_command(self, name: str, plugin: str, handler: CommandHandler) -> None:
        key = normalize_command(name)
        if not key:
            raise ValidationError("command", "Command name cannot be empty")

        existing = self._commands.get(key)
        if existing is not None:
            raise CommandConflictError(key, owner=existing.plugin)

        self._commands[key] = ChatCommand(name=key, plugin=plugin, handler=handler)
        logger.info(f"Registered chat command /{key} for {plugin}")

    def remove_chat_command(self, name: str, plugin: str) -> bool:
        key = normalize_command(name)
        existing = self._commands.get(key)
        if existing is None or existing.plugin != plugin:
            return False
        del self._commands[key]
        return True

    def remove_plugin_commands(self, plugin: str) -> int:
        names = [name for name, cmd in self._commands.items() if cmd.plugin == plugin]
        for name in names:
            del self._commands[name]
        return len(names)

    def get_command(self, name: str) -> Optional[ChatCommand]:
        return self._commands.get(normalize_command(name))

    def get_commands(self) -> List[str]:
        return sorted(self._commands)

    def dispatch(self, player: Optional[Player], message: str) -> Any:
        """
        Run the handler for a chat line.

        Returns:
            Whatever the handler returns

        Raises:
            CommandNotFoundError: If nothing is registered for the token
        """
        command, args = parse_chat_message(message)
        chat_command = self._commands.get(command)
        if chat_command is None:
            raise CommandNotFoundError(command)

        logger.debug(f"Dispatching /{command} for {player.user_id_string if player else 'unknown player'}")
        return chat_command.handler(player, command, args)
