"""
Plugin Configuration System.

Versioned JSON document holding the chat command names. Keys on disk are
the human-readable ones server owners edit by hand ("Reload Chat Command").

Loading always writes the file back, so new keys and version bumps are
persisted on first start.
"""
from dataclasses import dataclass
from typing import Dict, Any, Tuple
from pathlib import Path
import json
import logging

from reload_hotbar.core.errors import ConfigError

logger = logging.getLogger("reload_hotbar.config")

PLUGIN_NAME = "ReloadHotbar"
PLUGIN_VERSION = "1.0.0"

# Versions older than this are replaced with defaults on migration
RESET_BELOW_VERSION = "1.0.0"

KEY_VERSION = "Version"
KEY_RELOAD_COMMAND = "Reload Chat Command"
KEY_UNLOAD_COMMAND = "Unload Chat Command"

DEFAULT_RELOAD_COMMAND = "reload"
DEFAULT_UNLOAD_COMMAND = "unload"


@dataclass
class PluginConfig:
    """Configuration for the hotbar commands."""
    version: str = PLUGIN_VERSION
    reload_chat_command: str = DEFAULT_RELOAD_COMMAND
    unload_chat_command: str = DEFAULT_UNLOAD_COMMAND

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            KEY_VERSION: self.version,
            KEY_RELOAD_COMMAND: self.reload_chat_command,
            KEY_UNLOAD_COMMAND: self.unload_chat_command,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PluginConfig":
        """Create config from dictionary. Missing keys use defaults."""
        return cls(
            version=str(data.get(KEY_VERSION) or "0.0.0"),
            reload_chat_command=data.get(KEY_RELOAD_COMMAND, DEFAULT_RELOAD_COMMAND),
            unload_chat_command=data.get(KEY_UNLOAD_COMMAND, DEFAULT_UNLOAD_COMMAND),
        )

    def validate(self) -> None:
        """Raise ConfigError if a command name is unusable."""
        for key, value in (
            (KEY_RELOAD_COMMAND, self.reload_chat_command),
            (KEY_UNLOAD_COMMAND, self.unload_chat_command),
        ):
            if not isinstance(value, str) or not value.strip() or " " in value.strip():
                raise ConfigError(f"'{key}' must be a single non-empty word")
        if self.reload_chat_command.strip().casefold() == self.unload_chat_command.strip().casefold():
            raise ConfigError("Reload and unload chat commands must differ")

    def save_to_file(self, filepath: Path) -> None:
        """Save configuration to JSON file."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w', encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: Path) -> "PluginConfig":
        """Load configuration from JSON file."""
        try:
            with open(filepath, 'r', encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read configuration: {e}", path=str(filepath)) from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object", path=str(filepath))
        return cls.from_dict(data)


def parse_version(version: str) -> Tuple[int, ...]:
    """
    Turn "1.2.3" into (1, 2, 3) for comparison.

    Non-numeric parts count as 0 so a hand-mangled version still migrates.
    """
    parts = []
    for part in str(version).strip().split("."):
        digits = "".join(ch for ch in part if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    while len(parts) < 3:
        parts.append(0)
    return tuple(parts)


def is_older_version(version: str, than: str) -> bool:
    return parse_version(version) < parse_version(than)


def get_default_config() -> PluginConfig:
    """Fresh configuration at the current plugin version."""
    return PluginConfig(
        version=PLUGIN_VERSION,
        reload_chat_command=DEFAULT_RELOAD_COMMAND,
        unload_chat_command=DEFAULT_UNLOAD_COMMAND,
    )


def update_config(config: PluginConfig) -> PluginConfig:
    """
    Migrate an outdated configuration to the current version.

    Args:
        config: Configuration as read from disk

    Returns:
        Migrated configuration stamped with PLUGIN_VERSION
    """
    logger.warning("Config changes detected! Updating...")
    old_version = config.version

    if is_older_version(config.version, RESET_BELOW_VERSION):
        config = get_default_config()

    logger.warning(f"Config update complete! Updated from version {old_version} to {PLUGIN_VERSION}")
    config.version = PLUGIN_VERSION
    return config


def load_plugin_config(filepath: Path) -> PluginConfig:
    """
    Load, migrate and re-save the plugin configuration.

    A missing file produces the default configuration.

    Raises:
        ConfigError: If the file is unreadable or the values are invalid
    """
    filepath = Path(filepath)

    if filepath.exists():
        config = PluginConfig.load_from_file(filepath)
        if is_older_version(config.version, PLUGIN_VERSION):
            config = update_config(config)
    else:
        logger.info(f"Creating a new configuration file at {filepath}")
        config = get_default_config()

    config.validate()
    config.save_to_file(filepath)
    return config
