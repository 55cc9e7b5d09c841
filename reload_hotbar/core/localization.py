"""
Localization Service.

Message catalogs per plugin and language. Server owners can override any
message by editing `<lang_dir>/<language>/<plugin>.json`; the defaults
only fill in keys that file does not have yet.
"""
from typing import Dict, List, Optional
from pathlib import Path
import json
import logging

logger = logging.getLogger("reload_hotbar.localization")

FALLBACK_LANGUAGE = "en"


class Lang:
    """Message keys used by the hotbar commands."""
    NO_PERMISSION = "NoPermission"
    RELOADING = "Reloading"
    NO_WEAPON = "NoWeapon"
    SUCCESS_RELOAD = "Success"
    NO_AMMO = "NoAmmo"  # In the catalog but never sent
    UNLOADING = "Unloading"
    SUCCESS_UNLOAD = "SuccessUnload"


DEFAULT_MESSAGES: Dict[str, str] = {
    Lang.NO_PERMISSION: "You do not have permission to use this command.",
    Lang.RELOADING: "Reloading your hotbar weapons...",
    Lang.NO_WEAPON: "No weapons in your hotbar need reloading.",
    Lang.SUCCESS_RELOAD: "Reloaded {0} weapons using a total of {1} ammo:\n{2}",
    Lang.NO_AMMO: "You have no matching ammo in your inventory to reload your weapons.",
    Lang.UNLOADING: "Unloading your hotbar weapons...",
    Lang.SUCCESS_UNLOAD: "Unloaded {0} weapons, removing a total of {1} ammo:\n{2}",
}


def format_message(template: str, *args, fallback: Optional[str] = None) -> str:
    """
    Substitute positional {0}, {1}... placeholders when args are given.

    A template that cannot be formatted (named or unbalanced braces, an
    index past the given args) is replaced by `fallback`, or returned
    unformatted when there is none.
    """
    if not args:
        return template
    try:
        return template.format(*args)
    except (KeyError, IndexError, ValueError) as e:
        logger.warning(f"Could not format message {template!r}: {e}")
        if fallback is None or fallback == template:
            return template
        return format_message(fallback, *args)


class LocalizationService:
    """Per-plugin, per-language message lookup."""

    def __init__(self, lang_dir: Optional[Path] = None, default_language: str = FALLBACK_LANGUAGE):
        self.lang_dir = Path(lang_dir) if lang_dir else None
        self.default_language = default_language
        # plugin -> language -> key -> template
        self._catalogs: Dict[str, Dict[str, Dict[str, str]]] = {}
        self._user_languages: Dict[str, str] = {}

    def _lang_file(self, plugin: str, language: str) -> Optional[Path]:
        if self.lang_dir is None:
            return None
        return self.lang_dir / language / f"{plugin}.json"

    def register_messages(self, messages: Dict[str, str], plugin: str, language: str = FALLBACK_LANGUAGE) -> None:
        """
        Register a plugin's messages for one language.

        Messages already customised on disk win over the given defaults.
        Keys missing from the file are added and written back.
        """
        catalog = dict(messages)
        lang_file = self._lang_file(plugin, language)

        if lang_file is not None and lang_file.exists():
            try:
                with open(lang_file, "r", encoding="utf-8") as f:
                    overrides = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable language file {lang_file}: {e}")
                overrides = {}
            if isinstance(overrides, dict):
                catalog.update({k: str(v) for k, v in overrides.items()})

        self._catalogs.setdefault(plugin, {})[language] = catalog

        if lang_file is not None:
            lang_file.parent.mkdir(parents=True, exist_ok=True)
            with open(lang_file, "w", encoding="utf-8") as f:
                json.dump(catalog, f, indent=2, ensure_ascii=False)

    def unregister_messages(self, plugin: str) -> None:
        self._catalogs.pop(plugin, None)

    def get_languages(self, plugin: Optional[str] = None) -> List[str]:
        if plugin is not None:
            return sorted(self._catalogs.get(plugin, {}))
        languages = set()
        for catalog in self._catalogs.values():
            languages.update(catalog)
        return sorted(languages)

    def set_user_language(self, user_id: str, language: str) -> None:
        self._user_languages[str(user_id)] = language

    def get_user_language(self, user_id: Optional[str]) -> str:
        if user_id is None:
            return self.default_language
        return self._user_languages.get(str(user_id), self.default_language)

    def get_message(self, key: str, plugin: str, user_id: Optional[str] = None) -> str:
        """
        Look up a message template for a user.

        Falls back to the default language, then English, then the key.
        """
        catalogs = self._catalogs.get(plugin, {})
        for language in (self.get_user_language(user_id), self.default_language, FALLBACK_LANGUAGE):
            catalog = catalogs.get(language)
            if catalog and key in catalog:
                return catalog[key]
        return key
