# Host Services
"""
Services package for Reload Hotbar.

Keeps connected players addressable for the API.
"""

from .player_store import (
    active_players,
    item_catalog,
    get_player,
    require_player,
    register_player,
    remove_player,
)

__all__ = [
    'active_players',
    'item_catalog',
    'get_player',
    'require_player',
    'register_player',
    'remove_player',
]
