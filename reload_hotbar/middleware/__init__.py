"""Middleware package for the Reload Hotbar service."""

from reload_hotbar.middleware.error_handler import setup_error_handlers

__all__ = [
    "setup_error_handlers",
]
