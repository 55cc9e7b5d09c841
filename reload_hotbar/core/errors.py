"""
Reload Hotbar - Custom Error Types
Structured exceptions for plugin and host errors with recovery hints.

Command handlers never raise for bad per-item data; these errors come from
the registry, configuration and HTTP layers.
"""
from typing import Dict, Any, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the plugin."""
    # General errors
    UNKNOWN = "UNKNOWN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Authorization errors
    AUTH_FORBIDDEN = "AUTH_FORBIDDEN"
    PERMISSION_NOT_FOUND = "PERMISSION_NOT_FOUND"

    # Host errors
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"

    # Command errors
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"
    COMMAND_CONFLICT = "COMMAND_CONFLICT"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"


class GameError(Exception):
    """
    Base exception for all plugin-related errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Additional context details
    - Recovery hints for API clients
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
        recovery_hint: Optional[str] = None,
        http_status: int = 500
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint
        self.http_status = http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON response."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
                "recoverable": self.recoverable,
                "recovery_hint": self.recovery_hint
            }
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# =============================================================================
# Host Errors
# =============================================================================

class PlayerNotFoundError(GameError):
    """Raised when no connected player matches an id."""

    def __init__(self, player_id: str):
        super().__init__(
            code=ErrorCode.PLAYER_NOT_FOUND,
            message=f"Player '{player_id}' not found",
            details={"player_id": player_id},
            http_status=404,
            recovery_hint="Register the player before issuing commands"
        )


class ItemNotFoundError(GameError):
    """Raised when an item shortname is not in the item catalog."""

    def __init__(self, shortname: str):
        super().__init__(
            code=ErrorCode.ITEM_NOT_FOUND,
            message=f"Item definition '{shortname}' not found",
            details={"shortname": shortname},
            http_status=404,
            recovery_hint="Use a shortname from the item catalog"
        )


# =============================================================================
# Permission Errors
# =============================================================================

class PermissionNotFoundError(GameError):
    """Raised when granting or revoking a permission nobody registered."""

    def __init__(self, permission: str):
        super().__init__(
            code=ErrorCode.PERMISSION_NOT_FOUND,
            message=f"Permission '{permission}' is not registered",
            details={"permission": permission},
            http_status=404,
            recovery_hint="Check the permission name"
        )


# =============================================================================
# Command Errors
# =============================================================================

class CommandNotFoundError(GameError):
    """Raised when a chat command token has no registered handler."""

    def __init__(self, command: str):
        super().__init__(
            code=ErrorCode.COMMAND_NOT_FOUND,
            message=f"Unknown command '{command}'",
            details={"command": command},
            http_status=404,
            recovery_hint="Check the configured chat command names"
        )


class CommandConflictError(GameError):
    """Raised when a chat command token is already taken."""

    def __init__(self, command: str, owner: Optional[str] = None):
        details = {"command": command}
        if owner:
            details["owner"] = owner
        super().__init__(
            code=ErrorCode.COMMAND_CONFLICT,
            message=f"Command '{command}' is already registered",
            details=details,
            http_status=409,
            recovery_hint="Pick a different chat command name in the config"
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigError(GameError):
    """Raised when the plugin configuration cannot be read or is invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {}
        if path:
            details["path"] = path
        super().__init__(
            code=ErrorCode.CONFIG_INVALID,
            message=message,
            details=details,
            recoverable=False,
            http_status=500,
            recovery_hint="Fix or delete the configuration file and restart"
        )


# =============================================================================
# Validation Error
# =============================================================================

class ValidationError(GameError):
    """Input validation errors."""

    def __init__(self, field: str, message: str, value: Any = None):
        details = {"field": field}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details=details,
            http_status=400,
            recovery_hint=f"Check the value for '{field}'"
        )
