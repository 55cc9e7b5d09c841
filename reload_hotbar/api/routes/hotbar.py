"""
Hotbar API Routes.

Provides endpoints for driving the plugin from outside the game:
- Register and inspect players
- Run the reload/unload commands or any chat command
- Grant/revoke permissions
- Read the plugin configuration
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from typing import Dict, Any, Optional, List

from reload_hotbar.core.errors import PermissionNotFoundError
from reload_hotbar.core.commands import CommandRegistry
from reload_hotbar.core.plugin import ReloadHotbarPlugin
from reload_hotbar.services import player_store

router = APIRouter(tags=["hotbar"])


# ============================================================================
# Request/Response Models
# ============================================================================

class ItemSpec(BaseModel):
    """An item to place in a container."""
    shortname: str
    amount: int = Field(default=1, ge=1)
    position: Optional[int] = Field(default=None, ge=0)
    contents: int = Field(default=0, ge=0)  # Rounds loaded, for guns
    ammo: Optional[str] = None  # Magazine ammo type override


class PlayerCreateRequest(BaseModel):
    """Request to register a player."""
    user_id: str = Field(min_length=1)
    display_name: str = ""
    language: str = "en"
    belt: List[ItemSpec] = Field(default_factory=list)
    main: List[ItemSpec] = Field(default_factory=list)
    permissions: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """A chat line typed by the player."""
    message: str


class CommandResponse(BaseModel):
    """Outcome of one command invocation."""
    success: bool
    messages: List[str]
    result: Optional[Dict[str, Any]] = None


class PermissionResponse(BaseModel):
    """Permission state for a player."""
    user_id: str
    permission: str
    granted: bool


# ============================================================================
# Dependencies
# ============================================================================

def get_plugin(request: Request) -> ReloadHotbarPlugin:
    return request.app.state.plugin


def get_command_registry(request: Request) -> CommandRegistry:
    return request.app.state.commands


def _run_command(player, handler, *args) -> CommandResponse:
    """Call a command handler and collect the replies it produced."""
    before = len(player.replies)
    result = handler(*args)
    messages = player.replies[before:]
    return CommandResponse(
        success=bool(result is not None and getattr(result, "succeeded", False)),
        messages=messages,
        result=result.to_dict() if hasattr(result, "to_dict") else None,
    )


# ============================================================================
# API Endpoints
# ============================================================================

@router.post("/players", status_code=201)
async def create_player(request: PlayerCreateRequest, plugin: ReloadHotbarPlugin = Depends(get_plugin)) -> Dict[str, Any]:
    """Register a player with the given belt and main inventory."""
    # Nothing is stored unless every permission exists
    for permission in request.permissions:
        if not plugin.permissions.permission_exists(permission):
            raise PermissionNotFoundError(permission)

    player = player_store.register_player(
        request.user_id,
        display_name=request.display_name,
        belt=[spec.model_dump() for spec in request.belt],
        main=[spec.model_dump() for spec in request.main],
        language=request.language,
    )
    plugin.lang.set_user_language(player.user_id_string, player.language)
    for permission in request.permissions:
        plugin.permissions.grant_user_permission(player.user_id_string, permission)
    return player.to_dict()


@router.get("/players/{user_id}")
async def get_player(user_id: str) -> Dict[str, Any]:
    """Get the full inventory state of a player."""
    return player_store.require_player(user_id).to_dict()


@router.delete("/players/{user_id}")
async def delete_player(user_id: str) -> Dict[str, Any]:
    """Forget a player."""
    player_store.require_player(user_id)
    player_store.remove_player(user_id)
    return {"success": True, "user_id": user_id}


@router.post("/players/{user_id}/reload", response_model=CommandResponse)
async def reload_player_hotbar(user_id: str, plugin: ReloadHotbarPlugin = Depends(get_plugin)):
    """Reload every weapon on the player's hotbar."""
    player = player_store.require_player(user_id)
    return _run_command(player, plugin.cmd_reload, player, plugin.config.reload_chat_command, [])


@router.post("/players/{user_id}/unload", response_model=CommandResponse)
async def unload_player_hotbar(user_id: str, plugin: ReloadHotbarPlugin = Depends(get_plugin)):
    """Unload every weapon on the player's hotbar."""
    player = player_store.require_player(user_id)
    return _run_command(player, plugin.cmd_unload, player, plugin.config.unload_chat_command, [])


@router.post("/players/{user_id}/chat", response_model=CommandResponse)
async def send_chat_command(
    user_id: str,
    request: ChatRequest,
    commands: CommandRegistry = Depends(get_command_registry),
):
    """Dispatch a chat command ("/reload") as if the player typed it."""
    player = player_store.require_player(user_id)
    return _run_command(player, commands.dispatch, player, request.message)


@router.post("/players/{user_id}/permissions/{permission}", response_model=PermissionResponse)
async def grant_permission(user_id: str, permission: str, plugin: ReloadHotbarPlugin = Depends(get_plugin)):
    """Grant a permission to a player."""
    player_store.require_player(user_id)
    plugin.permissions.grant_user_permission(user_id, permission)
    return PermissionResponse(
        user_id=user_id,
        permission=permission,
        granted=plugin.permissions.user_has_permission(user_id, permission),
    )


@router.delete("/players/{user_id}/permissions/{permission}", response_model=PermissionResponse)
async def revoke_permission(user_id: str, permission: str, plugin: ReloadHotbarPlugin = Depends(get_plugin)):
    """Revoke a permission from a player."""
    player_store.require_player(user_id)
    plugin.permissions.revoke_user_permission(user_id, permission)
    return PermissionResponse(
        user_id=user_id,
        permission=permission,
        granted=plugin.permissions.user_has_permission(user_id, permission),
    )


@router.get("/config")
async def get_config(plugin: ReloadHotbarPlugin = Depends(get_plugin)) -> Dict[str, Any]:
    """Current plugin configuration document."""
    return plugin.config.to_dict()


@router.get("/items")
async def list_items() -> List[Dict[str, Any]]:
    """All item definitions players can be built from."""
    return [definition.to_dict() for definition in player_store.item_catalog.all()]
