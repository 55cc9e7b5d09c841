"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request

from reload_hotbar.config import get_settings
from reload_hotbar.core.commands import CommandRegistry
from reload_hotbar.core.localization import LocalizationService
from reload_hotbar.core.permissions import PermissionService
from reload_hotbar.core.plugin import ReloadHotbarPlugin
from reload_hotbar.core.plugin_config import PLUGIN_VERSION, load_plugin_config
from reload_hotbar.middleware.error_handler import setup_error_handlers

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("reload_hotbar")


def create_app(config_path: Optional[Path] = None, lang_dir: Optional[Path] = None) -> FastAPI:
    """
    Build the API around one plugin instance.

    Args:
        config_path: Plugin config file (defaults to settings.CONFIG_PATH)
        lang_dir: Language override directory (defaults to settings.LANG_DIR)
    """
    config_path = Path(config_path or settings.CONFIG_PATH)
    lang_dir = Path(lang_dir or settings.LANG_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events - plugin load and unload."""
        config = load_plugin_config(config_path)
        commands = CommandRegistry()
        plugin = ReloadHotbarPlugin(
            config=config,
            permissions=PermissionService(),
            lang=LocalizationService(lang_dir, default_language=settings.DEFAULT_LANGUAGE),
            commands=commands,
        )
        plugin.init()

        app.state.plugin = plugin
        app.state.commands = commands
        logger.info(f"[Startup] Reload Hotbar {PLUGIN_VERSION} ready (config: {config_path})")

        yield  # Application runs here

        plugin.unload()
        logger.info("[Shutdown] Reload Hotbar unloaded")

    app = FastAPI(
        title="Reload Hotbar",
        description="Reload or unload every weapon on a player's hotbar with one command",
        version=PLUGIN_VERSION,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.debug(f"[REQUEST] {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"[RESPONSE] {request.method} {request.url.path} -> {response.status_code}")
        return response

    setup_error_handlers(app, debug=settings.DEBUG)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "online", "plugin": "Reload Hotbar", "version": PLUGIN_VERSION}

    @app.get("/health")
    async def health_check():
        """Detailed health check."""
        plugin = getattr(app.state, "plugin", None)
        return {
            "status": "healthy",
            "plugin_loaded": bool(plugin and plugin.loaded),
            "debug_mode": settings.DEBUG,
        }

    from reload_hotbar.api.routes import hotbar
    app.include_router(hotbar.router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("reload_hotbar.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
