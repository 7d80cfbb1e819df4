"""ASGI entrypoint and composition."""

from fastapi import FastAPI

from sessionflash.config import get_settings
from sessionflash.errors import register_exception_handlers
from sessionflash.logging import configure_logging
from sessionflash.middleware import install_middlewares
from sessionflash.routes import health, home
from sessionflash.routes import infra as infra_routes

configure_logging()


def create_app(*, force_debug: bool | None = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    force_debug:
        - None: use settings.debug.
        - True: enable debug mode.
        - False: force non-debug mode (for 500.html testing).
    """
    # Clear cached settings to ensure fresh config on app creation (tests with monkeypatch)
    get_settings.cache_clear()
    settings = get_settings()

    debug = settings.debug if force_debug is None else bool(force_debug)
    app = FastAPI(title=settings.app_name, debug=debug)

    # Middlewares (session + X-Flash header delivery)
    install_middlewares(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(home.router)
    app.include_router(infra_routes.router)

    # Error handlers
    register_exception_handlers(app)

    return app


app = create_app()
