"""Application middlewares (sessions, flash header delivery)."""

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.sessions import SessionMiddleware

from sessionflash.config import get_settings
from sessionflash.utils.messages import Flash


class FlashHeaderMiddleware(BaseHTTPMiddleware):
    """Run the flash pre-render hook on each response before it is sent."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        return Flash.for_request(request).before_render(request, response)


def install_middlewares(app: FastAPI) -> None:
    """Install required middlewares."""
    settings = get_settings()
    # Added first so it runs inside SessionMiddleware and its session edits get saved
    app.add_middleware(FlashHeaderMiddleware)
    app.add_middleware(
        SessionMiddleware, secret_key=settings.secret_key, max_age=settings.session_max_age
    )


def get_flash(request: Request) -> Flash:
    """FastAPI dependency returning the flash component for this request."""
    return Flash.for_request(request)
