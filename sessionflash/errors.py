"""Exception handlers and error pages."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sessionflash.exceptions import FlashError
from sessionflash.utils.htmx import is_ajax, is_htmx
from sessionflash.web import render

logger = logging.getLogger(__name__)


def _wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("Accept", "") and not is_htmx(request)


def register_exception_handlers(app: FastAPI) -> None:
    """Register application-wide exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> HTMLResponse | JSONResponse:
        """Handle HTTP exceptions."""

        # Error 404 - Not Found
        if exc.status_code == 404:
            return render(request, "errors/404.html", {"title": "Page Not Found"}, status_code=404)

        # If JSON is preferred and this is not an HTMX request, answer JSON
        if _wants_json(request):
            return JSONResponse(
                {"detail": exc.detail, "status_code": exc.status_code}, status_code=exc.status_code
            )

        return render(
            request,
            "errors/500.html",
            {"title": "Error", "code": exc.status_code},
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception(request: Request, exc: RequestValidationError) -> HTMLResponse:
        """Handle request validation errors."""
        context: dict[str, Any] = {"title": "Unprocessable Entity", "errors": exc.errors()}
        return render(request, "errors/422.html", context, status_code=422)

    @app.exception_handler(Exception)
    async def server_exception(request: Request, exc: Exception) -> HTMLResponse | JSONResponse:
        """Handle uncaught server exceptions (flash misuse included)."""
        if isinstance(exc, FlashError):
            logger.error("Flash error: %s", exc, exc_info=exc)
        else:
            logger.error("Unhandled exception", exc_info=exc)
        if is_ajax(request) and not is_htmx(request):
            return JSONResponse({"detail": "Server error", "status_code": 500}, status_code=500)
        return render(request, "errors/500.html", {"title": "Server Error"}, status_code=500)
