"""Jinja integration and helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from sessionflash.utils.htmx import is_ajax, wants_flash_header
from sessionflash.utils.messages import Flash

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def flash_template(element: str) -> str:
    """Template path for a flash element id (``Blog.flash/x`` -> ``Blog/flash/x.html``)."""
    plugin, _, name = element.partition(".")
    if not name:
        return f"{element}.html"
    return f"{plugin}/{name}.html"


templates.env.globals["flash_template"] = flash_template


def render(
    request: Request, name: str, context: dict[str, Any] | None = None, status_code: int = 200
) -> HTMLResponse:
    """Render a template injecting one-time flash messages from the session."""
    # Requests that take their messages from the X-Flash header keep the queue
    header_delivery = is_ajax(request) and wants_flash_header(request)
    flash = Flash.for_request(request)
    ctx: dict[str, Any] = {
        "flash_messages": [] if header_delivery else flash.consume(),
    }
    if context:
        ctx.update(context)
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
