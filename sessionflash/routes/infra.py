"""Infra/diagnostic routes (non-prod helpers)."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from sessionflash.config import get_settings
from sessionflash.middleware import get_flash
from sessionflash.utils.htmx import hx_redirect, is_htmx
from sessionflash.utils.messages import Flash

router = APIRouter()

_SEVERITIES = ("success", "error", "warning", "info")


@router.get("/demo/flash", tags=["infra"])
def demo_flash(
    request: Request,
    msg: str = "Operation completed",
    severity: str = "success",
    flash: Flash = Depends(get_flash),
) -> Response:
    """Add a one-time message and redirect to home (HTMX-aware)."""
    if severity not in _SEVERITIES:
        raise HTTPException(400, f"Unknown severity {severity!r}")
    flash.set_with_severity(severity, msg)
    if is_htmx(request):
        return hx_redirect("/")
    return RedirectResponse("/", status_code=303)


@router.get("/demo/flash/ajax", tags=["infra"])
def demo_flash_ajax(
    msg: str = "Saved",
    key: str = "flash",
    flash: Flash = Depends(get_flash),
) -> JSONResponse:
    """Queue a message and answer JSON; X-Get-Flash clients get it in X-Flash."""
    flash.success(msg, {"key": key})
    return JSONResponse({"queued": len(flash.messages(key))})


@router.get("/debug/error", tags=["infra"])
def debug_error() -> None:
    """Intentionally raise an error to exercise the 500 handler in non-prod."""
    settings = get_settings()
    if settings.env == "prod":
        raise HTTPException(404, "Not found")
    raise RuntimeError("Simulated failure for testing purposes")
