"""HTMX and AJAX request helpers."""

from fastapi import Request, Response


def is_htmx(request: Request) -> bool:
    """Check if request is from HTMX."""
    return request.headers.get("HX-Request", "false").lower() == "true"


def is_ajax(request: Request) -> bool:
    """Check if request was sent by client-side script (XHR, fetch or HTMX)."""
    requested_with = request.headers.get("X-Requested-With", "")
    return requested_with.lower() == "xmlhttprequest" or is_htmx(request)


def wants_flash_header(request: Request) -> bool:
    """True if any ``X-Get-Flash`` value is ``yes`` (case-insensitive)."""
    values: list[str] = []
    for raw in request.headers.getlist("X-Get-Flash"):
        values.extend(part.strip().lower() for part in raw.split(","))
    return "yes" in values


def hx_redirect(url: str) -> Response:
    """
    Instruct HTMX to redirect client-side.
    For non-HTMX clients, use a standard 303 RedirectResponse instead.
    """
    return Response(status_code=204, headers={"HX-Redirect": url})
