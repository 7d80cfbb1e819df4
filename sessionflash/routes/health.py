"""Infra endpoints: health."""

from fastapi import APIRouter

from sessionflash.config import get_settings

router = APIRouter()


@router.get("/health", tags=["Infra"])
def health() -> dict[str, str]:
    """Return basic service health."""
    return {"status": "ok", "app": get_settings().app_name}
