"""Health check routes."""

from __future__ import annotations

from fastapi import APIRouter

from sharemyad import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Report that the intake service is up, with its version."""
    return {"status": "healthy", "version": __version__}
