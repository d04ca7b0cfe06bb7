"""Route handlers for the API."""

from sharemyad.api.routes import health, uploads

__all__ = [
    "health",
    "uploads",
]
