"""ShareMyAd intake API: archive upload, upload status and set folders."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sharemyad import __version__
from sharemyad.api.routes import health, uploads
from sharemyad.data.db import init_db

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the upload tables before serving requests."""
    init_db()
    yield


app = FastAPI(
    title="ShareMyAd API",
    description="Upload creative archives, detect creative sets and browse their folders",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("SHAREMYAD_CORS_ORIGINS", "*").split(","),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(uploads.router, prefix="/api")


def main() -> None:
    """Run the API with uvicorn (``SHAREMYAD_HOST`` / ``SHAREMYAD_PORT``)."""
    import uvicorn

    uvicorn.run(
        "sharemyad.api.main:app",
        host=os.getenv("SHAREMYAD_HOST", "127.0.0.1"),
        port=int(os.getenv("SHAREMYAD_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
