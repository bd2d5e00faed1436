"""mailsessions FastAPI app.

Run with ``mailsessions-api`` or ``python -m mailsessions.main``; binds to
``MAILSESSIONS_HOST`` and ``MAILSESSIONS_PORT``.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from mailsessions import config
from mailsessions.observability import initialize as initialize_observability, shutdown as shutdown_observability
from mailsessions.routers.sessions import sessions_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("mailsessions")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    logger.info("mailsessions API starting up")
    initialize_observability(app)
    yield
    shutdown_observability(app)
    logger.info("mailsessions API shut down")


app = FastAPI(title="mailsessions", lifespan=lifespan)

app.include_router(sessions_router)


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
