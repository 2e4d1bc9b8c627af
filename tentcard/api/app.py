"""FastAPI app and route registration."""
import logging

from fastapi import FastAPI

from tentcard.config import LOG_FORMAT, LOG_LEVEL

# Configure logging in the worker process (uvicorn --reload spawns one)
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

from tentcard.api.state import AppState, get_state
from tentcard.api.routes import cards, spotify

__all__ = ["app", "AppState", "get_state"]

app = FastAPI(
    title="Tentcard API",
    description="Local REST API to resolve link lists and render fold-over card PDFs",
)

app.include_router(cards.router, prefix="/api/cards", tags=["cards"])
app.include_router(spotify.router, prefix="/api/spotify", tags=["spotify"])
