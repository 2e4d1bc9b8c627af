"""Spotify credential status."""
from fastapi import APIRouter, Depends

from tentcard.api.state import AppState, get_state

router = APIRouter()


@router.get("/status")
def spotify_status(state: AppState = Depends(get_state)):
    """Whether client credentials are configured for catalogue lookups."""
    return {"configured": state.config.has_spotify_credentials}
