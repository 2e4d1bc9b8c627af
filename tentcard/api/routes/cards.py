"""Resolve link lists and render card PDFs."""
import logging
import tempfile
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from tentcard.api.state import AppState, get_state
from tentcard.core.pipeline import classify_lines, needs_provider, resolve_lines, write_deck
from tentcard.core.resolver import ResolutionResult
from tentcard.errors import MetadataProviderError

logger = logging.getLogger(__name__)

router = APIRouter()


class LinksBody(BaseModel):
    lines: List[str]


def _card_to_dict(card):
    return {
        "title": card.title,
        "artist": card.artist,
        "code_payload": card.code_payload,
        "source_kind": card.source_kind.value,
        "has_cover": card.has_cover,
    }


def _resolve(body: LinksBody, state: AppState) -> ResolutionResult:
    try:
        provider = state.get_provider() if needs_provider(classify_lines(body.lines)) else None
        return resolve_lines(body.lines, state.config, provider=provider)
    except MetadataProviderError as e:
        logger.warning("Resolve failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/resolve")
def resolve_cards(body: LinksBody, state: AppState = Depends(get_state)):
    """Classify and resolve the given lines; comments and blank lines are skipped."""
    result = _resolve(body, state)
    return {
        "cards": [_card_to_dict(c) for c in result.cards],
        "warnings": [{"reference": w.reference, "message": w.message} for w in result.warnings],
    }


@router.post("/pdf")
def render_pdf(body: LinksBody, state: AppState = Depends(get_state)):
    """Resolve the given lines and return the fold-over card PDF."""
    result = _resolve(body, state)
    with tempfile.TemporaryDirectory() as tmp:
        dest = Path(tmp) / "cards.pdf"
        write_deck(result, state.config, dest)
        data = dest.read_bytes()
    return Response(
        content=data,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="cards.pdf"'},
    )
