"""Map generation endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from travel_map.models import RunStatus, SessionState
from travel_map.orchestrate import MapOrchestrator
from web.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/map", tags=["map"])


class GenerateRequest(BaseModel):
    """Request body for map generation."""
    itinerary_text: str = Field(min_length=1, max_length=settings.MAX_ITINERARY_CHARS)


def _orchestrator(request: Request) -> MapOrchestrator:
    return request.app.state.orchestrator


@router.get("", response_model=SessionState)
async def get_map(request: Request):
    """Return the current session: map, status, error and selection."""
    return _orchestrator(request).state


@router.post("/generate", response_model=SessionState)
async def generate_map(body: GenerateRequest, request: Request):
    """
    Run the generation pipeline for an itinerary.

    Returns:
        Session state after the run

    Raises:
        HTTPException 409: If a run is already in progress
        HTTPException 502: If the run ended in ERROR
    """
    orchestrator = _orchestrator(request)
    if orchestrator.busy:
        raise HTTPException(status_code=409, detail=f"Generation already in progress ({orchestrator.status.value})")

    await orchestrator.generate(body.itinerary_text)

    state = orchestrator.state
    if state.status == RunStatus.ERROR:
        raise HTTPException(status_code=502, detail=state.error)
    return state


@router.post("/selection/{location_id}", response_model=SessionState)
async def select_location(location_id: str, request: Request):
    """
    Select a location on the current map.

    Raises:
        HTTPException 404: If the location is not on the current map
    """
    orchestrator = _orchestrator(request)
    try:
        orchestrator.select_location(location_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Location not found: {location_id}")
    return orchestrator.state


@router.delete("/selection", response_model=SessionState)
async def clear_selection(request: Request):
    """Clear the selected location."""
    orchestrator = _orchestrator(request)
    orchestrator.clear_selection()
    return orchestrator.state
