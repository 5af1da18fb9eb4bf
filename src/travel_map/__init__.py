"""Itinerary-to-map generation pipeline."""

from .models import Location, Decoration, MapState, RunStatus, SessionState
from .regions import RegionGuide, DEFAULT_REGION, SAMPLE_ITINERARY
from .links import maps_search_url
from .placement import spread_locations, find_collisions, is_separated
from .generate_background import generate_map_background
from .decorations import CharacterSpec, CHARACTER_ROSTER, generate_decorations
from .orchestrate import MapOrchestrator

__all__ = [
    "Location",
    "Decoration",
    "MapState",
    "RunStatus",
    "SessionState",
    "RegionGuide",
    "DEFAULT_REGION",
    "SAMPLE_ITINERARY",
    "maps_search_url",
    "spread_locations",
    "find_collisions",
    "is_separated",
    "generate_map_background",
    "CharacterSpec",
    "CHARACTER_ROSTER",
    "generate_decorations",
    "MapOrchestrator",
]
