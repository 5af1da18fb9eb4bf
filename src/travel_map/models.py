"""Data models for the itinerary map pipeline."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .links import maps_search_url


class RunStatus(str, Enum):
    """Progress of a generation run."""

    IDLE = "idle"
    EXTRACTING_LOCATIONS = "extracting_locations"
    SYNTHESIZING_ASSETS = "synthesizing_assets"
    READY = "ready"
    ERROR = "error"

    @property
    def is_generating(self) -> bool:
        return self in (RunStatus.EXTRACTING_LOCATIONS, RunStatus.SYNTHESIZING_ASSETS)


class Location(BaseModel):
    """A point of interest placed on the map (coordinates in 0-100 map space)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    emoji: str = "📍"
    x: float = Field(ge=0, le=100)  # west -> east
    y: float = Field(ge=0, le=100)  # north -> south
    tags: List[str] = []

    @computed_field(alias="mapsUrl")
    @property
    def maps_url(self) -> str:
        return maps_search_url(self.name)


class Decoration(BaseModel):
    """A decorative character overlay."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str  # "char-0"
    name: str
    image_url: str  # data: URL
    x: float
    y: float
    rotation: float = 0.0  # degrees
    scale: float = 1.0
    message: str = ""


class MapState(BaseModel):
    """Render-ready result of a generation run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    background_url: Optional[str] = None
    locations: List[Location] = []
    decorations: List[Decoration] = []
    region_name: Optional[str] = None

    def get_location(self, location_id: str) -> Optional[Location]:
        for location in self.locations:
            if location.id == location_id:
                return location
        return None


class SessionState(BaseModel):
    """Everything a UI needs to render the current session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    map: MapState = Field(default_factory=MapState)
    status: RunStatus = RunStatus.IDLE
    error: Optional[str] = None
    selected_location_id: Optional[str] = None
    run_id: int = 0
