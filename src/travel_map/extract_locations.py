"""Extract map locations from free-text itineraries using Gemini."""

import json
import logging
import time
from typing import Any, List, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator

from config import get_text_model
from exceptions import ExtractionFailure
from util.gemini import generate_content_async

from .models import Location
from .placement import COORD_MAX, COORD_MIN, MIN_SEPARATION, spread_locations
from .regions import DEFAULT_REGION, RegionGuide

logger = logging.getLogger(__name__)

OUTPUT_LANGUAGE = "Traditional Chinese (繁體中文)"
DESCRIPTION_TONE = 'a cute, Chiikawa-style voice (using "哇！", "好期待！", "哭哭", "好厲害" etc.)'
TARGET_COUNT = "12-15"
DEFAULT_EMOJI = "📍"

LOCATION_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING"},
            "name": {"type": "STRING"},
            "description": {"type": "STRING"},
            "emoji": {"type": "STRING"},
            "x": {"type": "NUMBER"},
            "y": {"type": "NUMBER"},
            "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
        },
        "required": ["name", "x", "y"],
    },
}


class ExtractedLocation(BaseModel):
    """One raw entry as returned by the model, before ids and spacing are fixed."""

    id: Optional[str] = None
    name: str
    description: str = ""
    emoji: str = DEFAULT_EMOJI
    x: float = 50.0
    y: float = 50.0
    tags: List[str] = []

    @field_validator('name')
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        """Ensure name is not empty."""
        if not v or not v.strip():
            raise ValueError("Location name cannot be empty")
        return v.strip()

    @field_validator('id', mode='before')
    @classmethod
    def id_to_str(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator('description', 'emoji', mode='before')
    @classmethod
    def none_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return "" if info.field_name == "description" else DEFAULT_EMOJI
        return v

    @field_validator('x', 'y', mode='before')
    @classmethod
    def none_to_centre(cls, v: Any) -> Any:
        return 50.0 if v is None else v

    @field_validator('tags', mode='before')
    @classmethod
    def normalize_tags(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError(f"tags must be a list of strings, got {type(v).__name__}")
        tags = [str(tag).strip() for tag in v if tag is not None]
        return [tag for tag in tags if tag]


def build_extraction_prompt(itinerary_text: str, region: RegionGuide = DEFAULT_REGION) -> str:
    """
    Construct the extraction prompt for an itinerary.

    Args:
        itinerary_text: Raw itinerary text
        region: Layout guidance for the trip's region

    Returns:
        Complete prompt string
    """
    layout = "\n".join(f"       - {hint}" for hint in region.layout_hints)
    if region.must_include:
        names = ", ".join(f'"{name}"' for name in region.must_include)
        must_include = (
            f"    2. MANDATORY: You MUST include specific attractions mentioned such as {names} "
            "as their own separate points, do not merge them into the city name.\n"
        )
    else:
        must_include = (
            "    2. MANDATORY: Named attractions mentioned inside a day's notes must be their own "
            "separate points, do not merge them into the city name.\n"
        )

    return f"""
    Analyze the following travel itinerary ({region.name}).

    ITINERARY START
    {itinerary_text}
    ITINERARY END

    Task:
    1. Extract {TARGET_COUNT} distinct locations.
{must_include}    3. Ignore generic terms like "Camp 1", "Camp 2", "Airport", hotels or transit legs unless it's a major stop (like start/end).
    4. Generate coordinates (x, y) for a map canvas where:
{layout}
       - x: 0-100 (Left to Right), y: 0-100 (Top to Bottom).
       - Keep every marker inside {COORD_MIN:g}-{COORD_MAX:g} on both axes.
       - CRITICAL: Spread out markers visually. If two locations are geographically close, separate them by at least {MIN_SEPARATION:g}% distance on the x or y axis so the UI pins do not overlap.

    Output Format: JSON Array.
    Each item:
    - name: Name in {OUTPUT_LANGUAGE}.
    - description: A description in {DESCRIPTION_TONE}. Limit to 2 sentences.
    - emoji: One relevant emoji (e.g., 🌊 for water park, 🎢 for theme park).
    - x: number ({COORD_MIN:g}-{COORD_MAX:g}).
    - y: number ({COORD_MIN:g}-{COORD_MAX:g}).
    - tags: 2-3 keywords ({OUTPUT_LANGUAGE}).
    """


def _strip_code_fences(response_text: str) -> str:
    """Remove markdown code blocks if present."""
    response_text = response_text.strip()
    if response_text.startswith("```"):
        lines = response_text.split("\n")
        response_text = "\n".join(lines[1:-1]) if lines[-1].strip().startswith("```") else "\n".join(lines[1:])
        response_text = response_text.strip()
        if response_text.startswith("json"):
            response_text = response_text[4:].strip()
    return response_text


def parse_locations_payload(response_text: Optional[str]) -> List[ExtractedLocation]:
    """
    Parse the model's JSON array into ExtractedLocation entries.

    Entries that are not objects or lack a usable name are skipped.

    Raises:
        ExtractionFailure: If there is no text, it is not JSON, or it is not an array
    """
    if not response_text or not response_text.strip():
        raise ExtractionFailure("No data returned from Gemini")

    cleaned = _strip_code_fences(response_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse Gemini response as JSON: {cleaned[:200]}")
        raise ExtractionFailure(f"Failed to parse Gemini response as JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("locations"), list):
        data = data["locations"]
    if not isinstance(data, list):
        raise ExtractionFailure(f"Expected a JSON array of locations, got {type(data).__name__}")

    entries = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping location entry {index}: not an object")
            continue
        try:
            entries.append(ExtractedLocation(**item))
        except ValidationError as e:
            logger.warning(f"Skipping location entry {index}: {e.errors()[0]['msg']}")
    return entries


def assign_location_ids(entries: List[ExtractedLocation], now: Optional[float] = None) -> List[Location]:
    """
    Turn extracted entries into Locations with unique ids.

    Entries with a missing or blank id, or an id already used earlier in the
    batch, get a synthesized id: loc-<index>-<timestamp ms>.

    Args:
        entries: Parsed entries in extraction order
        now: Timestamp in seconds (defaults to time.time())

    Returns:
        Locations in the same order, all ids distinct
    """
    stamp = int((time.time() if now is None else now) * 1000)
    seen = {entry.id.strip() for entry in entries if entry.id and entry.id.strip()}
    used = set()
    locations = []

    for index, entry in enumerate(entries):
        location_id = (entry.id or "").strip()
        if not location_id or location_id in used:
            location_id = f"loc-{index}-{stamp}"
            suffix = 1
            while location_id in used or location_id in seen:
                location_id = f"loc-{index}-{stamp}-{suffix}"
                suffix += 1
        used.add(location_id)

        locations.append(Location(
            id=location_id,
            name=entry.name,
            description=entry.description,
            emoji=entry.emoji,
            x=min(100.0, max(0.0, entry.x)),
            y=min(100.0, max(0.0, entry.y)),
            tags=entry.tags,
        ))
    return locations


async def extract_locations(
    itinerary_text: str,
    client: genai.Client,
    region: RegionGuide = DEFAULT_REGION,
    model_name: Optional[str] = None,
    now: Optional[float] = None
) -> List[Location]:
    """
    Use Gemini to turn itinerary text into map locations.

    The model is asked for a JSON array following LOCATION_RESPONSE_SCHEMA.
    The result is accepted whatever its length; ids are made unique and the
    layout is spread so no two markers overlap.

    Args:
        itinerary_text: Raw itinerary text (any language, any structure)
        client: genai.Client instance
        region: Layout guidance for the trip's region
        model_name: Text model (defaults to TRAVEL_MAP_TEXT_MODEL)
        now: Timestamp used for synthesized ids (defaults to time.time())

    Returns:
        Locations in extraction order

    Raises:
        ExtractionFailure: If the call fails or returns no parsable JSON array
    """
    model_name = model_name or get_text_model()
    logger.info(f"Extracting locations with {model_name}")

    prompt = build_extraction_prompt(itinerary_text, region)
    logger.debug(f"Extraction prompt: {prompt}")

    try:
        response = await generate_content_async(
            client,
            model=model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=LOCATION_RESPONSE_SCHEMA
            )
        )
        response_text = response.text
    except Exception as e:
        logger.error(f"Gemini location extraction call failed: {e}")
        raise ExtractionFailure(f"Gemini location extraction call failed: {e}") from e

    entries = parse_locations_payload(response_text)
    if not entries:
        logger.warning("Gemini returned no usable locations")

    locations = spread_locations(assign_location_ids(entries, now=now))
    logger.info(f"Extracted {len(locations)} locations")
    return locations
