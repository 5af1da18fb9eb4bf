"""Generate the map background image using a Gemini image model."""

import logging
from typing import Optional

from google import genai

from config import get_image_model
from exceptions import BackgroundSynthesisFailure
from util.parallel_image_gen import generate_image

from .regions import DEFAULT_REGION, RegionGuide

logger = logging.getLogger(__name__)

BACKGROUND_ASPECT_RATIO = "4:3"
ITINERARY_CONTEXT_CHARS = 600
DEFAULT_STYLE_PROMPT = (
    "A very cute, kawaii, hand-drawn vector style map background. "
    "Style: Chiikawa anime style (Nagano), pastel colors."
)


def construct_background_prompt(
    itinerary_text: str,
    region: RegionGuide = DEFAULT_REGION,
    style_prompt: Optional[str] = None
) -> str:
    """
    Construct the full prompt for the background image.

    The itinerary only hints at the region; individual stops are not drawn.

    Args:
        itinerary_text: Raw itinerary text
        region: Region guide supplying the geography
        style_prompt: Optional custom style prompt

    Returns:
        Complete prompt string
    """
    style = style_prompt or DEFAULT_STYLE_PROMPT
    context = itinerary_text.strip()[:ITINERARY_CONTEXT_CHARS]

    return f"""
{style}
Region: {region.name}.
Geography: {region.background_geography}
Trip context (for regional flavour only, do not draw route lines or stop names):
{context}

Colors: Very light cream paper texture background. Pale green forests, baby blue water. Flat color palette.
Aesthetic: Clean, simple, 'loose' ink lines like a children's book illustration.

IMPORTANT CONSTRAINTS:
- High brightness, low contrast background image so markers stand out
- Do NOT include any text, words, letters, or labels in the image
- View: top-down 2D map
"""


async def generate_map_background(
    itinerary_text: str,
    client: genai.Client,
    region: RegionGuide = DEFAULT_REGION,
    model_name: Optional[str] = None,
    style_prompt: Optional[str] = None
) -> str:
    """
    Generate the map background for an itinerary.

    Args:
        itinerary_text: Raw itinerary text (regional context only)
        client: genai.Client instance
        region: Region guide supplying the geography
        model_name: Image model (defaults to TRAVEL_MAP_IMAGE_MODEL)
        style_prompt: Optional custom style prompt

    Returns:
        data: URL of the generated image (4:3)

    Raises:
        BackgroundSynthesisFailure: If the call fails or returns no image
    """
    model_name = model_name or get_image_model()
    logger.info(f"Generating map background for '{region.name}' with {model_name}")

    prompt = construct_background_prompt(itinerary_text, region, style_prompt)
    logger.debug(f"Background prompt: {prompt}")

    try:
        image = await generate_image(
            client,
            prompt,
            aspect_ratio=BACKGROUND_ASPECT_RATIO,
            model=model_name
        )
    except Exception as e:
        logger.error(f"Failed to generate map background: {e}")
        raise BackgroundSynthesisFailure(f"Failed to generate map image: {e}") from e

    logger.info(f"Generated map background ({len(image.data)} bytes)")
    return image.to_data_url()
