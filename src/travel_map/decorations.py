"""Decorative character stickers scattered over the map."""

import logging
import random
from typing import List, Optional, Sequence

from google import genai
from pydantic import BaseModel

from config import get_image_model
from util.parallel_image_gen import generate_images_parallel

from .models import Decoration
from .placement import DECORATION_SCALE, anchor_for_slot, jittered_position, random_rotation

logger = logging.getLogger(__name__)

CHARACTER_ASPECT_RATIO = "1:1"
STICKER_STYLE = "White background, simple thick black outlines, vector flat style."


class CharacterSpec(BaseModel):
    """One roster entry: who to draw and what they say."""

    name: str
    prompt: str
    default_message: str


# Slot order matters: slot i sits at placement.ANCHOR_ZONES[i]
CHARACTER_ROSTER: List[CharacterSpec] = [
    CharacterSpec(
        name="吉伊卡娃",
        prompt="Full body sticker of Chiikawa (small white bear) wearing swimming goggles and a floatie, "
               f"looking nervous but happy. {STICKER_STYLE}",
        default_message="水...水好涼！",
    ),
    CharacterSpec(
        name="小八貓",
        prompt="Full body sticker of Hachiware (cat with blue tips) holding a camera taking a photo of scenery, "
               f"speaking. {STICKER_STYLE}",
        default_message="這個好像很厲害耶！",
    ),
    CharacterSpec(
        name="烏薩奇",
        prompt="Full body sticker of Usagi (yellow rabbit) running fast with a French baguette in mouth, "
               f"crazy eyes. {STICKER_STYLE}",
        default_message="普魯亞哈！！",
    ),
    CharacterSpec(
        name="栗子饅頭",
        prompt="Full body sticker of Kurimanju (otter) holding a german beer mug, sighing with satisfaction "
               f"'Haa...'. {STICKER_STYLE}",
        default_message="哈...",
    ),
]


async def generate_decorations(
    client: genai.Client,
    roster: Sequence[CharacterSpec] = CHARACTER_ROSTER,
    rng: Optional[random.Random] = None,
    model_name: Optional[str] = None,
    max_concurrent: int = 4
) -> List[Decoration]:
    """
    Generate one sticker per roster entry and place it near its anchor.

    Characters are generated independently; a failed character is logged by
    the image helper and left out. This never raises for per-character
    failures, so the result may be shorter than the roster, or empty.

    Args:
        client: genai.Client instance
        roster: Characters to draw, in slot order
        rng: Random source for jitter and rotation (seed it for repeatable layouts)
        model_name: Image model (defaults to TRAVEL_MAP_IMAGE_MODEL)
        max_concurrent: Maximum concurrent image calls

    Returns:
        Decorations for the characters that succeeded, in roster order
    """
    if not roster:
        return []

    rng = rng or random.Random()
    model_name = model_name or get_image_model()
    logger.info(f"Generating {len(roster)} character stickers")

    images = await generate_images_parallel(
        client,
        [character.prompt for character in roster],
        max_concurrent=max_concurrent,
        aspect_ratio=CHARACTER_ASPECT_RATIO,
        model=model_name
    )

    decorations = []
    for index, (character, image) in enumerate(zip(roster, images)):
        if image is None:
            logger.warning(f"Dropping character '{character.name}': no image generated")
            continue

        x, y = jittered_position(anchor_for_slot(index), rng)
        decorations.append(Decoration(
            id=f"char-{index}",
            name=character.name,
            image_url=image.to_data_url(),
            x=x,
            y=y,
            rotation=random_rotation(rng),
            scale=DECORATION_SCALE,
            message=character.default_message,
        ))

    logger.info(f"Placed {len(decorations)}/{len(roster)} characters")
    return decorations
