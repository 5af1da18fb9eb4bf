"""Parallel image generation utility using Gemini image models."""

import asyncio
import logging
from typing import List, Optional

from google import genai
from google.genai import types

from config import DEFAULT_IMAGE_MODEL
from util.gemini import GeneratedImage, extract_inline_image, generate_content_async

logger = logging.getLogger(__name__)


async def generate_image(
    client: genai.Client,
    prompt: str,
    aspect_ratio: str = "1:1",
    model: str = DEFAULT_IMAGE_MODEL
) -> GeneratedImage:
    """
    Generate a single image from a prompt.

    Args:
        client: genai.Client instance
        prompt: Image generation prompt
        aspect_ratio: Aspect ratio hint, e.g. "4:3" or "1:1"
        model: Gemini image model

    Returns:
        GeneratedImage with the first inline image part

    Raises:
        RuntimeError: If the response carries no image data
    """
    response = await generate_content_async(
        client,
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            response_modalities=["IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio)
        )
    )

    image = extract_inline_image(response)
    if image is None:
        raise RuntimeError("No image data in response")

    logger.debug(f"Generated {image.mime_type} image ({len(image.data)} bytes)")
    return image


async def generate_images_parallel(
    client: genai.Client,
    prompts: List[str],
    max_concurrent: int = 4,
    aspect_ratio: str = "1:1",
    model: str = DEFAULT_IMAGE_MODEL
) -> List[Optional[GeneratedImage]]:
    """
    Generate multiple images in parallel from prompts.

    Each prompt is an independent unit of work: a failure is logged and
    reported as None in its slot, and never cancels or fails its siblings.

    Args:
        client: genai.Client instance
        prompts: List of image generation prompts
        max_concurrent: Maximum concurrent API calls (default 4)
        aspect_ratio: Aspect ratio hint applied to every prompt
        model: Gemini model to use

    Returns:
        List aligned with prompts: GeneratedImage, or None for failed generations

    Example:
        images = await generate_images_parallel(client, prompts)
        successes = [img for img in images if img is not None]
    """
    if not prompts:
        return []

    semaphore = asyncio.Semaphore(max_concurrent)

    async def generate_one(prompt: str, index: int) -> Optional[GeneratedImage]:
        async with semaphore:
            try:
                return await generate_image(client, prompt, aspect_ratio=aspect_ratio, model=model)
            except Exception as e:
                logger.error(f"Failed to generate image {index} ('{prompt[:50]}...'): {e}")
                return None

    logger.info(f"Generating {len(prompts)} images with max_concurrent={max_concurrent}")
    results = await asyncio.gather(*[generate_one(p, i) for i, p in enumerate(prompts)])

    success_count = sum(1 for r in results if r is not None)
    logger.info(f"Generated {success_count}/{len(prompts)} images successfully")

    return list(results)
