"""Write a finished map to disk: JSON state plus decoded PNG images."""

import base64
import binascii
import json
import logging
import re
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Dict, Optional

from PIL import Image

from .models import MapState

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<payload>.+)$", re.DOTALL)


def create_run_directory(base_dir: Path) -> Path:
    """
    Create a timestamped run directory.

    Example:
        output/runs/20260702_143022/
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(base_dir) / timestamp
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created output directory: {run_dir}")
    return run_dir


def decode_data_url(data_url: str) -> bytes:
    """
    Decode a base64 data: URL into raw bytes.

    Raises:
        ValueError: If the string is not a base64 data URL
    """
    match = _DATA_URL_RE.match(data_url)
    if not match:
        raise ValueError("Not a base64 data URL")
    try:
        return base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def save_data_url_as_png(data_url: str, output_path: Path) -> Path:
    """Decode an image data URL and save it as PNG, whatever its source format."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with Image.open(BytesIO(decode_data_url(data_url))) as image:
        image.save(output_path, format="PNG")
    logger.debug(f"Saved image to {output_path}")
    return output_path


def save_map_state(map_state: MapState, output_dir: Path) -> Dict[str, Path]:
    """
    Save a map to a run directory.

    Writes map_state.json (camelCase, with images replaced by relative file
    names), background.png and one characters/<id>.png per decoration.

    Args:
        map_state: Completed map
        output_dir: Directory to write into

    Returns:
        Mapping of artifact name to written path
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}
    payload = map_state.model_dump(mode="json", by_alias=True)

    background: Optional[str] = map_state.background_url
    if background:
        written["background"] = save_data_url_as_png(background, output_dir / "background.png")
        payload["backgroundUrl"] = "background.png"

    for decoration, entry in zip(map_state.decorations, payload["decorations"]):
        relative = f"characters/{decoration.id}.png"
        written[decoration.id] = save_data_url_as_png(decoration.image_url, output_dir / relative)
        entry["imageUrl"] = relative

    state_file = output_dir / "map_state.json"
    state_file.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    written["map_state"] = state_file
    logger.info(f"Saved map state to {state_file}")
    return written
