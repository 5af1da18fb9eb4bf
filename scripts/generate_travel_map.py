#!/usr/bin/env python3
"""
Generate a decorated travel map from an itinerary.

This script:
1. Extracts map locations from the itinerary using Gemini
2. Generates the map background and character stickers in parallel
3. Saves map_state.json and the images to a timestamped run directory

Usage:
    uv run python scripts/generate_travel_map.py
    uv run python scripts/generate_travel_map.py --itinerary-file trip.txt --seed 42
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config import get_runs_dir  # noqa: E402
from logging_config import get_run_logger  # noqa: E402
from travel_map import MapOrchestrator, RunStatus, SAMPLE_ITINERARY  # noqa: E402
from travel_map.export import create_run_directory, save_map_state  # noqa: E402

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    RunStatus.EXTRACTING_LOCATIONS: "Reading the itinerary...",
    RunStatus.SYNTHESIZING_ASSETS: "Drawing the map and characters...",
    RunStatus.READY: "Map ready!",
    RunStatus.ERROR: "Generation failed.",
}


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate a decorated travel map from an itinerary")
    parser.add_argument("--itinerary-file", help="Text file with the itinerary (default: bundled sample)")
    parser.add_argument("--output-dir", help=f"Base directory for runs (default: {get_runs_dir()})")
    parser.add_argument("--seed", type=int, help="Seed for character placement")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")

    args = parser.parse_args()

    if args.itinerary_file:
        itinerary_path = Path(args.itinerary_file)
        if not itinerary_path.exists():
            parser.error(f"Itinerary file not found: {itinerary_path}")
        itinerary_text = itinerary_path.read_text(encoding="utf-8")
    else:
        itinerary_text = SAMPLE_ITINERARY

    run_dir = create_run_directory(Path(args.output_dir) if args.output_dir else get_runs_dir())
    get_run_logger(run_dir, level=logging.DEBUG if args.verbose else logging.INFO)
    logger.info(f"Run directory: {run_dir}")

    rng = random.Random(args.seed) if args.seed is not None else None
    orchestrator = MapOrchestrator(rng=rng)
    orchestrator.subscribe(lambda status: logger.info(STATUS_MESSAGES.get(status, status.value)))

    map_state = asyncio.run(orchestrator.generate(itinerary_text))
    if map_state is None:
        logger.error(orchestrator.state.error)
        return 1

    save_map_state(map_state, run_dir)

    logger.info("=" * 60)
    logger.info("Travel map generation complete!")
    logger.info(f"  Locations: {len(map_state.locations)}")
    logger.info(f"  Characters: {len(map_state.decorations)}")
    logger.info(f"  Output directory: {run_dir}")
    logger.info("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
