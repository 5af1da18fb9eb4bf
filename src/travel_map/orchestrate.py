"""Map generation orchestration pipeline.

Orchestrates one run from itinerary text to a render-ready map:
1. Extract locations (sequential; nothing else starts until they exist)
2. Generate background and character stickers in parallel
3. Merge everything into the session's MapState

Progress is tracked as a RunStatus:

    IDLE -> EXTRACTING_LOCATIONS -> SYNTHESIZING_ASSETS -> READY
                    |                        |
                    +--------> ERROR <-------+

READY and ERROR are resting states; a new run can start from either.
"""

import asyncio
import logging
import random
from typing import Callable, List, Optional

from exceptions import GenerationError
from util.gemini import GeminiAPI

from .decorations import generate_decorations
from .extract_locations import extract_locations
from .generate_background import generate_map_background
from .models import MapState, RunStatus, SessionState
from .regions import DEFAULT_REGION, RegionGuide

logger = logging.getLogger(__name__)

RUN_FAILED_MESSAGE = "生成失敗，請稍後再試 (可能是 API 額度限制)"

StatusListener = Callable[[RunStatus], None]


class MapOrchestrator:
    """
    Owns the session state and is its only writer.

    Overlapping runs are allowed: every run is stamped with a run number
    when it starts, and a run whose number is no longer the latest drops
    its results instead of writing them. Triggers that want to refuse
    re-entry should check `busy` first.
    """

    def __init__(
        self,
        api: Optional[GeminiAPI] = None,
        region: RegionGuide = DEFAULT_REGION,
        rng: Optional[random.Random] = None
    ):
        """
        Args:
            api: Configured GeminiAPI (created from the environment on first run if None)
            region: Layout guidance for extraction and background
            rng: Random source for decoration jitter and rotation
        """
        self._api = api
        self.region = region
        self.rng = rng or random.Random()
        self._state = SessionState()
        self._last_good_map = MapState()
        self._listeners: List[StatusListener] = []

    @property
    def state(self) -> SessionState:
        """Snapshot of the current session state."""
        return self._state.model_copy(deep=True)

    @property
    def status(self) -> RunStatus:
        return self._state.status

    @property
    def busy(self) -> bool:
        """True while a run is generating."""
        return self._state.status.is_generating

    def subscribe(self, listener: StatusListener) -> None:
        """Call listener with the new status on every applied transition."""
        self._listeners.append(listener)

    def select_location(self, location_id: str) -> None:
        """
        Mark a location as selected.

        Raises:
            KeyError: If the id is not in the current map
        """
        if self._state.map.get_location(location_id) is None:
            raise KeyError(location_id)
        self._state.selected_location_id = location_id

    def clear_selection(self) -> None:
        self._state.selected_location_id = None

    def _get_client(self):
        if self._api is None:
            self._api = GeminiAPI()
        return self._api.get_client()

    def _is_current(self, run_id: int) -> bool:
        return run_id == self._state.run_id

    def _set_status(self, status: RunStatus) -> None:
        self._state.status = status
        logger.info(f"Run {self._state.run_id}: {status.value}")
        for listener in self._listeners:
            try:
                listener(status)
            except Exception:
                logger.exception(f"Status listener failed on {status.value}")

    def _start_run(self) -> int:
        """IDLE/READY/ERROR -> EXTRACTING_LOCATIONS."""
        self._state.run_id += 1
        self._state.error = None
        self._state.selected_location_id = None
        self._state.map = self._state.map.model_copy(update={"decorations": []})
        self._set_status(RunStatus.EXTRACTING_LOCATIONS)
        return self._state.run_id

    def _fail_run(self, run_id: int, stage: str, error: Exception) -> None:
        """Any generating state -> ERROR, restoring the last successful map."""
        if not self._is_current(run_id):
            logger.info(f"Run {run_id} failed during {stage} after being superseded; ignoring: {error}")
            return

        if isinstance(error, GenerationError):
            logger.error(f"Run {run_id} failed during {stage}: {error}")
        else:
            logger.exception(f"Run {run_id} failed during {stage} with unexpected error: {error}")

        self._state.map = self._last_good_map.model_copy(deep=True)
        self._state.error = RUN_FAILED_MESSAGE
        self._set_status(RunStatus.ERROR)

    async def generate(self, itinerary_text: str) -> Optional[MapState]:
        """
        Run the full pipeline for an itinerary.

        Failures never escape: they end the run in ERROR with a single
        user-facing message, and the previous map stays as it was.

        Args:
            itinerary_text: Raw itinerary text

        Returns:
            The new MapState if this run finished and was applied, otherwise None
            (failed, or superseded by a newer run)
        """
        run_id = self._start_run()
        logger.info(f"Run {run_id}: starting ({len(itinerary_text)} chars of itinerary)")

        try:
            client = self._get_client()
            locations = await extract_locations(itinerary_text, client, region=self.region)
        except Exception as e:
            self._fail_run(run_id, "location extraction", e)
            return None

        if not self._is_current(run_id):
            logger.info(f"Run {run_id} superseded after extraction; discarding {len(locations)} locations")
            return None

        # Locations become visible before the artwork is ready
        self._state.map = self._state.map.model_copy(update={"locations": locations})
        self._set_status(RunStatus.SYNTHESIZING_ASSETS)

        try:
            background_url, decorations = await asyncio.gather(
                generate_map_background(itinerary_text, client, region=self.region),
                generate_decorations(client, rng=self.rng),
            )
        except Exception as e:
            self._fail_run(run_id, "asset generation", e)
            return None

        if not self._is_current(run_id):
            logger.info(f"Run {run_id} superseded during asset generation; discarding results")
            return None

        new_map = MapState(
            background_url=background_url,
            locations=locations,
            decorations=decorations,
            region_name=self.region.name,
        )
        self._state.map = new_map
        self._last_good_map = new_map.model_copy(deep=True)
        self._set_status(RunStatus.READY)
        logger.info(
            f"Run {run_id}: map ready with {len(locations)} locations "
            f"and {len(decorations)} decorations"
        )
        return new_map.model_copy(deep=True)
