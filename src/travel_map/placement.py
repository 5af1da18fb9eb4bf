"""Map-space geometry: location spacing and decoration anchor zones.

All coordinates live in a 0-100 square with the origin at the top-left
(north = low y, west = low x).
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from .models import Location

logger = logging.getLogger(__name__)

MIN_SEPARATION = 15.0
COORD_MIN = 10.0
COORD_MAX = 90.0

JITTER = 5.0
MAX_ROTATION = 10.0
DECORATION_SCALE = 0.9

# Grid used when nudging cannot untangle a crowded layout: 6x6 cells
# with a 16-unit pitch from 10 to 90.
SNAP_GRID_PITCH = 16.0
SNAP_GRID_STEPS = 6

MAX_NUDGE_PASSES = 50
_EPSILON = 1e-6

# (x, y, label) - one per character slot
ANCHOR_ZONES: List[Tuple[float, float, str]] = [
    (80.0, 80.0, "south-east, near the lakes"),
    (50.0, 50.0, "central"),
    (25.0, 70.0, "west, roaming"),
    (75.0, 20.0, "north-east"),
]


def clamp_coordinate(value: float) -> float:
    """Clamp a coordinate into the marker-safe band [10, 90]."""
    return max(COORD_MIN, min(COORD_MAX, float(value)))


def is_separated(a: Location, b: Location, min_gap: float = MIN_SEPARATION) -> bool:
    """True if two locations are at least min_gap apart on x or on y."""
    return _separated((a.x, a.y), (b.x, b.y), min_gap)


def _separated(a: Sequence[float], b: Sequence[float], min_gap: float) -> bool:
    return abs(a[0] - b[0]) >= min_gap - _EPSILON or abs(a[1] - b[1]) >= min_gap - _EPSILON


def find_collisions(locations: Sequence[Location], min_gap: float = MIN_SEPARATION) -> List[Tuple[int, int]]:
    """Return index pairs (i, j), i < j, that violate the spacing rule."""
    return _collisions([(loc.x, loc.y) for loc in locations], min_gap)


def _collisions(points: Sequence[Sequence[float]], min_gap: float) -> List[Tuple[int, int]]:
    pairs = []
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            if not _separated(points[i], points[j], min_gap):
                pairs.append((i, j))
    return pairs


def _push_apart(points: List[List[float]], i: int, j: int, min_gap: float) -> None:
    """
    Move points i and j apart along the axis that needs the smaller shift.

    The shift is split between both points; when one of them is pinned
    against a bound the other takes the remainder.
    """
    dx = abs(points[i][0] - points[j][0])
    dy = abs(points[i][1] - points[j][1])
    axis = 0 if dx >= dy else 1

    # Lower/upper by coordinate; ties keep extraction order
    lo, hi = (i, j) if points[i][axis] <= points[j][axis] else (j, i)
    needed = min_gap - abs(points[hi][axis] - points[lo][axis])

    new_lo = points[lo][axis] - needed / 2
    new_hi = points[hi][axis] + needed / 2
    if new_lo < COORD_MIN:
        new_hi += COORD_MIN - new_lo
        new_lo = COORD_MIN
    if new_hi > COORD_MAX:
        new_lo -= new_hi - COORD_MAX
        new_hi = COORD_MAX

    points[lo][axis] = clamp_coordinate(new_lo)
    points[hi][axis] = clamp_coordinate(new_hi)


def _grid_cells() -> List[Tuple[float, float]]:
    return [
        (COORD_MIN + ix * SNAP_GRID_PITCH, COORD_MIN + iy * SNAP_GRID_PITCH)
        for iy in range(SNAP_GRID_STEPS)
        for ix in range(SNAP_GRID_STEPS)
    ]


def _snap_colliding(
    points: List[List[float]],
    collisions: Sequence[Tuple[int, int]],
    min_gap: float
) -> Optional[List[List[float]]]:
    """
    Move only the colliding points onto free grid cells.

    Points outside every collision stay put; a cell is usable when it is
    separated from all of them. Returns None if some colliding point finds
    no usable cell.
    """
    moving = sorted({index for pair in collisions for index in pair})
    fixed = [points[i] for i in range(len(points)) if i not in moving]
    free = [cell for cell in _grid_cells() if all(_separated(cell, p, min_gap) for p in fixed)]

    snapped = [list(p) for p in points]
    for index in moving:
        if not free:
            return None
        x, y = points[index]
        cell = min(free, key=lambda c: (c[0] - x) ** 2 + (c[1] - y) ** 2)
        free.remove(cell)
        snapped[index] = [cell[0], cell[1]]
    return snapped


def _snap_to_grid(points: List[List[float]]) -> List[List[float]]:
    """Assign each point, in order, to the nearest free grid cell."""
    free = _grid_cells()
    snapped = []
    for x, y in points:
        if not free:
            # More points than cells; leave the remainder where they are
            snapped.append([x, y])
            continue
        cell = min(free, key=lambda c: (c[0] - x) ** 2 + (c[1] - y) ** 2)
        free.remove(cell)
        snapped.append([cell[0], cell[1]])
    return snapped


def spread_locations(locations: Sequence[Location], min_gap: float = MIN_SEPARATION) -> List[Location]:
    """
    Enforce the marker layout rules on a batch of locations.

    Coordinates are clamped into [10, 90]; colliding pairs (closer than
    min_gap on both axes) are nudged apart. If nudging does not settle the
    layout, the locations still colliding are snapped onto free cells of a
    16-unit grid; only when no such cells remain is every location snapped.
    Locations outside any collision keep their place. Order and all
    non-coordinate fields are preserved.

    Args:
        locations: Locations in extraction order

    Returns:
        New Location objects satisfying the spacing rule (for up to 36 locations)
    """
    points = [[clamp_coordinate(loc.x), clamp_coordinate(loc.y)] for loc in locations]

    if len(points) >= 2:
        collisions = _collisions(points, min_gap)
        if collisions:
            logger.warning(f"Repairing {len(collisions)} overlapping location pair(s)")

        passes = 0
        while collisions and passes < MAX_NUDGE_PASSES:
            for i, j in collisions:
                if not _separated(points[i], points[j], min_gap):
                    _push_apart(points, i, j, min_gap)
            collisions = _collisions(points, min_gap)
            passes += 1

        if collisions:
            logger.warning(
                f"{len(collisions)} collision(s) left after {passes} passes, snapping colliding locations to grid"
            )
            snapped = _snap_colliding(points, collisions, min_gap)
            if snapped is None:
                logger.warning("Not enough free grid cells, snapping every location to grid")
                snapped = _snap_to_grid(points)
            points = snapped

    spread = []
    for loc, (x, y) in zip(locations, points):
        if (x, y) != (loc.x, loc.y):
            logger.debug(f"Moved '{loc.name}' from ({loc.x:.1f}, {loc.y:.1f}) to ({x:.1f}, {y:.1f})")
            loc = loc.model_copy(update={"x": x, "y": y})
        spread.append(loc)
    return spread


def anchor_for_slot(index: int) -> Tuple[float, float]:
    """Anchor point for a character slot; slots beyond the table wrap around."""
    x, y, _label = ANCHOR_ZONES[index % len(ANCHOR_ZONES)]
    return x, y


def jittered_position(anchor: Tuple[float, float], rng: Optional[random.Random] = None) -> Tuple[float, float]:
    """Anchor plus independent uniform jitter of +/-5 on each axis."""
    rng = rng or random.Random()
    return (
        anchor[0] + rng.uniform(-JITTER, JITTER),
        anchor[1] + rng.uniform(-JITTER, JITTER),
    )


def random_rotation(rng: Optional[random.Random] = None) -> float:
    """Small random tilt in degrees, within +/-10."""
    rng = rng or random.Random()
    return rng.uniform(-MAX_ROTATION, MAX_ROTATION)
