import logging
import random
from typing import List, Tuple

from maze.grid import Grid


logger = logging.getLogger(__name__)


def endpoint_candidates(grid: Grid, include_center: bool = False) -> List[int]:
    """The four corners (and optionally the centre), without duplicates."""
    candidates = [
        grid.index(0, 0),
        grid.index(grid.cols - 1, 0),
        grid.index(0, grid.rows - 1),
        grid.index(grid.cols - 1, grid.rows - 1),
    ]
    if include_center:
        candidates.append(grid.index(grid.cols // 2, grid.rows // 2))
    return list(dict.fromkeys(candidates))


def pick_endpoints(
    grid: Grid,
    rng: random.Random,
    include_center: bool = False,
) -> Tuple[int, int]:
    """
    Choose (start, end) uniformly from the candidate cells.  The end may not
    equal the start and may not be a blocked cell; when every other candidate
    is blocked the blocked ones are allowed (and unblocked below).
    Both endpoints are forced unblocked.
    """
    candidates = endpoint_candidates(grid, include_center)
    start = rng.choice(candidates)

    ends = [c for c in candidates if c != start and not grid.cells[c].blocked]
    if not ends:
        ends = [c for c in candidates if c != start]
    end = rng.choice(ends)

    grid.cells[start].blocked = False
    grid.cells[end].blocked   = False

    logger.info("Start: %s, End: %s", grid.coords(start), grid.coords(end))
    return start, end
