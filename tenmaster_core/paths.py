from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from .grid import Grid, index_of, is_filled, position_of


class PathKind(str, Enum):
    """Geometry by which two cells connect."""
    SEQUENTIAL = 'sequential'
    SEQUENTIAL_WRAP = 'sequential-wrap'
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    DIAGONAL = 'diagonal'


def values_match(v1: int, v2: int) -> bool:
    """Two digits pair when they are identical or add up to ten."""
    return v1 == v2 or v1 + v2 == 10


def _sequential_clear(grid: Grid, start: int, end: int) -> bool:
    return all(grid[i] is None for i in range(start + 1, end))


def _line_clear(grid: Grid, cols: int, x: int, y: int, step_x: int, step_y: int, steps: int) -> bool:
    """Checks the cells strictly between (x, y) and (x + steps*step_x, y + steps*step_y)."""
    for i in range(1, steps):
        if grid[index_of(x + i * step_x, y + i * step_y, cols)] is not None:
            return False
    return True


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def resolve(i1: int, i2: int, grid: Grid, cols: int) -> Optional[PathKind]:
    """
    Decides whether two cells can be removed together and by which path.
    Candidates are tried in order: reading order, horizontal, vertical, diagonal.
    Returns None when the pair is not a match.
    """
    if i1 == i2:
        return None
    if not is_filled(grid, i1) or not is_filled(grid, i2):
        return None
    if not values_match(grid[i1], grid[i2]):  # type: ignore[arg-type]
        return None

    start, end = (i1, i2) if i1 < i2 else (i2, i1)
    sx, sy = position_of(start, cols)
    ex, ey = position_of(end, cols)

    if _sequential_clear(grid, start, end):
        if sy != ey and ex < sx:
            return PathKind.SEQUENTIAL_WRAP
        return PathKind.SEQUENTIAL

    dx = ex - sx
    dy = ey - sy
    if dy == 0:
        # Same-row pairs are already decided by the sequential scan above; kept for rule order.
        if _line_clear(grid, cols, sx, sy, 1, 0, dx):
            return PathKind.HORIZONTAL
        return None
    if dx == 0:
        if _line_clear(grid, cols, sx, sy, 0, 1, dy):
            return PathKind.VERTICAL
        return None
    if abs(dx) == abs(dy):
        if _line_clear(grid, cols, sx, sy, _sign(dx), _sign(dy), abs(dx)):
            return PathKind.DIAGONAL
    return None


def are_matchable(i1: int, i2: int, grid: Grid, cols: int) -> bool:
    return resolve(i1, i2, grid, cols) is not None


def matching_indices(index: int, grid: Grid, cols: int) -> Tuple[int, ...]:
    """All indices that would currently pair with index, ascending."""
    if not is_filled(grid, index):
        return tuple()
    out: List[int] = []
    for other in range(len(grid)):
        if other != index and resolve(index, other, grid, cols) is not None:
            out.append(other)
    return tuple(out)
