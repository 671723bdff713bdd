from __future__ import annotations

import random
from typing import List, Union

from .config import INITIAL_FILL_COUNT
from .grid import Cell, Grid, pad_to_row, rows


RngLike = Union[random.Random, int, None]


def make_rng(rng: RngLike = None) -> random.Random:
    """Returns rng unchanged when it is a Random, otherwise a Random seeded with it."""
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def create_grid(cols: int, fill_count: int, rng: RngLike = None) -> Grid:
    """Deals fill_count uniform digits 1..9 and pads the last row with empty cells."""
    r = make_rng(rng)
    cells: List[Cell] = [r.randint(1, 9) for _ in range(fill_count)]
    return pad_to_row(cells, cols)


def collapse_empty_rows(grid: Grid, cols: int) -> Grid:
    """Drops every row holding only empty cells. A partial last row is kept unpadded."""
    out: List[Cell] = []
    for row in rows(grid, cols):
        if any(v is not None for v in row):
            out.extend(row)
    return tuple(out)


def refill_grid(grid: Grid, cols: int, fill_count: int = INITIAL_FILL_COUNT, rng: RngLike = None) -> Grid:
    """
    Appends a copy of the remaining digits, in reading order, right after the
    last filled cell and pads the last row. An empty board is dealt afresh.
    """
    existing = [v for v in grid if v is not None]
    last_index = -1
    for i in range(len(grid) - 1, -1, -1):
        if grid[i] is not None:
            last_index = i
            break
    if last_index == -1:
        return create_grid(cols, fill_count, rng)
    cells = list(grid[:last_index + 1]) + existing
    return pad_to_row(cells, cols)
