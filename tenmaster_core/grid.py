from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

Cell = Optional[int]  # 1..9, None for an empty slot
Grid = Tuple[Cell, ...]
Pos = Tuple[int, int]  # (x, y)

EMPTY: Cell = None
DIGITS = tuple(range(1, 10))


def position_of(index: int, cols: int) -> Pos:
    """Column and row of a flat index."""
    return index % cols, index // cols


def index_of(x: int, y: int, cols: int) -> int:
    """Flat index of a column and row."""
    return y * cols + x


def is_filled(grid: Grid, index: int) -> bool:
    """True when index is inside the grid and holds a digit."""
    return 0 <= index < len(grid) and grid[index] is not None


def row_count(grid: Grid, cols: int) -> int:
    return (len(grid) + cols - 1) // cols


def rows(grid: Grid, cols: int) -> Iterable[Grid]:
    """Yields the rows of the grid; the last one may be shorter than cols."""
    for start in range(0, len(grid), cols):
        yield tuple(grid[start:start + cols])


def filled_count(grid: Grid) -> int:
    return sum(1 for v in grid if v is not None)


def digit_presence(grid: Grid) -> Dict[int, bool]:
    """Maps every digit 1..9 to whether it is still on the board."""
    present = set(v for v in grid if v is not None)
    return {d: d in present for d in DIGITS}


def pad_to_row(cells: List[Cell], cols: int) -> Grid:
    """Pads with empty cells up to the next multiple of cols."""
    remainder = len(cells) % cols
    if remainder:
        cells = cells + [EMPTY] * (cols - remainder)
    return tuple(cells)


def validate_cell(value: object) -> Cell:
    """Coerces a stored value into a Cell; raises ValueError for anything else."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid cell value: {value!r}")
    if value < 1 or value > 9:
        raise ValueError(f"cell out of range: {value}")
    return value


def grid_to_json(grid: Grid) -> list:
    return [None if v is None else int(v) for v in grid]


def grid_from_json(obj: object) -> Grid:
    """Parses a JSON list into a Grid; raises ValueError on any bad cell."""
    if not isinstance(obj, list):
        raise ValueError("grid must be a list")
    return tuple(validate_cell(v) for v in obj)


def pretty(
    grid: Grid,
    cols: int,
    selected: Optional[int] = None,
    highlights: Optional[Set[int]] = None,
) -> str:
    """Human-readable board; '·' is empty, [d] selected and (d) a possible match."""
    marks = highlights or set()
    lines: List[str] = []
    for y, row in enumerate(rows(grid, cols)):
        out: List[str] = []
        for x, cell in enumerate(row):
            idx = index_of(x, y, cols)
            text = "·" if cell is None else str(cell)
            if idx == selected:
                out.append(f"[{text}]")
            elif idx in marks:
                out.append(f"({text})")
            else:
                out.append(f" {text} ")
        lines.append(f"{y * cols:4d} " + "".join(out))
    return "\n".join(lines)
