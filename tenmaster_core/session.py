from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .config import GameConfig, INITIAL_FILL_COUNT, MATCH_REWARD
from .grid import Grid, is_filled
from .paths import PathKind, resolve
from .transforms import RngLike, collapse_empty_rows, create_grid, refill_grid

MSG_MATCH = "Nice match!"
MSG_REFILLED = "Refilled!"
MSG_NO_REFILLS = "No refills left!"
MSG_UNDONE = "Undone"
MSG_NO_UNDO = "No undo available"
MSG_NEW_GAME = "New game"
MSG_GAME_OVER = "Board cleared. Start a new game."


@dataclass(frozen=True)
class UndoSnapshot:
    """Grid and score as they were just before the first committed match."""
    grid: Grid
    score: int


@dataclass(frozen=True)
class Session:
    """One game in progress. Transitions below return new instances."""
    grid: Grid
    cols: int
    score: int = 0
    refills_remaining: int = 0
    selected: Optional[int] = None
    undo_used: bool = False
    undo_snapshot: Optional[UndoSnapshot] = None

    def is_won(self) -> bool:
        # An all-empty grid only counts once collapse has removed its rows.
        return len(self.grid) == 0

    def undo_available(self) -> bool:
        return not self.is_won() and not self.undo_used and self.undo_snapshot is not None

    def with_selection(self, selected: Optional[int]) -> 'Session':
        return replace(self, selected=selected)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a player action: the next session plus user-facing feedback."""
    session: Session
    ok: bool
    message: Optional[str] = None
    path: Optional[PathKind] = None


def new_session(config: Optional[GameConfig] = None, rng: RngLike = None) -> Session:
    """Deals a fresh board with a full refill quota."""
    cfg = config or GameConfig()
    grid = create_grid(cfg.cols, cfg.initial_fill, rng)
    return Session(grid=grid, cols=cfg.cols, refills_remaining=cfg.max_refills)


def is_won(session: Session) -> bool:
    return session.is_won()


def undo_available(session: Session) -> bool:
    return session.undo_available()


def select(session: Session, index: int, reward: int = MATCH_REWARD) -> ActionResult:
    """
    Handles a tap on a cell. Empty cells are ignored; tapping the selected cell
    deselects it; a second cell either completes a match or becomes the new
    selection.
    """
    grid = session.grid
    if not is_filled(grid, index):
        return ActionResult(session, ok=False)
    current = session.selected
    if current is None:
        return ActionResult(session.with_selection(index), ok=True)
    if current == index:
        return ActionResult(session.with_selection(None), ok=True)

    path = resolve(current, index, grid, session.cols)
    if path is None:
        return ActionResult(session.with_selection(index), ok=True)

    snapshot = session.undo_snapshot
    if not session.undo_used and snapshot is None:
        snapshot = UndoSnapshot(grid=grid, score=session.score)
    cells = list(grid)
    cells[current] = None
    cells[index] = None
    nxt = replace(
        session,
        grid=collapse_empty_rows(tuple(cells), session.cols),
        score=session.score + reward,
        selected=None,
        undo_snapshot=snapshot,
    )
    return ActionResult(nxt, ok=True, message=MSG_MATCH, path=path)


def clear_selection(session: Session) -> ActionResult:
    if session.is_won():
        return ActionResult(session, ok=False, message=MSG_GAME_OVER)
    return ActionResult(session.with_selection(None), ok=True)


def refill(session: Session, fill_count: int = INITIAL_FILL_COUNT, rng: RngLike = None) -> ActionResult:
    """Spends one refill to extend the board; rejected when the quota is used up."""
    if session.is_won():
        return ActionResult(session, ok=False, message=MSG_GAME_OVER)
    if session.refills_remaining <= 0:
        return ActionResult(session, ok=False, message=MSG_NO_REFILLS)
    nxt = replace(
        session,
        grid=refill_grid(session.grid, session.cols, fill_count, rng),
        refills_remaining=session.refills_remaining - 1,
        selected=None,
    )
    return ActionResult(nxt, ok=True, message=MSG_REFILLED)


def undo(session: Session) -> ActionResult:
    """Restores the snapshot taken before the first match; usable once per game."""
    if session.is_won():
        return ActionResult(session, ok=False, message=MSG_GAME_OVER)
    snapshot = session.undo_snapshot
    if session.undo_used or snapshot is None:
        return ActionResult(session, ok=False, message=MSG_NO_UNDO)
    nxt = replace(
        session,
        grid=snapshot.grid,
        score=snapshot.score,
        selected=None,
        undo_used=True,
        undo_snapshot=None,
    )
    return ActionResult(nxt, ok=True, message=MSG_UNDONE)


def reset(config: Optional[GameConfig] = None, rng: RngLike = None) -> ActionResult:
    return ActionResult(new_session(config, rng), ok=True, message=MSG_NEW_GAME)
