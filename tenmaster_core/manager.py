from __future__ import annotations

import logging
from typing import Optional, Tuple

from . import session as sm
from .config import GameConfig
from .db import erase_session, load_session, save_session
from .grid import Grid
from .hint import HintProvider, HintSuggestion, request_hint
from .paths import matching_indices
from .session import ActionResult, Session
from .transforms import RngLike, make_rng

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Owns the live session. Every action runs to completion and is then written
    through to the store, or erases the saved record once the board is cleared.
    """

    def __init__(self, config: Optional[GameConfig] = None, db_path: Optional[str] = None, rng: RngLike = None) -> None:
        self.config = config or GameConfig()
        self.db_path = db_path or self.config.db_path
        self._rng = make_rng(rng)
        restored = load_session(self.db_path, self.config.cols)
        self.resumed = restored is not None
        if restored is not None:
            logger.info("resumed saved session (score=%d, cells=%d)", restored.score, len(restored.grid))
            self._session = restored
        else:
            self._session = sm.new_session(self.config, self._rng)
            logger.info("started new session")
            self._persist()

    # ---------- Queries ----------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def grid(self) -> Grid:
        return self._session.grid

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def refills_remaining(self) -> int:
        return self._session.refills_remaining

    @property
    def selected(self) -> Optional[int]:
        return self._session.selected

    @property
    def undo_available(self) -> bool:
        return self._session.undo_available()

    @property
    def won(self) -> bool:
        return self._session.is_won()

    def possible_matches(self) -> Tuple[int, ...]:
        sel = self._session.selected
        if sel is None:
            return tuple()
        return matching_indices(sel, self._session.grid, self._session.cols)

    # ---------- Actions ----------

    def select(self, index: int) -> ActionResult:
        return self._commit(sm.select(self._session, index, self.config.match_reward))

    def clear_selection(self) -> ActionResult:
        return self._commit(sm.clear_selection(self._session))

    def refill(self) -> ActionResult:
        return self._commit(sm.refill(self._session, self.config.initial_fill, self._rng))

    def undo(self) -> ActionResult:
        return self._commit(sm.undo(self._session))

    def reset(self) -> ActionResult:
        erase_session(self.db_path)
        return self._commit(sm.reset(self.config, self._rng))

    def hint(self, provider: Optional[HintProvider] = None) -> Optional[HintSuggestion]:
        return request_hint(self._session.grid, self._session.cols, provider)

    # ---------- Internals ----------

    def _commit(self, result: ActionResult) -> ActionResult:
        if result.session is self._session:
            return result
        self._session = result.session
        self._persist()
        return result

    def _persist(self) -> None:
        if self._session.is_won():
            logger.info("board cleared with score %d", self._session.score)
            erase_session(self.db_path)
        else:
            save_session(self.db_path, self._session)
