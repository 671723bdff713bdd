from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .grid import Grid
from .paths import PathKind, resolve

logger = logging.getLogger(__name__)

HINT_TIMEOUT = 8.0

# provider(grid, cols, timeout) -> {"idx1", "idx2", "reasoning"} or None
HintProvider = Callable[[Grid, int, float], Any]


@dataclass(frozen=True)
class HintSuggestion:
    idx1: int
    idx2: int
    path: PathKind
    reasoning: str = ''


def find_hint(grid: Grid, cols: int) -> Optional[HintSuggestion]:
    """First matchable pair in reading order, or None when the board is stuck."""
    n = len(grid)
    for i in range(n):
        if grid[i] is None:
            continue
        for j in range(i + 1, n):
            path = resolve(i, j, grid, cols)
            if path is not None:
                return HintSuggestion(i, j, path, f"{grid[i]} and {grid[j]} connect ({path.value})")
    return None


def validate_suggestion(obj: Any, grid: Grid, cols: int) -> Optional[HintSuggestion]:
    """Accepts an untrusted suggestion only if the resolver agrees it is a match."""
    if not isinstance(obj, dict):
        return None
    idx1 = obj.get('idx1')
    idx2 = obj.get('idx2')
    if isinstance(idx1, bool) or isinstance(idx2, bool):
        return None
    if not isinstance(idx1, int) or not isinstance(idx2, int):
        return None
    path = resolve(idx1, idx2, grid, cols)
    if path is None:
        logger.info("rejected hint suggestion %s/%s: not a valid match", idx1, idx2)
        return None
    reasoning = obj.get('reasoning')
    return HintSuggestion(idx1, idx2, path, reasoning if isinstance(reasoning, str) else '')


def request_hint(
    grid: Grid,
    cols: int,
    provider: Optional[HintProvider] = None,
    timeout: float = HINT_TIMEOUT,
) -> Optional[HintSuggestion]:
    """
    Asks provider for a suggestion and re-validates it; without a provider the
    local search answers. A provider that raises, times out or proposes an
    invalid pair yields None.

    The provider runs on a daemon thread, so one that never returns is
    abandoned after timeout and cannot hold the process open at exit.
    """
    if provider is None:
        return find_hint(grid, cols)
    outcome: Dict[str, Any] = {}

    def _call() -> None:
        try:
            outcome['value'] = provider(grid, cols, timeout)
        except Exception as e:
            outcome['error'] = e

    worker = threading.Thread(target=_call, name='hint-provider', daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        logger.warning("hint provider timed out after %.1fs", timeout)
        return None
    if 'error' in outcome:
        logger.warning("hint provider failed: %s", outcome['error'])
        return None
    return validate_suggestion(outcome.get('value'), grid, cols)
