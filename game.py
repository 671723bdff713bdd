from __future__ import annotations

# Facade module that re-exports the Ten Master core.
# Used by the Flask app and the tests; the single-responsibility modules
# live under tenmaster_core/*.

from tenmaster_core.config import (  # noqa: F401
    GameConfig,
    GRID_COLUMNS,
    INITIAL_FILL_COUNT,
    MAX_REFILLS,
    MATCH_REWARD,
)
from tenmaster_core.grid import (  # noqa: F401
    Cell,
    Grid,
    EMPTY,
    position_of,
    index_of,
    is_filled,
    validate_cell,
    grid_to_json,
    grid_from_json,
    rows,
    row_count,
    filled_count,
    digit_presence,
    pretty,
)
from tenmaster_core.paths import (  # noqa: F401
    PathKind,
    values_match,
    resolve,
    are_matchable,
    matching_indices,
)
from tenmaster_core.transforms import (  # noqa: F401
    make_rng,
    create_grid,
    collapse_empty_rows,
    refill_grid,
)
from tenmaster_core.session import (  # noqa: F401
    Session,
    UndoSnapshot,
    ActionResult,
    new_session,
    select,
    clear_selection,
    refill,
    undo,
    reset,
    is_won,
    undo_available,
)
from tenmaster_core.db import (  # noqa: F401
    SESSION_KEY,
    _ensure_db_dir,
    _resolve_db_path,
    session_to_record,
    session_from_record,
    save_session,
    load_session,
    erase_session,
)
from tenmaster_core.hint import (  # noqa: F401
    HintSuggestion,
    find_hint,
    validate_suggestion,
    request_hint,
)
from tenmaster_core.manager import SessionManager  # noqa: F401


def main() -> None:
    # CLI driver delegated to tenmaster_core.cli
    from tenmaster_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
