from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .grid import grid_from_json, grid_to_json
from .session import Session, UndoSnapshot

logger = logging.getLogger(__name__)

SESSION_KEY = 'ten-master-session'


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        logger.debug("db directory for %s not writable, trying fallbacks", db_path)
    candidates = [
        os.getenv('TENMASTER_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        tempfile.gettempdir(),
    ]
    base = os.path.basename(db_path) or 'tenmaster.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
            return os.path.join(d, base)
        except OSError:
            continue
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the table holding saved sessions exists."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS sessions (
            key TEXT PRIMARY KEY,
            payload TEXT NOT NULL,
            saved_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    resolved = _resolve_db_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
    except Exception:
        conn.close()
        raise
    return conn


# ---------- Record <-> Session ----------

def _non_negative_int(obj: Any, name: str) -> int:
    if isinstance(obj, bool) or not isinstance(obj, int) or obj < 0:
        raise ValueError(f'{name} must be a non-negative integer')
    return obj


def session_to_record(session: Session) -> Dict[str, Any]:
    """Durable projection of a session; selection is not persisted."""
    snap = session.undo_snapshot
    return {
        'grid': grid_to_json(session.grid),
        'refillsRemaining': int(session.refills_remaining),
        'score': int(session.score),
        'undoUsed': bool(session.undo_used),
        'undoSnapshot': None if snap is None else {
            'grid': grid_to_json(snap.grid),
            'score': int(snap.score),
        },
    }


def session_from_record(obj: Any, cols: int) -> Session:
    """Rebuilds a session from a stored record. Raises ValueError on any unexpected shape."""
    if not isinstance(obj, dict):
        raise ValueError('record must be an object')
    grid = grid_from_json(obj.get('grid'))
    refills = _non_negative_int(obj.get('refillsRemaining'), 'refillsRemaining')
    score = _non_negative_int(obj.get('score'), 'score')
    undo_used = obj.get('undoUsed')
    if not isinstance(undo_used, bool):
        raise ValueError('undoUsed must be a boolean')
    snap_in = obj.get('undoSnapshot')
    snapshot: Optional[UndoSnapshot] = None
    if snap_in is not None:
        if not isinstance(snap_in, dict):
            raise ValueError('undoSnapshot must be an object')
        snapshot = UndoSnapshot(
            grid=grid_from_json(snap_in.get('grid')),
            score=_non_negative_int(snap_in.get('score'), 'undoSnapshot.score'),
        )
    return Session(
        grid=grid,
        cols=cols,
        score=score,
        refills_remaining=refills,
        undo_used=undo_used,
        undo_snapshot=snapshot,
    )


# ---------- Store ----------

def save_session(db_path: str, session: Session, key: str = SESSION_KEY) -> bool:
    """Overwrites the saved session. Returns False (and logs) when the store is unavailable."""
    payload = json.dumps(session_to_record(session), separators=(',', ':'))
    saved_at = datetime.now(timezone.utc).isoformat(timespec='seconds').replace('+00:00', 'Z')
    try:
        conn = _connect(db_path)
        try:
            conn.execute(
                "INSERT OR REPLACE INTO sessions (key, payload, saved_at) VALUES (?, ?, ?)",
                (key, payload, saved_at),
            )
            conn.commit()
        finally:
            conn.close()
    except (sqlite3.Error, OSError) as e:
        logger.warning("could not save session to %s: %s", db_path, e)
        return False
    return True


def load_session(db_path: str, cols: int, key: str = SESSION_KEY) -> Optional[Session]:
    """Returns the saved session, or None when absent, unreadable, malformed or already cleared."""
    try:
        conn = _connect(db_path)
        try:
            row = conn.execute("SELECT payload FROM sessions WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
    except (sqlite3.Error, OSError) as e:
        logger.warning("could not read saved session from %s: %s", db_path, e)
        return None
    if not row:
        return None
    try:
        session = session_from_record(json.loads(row[0]), cols)
    except (TypeError, ValueError) as e:
        logger.warning("discarding malformed saved session: %s", e)
        return None
    if not session.grid:
        return None
    return session


def erase_session(db_path: str, key: str = SESSION_KEY) -> bool:
    """Deletes the saved session. Returns False (and logs) when the store is unavailable."""
    try:
        conn = _connect(db_path)
        try:
            conn.execute("DELETE FROM sessions WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
    except (sqlite3.Error, OSError) as e:
        logger.warning("could not erase saved session from %s: %s", db_path, e)
        return False
    return True
