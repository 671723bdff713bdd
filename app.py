from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    GameConfig,
    PathKind,
    Session,
    SessionManager,
    ActionResult,
    digit_presence,
    matching_indices,
    resolve,
    grid_from_json,
    grid_to_json,
    request_hint,
)

logger = logging.getLogger(__name__)

CONFIG = GameConfig.from_env()

app = Flask(__name__)

_lock = threading.Lock()
_manager: Optional[SessionManager] = None

# External hint collaborator: provider(grid, cols, timeout) -> {idx1, idx2, reasoning} | None.
# None means the local search answers hint requests.
hint_provider = None


def get_manager() -> SessionManager:
    global _manager
    if _manager is None:
        logger.info("opening game store at %s", CONFIG.db_path)
        _manager = SessionManager(CONFIG)
    return _manager


def set_manager(mgr: Optional[SessionManager]) -> None:
    """Swaps the live manager (tests point it at a temporary database)."""
    global _manager
    _manager = mgr


# ---------- JSON helpers ----------

def state_to_json(s: Session) -> Dict[str, Any]:
    matches = matching_indices(s.selected, s.grid, s.cols) if s.selected is not None else tuple()
    return {
        "grid": grid_to_json(s.grid),
        "cols": int(s.cols),
        "score": int(s.score),
        "refillsRemaining": int(s.refills_remaining),
        "selected": s.selected,
        "undoAvailable": s.undo_available(),
        "won": s.is_won(),
        "matches": list(matches),
        "digits": {str(d): on for d, on in digit_presence(s.grid).items()},
    }


def _path_json(path: Optional[PathKind]) -> Optional[str]:
    return path.value if path is not None else None


def _result_json(res: ActionResult) -> Dict[str, Any]:
    return {
        "ok": bool(res.ok),
        "state": state_to_json(res.session),
        "message": res.message,
        "path": _path_json(res.path),
    }


def _json_body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _int_field(body: Dict[str, Any], name: str) -> Tuple[Optional[int], Optional[str]]:
    val = body.get(name)
    if isinstance(val, bool) or not isinstance(val, int):
        return None, f"{name} must be an integer"
    return val, None


# ---------- Game API ----------

@app.get("/api/state")
def api_state() -> Any:
    with _lock:
        mgr = get_manager()
        return jsonify({"ok": True, "state": state_to_json(mgr.session), "resumed": mgr.resumed})


@app.post("/api/select")
def api_select() -> Any:
    body = _json_body()
    index, err = _int_field(body, "index")
    if err:
        return jsonify({"ok": False, "error": err}), 400
    with _lock:
        res = get_manager().select(index)  # type: ignore[arg-type]
    return jsonify(_result_json(res))


@app.post("/api/clear")
def api_clear() -> Any:
    with _lock:
        res = get_manager().clear_selection()
    return jsonify(_result_json(res))


@app.post("/api/refill")
def api_refill() -> Any:
    with _lock:
        res = get_manager().refill()
    if not res.ok:
        return jsonify({"ok": False, "error": res.message, "state": state_to_json(res.session)}), 409
    return jsonify(_result_json(res))


@app.post("/api/undo")
def api_undo() -> Any:
    with _lock:
        res = get_manager().undo()
    if not res.ok:
        return jsonify({"ok": False, "error": res.message, "state": state_to_json(res.session)}), 409
    return jsonify(_result_json(res))


@app.post("/api/reset")
def api_reset() -> Any:
    with _lock:
        res = get_manager().reset()
    return jsonify(_result_json(res))


@app.post("/api/hint")
def api_hint() -> Any:
    with _lock:
        s = get_manager().session
    # Grid is an immutable tuple, so the provider runs without holding the lock.
    h = request_hint(s.grid, s.cols, hint_provider)
    if h is None:
        return jsonify({"ok": True, "hint": None})
    return jsonify({
        "ok": True,
        "hint": {"idx1": h.idx1, "idx2": h.idx2, "path": h.path.value, "reasoning": h.reasoning},
    })


@app.post("/api/check")
def api_check() -> Any:
    body = _json_body()
    try:
        grid = grid_from_json(body.get("grid"))
    except ValueError as e:
        return jsonify({"ok": False, "error": f"bad grid: {e}"}), 400
    cols = body.get("cols", CONFIG.cols)
    if isinstance(cols, bool) or not isinstance(cols, int) or cols <= 0:
        return jsonify({"ok": False, "error": "cols must be a positive integer"}), 400
    i1, err1 = _int_field(body, "i1")
    i2, err2 = _int_field(body, "i2")
    if err1 or err2:
        return jsonify({"ok": False, "error": err1 or err2}), 400
    path = resolve(i1, i2, grid, cols)  # type: ignore[arg-type]
    return jsonify({"ok": True, "match": path is not None, "path": _path_json(path)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    logging.basicConfig(level=logging.DEBUG if (debug or CONFIG.debug) else logging.INFO)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
