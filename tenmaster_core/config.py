from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

GRID_COLUMNS = 10
INITIAL_FILL_COUNT = 35
MAX_REFILLS = 5
MATCH_REWARD = 10
DEFAULT_DB = os.path.join('data', 'tenmaster.db')

_TRUTHY = ('1', 'true', 'yes', 'on')


def env_flag(value: Optional[str]) -> bool:
    return (value or '0').strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logger.warning("ignoring %s=%d: must be >= %d", name, value, minimum)
        return default
    return value


@dataclass(frozen=True)
class GameConfig:
    """Board size, refill quota, scoring and storage location for one game."""
    cols: int = GRID_COLUMNS
    initial_fill: int = INITIAL_FILL_COUNT
    max_refills: int = MAX_REFILLS
    match_reward: int = MATCH_REWARD
    db_path: str = DEFAULT_DB
    debug: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'GameConfig':
        """Reads TENMASTER_* variables; invalid values fall back to defaults."""
        e = os.environ if env is None else env
        return cls(
            cols=_env_int(e, 'TENMASTER_COLS', GRID_COLUMNS, 1),
            initial_fill=_env_int(e, 'TENMASTER_FILL', INITIAL_FILL_COUNT, 0),
            max_refills=_env_int(e, 'TENMASTER_MAX_REFILLS', MAX_REFILLS, 0),
            match_reward=_env_int(e, 'TENMASTER_REWARD', MATCH_REWARD, 0),
            db_path=e.get('TENMASTER_DB') or DEFAULT_DB,
            debug=env_flag(e.get('TENMASTER_DEBUG')),
        )
