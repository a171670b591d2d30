from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_DEAL_ATTEMPTS = 500


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class EngineConfig:
    """Flags the engine reads but does not own (preferences live with the caller)."""
    is_undo_enabled: bool = True
    no_auto_move_first_move: bool = False
    max_deal_attempts: int = DEFAULT_MAX_DEAL_ATTEMPTS
    dev_mode: bool = False  # initial dev mode for a fresh session

    @classmethod
    def from_env(cls, base: Optional['EngineConfig'] = None) -> 'EngineConfig':
        """Overlay SHENZHEN_* environment variables on top of `base` (or the defaults)."""
        b = base or cls()
        return cls(
            is_undo_enabled=_env_flag('SHENZHEN_UNDO_ENABLED', b.is_undo_enabled),
            no_auto_move_first_move=_env_flag('SHENZHEN_NO_AUTO_FIRST_MOVE', b.no_auto_move_first_move),
            max_deal_attempts=max(1, _env_int('SHENZHEN_MAX_DEAL_ATTEMPTS', b.max_deal_attempts)),
            dev_mode=_env_flag('SHENZHEN_DEV_MODE', b.dev_mode),
        )
