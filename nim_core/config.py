"""
Environment-driven settings for the shell and the Flask app.

- NIM_LOG_LEVEL: logging level name (default WARNING)
- NIM_VERBOSE: start the shell with verbose rendering on (default false)
- NIM_OPENER: who opens the first game, "human" or "machine" (default human)
- NIM_HOST / NIM_PORT: bind address of the Flask app
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .move import Player

_TRUE = {"1", "true", "yes", "on"}


def _get(env: Mapping[str, str], name: str, default: Any, cast: Optional[Callable[[str], Any]] = None) -> Any:
    val = env.get(name)
    if val is None or val == "":
        return default
    return cast(val) if cast else val


def _as_bool(val: str) -> bool:
    return val.strip().lower() in _TRUE


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    verbose: bool = False
    opener: Player = Player.HUMAN
    host: str = "127.0.0.1"
    port: int = 5000

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        env = os.environ if env is None else env
        return cls(
            log_level=str(_get(env, "NIM_LOG_LEVEL", cls.log_level)).upper(),
            verbose=_get(env, "NIM_VERBOSE", cls.verbose, _as_bool),
            opener=_get(env, "NIM_OPENER", cls.opener, Player.parse),
            host=_get(env, "NIM_HOST", cls.host),
            port=_get(env, "NIM_PORT", cls.port, int),
        )
