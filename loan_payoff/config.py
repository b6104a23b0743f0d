"""Settings read from the environment.

All settings have defaults, so the calculator runs with no environment at
all. Invalid values raise ``ValueError`` naming the offending variable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .strategy import DEFAULT_STRATEGY, get_strategy

ENV_PREFIX = "LOAN_PAYOFF_"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    try:
        result = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer; got {value!r}") from exc
    if result <= 0:
        raise ValueError(f"{name} must be positive; got {value!r}")
    return result


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    days_in_period: int = 30
    strategy: str = DEFAULT_STRATEGY
    log_level: str = "WARNING"
    log_json: bool = False
    max_rows: int = 120
    max_periods: int = 1200
    secret_key: str = "dev-secret-key"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        strategy = env.get(ENV_PREFIX + "STRATEGY", DEFAULT_STRATEGY)
        try:
            strategy = get_strategy(strategy).name
        except ValueError as exc:
            raise ValueError(f"{ENV_PREFIX}STRATEGY: {exc}") from exc
        log_level = env.get(ENV_PREFIX + "LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level; got {log_level!r}")
        return cls(
            days_in_period=_env_int(env, ENV_PREFIX + "DAYS_IN_PERIOD", 30),
            strategy=strategy,
            log_level=log_level,
            log_json=_env_bool(env, ENV_PREFIX + "LOG_JSON"),
            max_rows=_env_int(env, ENV_PREFIX + "MAX_ROWS", 120),
            max_periods=_env_int(env, ENV_PREFIX + "MAX_PERIODS", 1200),
            secret_key=env.get("FLASK_SECRET_KEY", "dev-secret-key"),
        )
