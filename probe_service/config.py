"""Environment-driven configuration for the probe service."""

import logging
import os
from dataclasses import dataclass

LOAD_MODE_THREADPOOL = "threadpool"
LOAD_MODE_LEGACY = "legacy"
LOAD_MODES = (LOAD_MODE_THREADPOOL, LOAD_MODE_LEGACY)


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    hostname: str = "unknown"
    redis_url: str = "redis://localhost:6379/0"
    redis_timeout_seconds: float = 1.0
    environment: str = "development"
    log_level: str = "INFO"
    log_file: str | None = None
    load_execution_mode: str = LOAD_MODE_THREADPOOL
    load_batch_size: int = 10_000
    chaos_exit_delay_seconds: float = 0.1
    rate_limit_max: int = 1000
    rate_limit_window_minutes: int = 15

    def __post_init__(self):
        if self.load_execution_mode not in LOAD_MODES:
            raise ValueError(
                f"LOAD_EXECUTION_MODE must be one of {', '.join(LOAD_MODES)}, "
                f"got {self.load_execution_mode!r}"
            )
        if self.load_batch_size < 1:
            raise ValueError("LOAD_BATCH_SIZE must be a positive integer")
        if self.rate_limit_max < 1 or self.rate_limit_window_minutes < 1:
            raise ValueError("RATE_LIMIT_MAX and RATE_LIMIT_WINDOW_MINUTES must be positive integers")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown LOG_LEVEL {self.log_level!r}")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        return cls(
            port=int(env.get("PORT", "3000")),
            hostname=env.get("HOSTNAME", "unknown"),
            redis_url=env.get("REDIS_URL", "redis://localhost:6379/0"),
            redis_timeout_seconds=float(env.get("REDIS_TIMEOUT_SECONDS", "1.0")),
            environment=env.get("ENVIRONMENT", "development"),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE") or None,
            load_execution_mode=env.get("LOAD_EXECUTION_MODE", LOAD_MODE_THREADPOOL).lower(),
            load_batch_size=int(env.get("LOAD_BATCH_SIZE", "10000")),
            chaos_exit_delay_seconds=float(env.get("CHAOS_EXIT_DELAY_SECONDS", "0.1")),
            rate_limit_max=int(env.get("RATE_LIMIT_MAX", "1000")),
            rate_limit_window_minutes=int(env.get("RATE_LIMIT_WINDOW_MINUTES", "15")),
        )
