"""Settings shared by the worker, the workflow and clients.

Everything is read from the environment:

    TEMPORAL_ADDRESS                      default localhost:7233
    TEMPORAL_NAMESPACE                    default "default"
    TEMPORAL_PROFILE                      profile in temporal.toml, if any
    MINESWEEPER_TASK_QUEUE                default minesweeper-task-queue
    MINESWEEPER_ACTIVITY_TIMEOUT_SECONDS  default 60
    MINESWEEPER_ACTIVITY_MAX_ATTEMPTS     default 3
"""
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    """Read a positive integer setting, naming the variable when it is malformed."""
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    address: str = "localhost:7233"
    namespace: str = "default"
    profile: Optional[str] = None
    task_queue: str = "minesweeper-task-queue"
    # Upper bound for a single board generation attempt
    activity_timeout: timedelta = timedelta(seconds=60)
    # Server-side retries of one generation activity before the move fails
    activity_max_attempts: int = 3

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        return cls(
            address=environ.get("TEMPORAL_ADDRESS", cls.address),
            namespace=environ.get("TEMPORAL_NAMESPACE", cls.namespace),
            profile=environ.get("TEMPORAL_PROFILE") or None,
            task_queue=environ.get("MINESWEEPER_TASK_QUEUE", cls.task_queue),
            activity_timeout=timedelta(
                seconds=_positive_int(environ, "MINESWEEPER_ACTIVITY_TIMEOUT_SECONDS", 60)
            ),
            activity_max_attempts=_positive_int(
                environ, "MINESWEEPER_ACTIVITY_MAX_ATTEMPTS", cls.activity_max_attempts
            ),
        )


settings = Settings.from_env()
