"""Runtime configuration for the fan-out pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_PLACEHOLDER = "{}"
DEFAULT_QUEUE_SIZE = 1
DEFAULT_CHUNK_SIZE = 4096
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class Settings:
    """Pipeline settings passed explicitly to producer, workers and collector.

    ``queue_size`` bounds the job queue between the producer and the workers.
    ``1`` keeps the producer at most one record ahead of a free worker; ``0``
    makes the queue unbounded so the producer never blocks.
    """

    workers: int = 1
    placeholder: str = DEFAULT_PLACEHOLDER
    queue_size: int = DEFAULT_QUEUE_SIZE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    announce: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(
        cls,
        workers: int,
        *,
        placeholder: str | None = None,
        queue_size: int | None = None,
        quiet: bool = False,
        log_level: str | None = None,
    ) -> Settings:
        """Load settings from ``PRUN_*`` environment, explicit arguments win."""

        return cls(
            workers=workers,
            placeholder=(
                placeholder
                if placeholder is not None
                else os.getenv("PRUN_PLACEHOLDER", DEFAULT_PLACEHOLDER)
            ),
            queue_size=(
                queue_size
                if queue_size is not None
                else _env_int("PRUN_QUEUE_SIZE", DEFAULT_QUEUE_SIZE)
            ),
            chunk_size=_env_int("PRUN_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
            announce=not (quiet or _env_bool("PRUN_QUIET", default=False)),
            log_level=(log_level or os.getenv("PRUN_LOG_LEVEL", "WARNING")).strip().upper(),
        )

    def validate(self) -> None:
        """Raise configuration error if any setting is out of range."""

        if self.workers < 1:
            raise ValueError(f"Worker count must be >= 1, got {self.workers}.")
        if not self.placeholder:
            raise ValueError("PRUN_PLACEHOLDER must not be empty.")
        if self.queue_size < 0:
            raise ValueError("PRUN_QUEUE_SIZE must be >= 0.")
        if self.chunk_size < 1:
            raise ValueError("PRUN_CHUNK_SIZE must be >= 1.")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {self.log_level!r}. Expected one of {', '.join(_LOG_LEVELS)}.",
            )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as error:
        raise ValueError(f"Invalid integer value for {name}: {raw!r}") from error


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
