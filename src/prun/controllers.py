"""Controller for the prun CLI command."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO

from prun.config import Settings
from prun.pipeline import FanOutPipeline, JobBackend, RunSummary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunCommand:
    """CLI input for one fan-out run."""

    workers: int
    command: tuple[str, ...]
    placeholder: str | None = None
    queue_size: int | None = None
    quiet: bool = False
    log_level: str | None = None


class PrunCliController:
    """Builds settings from CLI input and environment, then runs the pipeline."""

    def __init__(self, backend: JobBackend | None = None) -> None:
        self._backend = backend

    def settings_for(self, command: RunCommand) -> Settings:
        settings = Settings.from_env(
            command.workers,
            placeholder=command.placeholder,
            queue_size=command.queue_size,
            quiet=command.quiet,
            log_level=command.log_level,
        )
        settings.validate()
        return settings

    def run(
        self,
        command: RunCommand,
        *,
        stream: BinaryIO,
        emit: Callable[[str], None],
        settings: Settings | None = None,
    ) -> RunSummary:
        """Execute ``command`` for every line of ``stream``; output goes to ``emit``."""

        settings = settings or self.settings_for(command)
        logger.debug("Running %s with %s", command.command, settings)
        pipeline = FanOutPipeline(
            settings=settings,
            command_template=command.command,
            backend=self._backend,
            emit=emit,
            on_progress=(lambda msg: emit(f"{msg}\n")) if settings.announce else None,
        )
        return pipeline.run(stream)
