"""Wire producer, worker pool and collector into one fan-out run."""

from __future__ import annotations

import logging
import os
import queue
import sys
import threading
from collections.abc import Callable
from typing import BinaryIO

from prun.config import Settings
from prun.pipeline.backend import JobBackend, SubprocessBackend
from prun.pipeline.collector import ResultCollector
from prun.pipeline.models import Job, RunSummary
from prun.pipeline.producer import LineProducer
from prun.pipeline.worker import PoolWorker

logger = logging.getLogger(__name__)


def write_stdout(text: str) -> None:
    """Write ``text`` to stdout as raw bytes, undoing surrogate escapes."""

    sys.stdout.flush()
    sys.stdout.buffer.write(os.fsencode(text))
    sys.stdout.buffer.flush()


class FanOutPipeline:
    """Run ``command_template`` once per input line on ``settings.workers`` threads."""

    def __init__(
        self,
        *,
        settings: Settings,
        command_template: tuple[str, ...],
        backend: JobBackend | None = None,
        emit: Callable[[str], None] = write_stdout,
        on_progress: Callable[[str], None] | None = None,
    ) -> None:
        self.settings = settings
        self.command_template = tuple(command_template)
        self.backend = backend or SubprocessBackend()
        self._emit = emit
        self._on_progress = on_progress or (lambda _msg: None)

    def run(self, stream: BinaryIO) -> RunSummary:
        settings = self.settings
        jobs: queue.Queue[Job | None] = queue.Queue(maxsize=settings.queue_size)
        collector = ResultCollector(self._emit)

        self._on_progress(f"Starting {settings.workers} workers...")
        for worker_id in range(settings.workers):
            worker = PoolWorker(worker_id=worker_id, jobs=jobs, backend=self.backend)
            threading.Thread(
                target=worker.run,
                daemon=True,
                name=f"prun-worker-{worker_id}",
            ).start()

        self._on_progress("Reading input...")
        producer = LineProducer(
            stream=stream,
            jobs=jobs,
            command_template=self.command_template,
            placeholder=settings.placeholder,
            output_sink=collector.send_output,
            completion_sink=collector.send_completion,
            finish_input=collector.finish_input,
            fail_input=collector.fail_input,
            chunk_size=settings.chunk_size,
        )
        threading.Thread(target=producer.run, daemon=True, name="prun-producer").start()

        summary = collector.collect()
        logger.info(
            "Run finished: %d jobs, %d failed, %d workers",
            summary.total,
            summary.failed,
            settings.workers,
        )
        for _ in range(settings.workers):
            jobs.put(None)
        return summary
