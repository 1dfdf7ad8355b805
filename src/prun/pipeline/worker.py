"""Pool worker that executes queued jobs one at a time."""

from __future__ import annotations

import logging
import queue

from prun.pipeline.backend import (
    BackendRunError,
    JobBackend,
    describe_failure,
    format_result_line,
    substitute_placeholder,
)
from prun.pipeline.models import JOB_FAILED, JOB_SUCCEEDED, Job

logger = logging.getLogger(__name__)


class PoolWorker:
    """Consumes jobs from the shared queue until a ``None`` stop marker arrives."""

    def __init__(
        self,
        *,
        worker_id: int,
        jobs: queue.Queue[Job | None],
        backend: JobBackend,
    ) -> None:
        self.worker_id = worker_id
        self.jobs = jobs
        self.backend = backend

    def run(self) -> None:
        while True:
            job = self.jobs.get()
            if job is None:
                logger.debug("Worker %d stopping", self.worker_id)
                return
            if not job.argument:
                job.completion_sink(JOB_SUCCEEDED)
                continue
            self.execute(job)

    def execute(self, job: Job) -> None:
        """Run one job and report exactly one completion for it."""

        if not job.command_template:
            job.completion_sink(JOB_SUCCEEDED)
            return

        argv = substitute_placeholder(job.command_template, job.argument, job.placeholder)
        logger.debug("Worker %d running job #%d: %s", self.worker_id, job.sequence, argv)
        try:
            result = self.backend.run(argv)
        except BackendRunError as error:
            detail = str(error)
            outcome = JOB_FAILED
        except Exception as error:  # noqa: BLE001
            logger.exception("Worker %d: unexpected failure on job #%d", self.worker_id, job.sequence)
            detail = str(error) or type(error).__name__
            outcome = JOB_FAILED
        else:
            if result.succeeded:
                detail = result.output
                outcome = JOB_SUCCEEDED
            else:
                detail = describe_failure(result)
                outcome = JOB_FAILED

        if outcome == JOB_FAILED:
            logger.info("Job #%d failed on worker %d: %s", job.sequence, self.worker_id, detail)
        job.output_sink(format_result_line(self.worker_id, argv, detail))
        job.completion_sink(outcome)
