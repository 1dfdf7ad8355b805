"""Producer / worker pool / collector pipeline behind the ``prun`` command.

Data flows one way: input stream -> ``LineProducer`` -> bounded job queue ->
``PoolWorker`` threads -> collector mailbox -> ``ResultCollector`` on the
calling thread. Workers never touch the aggregate counters; only the collector
does, so no locks are needed beyond the two queues.
"""

from prun.pipeline.backend import (
    BackendRunError,
    JobBackend,
    JobRunResult,
    SubprocessBackend,
    substitute_placeholder,
)
from prun.pipeline.collector import InputReadError, ResultCollector
from prun.pipeline.models import JOB_FAILED, JOB_SUCCEEDED, Job, RunSummary
from prun.pipeline.producer import LineProducer, split_records
from prun.pipeline.runner import FanOutPipeline
from prun.pipeline.worker import PoolWorker

__all__ = [
    "JOB_FAILED",
    "JOB_SUCCEEDED",
    "BackendRunError",
    "FanOutPipeline",
    "InputReadError",
    "Job",
    "JobBackend",
    "JobRunResult",
    "LineProducer",
    "PoolWorker",
    "ResultCollector",
    "RunSummary",
    "SubprocessBackend",
    "split_records",
    "substitute_placeholder",
]
