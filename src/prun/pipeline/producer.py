"""Line producer: turn an input byte stream into queued jobs."""

from __future__ import annotations

import logging
import os
import queue
from collections.abc import Callable, Iterator
from typing import BinaryIO

from prun.pipeline.models import Job

logger = logging.getLogger(__name__)


def split_records(stream: BinaryIO, chunk_size: int = 4096) -> Iterator[str]:
    """Yield every ``\\n``-terminated record of ``stream``, cleaned.

    Each record is yielded as soon as its line feed arrives, without waiting for
    more input. Carriage returns are removed and surrounding whitespace stripped.
    Bytes that are not valid in the filesystem encoding are kept as surrogate
    escapes so the argument reaches the command unchanged. Bytes after the last
    line feed do not form a record and are dropped.
    """

    pending = bytearray()
    while True:
        chunk = stream.read1(chunk_size)
        if not chunk:
            break
        pending.extend(chunk)
        start = 0
        while True:
            end = pending.find(b"\n", start)
            if end < 0:
                break
            yield _clean_record(bytes(pending[start:end]))
            start = end + 1
        del pending[:start]

    if pending:
        logger.debug("Dropping %d bytes of unterminated trailing input", len(pending))


def _clean_record(raw: bytes) -> str:
    return os.fsdecode(raw).strip().replace("\r", "")


class LineProducer:
    """Reads records, enqueues one job per record and reports the total once."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        stream: BinaryIO,
        jobs: queue.Queue[Job | None],
        command_template: tuple[str, ...],
        placeholder: str,
        output_sink: Callable[[str], None],
        completion_sink: Callable[[int], None],
        finish_input: Callable[[int], None],
        fail_input: Callable[[BaseException], None],
        chunk_size: int = 4096,
    ) -> None:
        self.stream = stream
        self.jobs = jobs
        self.command_template = command_template
        self.placeholder = placeholder
        self.output_sink = output_sink
        self.completion_sink = completion_sink
        self.finish_input = finish_input
        self.fail_input = fail_input
        self.chunk_size = chunk_size

    def run(self) -> None:
        count = 0
        try:
            for argument in split_records(self.stream, self.chunk_size):
                count += 1
                self.jobs.put(
                    Job(
                        argument=argument,
                        command_template=self.command_template,
                        output_sink=self.output_sink,
                        completion_sink=self.completion_sink,
                        placeholder=self.placeholder,
                        sequence=count,
                    ),
                )
        except Exception as error:  # noqa: BLE001
            logger.error("Input read failed after %d records: %s", count, error)
            self.fail_input(error)
            return

        logger.info("Input exhausted: %d records", count)
        self.finish_input(count)
