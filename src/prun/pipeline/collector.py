"""Result collector: the single consumer of worker output and completions."""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable

from prun.pipeline.models import (
    CollectorEvent,
    CompletionSignal,
    InputExhausted,
    InputFailed,
    OutputMessage,
    RunSummary,
)

logger = logging.getLogger(__name__)


class InputReadError(RuntimeError):
    """Reading the input stream failed with something other than end-of-input."""


class ResultCollector:
    """Drain output and completion signals until every produced job is accounted for.

    Both channels share one FIFO mailbox, so a worker's output line is always seen
    before its completion signal. The expected total stays unknown (``None``) until
    the producer reports it, which happens exactly once.
    """

    def __init__(self, emit: Callable[[str], None]) -> None:
        self._emit = emit
        self._mailbox: queue.Queue[CollectorEvent] = queue.Queue()
        self._total: int | None = None

    def send_output(self, text: str) -> None:
        self._mailbox.put(OutputMessage(text))

    def send_completion(self, outcome: int) -> None:
        self._mailbox.put(CompletionSignal(outcome))

    def finish_input(self, total: int) -> None:
        self._mailbox.put(InputExhausted(total))

    def fail_input(self, error: BaseException) -> None:
        self._mailbox.put(InputFailed(error))

    def collect(self) -> RunSummary:
        summary = RunSummary()
        while self._total is None or summary.done < self._total:
            event = self._mailbox.get()
            if isinstance(event, CompletionSignal):
                summary.done += 1
                summary.failed += event.outcome
            elif isinstance(event, OutputMessage):
                self._emit(event.text)
            elif isinstance(event, InputExhausted):
                self._set_total(event.total)
            elif isinstance(event, InputFailed):
                raise InputReadError(f"Failed to read input: {event.error}") from event.error

        summary.total = self._total
        if summary.failed != summary.exit_code:
            logger.warning(
                "%d jobs failed; exit status capped at %d",
                summary.failed,
                summary.exit_code,
            )
        return summary

    def _set_total(self, total: int) -> None:
        if self._total is not None:
            raise RuntimeError("Total job count was already reported.")
        self._total = total
