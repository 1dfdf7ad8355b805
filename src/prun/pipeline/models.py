"""Typed records exchanged between producer, workers and collector."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

JOB_SUCCEEDED = 0
JOB_FAILED = 1

MAX_EXIT_CODE = 255


@dataclass(frozen=True, slots=True)
class Job:
    """One input line paired with the shared command template."""

    argument: str
    command_template: tuple[str, ...]
    output_sink: Callable[[str], None]
    completion_sink: Callable[[int], None]
    placeholder: str = "{}"
    sequence: int = 0


class OutputMessage(NamedTuple):
    text: str


class CompletionSignal(NamedTuple):
    outcome: int


class InputExhausted(NamedTuple):
    total: int


class InputFailed(NamedTuple):
    error: BaseException


CollectorEvent = OutputMessage | CompletionSignal | InputExhausted | InputFailed


@dataclass(slots=True)
class RunSummary:
    """Aggregate counters owned by the collector."""

    total: int = 0
    done: int = 0
    failed: int = 0

    @property
    def exit_code(self) -> int:
        """Failure count, capped to the largest portable process exit status."""

        return min(self.failed, MAX_EXIT_CODE)
