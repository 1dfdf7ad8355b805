"""Shared test fixtures."""

from __future__ import annotations

import sys
import threading
import time

import pytest

from prun.pipeline import JobRunResult

PRINT_ARGS = (sys.executable, "-c", "import sys; print(' '.join(sys.argv[1:]))")
EXIT_WITH = (sys.executable, "-c", "import sys; sys.exit(int(sys.argv[1]))")


class RecordingBackend:
    """In-process backend that records concurrency and echoes the argv tail."""

    def __init__(self, delay_seconds: float = 0.0, fail_on: frozenset[str] = frozenset()) -> None:
        self.delay_seconds = delay_seconds
        self.fail_on = fail_on
        self.calls: list[tuple[str, ...]] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def run(self, argv: tuple[str, ...]) -> JobRunResult:
        with self._lock:
            self.calls.append(argv)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay_seconds:
                time.sleep(self.delay_seconds)
            if self.fail_on.intersection(argv):
                return JobRunResult(exit_code=1, output="")
            return JobRunResult(exit_code=0, output=" ".join(argv[1:]) + "\n")
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture()
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture(autouse=True)
def _clean_prun_env(monkeypatch) -> None:
    for name in (
        "PRUN_PLACEHOLDER",
        "PRUN_QUEUE_SIZE",
        "PRUN_CHUNK_SIZE",
        "PRUN_QUIET",
        "PRUN_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
