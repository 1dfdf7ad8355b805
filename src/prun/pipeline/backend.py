"""Subprocess-based execution of one substituted command line."""

from __future__ import annotations

import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Protocol


class BackendRunError(RuntimeError):
    """Command could not be spawned or did not finish successfully."""


@dataclass(slots=True)
class JobRunResult:
    """Execution outcome of one command."""

    exit_code: int
    output: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class JobBackend(Protocol):
    """Protocol implemented by command runners."""

    def run(self, argv: tuple[str, ...]) -> JobRunResult:
        """Run ``argv`` to completion and return its combined output."""


class SubprocessBackend:
    """Spawn each command directly (no shell) and capture stdout+stderr together."""

    def run(self, argv: tuple[str, ...]) -> JobRunResult:
        if not argv:
            raise BackendRunError("Command line is empty.")
        try:
            completed = subprocess.run(  # noqa: S603
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except FileNotFoundError as error:
            raise BackendRunError(f"exec: {argv[0]!r}: executable file not found") from error
        except OSError as error:
            raise BackendRunError(f"exec: {argv[0]!r}: {error.strerror or error}") from error
        return JobRunResult(
            exit_code=completed.returncode,
            output=os.fsdecode(completed.stdout),
        )


def substitute_placeholder(
    template: tuple[str, ...] | list[str],
    argument: str,
    placeholder: str = "{}",
) -> tuple[str, ...]:
    """Return a private copy of ``template`` with every exact ``placeholder`` token replaced.

    Tokens that only contain the placeholder as a substring are left as they are.
    """

    return tuple(argument if token == placeholder else token for token in template)


def describe_failure(result: JobRunResult) -> str:
    if result.exit_code < 0:
        return f"signal: {_signal_description(-result.exit_code)}"
    return f"exit status {result.exit_code}"


def format_result_line(worker_id: int, argv: tuple[str, ...], detail: str) -> str:
    return f"[{worker_id}] {' '.join(argv)}: {detail}\n"


def _signal_description(signum: int) -> str:
    try:
        description = signal.strsignal(signum)
    except ValueError:
        description = None
    return description.lower() if description else str(signum)
