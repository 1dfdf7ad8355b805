"""CLI entrypoint for prun."""

import logging
import sys

import rich_click as click

from prun import __version__
from prun.controllers import PrunCliController, RunCommand
from prun.pipeline.runner import write_stdout

click.rich_click.USE_MARKDOWN = True
CONTROLLER = PrunCliController()

USAGE_TEMPLATE = """\
Usage:
\t{name} <worker count> <command>

\tWhere <command> is the command to run for each input argument.
\tThe string '{{}}' within the command will be replaced with the argument coming in from the input pipeline.

\texample: find . -type f | {name} 4 ls -alh {{}}"""


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.version_option(version=__version__, prog_name="prun")
@click.option(
    "--placeholder",
    default=None,
    help="Token replaced by each input line. Defaults to PRUN_PLACEHOLDER or `{}`.",
)
@click.option(
    "--queue-size",
    type=click.IntRange(min=0),
    default=None,
    help=(
        "Jobs buffered ahead of the workers. `0` means unbounded. "
        "Defaults to PRUN_QUEUE_SIZE or 1."
    ),
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Do not print the startup banners.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostics level on stderr. Defaults to PRUN_LOG_LEVEL or WARNING.",
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def prun(  # noqa: PLR0913
    ctx: click.Context,
    placeholder: str | None,
    queue_size: int | None,
    quiet: bool,
    log_level: str | None,
    args: tuple[str, ...],
) -> None:
    """Run COMMAND once for every line read from stdin, on WORKER_COUNT parallel workers.

    The exit status is the number of commands that failed.
    """

    if len(args) < 2:
        click.echo(USAGE_TEMPLATE.format(name=ctx.info_name or "prun"))
        ctx.exit(1)

    try:
        workers = int(args[0])
    except ValueError as error:
        raise click.BadParameter(
            f"{args[0]!r} is not an integer.",
            param_hint="'<worker count>'",
        ) from error
    if workers < 1:
        raise click.BadParameter(
            f"{workers} is smaller than the minimum of 1.",
            param_hint="'<worker count>'",
        )

    command = RunCommand(
        workers=workers,
        command=tuple(args[1:]),
        placeholder=placeholder,
        queue_size=queue_size,
        quiet=quiet,
        log_level=log_level,
    )
    try:
        settings = CONTROLLER.settings_for(command)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    _configure_logging(settings.log_level)
    summary = CONTROLLER.run(
        command,
        stream=sys.stdin.buffer,
        emit=write_stdout,
        settings=settings,
    )
    ctx.exit(summary.exit_code)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover
    prun()
