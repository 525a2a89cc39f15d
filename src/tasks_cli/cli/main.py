# src/tasks_cli/cli/main.py

"""
CLI entrypoint.

The command table is explicit: `build_cli(COMMANDS)` assembles the group, so
nothing is registered as an import side effect.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import click

from ..config import Settings
from ..logging_setup import setup_logging
from .commands import COMMANDS

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def build_cli(commands: Iterable[click.Command]) -> click.Group:
    @click.group(context_settings=CONTEXT_SETTINGS)
    @click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
    @click.pass_context
    def cli(ctx: click.Context, verbose: bool) -> None:
        """A CLI task management tool."""
        settings = ctx.obj if isinstance(ctx.obj, Settings) else Settings.from_env()
        ctx.obj = settings

        console_level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
        try:
            setup_logging(
                log_file=settings.log_path if settings.log_to_file else None,
                console_level=console_level,
            )
        except OSError as exc:
            raise click.ClickException(f"cannot open log file {settings.log_path}: {exc}") from exc
        logger.debug("Running %s with data_dir=%s", ctx.invoked_subcommand, settings.data_dir)

    for command in commands:
        cli.add_command(command)
    return cli


def main() -> None:
    build_cli(COMMANDS)(prog_name="tasks")


if __name__ == "__main__":
    main()
